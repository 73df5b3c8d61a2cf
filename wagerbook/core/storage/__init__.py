from .atomic_writer import AtomicJsonWriter, WriteResult
from .local import InMemoryRepository, LocalJsonRepository

__all__ = [
    "AtomicJsonWriter",
    "WriteResult",
    "InMemoryRepository",
    "LocalJsonRepository",
]
