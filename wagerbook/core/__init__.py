"""
Core module - Protocols, containers, and adapters.
"""
from .protocols import Notifier, PersistenceGateway
from .container import ServiceContainer

__all__ = [
    "Notifier",
    "PersistenceGateway",
    "ServiceContainer",
]
