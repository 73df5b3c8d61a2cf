"""
Protocol definitions for persistence and user-notification abstractions.

These protocols define the interfaces that concrete implementations must follow.
Using Protocol allows duck typing while still providing type checking support.
"""
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class PersistenceGateway(Protocol):
    """
    Storage abstraction for the serialized ledger state.

    Implementations:
    - LocalJsonRepository (default): JSON file on local disk
    - InMemoryRepository: process memory, for tests and embedding
    """

    def load(self) -> Optional[str]:
        """
        Load the serialized ledger.

        Returns:
            Serialized state, or None if nothing has been saved yet

        Raises:
            PersistenceError: If stored state exists but cannot be read
        """
        ...

    def save(self, payload: str) -> bool:
        """
        Replace the stored ledger with ``payload``.

        Args:
            payload: Full serialized ledger state

        Returns:
            True on success
        """
        ...

    def quarantine(self, reason: str) -> Optional[str]:
        """
        Move stored state that failed to load out of the way of later saves.

        Args:
            reason: Why the state was rejected, for the log

        Returns:
            Where the state was kept, or None if nothing was stored

        Raises:
            PersistenceError: If the state exists but could not be moved
        """
        ...


@runtime_checkable
class Notifier(Protocol):
    """
    User-facing feedback channel.

    Implementations:
    - ConsoleNotifier (default): stderr warnings, y/N prompt on stdin
    - AutoConfirmNotifier: logs warnings and always confirms
    """

    def warn(self, message: str) -> None:
        """Report a validation problem. Informational, never blocks."""
        ...

    def confirm_destructive(self, prompt: str) -> bool:
        """Ask the user to confirm a destructive action. Blocks until answered."""
        ...
