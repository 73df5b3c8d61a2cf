"""
Service Container - Simple dependency injection for swappable implementations.

Usage:
    from wagerbook.core import ServiceContainer

    # Get default implementations
    storage = ServiceContainer.get_storage()
    notifier = ServiceContainer.get_notifier()

    # Register custom implementations
    ServiceContainer.register_storage(InMemoryRepository())
    ServiceContainer.register_notifier(AutoConfirmNotifier())
"""
from typing import Optional, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from .protocols import Notifier, PersistenceGateway

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Simple dependency injection container.

    Provides lazy initialization of default implementations
    and allows swapping to alternative implementations.
    """

    _storage: Optional["PersistenceGateway"] = None
    _notifier: Optional["Notifier"] = None

    @classmethod
    def get_storage(cls) -> "PersistenceGateway":
        """Get the configured persistence gateway."""
        if cls._storage is None:
            from wagerbook.config import settings
            from .storage import LocalJsonRepository
            cls._storage = LocalJsonRepository(
                settings.history_path,
                create_backup=settings.storage.create_backup,
            )
            logger.debug(f"Initialized default LocalJsonRepository at {settings.history_path}")
        return cls._storage

    @classmethod
    def get_notifier(cls) -> "Notifier":
        """Get the configured notifier."""
        if cls._notifier is None:
            from .notifier import ConsoleNotifier
            cls._notifier = ConsoleNotifier()
            logger.debug("Initialized default ConsoleNotifier")
        return cls._notifier

    @classmethod
    def register_storage(cls, storage: "PersistenceGateway") -> None:
        """Register a custom storage implementation."""
        cls._storage = storage
        logger.info(f"Registered storage: {type(storage).__name__}")

    @classmethod
    def register_notifier(cls, notifier: "Notifier") -> None:
        """Register a custom notifier implementation."""
        cls._notifier = notifier
        logger.info(f"Registered notifier: {type(notifier).__name__}")

    @classmethod
    def reset(cls) -> None:
        """Reset to defaults (for testing)."""
        cls._storage = None
        cls._notifier = None
