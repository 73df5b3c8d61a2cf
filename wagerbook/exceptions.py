"""
Custom exceptions for the wager ledger.
"""


class WagerBookError(Exception):
    """Base exception for all custom errors."""
    pass


class ValidationError(WagerBookError):
    """Raised when user input for a wager is rejected (empty match, bad stake)."""
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class NotFoundError(WagerBookError):
    """Raised when no wager exists with the requested id."""
    def __init__(self, wager_id: int = None):
        self.wager_id = wager_id
        msg = "Wager not found"
        if wager_id is not None:
            msg += f": #{wager_id}"
        super().__init__(msg)


class PersistenceError(WagerBookError):
    """Raised when ledger state cannot be loaded or saved."""
    pass
