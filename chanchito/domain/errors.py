"""Domain error hierarchy."""


class ChanchitoError(Exception):
    """Base exception for finance operations."""


class ValidationError(ChanchitoError):
    """Input rejected before reaching the finance core.

    The message is meant to be shown to the user verbatim.
    """


class PersistenceError(ChanchitoError):
    """A repository operation failed."""


class ReferentialIntegrityError(PersistenceError):
    """A foreign key constraint blocked the operation."""


__all__ = [
    "ChanchitoError",
    "ValidationError",
    "PersistenceError",
    "ReferentialIntegrityError",
]
