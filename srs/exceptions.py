"""
Errors raised by the scheduling core.
"""


class SchedulingError(Exception):
    """Base exception for the scheduling core."""
    pass


class Unauthenticated(SchedulingError):
    """Raised when no trusted learner identity is present."""
    pass


class AccessDenied(SchedulingError):
    """Raised when a learner touches a card they do not own."""
    pass


class CardNotFound(SchedulingError):
    """Raised when a requested card does not exist."""
    pass


class InvalidTransition(SchedulingError):
    """Raised when a session operation is not valid in the current state."""
    pass


class RepositoryUnavailable(SchedulingError):
    """Raised when the card store or the review ledger cannot be read or written."""
    pass
