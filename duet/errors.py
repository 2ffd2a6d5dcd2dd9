"""Exceptions raised by duet operations.

Commands catch DuetError, show its message and exit; nothing retries.
"""


class DuetError(Exception):
    """Base class for recoverable duet failures."""


class ValidationError(DuetError):
    """A required field is missing or invalid. No state was changed."""


class RemoteFailure(DuetError):
    """A call to the remote ledger failed. No local state was changed."""


class SessionExpired(DuetError):
    """A remote operation needs a signed-in session and there is none."""

    def __init__(self, message: str = "Your session has expired. Run 'duet login' again.") -> None:
        super().__init__(message)


class NotFoundError(DuetError):
    """No transaction, budget item or goal has the requested identifier."""
