"""
Contract errors raised by the session engine.

All of these are synchronous: they are raised to the caller of the
offending operation and never retried internally.
"""


class StepwiseError(Exception):
    """Base class for session engine errors."""


class InvalidTransition(StepwiseError):
    """Operation is not legal for the run's current status or position."""

    def __init__(self, operation: str, status: str, detail: str | None = None):
        self.operation = operation
        self.status = status
        message = f"Cannot {operation} while session is {status}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class UnknownItem(StepwiseError):
    """Item id is not part of the active session."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Unknown item: {item_id!r}")


class OutOfRangeResponse(StepwiseError):
    """Response has the wrong shape or refers to an option that does not exist."""


class EmptySession(StepwiseError):
    """Session definition has no items."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session {session_id!r} has no items")


class UnknownSession(StepwiseError):
    """Catalog has no definition for the requested session id."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Unknown session: {session_id!r}")
