# /app/core/exceptions.py

"""
Typed, recoverable errors raised by the grade and calendar engines and the
services around them.

Each error carries a stable `kind` string and the HTTP status the API layer
answers with. The exception handlers registered in `app.main` translate them
into `{"detail": ..., "kind": ...}` JSON bodies.
"""


class PortalError(Exception):
    """Base class for every domain error the API reports as a 4xx response."""
    kind = "portal_error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"detail": self.message, "kind": self.kind}


class InvalidInputError(PortalError):
    """Malformed numeric, time or enum input."""
    kind = "invalid_input"
    status_code = 400


class InvalidRangeError(PortalError):
    """An end time that is not strictly after its start time."""
    kind = "invalid_range"
    status_code = 400


class InvalidStatusTransitionError(InvalidInputError):
    kind = "invalid_status_transition"


class ClassFullError(PortalError):
    kind = "class_full"
    status_code = 400


class DuplicateError(PortalError):
    """A uniqueness constraint was violated (pre-check or database constraint)."""
    kind = "duplicate"
    status_code = 409


class AlreadyEnrolledError(DuplicateError):
    kind = "already_enrolled"


class NotFoundError(PortalError):
    kind = "not_found"
    status_code = 404


class NotEnrolledError(PortalError):
    """A grade was submitted for a student not currently enrolled in the class."""
    kind = "not_enrolled"
    status_code = 400


class ConcurrentUpdateError(PortalError):
    """The row changed underneath a read-modify-write; the caller should retry."""
    kind = "concurrent_update"
    status_code = 409
