from typing import Iterable, Optional


class RosterClientError(Exception):
    """Base class for every error raised by the roster client."""


class ValidationError(RosterClientError):
    """
    A submit was rejected locally before any request was sent.

    Args:
        message: Human readable explanation
        fields: Names of the offending form fields
    """
    def __init__(self, message: str, fields: Iterable[str] = ()):
        super().__init__(message)
        self.fields = tuple(fields)


class MalformedDateError(ValidationError):
    """Date text did not have the DD/MM/YYYY shape."""
    def __init__(self, value):
        super().__init__(f"Invalid date format. Expected DD/MM/YYYY, got: {value!r}", fields=("birth_date",))
        self.value = value


class NetworkError(RosterClientError):
    """Transport failure or a non-success response from the student service."""
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(NetworkError):
    """The student being updated no longer exists on the service."""
    def __init__(self, student_id):
        super().__init__(f"Student {student_id} not found", status_code=404)
        self.student_id = student_id
