"""Client-side synchronization and edit workflow for the student roster service."""

from .controller import ClientState, RosterController
from .dates import DateFormatTranslator, to_display_form, to_service_form
from .errors import (
    MalformedDateError,
    NetworkError,
    NotFoundError,
    RosterClientError,
    ValidationError,
)
from .models import DeletePrompt, Student, StudentDraft, StudentForm
from .session import EditSession, EditSessionController, SessionMode
from .settings import SERVICE_PORT, Settings, get_settings
from .store import RemoteStudentStore

__version__ = "0.1.0"

__all__ = [
    "ClientState",
    "DateFormatTranslator",
    "DeletePrompt",
    "EditSession",
    "EditSessionController",
    "MalformedDateError",
    "NetworkError",
    "NotFoundError",
    "RemoteStudentStore",
    "RosterClientError",
    "RosterController",
    "SERVICE_PORT",
    "SessionMode",
    "Settings",
    "Student",
    "StudentDraft",
    "StudentForm",
    "ValidationError",
    "get_settings",
    "to_display_form",
    "to_service_form",
]
