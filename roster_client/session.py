from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, Optional

import structlog

from .dates import to_display_form
from .models import Student, StudentForm

logger = structlog.get_logger(__name__)


class SessionMode(str, Enum):
    IDLE = "idle"
    EDITING = "editing"


SAVE_LABEL = "Save"
SAVE_EDIT_LABEL = "Save Edit"


@dataclass(frozen=True)
class EditSession:
    """Which student, if any, the form is editing. No target means create mode."""
    target: Optional[Any] = None
    form: StudentForm = field(default_factory=StudentForm)

    @property
    def mode(self) -> SessionMode:
        return SessionMode.IDLE if self.target is None else SessionMode.EDITING

    @property
    def is_editing(self) -> bool:
        return self.mode is SessionMode.EDITING

    @property
    def submit_label(self) -> str:
        return SAVE_EDIT_LABEL if self.is_editing else SAVE_LABEL


class EditSessionController:
    """
    Owns the single edit session of a client.

    Each transition computes a new EditSession, keeps it as the current state
    and returns it.
    """

    def __init__(self):
        self._state = EditSession()

    @property
    def state(self) -> EditSession:
        return self._state

    @property
    def target(self) -> Optional[Any]:
        return self._state.target

    @property
    def is_editing(self) -> bool:
        return self._state.is_editing

    @property
    def submit_label(self) -> str:
        return self._state.submit_label

    def _transition(self, new_state: EditSession) -> EditSession:
        if new_state.mode is not self._state.mode or new_state.target != self._state.target:
            logger.debug("edit session transition",
                         from_mode=self._state.mode.value, to_mode=new_state.mode.value,
                         target=new_state.target)
        self._state = new_state
        return new_state

    def start_edit(self, student_id: Any, roster: Iterable[Student]) -> EditSession:
        """
        Load a cached student into the form and switch to editing it.

        An id missing from the roster leaves the session untouched.
        """
        student = next((s for s in roster if s.id == student_id), None)
        if student is None:
            logger.warning(f"Cannot edit student {student_id}: not in the current roster")
            return self._state

        form = StudentForm(
            name=student.name,
            age=str(student.age),
            birth_date=to_display_form(student.birth_date),
        )
        return self._transition(EditSession(target=student_id, form=form))

    def cancel_edit(self) -> EditSession:
        return self._transition(EditSession())

    def on_submit_succeeded(self) -> EditSession:
        """Clear the form and return to create mode after a successful save."""
        return self._transition(EditSession())

    def update_form(self, **fields) -> EditSession:
        """Record what the operator typed; accepts name, age and birth_date."""
        return self._transition(replace(self._state, form=self._state.form.with_fields(**fields)))
