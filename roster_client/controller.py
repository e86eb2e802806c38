"""
Roster orchestration: keeps the cached student list in step with the service
and turns form submits into create or update calls.

All mutable client state lives in a ClientState value owned by the
controller. The rendering layer reads ``controller.state`` and
``controller.session.state`` and calls the methods below; it never mutates
either directly.
"""

import asyncio
import inspect
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Optional, Tuple, Union

import structlog

from .dates import to_service_form
from .errors import NetworkError, RosterClientError, ValidationError
from .models import DeletePrompt, Student, StudentDraft, StudentForm
from .session import EditSessionController
from .store import RemoteStudentStore

logger = structlog.get_logger(__name__)

ConfirmCallback = Callable[[DeletePrompt], Union[bool, Awaitable[bool]]]


@dataclass(frozen=True)
class ClientState:
    roster: Tuple[Student, ...] = ()
    loading: bool = True
    host: str = "localhost"
    last_error: Optional[RosterClientError] = None


class RosterController:
    """
    Drives the RemoteStudentStore and the edit session.

    Args:
        store: Store used for every request
        session: Edit session controller, a fresh one is created if omitted
    """

    def __init__(self, store: RemoteStudentStore, session: Optional[EditSessionController] = None):
        self.store = store
        self.session = session or EditSessionController()
        self._state = ClientState(host=store.host)
        self._refresh_task: Optional[asyncio.Task] = None

    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def roster(self) -> Tuple[Student, ...]:
        return self._state.roster

    def _set_state(self, **changes) -> ClientState:
        self._state = replace(self._state, **changes)
        return self._state

    def find(self, student_id: Any) -> Optional[Student]:
        return next((s for s in self._state.roster if s.id == student_id), None)

    async def __aenter__(self) -> "RosterController":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._refresh_task is not None and not self._refresh_task.done():
            self._refresh_task.cancel()
        await self.store.aclose()

    # =========
    # ROSTER
    # =========

    async def start(self) -> ClientState:
        """Enter the loading state and fetch the roster for the first time."""
        self._set_state(loading=True)
        return await self.refresh()

    async def refresh(self) -> ClientState:
        """
        Replace the cached roster with the service's current list.

        A newer refresh cancels one still in flight; the superseded call
        returns the state as it stands without touching the cache. On failure
        the previous roster is kept, loading is cleared and the error is
        re-raised.
        """
        previous = self._refresh_task
        if previous is not None and not previous.done():
            logger.debug("cancelling superseded refresh")
            previous.cancel()

        task = asyncio.ensure_future(self.store.list())
        self._refresh_task = task

        try:
            students = await task
        except asyncio.CancelledError:
            if self._refresh_task is not task:
                return self._state
            raise
        except NetworkError as e:
            if self._refresh_task is task:
                self._refresh_task = None
                self._set_state(loading=False, last_error=e)
            logger.error(f"Error fetching students: {e}")
            raise

        if self._refresh_task is not task:
            # a newer refresh was issued after this response arrived
            return self._state

        self._refresh_task = None
        logger.info(f"Roster refreshed with {len(students)} students")
        return self._set_state(roster=tuple(students), loading=False, last_error=None)

    async def _refresh_after_mutation(self) -> None:
        # the mutation already succeeded; a failed reload is only recorded
        try:
            await self.refresh()
        except NetworkError as e:
            logger.warning(f"Roster reload after change failed: {e}")

    def set_host(self, host: str) -> ClientState:
        self.store.set_host(host)
        return self._set_state(host=host)

    # ============
    # EDIT SESSION
    # ============

    def start_edit(self, student_id: Any):
        return self.session.start_edit(student_id, self._state.roster)

    def cancel_edit(self):
        return self.session.cancel_edit()

    def update_form(self, **fields):
        return self.session.update_form(**fields)

    # =========
    # MUTATIONS
    # =========

    def _build_draft(self, form: StudentForm) -> StudentDraft:
        missing = form.missing_fields()
        if missing:
            raise ValidationError(f"Please fill in all fields before saving: {', '.join(missing)}", fields=missing)

        # plain ASCII digits only: no sign, underscores or other scripts
        age_text = str(form.age).strip()
        if not (age_text.isascii() and age_text.isdigit()):
            raise ValidationError(f"Age must be a whole number, got: {form.age!r}", fields=("age",))

        return StudentDraft(
            name=form.name.strip(),
            age=int(age_text),
            birth_date=to_service_form(form.birth_date),
        )

    async def submit(self, form: Optional[StudentForm] = None) -> Student:
        """
        Create a student, or update the one being edited.

        Uses the session's form when none is given. Missing or invalid fields
        raise ValidationError before any request is made.
        """
        form = form if form is not None else self.session.state.form
        target = self.session.target

        try:
            draft = self._build_draft(form)
        except ValidationError as e:
            logger.warning(f"Submit rejected: {e}", fields=list(e.fields))
            self._set_state(last_error=e)
            raise

        try:
            if target is not None:
                student = await self.store.update(target, draft)
                logger.info(f"Student updated successfully: {student.id}")
            else:
                student = await self.store.create(draft)
                logger.info(f"Student created successfully: {student.id}")
        except NetworkError as e:
            logger.error(f"Error saving student: {e}")
            self._set_state(last_error=e)
            raise

        self.session.on_submit_succeeded()
        await self._refresh_after_mutation()
        return student

    async def remove(self, student_id: Any, confirm: ConfirmCallback) -> bool:
        """
        Ask the operator to confirm, then delete a student.

        Returns False without sending anything when the operator declines.
        """
        student = self.find(student_id)
        prompt = DeletePrompt(student_id=student_id, student_name=student.name if student else None)

        answer = confirm(prompt)
        if inspect.isawaitable(answer):
            answer = await answer
        if not answer:
            logger.info(f"Deletion of student {student_id} cancelled by operator")
            return False

        try:
            await self.store.delete(student_id)
        except NetworkError as e:
            logger.error(f"Error deleting student: {e}")
            self._set_state(last_error=e)
            raise

        await self._refresh_after_mutation()
        return True
