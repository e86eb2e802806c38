from dataclasses import dataclass, replace
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .dates import to_display_form


class Student(BaseModel):
    """A student record exactly as the service returned it."""
    model_config = ConfigDict(populate_by_name=True, extra='allow', frozen=True)

    id: Any
    name: str = Field(alias='nome')
    age: int = Field(alias='idade')
    birth_date: Any = Field(None, alias='dataNascimento')  # [year, month, day]

    @property
    def birth_date_display(self) -> str:
        return to_display_form(self.birth_date)


class StudentDraft(BaseModel):
    """Request body for creating or updating a student."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, alias='nome')
    age: int = Field(..., ge=0, alias='idade')
    birth_date: str = Field(..., pattern=r'^[0-9]{1,4}-[0-9]{2}-[0-9]{2}$', alias='dataNascimento')

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


@dataclass(frozen=True)
class StudentForm:
    """Raw text of the three form fields as the operator typed them."""
    name: str = ''
    age: str = ''
    birth_date: str = ''

    def with_fields(self, **fields) -> "StudentForm":
        return replace(self, **fields)

    def missing_fields(self) -> list:
        return [
            field for field in ('name', 'age', 'birth_date')
            if getattr(self, field) is None or str(getattr(self, field)).strip() == ''
        ]


@dataclass(frozen=True)
class DeletePrompt:
    """Confirmation shown to the operator before a student is deleted."""
    student_id: Any
    student_name: Optional[str] = None
    title: str = 'Confirmation'
    message: str = 'Are you sure you want to delete this student?'
    confirm_label: str = 'Delete'
    cancel_label: str = 'Cancel'
    cancelable: bool = False
