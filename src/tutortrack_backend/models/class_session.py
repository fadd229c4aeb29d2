'''

'''
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from .base import CamelModel


def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """
    Sessions are stored as naive server-local timestamps.
    Aware values (e.g. an ISO string ending in 'Z') are converted first.
    """
    if value is not None and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def unique_student_ids(value: Optional[list[str]]) -> Optional[list[str]]:
    """A student is listed (and billed) once per session, first occurrence wins."""
    if value is None:
        return value
    return list(dict.fromkeys(value))


class ClassSessionCreate(CamelModel):
    """
    Validates the request body for logging a class.
    'date' defaults to the time of creation when omitted.
    """
    date: Optional[datetime] = None
    duration_minutes: int = Field(..., gt=0)
    summary: str = ""
    student_ids: list[str] = Field(..., min_length=1)
    status: str = "completed"
    is_paid: bool = False

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_local_naive(value)

    @field_validator("student_ids")
    @classmethod
    def _dedupe_student_ids(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        return unique_student_ids(value)


class ClassSessionUpdate(CamelModel):
    """
    All fields are optional to allow for partial updates (PATCH).
    Toggling 'is_paid' alone does not change date or duration.
    """
    date: Optional[datetime] = None
    duration_minutes: Optional[int] = Field(None, gt=0)
    summary: Optional[str] = None
    student_ids: Optional[list[str]] = Field(None, min_length=1)
    status: Optional[str] = None
    is_paid: Optional[bool] = None

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_local_naive(value)

    @field_validator("student_ids")
    @classmethod
    def _dedupe_student_ids(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        return unique_student_ids(value)


class ClassSessionRead(CamelModel):
    """
    Pydantic model for reading a class session, corresponds to db_models.ClassSessions.
    """
    id: str
    user_id: int
    date: datetime
    duration_minutes: int
    summary: str
    student_ids: list[str]
    status: str
    is_paid: bool
