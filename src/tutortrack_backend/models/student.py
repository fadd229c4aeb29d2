'''

'''
from typing import Optional

from pydantic import Field

from .base import CamelModel


class StudentBase(CamelModel):
    """
    Fields a tutor fills in on the add/edit student form.
    'balance' and 'total_paid' are derived and never accepted from clients.
    """
    name: str = Field(..., min_length=1)
    grade: str
    parent_name: str
    parent_email: str
    parent_phone: str
    hourly_rate: int = Field(50, ge=0)


class StudentCreate(StudentBase):
    """
    Pydantic model for validating the JSON payload when CREATING a student.
    'user_id' is excluded and will be added by the service.
    """
    pass


class StudentUpdate(CamelModel):
    """
    All fields are optional to allow for partial updates (PATCH).
    Changing the hourly rate does not touch the stored balance.
    """
    name: Optional[str] = Field(None, min_length=1)
    grade: Optional[str] = None
    parent_name: Optional[str] = None
    parent_email: Optional[str] = None
    parent_phone: Optional[str] = None
    hourly_rate: Optional[int] = Field(None, ge=0)


class StudentRead(StudentBase):
    """
    Pydantic model for reading a student, corresponds to db_models.Students.
    """
    id: str
    user_id: int
    balance: int
    total_paid: int
