'''
Pydantic models for tutor accounts and Google profiles.
'''
from typing import Optional

from pydantic import BaseModel

from .base import CamelModel


class GoogleProfile(BaseModel):
    """
    The subset of Google's userinfo response we keep.
    """
    sub: str
    email: Optional[str] = None
    name: str = ""
    picture: Optional[str] = None


class UserRead(CamelModel):
    """
    Pydantic model for reading the logged in tutor.
    Corresponds to the db_models.Users ORM model.
    """
    id: int
    google_id: str
    email: str
    name: str
    picture: Optional[str] = None
