'''

'''
from typing import Annotated
from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.engine import get_db_session
from ..database import models as db_models
from ..common.logger import log
from ..models import user as user_models


class UserService:
    """
    Service for tutor accounts. Tutors only ever sign in through Google,
    so there is no password handling here.
    """
    def __init__(self, db: Annotated[AsyncSession, Depends(get_db_session)]):
        self.db = db

    async def get_user_by_email(self, email: str) -> db_models.Users | None:
        log.info(f"Fetching user for email: {email}")
        try:
            stmt = select(db_models.Users).filter(db_models.Users.email == email)
            result = await self.db.execute(stmt)
            return result.scalars().first()
        except Exception as e:
            log.error(f"Database error fetching user by email {email}: {e}", exc_info=True)
            raise

    async def get_user_by_id(self, user_id: int) -> db_models.Users | None:
        log.info(f"Fetching user for ID: {user_id}")
        return await self.db.get(db_models.Users, user_id)

    async def get_user_by_google_id(self, google_id: str) -> db_models.Users | None:
        stmt = select(db_models.Users).filter(db_models.Users.google_id == google_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_or_create_from_google(self, profile: user_models.GoogleProfile) -> db_models.Users:
        """
        Returns the tutor linked to a Google account, creating it on first login.
        An existing account is matched by Google id only.
        """
        if not profile.email:
            log.warning(f"Google profile {profile.sub} has no email.")
            raise ValueError("No email found in Google profile")

        user = await self.get_user_by_google_id(profile.sub)
        if user:
            return user

        log.info(f"Creating new user for Google account {profile.email}")
        user = db_models.Users(
            google_id=profile.sub,
            email=profile.email,
            name=profile.name or profile.email,
            picture=profile.picture
        )
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return user
