'''
Service for logging and editing class sessions.
'''
from datetime import datetime
from typing import Annotated
from fastapi import Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.engine import get_db_session
from ..database import models as db_models
from ..common.logger import log
from ..core import finance
from ..models import class_session as class_session_models
from .balance_service import BalanceService


class ClassSessionService:
    """
    Service for logging and editing class sessions.
    Every create or update is followed by a balance recalculation for the
    students the session lists.
    """
    def __init__(
        self,
        db: Annotated[AsyncSession, Depends(get_db_session)],
        balance_service: Annotated[BalanceService, Depends(BalanceService)]
    ):
        self.db = db
        self.balance_service = balance_service

    # --- Internal Data-Fetching ---

    async def get_sessions_internal(self, user_id: int) -> list[db_models.ClassSessions]:
        stmt = select(db_models.ClassSessions).filter(
            db_models.ClassSessions.user_id == user_id
        ).order_by(db_models.ClassSessions.date)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _get_session_by_id_internal(self, session_id: str, user_id: int) -> db_models.ClassSessions:
        stmt = select(db_models.ClassSessions).filter(
            db_models.ClassSessions.id == session_id,
            db_models.ClassSessions.user_id == user_id
        )
        result = await self.db.execute(stmt)
        class_session = result.scalars().first()
        if not class_session:
            log.warning(f"Tried to fetch non-existent class session id: {session_id}")
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Class session not found")
        return class_session

    # --- API-facing methods ---

    async def list_sessions(self, current_user: db_models.Users) -> list[db_models.ClassSessions]:
        log.info(f"Listing class sessions for user {current_user.id}")
        return await self.get_sessions_internal(current_user.id)

    async def get_session(self, session_id: str, current_user: db_models.Users) -> db_models.ClassSessions:
        return await self._get_session_by_id_internal(session_id, current_user.id)

    async def list_sessions_for_student(self, student_id: str, current_user: db_models.Users) -> list[db_models.ClassSessions]:
        """Sessions listing the student. An unknown student id gives an empty list."""
        sessions = await self.get_sessions_internal(current_user.id)
        return finance.sessions_for_student(student_id, sessions)

    async def create_session(
        self,
        session_data: class_session_models.ClassSessionCreate,
        current_user: db_models.Users
    ) -> db_models.ClassSessions:
        log.info(f"Logging class for user {current_user.id} with students {session_data.student_ids}")
        try:
            values = session_data.model_dump()
            if values["date"] is None:
                values["date"] = datetime.now()

            class_session = db_models.ClassSessions(user_id=current_user.id, **values)
            self.db.add(class_session)
            await self.db.flush()

            await self.balance_service.recalculate_for_students(class_session.student_ids, current_user.id)

            await self.db.refresh(class_session)
            return class_session
        except Exception as e:
            log.error(f"Error creating class session for user {current_user.id}: {e}", exc_info=True)
            raise

    async def update_session(
        self,
        session_id: str,
        update_data: class_session_models.ClassSessionUpdate,
        current_user: db_models.Users
    ) -> db_models.ClassSessions:
        """
        Applies a partial update and recalculates every student the session
        lists now, plus any student that was removed from it.
        """
        class_session = await self._get_session_by_id_internal(session_id, current_user.id)
        previous_student_ids = list(class_session.student_ids)

        changes = update_data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None:
                continue
            setattr(class_session, field, value)
        await self.db.flush()

        affected = list(class_session.student_ids) + [
            sid for sid in previous_student_ids if sid not in class_session.student_ids
        ]
        await self.balance_service.recalculate_for_students(affected, current_user.id)

        await self.db.refresh(class_session)
        log.info(f"Class session {session_id} updated by user {current_user.id}: {sorted(changes)}")
        return class_session
