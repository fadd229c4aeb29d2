'''
Keeps Students.balance and Students.total_paid in line with class sessions.
'''
from typing import Annotated, Iterable, Optional
from fastapi import Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.engine import get_db_session
from ..database import models as db_models
from ..common.logger import log
from ..core import finance
from .student_service import StudentService


class BalanceService:
    """
    The stored balance fields are a cache of finance.calculate_balance over
    the student's sessions. They are refreshed whenever a session listing
    the student is created or updated, and on explicit request.
    """
    def __init__(
        self,
        db: Annotated[AsyncSession, Depends(get_db_session)],
        student_service: Annotated[StudentService, Depends(StudentService)]
    ):
        self.db = db
        self.student_service = student_service

    async def get_sessions_for_student(self, student_id: str, user_id: int) -> list[db_models.ClassSessions]:
        """
        All of the tutor's sessions that list the student, ordered by date.
        """
        stmt = select(db_models.ClassSessions).filter(
            db_models.ClassSessions.user_id == user_id
        ).order_by(db_models.ClassSessions.date)
        result = await self.db.execute(stmt)
        return finance.sessions_for_student(student_id, result.scalars().all())

    async def recalculate_balance(self, student_id: str, user_id: int) -> Optional[finance.BalanceResult]:
        """
        Recomputes and stores one student's balance and total paid.
        An unknown student is a no-op and returns None.
        """
        student = await self.student_service.get_student_internal(student_id, user_id)
        if not student:
            log.info(f"Skipping balance recalculation for missing student {student_id}")
            return None

        sessions = await self.get_sessions_for_student(student_id, user_id)
        result = finance.calculate_balance(student, sessions)

        student.balance = result.balance
        student.total_paid = result.total_paid
        await self.db.flush()

        log.info(
            f"Recalculated student {student_id}: balance={result.balance}, "
            f"total_paid={result.total_paid} over {len(sessions)} sessions"
        )
        return result

    async def recalculate_for_students(self, student_ids: Iterable[str], user_id: int) -> None:
        """Recalculates each distinct id once, in the order given."""
        for student_id in dict.fromkeys(student_ids):
            await self.recalculate_balance(student_id, user_id)

    async def recalculate_for_api(self, student_id: str, current_user: db_models.Users) -> db_models.Students:
        """
        Maintenance entry point, for repairing stale balances by hand.
        """
        student = await self.student_service.get_student_internal(student_id, current_user.id)
        if not student:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
        await self.recalculate_balance(student_id, current_user.id)
        await self.db.refresh(student)
        return student
