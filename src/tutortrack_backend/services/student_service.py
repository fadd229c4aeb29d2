'''
Service for a tutor's students.
'''
from typing import Annotated
from fastapi import Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.engine import get_db_session
from ..database import models as db_models
from ..common.logger import log
from ..models import student as student_models


class StudentService:
    """
    Service for creating, reading, updating and deleting a tutor's students.
    Every query is scoped to the owning tutor.
    """
    def __init__(self, db: Annotated[AsyncSession, Depends(get_db_session)]):
        self.db = db

    # --- Internal Data-Fetching ---

    async def get_student_internal(self, student_id: str, user_id: int) -> db_models.Students | None:
        """Returns None on a miss; callers decide whether that is an error."""
        stmt = select(db_models.Students).filter(
            db_models.Students.id == student_id,
            db_models.Students.user_id == user_id
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_students_internal(self, user_id: int) -> list[db_models.Students]:
        stmt = select(db_models.Students).filter(
            db_models.Students.user_id == user_id
        ).order_by(db_models.Students.name)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_students_by_ids(self, student_ids: list[str], user_id: int) -> list[db_models.Students]:
        """
        Fetches the listed students, preserving the order of 'student_ids'.
        Unknown ids are skipped.
        """
        if not student_ids:
            return []
        stmt = select(db_models.Students).filter(
            db_models.Students.id.in_(student_ids),
            db_models.Students.user_id == user_id
        )
        result = await self.db.execute(stmt)
        by_id = {student.id: student for student in result.scalars().all()}
        return [by_id[sid] for sid in dict.fromkeys(student_ids) if sid in by_id]

    # --- API-facing methods ---

    async def list_students(self, current_user: db_models.Users) -> list[db_models.Students]:
        log.info(f"Listing students for user {current_user.id}")
        return await self.get_students_internal(current_user.id)

    async def get_student(self, student_id: str, current_user: db_models.Users) -> db_models.Students:
        student = await self.get_student_internal(student_id, current_user.id)
        if not student:
            log.warning(f"User {current_user.id} requested non-existent student {student_id}")
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
        return student

    async def create_student(
        self,
        student_data: student_models.StudentCreate,
        current_user: db_models.Users
    ) -> db_models.Students:
        log.info(f"Creating student '{student_data.name}' for user {current_user.id}")
        try:
            student = db_models.Students(
                user_id=current_user.id,
                balance=0,
                total_paid=0,
                **student_data.model_dump()
            )
            self.db.add(student)
            await self.db.flush()
            await self.db.refresh(student)
            return student
        except Exception as e:
            log.error(f"Error creating student for user {current_user.id}: {e}", exc_info=True)
            raise

    async def update_student(
        self,
        student_id: str,
        update_data: student_models.StudentUpdate,
        current_user: db_models.Users
    ) -> db_models.Students:
        """
        Applies a partial update. Explicit nulls are ignored, every column
        is required. Balance fields are not recomputed here, an hourly rate
        change only affects sessions recalculated afterwards.
        """
        student = await self.get_student(student_id, current_user)
        for field, value in update_data.model_dump(exclude_unset=True).items():
            if value is None:
                continue
            setattr(student, field, value)
        await self.db.flush()
        await self.db.refresh(student)
        log.info(f"Student {student_id} updated by user {current_user.id}")
        return student

    async def delete_student(self, student_id: str, current_user: db_models.Users) -> None:
        """
        Deletes the student row only. Sessions keep the id in 'student_ids'.
        """
        student = await self.get_student(student_id, current_user)
        await self.db.delete(student)
        await self.db.flush()
        log.info(f"Student {student_id} deleted by user {current_user.id}")
