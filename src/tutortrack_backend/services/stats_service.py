'''
Read-only dashboard and earnings figures.
'''
from datetime import datetime
from typing import Annotated, Optional
from fastapi import Depends

from ..database import models as db_models
from ..common.logger import log
from ..core import finance
from ..models import stats as stats_models
from .student_service import StudentService
from .class_session_service import ClassSessionService


class StatsService:
    """
    Loads a tutor's students and sessions and hands them to the pure
    aggregators in core.finance. Nothing is written.
    """
    def __init__(
        self,
        student_service: Annotated[StudentService, Depends(StudentService)],
        class_session_service: Annotated[ClassSessionService, Depends(ClassSessionService)]
    ):
        self.student_service = student_service
        self.class_session_service = class_session_service

    async def get_stats_for_api(
        self,
        current_user: db_models.Users,
        now: Optional[datetime] = None
    ) -> stats_models.DashboardStats:
        if now is None:
            now = datetime.now()
        log.info(f"Computing dashboard stats for user {current_user.id}")

        students = await self.student_service.get_students_internal(current_user.id)
        sessions = await self.class_session_service.get_sessions_internal(current_user.id)
        stats = finance.compute_stats(students, sessions, now)

        return stats_models.DashboardStats(
            total_students=stats.total_students,
            classes_this_week=stats.classes_this_week,
            revenue_this_month=stats.revenue_this_month,
            unpaid_count=stats.unpaid_count
        )

    async def get_earnings_for_api(self, current_user: db_models.Users) -> stats_models.EarningsBreakdown:
        log.info(f"Computing earnings breakdown for user {current_user.id}")

        students = await self.student_service.get_students_internal(current_user.id)
        sessions = await self.class_session_service.get_sessions_internal(current_user.id)
        earnings = finance.compute_earnings(students, sessions)

        return stats_models.EarningsBreakdown(
            total_earned=earnings.total_earned,
            total_collected=earnings.total_collected,
            total_outstanding=earnings.total_outstanding
        )
