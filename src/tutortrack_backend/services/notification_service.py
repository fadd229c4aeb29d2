'''
Parent notifications: class summaries, payment reminders and free-form messages.
'''
import asyncio
from typing import Annotated
from fastapi import Depends, HTTPException, status

from ..database import models as db_models
from ..common.logger import log
from ..models import notify as notify_models
from . import email_service as templates
from .email_service import EmailService
from .student_service import StudentService
from .balance_service import BalanceService


class NotificationService:
    """
    Builds the emails for one or more students and hands them to EmailService.
    Delivery failures are reported per recipient in the returned report.
    """
    def __init__(
        self,
        student_service: Annotated[StudentService, Depends(StudentService)],
        balance_service: Annotated[BalanceService, Depends(BalanceService)],
        email_service: Annotated[EmailService, Depends(EmailService)]
    ):
        self.student_service = student_service
        self.balance_service = balance_service
        self.email_service = email_service

    @staticmethod
    def _report(results: list[notify_models.RecipientResult]) -> notify_models.NotificationReport:
        sent = sum(1 for r in results if r.success)
        return notify_models.NotificationReport(sent=sent, failed=len(results) - sent, results=results)

    async def _send_to_parent(
        self,
        student: db_models.Students,
        subject: str,
        html: str
    ) -> notify_models.RecipientResult:
        result = await self.email_service.send(student.parent_email, subject, html)
        return notify_models.RecipientResult(
            student_id=student.id,
            parent_email=student.parent_email,
            success=result.success,
            error=result.error
        )

    async def _get_student_or_404(self, student_id: str, current_user: db_models.Users) -> db_models.Students:
        return await self.student_service.get_student(student_id, current_user)

    async def send_class_summary(
        self,
        data: notify_models.ClassSummaryNotification,
        current_user: db_models.Users
    ) -> notify_models.NotificationReport:
        """
        Emails every listed student's parent in parallel.
        Ids that do not match a student are skipped.
        """
        students = await self.student_service.get_students_by_ids(data.student_ids, current_user.id)
        if not students:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")

        log.info(f"Sending class summary for {len(students)} student(s) from user {current_user.id}")
        sends = [
            self._send_to_parent(
                student,
                f"Class Summary for {student.name} - {data.date}",
                templates.render_class_summary(
                    student.parent_name, student.name, current_user.name,
                    data.date, data.duration_minutes, data.summary
                )
            )
            for student in students
        ]
        results = await asyncio.gather(*sends)
        return self._report(list(results))

    async def send_payment_reminder(
        self,
        data: notify_models.PaymentReminderNotification,
        current_user: db_models.Users
    ) -> notify_models.NotificationReport:
        """
        The amount due is the stored balance, the count is the student's
        unpaid sessions.
        """
        student = await self._get_student_or_404(data.student_id, current_user)
        sessions = await self.balance_service.get_sessions_for_student(student.id, current_user.id)
        unpaid_sessions = sum(1 for s in sessions if not s.is_paid)

        result = await self._send_to_parent(
            student,
            f"Payment Reminder for {student.name}'s Tutoring",
            templates.render_payment_reminder(
                student.parent_name, student.name, current_user.name,
                student.balance, unpaid_sessions
            )
        )
        return self._report([result])

    async def send_custom(
        self,
        data: notify_models.CustomNotification,
        current_user: db_models.Users
    ) -> notify_models.NotificationReport:
        student = await self._get_student_or_404(data.student_id, current_user)
        result = await self._send_to_parent(
            student,
            data.subject,
            templates.render_custom_message(
                student.parent_name, student.name, current_user.name, data.message
            )
        )
        return self._report([result])
