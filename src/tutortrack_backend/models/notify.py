'''
Request and response models for the parent notification endpoints.
'''
from typing import Optional

from pydantic import Field

from .base import CamelModel


class ClassSummaryNotification(CamelModel):
    """
    Body of POST /api/notify/class-summary.
    'date' is the display string chosen by the client.
    """
    student_ids: list[str] = Field(..., min_length=1)
    date: str
    duration_minutes: int = Field(..., gt=0)
    summary: str = ""


class PaymentReminderNotification(CamelModel):
    """Body of POST /api/notify/payment-reminder."""
    student_id: str


class CustomNotification(CamelModel):
    """Body of POST /api/notify/custom."""
    student_id: str
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)


class EmailResult(CamelModel):
    """Outcome of a single send. Failures are reported, never raised."""
    success: bool
    error: Optional[str] = None


class RecipientResult(EmailResult):
    student_id: str
    parent_email: str


class NotificationReport(CamelModel):
    sent: int
    failed: int
    results: list[RecipientResult]
