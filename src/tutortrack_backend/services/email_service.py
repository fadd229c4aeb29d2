'''
Transactional email to parents, sent through the Resend HTTP API.
'''
from html import escape

import httpx

from ..common.config import settings
from ..common.exceptions import EmailDeliveryError
from ..common.logger import log
from ..models.notify import EmailResult


# --- Templates ---

_LAYOUT = """
<div style="font-family: 'Segoe UI', Arial, sans-serif; max-width: 600px; margin: 0 auto; background: #ffffff;">
    <div style="background: {header_background}; padding: 32px; border-radius: 12px 12px 0 0;">
        <h1 style="color: white; margin: 0; font-size: 24px;">{title}</h1>
    </div>
    <div style="padding: 32px; border: 1px solid #e5e7eb; border-top: none; border-radius: 0 0 12px 12px;">
        {body}
        <p style="color: #9ca3af; font-size: 12px; margin-top: 32px;">Sent via TutorTrack</p>
    </div>
</div>
"""

def _render(title: str, header_background: str, body: str) -> str:
    return _LAYOUT.format(title=title, header_background=header_background, body=body)

def _signature(tutor_name: str) -> str:
    return f'<p style="color: #374151; font-size: 14px; margin-top: 24px;">Best regards,<br/><strong>{escape(tutor_name)}</strong></p>'

def render_class_summary(parent_name: str, student_name: str, tutor_name: str, date: str, duration_minutes: int, summary: str) -> str:
    rows = "".join(
        f'<tr><td style="padding: 8px 0; color: #6b7280; font-size: 14px;">{label}</td>'
        f'<td style="padding: 8px 0; color: #111827; font-size: 14px; font-weight: 600;">{value}</td></tr>'
        for label, value in (
            ("Date", escape(date)),
            ("Duration", f"{duration_minutes} minutes"),
            ("Tutor", escape(tutor_name)),
        )
    )
    notes = ""
    if summary:
        notes = (
            '<div style="margin: 20px 0;">'
            '<h3 style="color: #374151; font-size: 16px; margin-bottom: 8px;">Session Notes</h3>'
            '<p style="color: #4b5563; font-size: 14px; line-height: 1.6; background: #f0fdf4; padding: 16px; '
            f'border-radius: 8px; border-left: 4px solid #22c55e;">{escape(summary)}</p></div>'
        )
    body = (
        f'<p style="color: #374151; font-size: 16px;">Hi {escape(parent_name)},</p>'
        f'<p style="color: #374151; font-size: 16px;">Here\'s a summary of <strong>{escape(student_name)}</strong>\'s recent tutoring session:</p>'
        f'<div style="background: #f9fafb; border-radius: 8px; padding: 20px; margin: 20px 0;">'
        f'<table style="width: 100%; border-collapse: collapse;">{rows}</table></div>'
        f'{notes}'
    )
    return _render("Class Summary", "linear-gradient(135deg, #6366f1, #8b5cf6)", body)

def render_payment_reminder(parent_name: str, student_name: str, tutor_name: str, amount_due: int, unpaid_sessions: int) -> str:
    plural = "" if unpaid_sessions == 1 else "s"
    body = (
        f'<p style="color: #374151; font-size: 16px;">Hi {escape(parent_name)},</p>'
        f'<p style="color: #374151; font-size: 16px;">This is a friendly reminder about the outstanding balance for '
        f'<strong>{escape(student_name)}</strong>\'s tutoring sessions.</p>'
        '<div style="background: #fef3c7; border-radius: 8px; padding: 20px; margin: 20px 0; text-align: center;">'
        '<p style="color: #92400e; font-size: 14px; margin: 0 0 4px 0;">Amount Due</p>'
        f'<p style="color: #92400e; font-size: 36px; font-weight: 700; margin: 0;">${amount_due}</p>'
        f'<p style="color: #b45309; font-size: 14px; margin: 8px 0 0 0;">{unpaid_sessions} unpaid session{plural}</p></div>'
        '<p style="color: #4b5563; font-size: 14px;">Please arrange payment at your earliest convenience. '
        'If you\'ve already paid, please disregard this reminder.</p>'
        f'{_signature(tutor_name)}'
    )
    return _render("Payment Reminder", "linear-gradient(135deg, #f59e0b, #ef4444)", body)

def render_custom_message(parent_name: str, student_name: str, tutor_name: str, message: str) -> str:
    body = (
        f'<p style="color: #374151; font-size: 16px;">Hi {escape(parent_name)},</p>'
        f'<p style="color: #374151; font-size: 16px;">A message regarding <strong>{escape(student_name)}</strong>:</p>'
        '<div style="background: #f0f9ff; border-radius: 8px; padding: 20px; margin: 20px 0; border-left: 4px solid #3b82f6;">'
        f'<p style="color: #1e3a5f; font-size: 15px; line-height: 1.7; margin: 0; white-space: pre-wrap;">{escape(message)}</p></div>'
        f'{_signature(tutor_name)}'
    )
    return _render(f"Message from {escape(tutor_name)}", "linear-gradient(135deg, #06b6d4, #3b82f6)", body)


# --- Delivery ---

class EmailService:
    """
    Sends a single HTML email. Never raises: every outcome is an EmailResult.
    """
    RESEND_API_URL = "https://api.resend.com/emails"

    async def _post(self, payload: dict) -> None:
        try:
            async with httpx.AsyncClient(timeout=10.0) as client:
                response = await client.post(
                    self.RESEND_API_URL,
                    json=payload,
                    headers={"Authorization": f"Bearer {settings.RESEND_API_KEY}"}
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise EmailDeliveryError(f"Email provider returned {e.response.status_code}: {e.response.text}") from e
        except httpx.RequestError as e:
            raise EmailDeliveryError(f"Email provider unreachable: {e}") from e

    async def send(self, to: str, subject: str, html: str) -> EmailResult:
        log.info(f"Sending email '{subject}' to {to}")
        try:
            await self._post({
                "from": settings.EMAIL_FROM,
                "to": to,
                "subject": subject,
                "html": html,
            })
            return EmailResult(success=True)
        except EmailDeliveryError as e:
            log.error(f"Failed to send email '{subject}' to {to}: {e}", exc_info=True)
            return EmailResult(success=False, error=str(e) or "Failed to send email")
