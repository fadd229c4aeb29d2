'''
API endpoints for emailing parents.
'''
from typing import Annotated, Any
from fastapi import APIRouter, Depends

from ..database import models as db_models
from ..models import notify as notify_models
from ..services.security import verify_token_and_get_user
from ..services.notification_service import NotificationService

class NotifyAPI:
    """
    A class to encapsulate the parent notification endpoints.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/api/notify",
            tags=["Notifications"]
        )
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
            "/class-summary",
            self.send_class_summary,
            methods=["POST"],
            response_model=notify_models.NotificationReport)
        self.router.add_api_route(
            "/payment-reminder",
            self.send_payment_reminder,
            methods=["POST"],
            response_model=notify_models.NotificationReport)
        self.router.add_api_route(
            "/custom",
            self.send_custom,
            methods=["POST"],
            response_model=notify_models.NotificationReport)

    async def send_class_summary(
        self,
        data: notify_models.ClassSummaryNotification,
        current_user: Annotated[db_models.Users, Depends(verify_token_and_get_user)],
        notification_service: Annotated[NotificationService, Depends(NotificationService)]
    ) -> Any:
        """
        Emails a class summary to the parent of every listed student.
        """
        return await notification_service.send_class_summary(data, current_user)

    async def send_payment_reminder(
        self,
        data: notify_models.PaymentReminderNotification,
        current_user: Annotated[db_models.Users, Depends(verify_token_and_get_user)],
        notification_service: Annotated[NotificationService, Depends(NotificationService)]
    ) -> Any:
        return await notification_service.send_payment_reminder(data, current_user)

    async def send_custom(
        self,
        data: notify_models.CustomNotification,
        current_user: Annotated[db_models.Users, Depends(verify_token_and_get_user)],
        notification_service: Annotated[NotificationService, Depends(NotificationService)]
    ) -> Any:
        return await notification_service.send_custom(data, current_user)

# Instantiate the class and export its router
notify_api = NotifyAPI()
router = notify_api.router
