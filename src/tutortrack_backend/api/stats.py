'''
API endpoints for dashboard statistics and earnings.
'''
from typing import Annotated, Any
from fastapi import APIRouter, Depends

from ..database import models as db_models
from ..models import stats as stats_models
from ..services.security import verify_token_and_get_user
from ..services.stats_service import StatsService

class StatsAPI:
    """
    A class to encapsulate the read-only statistics endpoints.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/api/stats",
            tags=["Stats"]
        )
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route("", self.get_stats, methods=["GET"], response_model=stats_models.DashboardStats)
        self.router.add_api_route("/earnings", self.get_earnings, methods=["GET"], response_model=stats_models.EarningsBreakdown)

    async def get_stats(
        self,
        current_user: Annotated[db_models.Users, Depends(verify_token_and_get_user)],
        stats_service: Annotated[StatsService, Depends(StatsService)]
    ) -> Any:
        """
        Student count, classes this week, revenue this month and unpaid classes.
        """
        return await stats_service.get_stats_for_api(current_user)

    async def get_earnings(
        self,
        current_user: Annotated[db_models.Users, Depends(verify_token_and_get_user)],
        stats_service: Annotated[StatsService, Depends(StatsService)]
    ) -> Any:
        """
        Total earned, collected and outstanding over all sessions.
        """
        return await stats_service.get_earnings_for_api(current_user)

# Instantiate the class and export its router
stats_api = StatsAPI()
router = stats_api.router
