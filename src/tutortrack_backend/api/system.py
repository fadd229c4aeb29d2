'''
Liveness and database connectivity checks.
'''
from datetime import datetime
from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.engine import get_db_session
from ..common.logger import log

class SystemAPI:
    """
    Unauthenticated endpoints used by uptime monitors and deploy checks.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/api",
            tags=["System"]
        )
        self._register_routes()

    def _register_routes(self):
        self.router.add_api_route("/health", self.health, methods=["GET"])
        self.router.add_api_route("/db-check", self.db_check, methods=["GET"])

    async def health(self):
        return {"status": "ok", "time": datetime.now().isoformat()}

    async def db_check(
        self,
        db: Annotated[AsyncSession, Depends(get_db_session)]
    ):
        """
        Runs a trivial query to prove the database is reachable.
        """
        try:
            result = await db.execute(text("SELECT CURRENT_TIMESTAMP"))
            db_time = result.scalar_one()
        except Exception as e:
            log.error(f"Database check failed: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Database unavailable"
            )
        return {"status": "ok", "time": str(db_time)}

system_api = SystemAPI()
router = system_api.router
