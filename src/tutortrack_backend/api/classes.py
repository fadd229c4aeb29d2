'''
API endpoints for managing Class Sessions.
'''
from typing import Annotated, Any, List
from fastapi import APIRouter, Depends, status

from ..database import models as db_models
from ..models import class_session as class_session_models
from ..services.security import verify_token_and_get_user
from ..services.class_session_service import ClassSessionService

class ClassSessionsAPI:
    """
    A class to encapsulate endpoints for Class Sessions.
    There is intentionally no delete endpoint.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/api/classes",
            tags=["Class Sessions"]
        )
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
            "",
            self.list_sessions,
            methods=["GET"],
            response_model=List[class_session_models.ClassSessionRead])
        self.router.add_api_route(
            "",
            self.create_session,
            methods=["POST"],
            status_code=status.HTTP_201_CREATED,
            response_model=class_session_models.ClassSessionRead)
        self.router.add_api_route(
            "/student/{student_id}",
            self.list_sessions_for_student,
            methods=["GET"],
            response_model=List[class_session_models.ClassSessionRead])
        self.router.add_api_route(
            "/{session_id}",
            self.get_session,
            methods=["GET"],
            response_model=class_session_models.ClassSessionRead)
        self.router.add_api_route(
            "/{session_id}",
            self.update_session,
            methods=["PATCH"],
            response_model=class_session_models.ClassSessionRead)

    async def list_sessions(
        self,
        current_user: Annotated[db_models.Users, Depends(verify_token_and_get_user)],
        class_session_service: Annotated[ClassSessionService, Depends(ClassSessionService)]
    ) -> List[Any]:
        """
        Retrieves all class sessions of the current tutor, oldest first.
        """
        return await class_session_service.list_sessions(current_user)

    async def list_sessions_for_student(
        self,
        student_id: str,
        current_user: Annotated[db_models.Users, Depends(verify_token_and_get_user)],
        class_session_service: Annotated[ClassSessionService, Depends(ClassSessionService)]
    ) -> List[Any]:
        return await class_session_service.list_sessions_for_student(student_id, current_user)

    async def get_session(
        self,
        session_id: str,
        current_user: Annotated[db_models.Users, Depends(verify_token_and_get_user)],
        class_session_service: Annotated[ClassSessionService, Depends(ClassSessionService)]
    ) -> Any:
        return await class_session_service.get_session(session_id, current_user)

    async def create_session(
        self,
        session_data: class_session_models.ClassSessionCreate,
        current_user: Annotated[db_models.Users, Depends(verify_token_and_get_user)],
        class_session_service: Annotated[ClassSessionService, Depends(ClassSessionService)]
    ) -> Any:
        """
        Logs a class and refreshes the balances of its students.
        """
        return await class_session_service.create_session(session_data, current_user)

    async def update_session(
        self,
        session_id: str,
        session_data: class_session_models.ClassSessionUpdate,
        current_user: Annotated[db_models.Users, Depends(verify_token_and_get_user)],
        class_session_service: Annotated[ClassSessionService, Depends(ClassSessionService)]
    ) -> Any:
        """
        Edits a class (date, duration, summary, paid status...) and
        refreshes the balances of its students.
        """
        return await class_session_service.update_session(session_id, session_data, current_user)


# Instantiate the class and export its router
class_sessions_api = ClassSessionsAPI()
router = class_sessions_api.router
