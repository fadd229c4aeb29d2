'''
API endpoints for managing Students.
'''
from typing import Annotated, Any, List
from fastapi import APIRouter, Depends, status, Response

from ..database import models as db_models
from ..models import student as student_models
from ..services.security import verify_token_and_get_user
from ..services.student_service import StudentService
from ..services.balance_service import BalanceService

class StudentsAPI:
    """
    A class to encapsulate CRUD endpoints for Students.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/api/students",
            tags=["Students"]
        )
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
                "",
                self.list_students,
                methods=["GET"],
                response_model=List[student_models.StudentRead])

        self.router.add_api_route(
                "",
                self.create_student,
                methods=["POST"],
                status_code=status.HTTP_201_CREATED,
                response_model=student_models.StudentRead)

        self.router.add_api_route(
                "/{student_id}",
                self.get_student,
                methods=["GET"],
                response_model=student_models.StudentRead)

        self.router.add_api_route(
                "/{student_id}",
                self.update_student,
                methods=["PATCH"],
                response_model=student_models.StudentRead)

        self.router.add_api_route(
                "/{student_id}",
                self.delete_student,
                methods=["DELETE"],
                status_code=status.HTTP_204_NO_CONTENT)

        self.router.add_api_route(
                "/{student_id}/recalculate",
                self.recalculate_balance,
                methods=["POST"],
                response_model=student_models.StudentRead)

    async def list_students(
        self,
        current_user: Annotated[db_models.Users, Depends(verify_token_and_get_user)],
        student_service: Annotated[StudentService, Depends(StudentService)]
    ) -> List[Any]:
        """
        Retrieves all students of the current tutor.
        """
        return await student_service.list_students(current_user)

    async def get_student(
        self,
        student_id: str,
        current_user: Annotated[db_models.Users, Depends(verify_token_and_get_user)],
        student_service: Annotated[StudentService, Depends(StudentService)]
    ) -> Any:
        return await student_service.get_student(student_id, current_user)

    async def create_student(
        self,
        student_data: student_models.StudentCreate,
        current_user: Annotated[db_models.Users, Depends(verify_token_and_get_user)],
        student_service: Annotated[StudentService, Depends(StudentService)]
    ) -> Any:
        """
        Creates a new student with a zero balance.
        """
        return await student_service.create_student(student_data, current_user)

    async def update_student(
        self,
        student_id: str,
        student_data: student_models.StudentUpdate,
        current_user: Annotated[db_models.Users, Depends(verify_token_and_get_user)],
        student_service: Annotated[StudentService, Depends(StudentService)]
    ) -> Any:
        """
        Updates the editable fields of a student.
        """
        return await student_service.update_student(student_id, student_data, current_user)

    async def delete_student(
        self,
        student_id: str,
        current_user: Annotated[db_models.Users, Depends(verify_token_and_get_user)],
        student_service: Annotated[StudentService, Depends(StudentService)]
    ):
        await student_service.delete_student(student_id, current_user)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    async def recalculate_balance(
        self,
        student_id: str,
        current_user: Annotated[db_models.Users, Depends(verify_token_and_get_user)],
        balance_service: Annotated[BalanceService, Depends(BalanceService)]
    ) -> Any:
        """
        Recomputes the student's balance and total paid from their sessions.
        """
        return await balance_service.recalculate_for_api(student_id, current_user)

# Instantiate the class and export its router
students_api = StudentsAPI()
router = students_api.router
