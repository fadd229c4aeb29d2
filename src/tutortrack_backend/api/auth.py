'''
API endpoints for Authentication: Google sign-in, logout and the current user.
'''
from typing import Annotated, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Request
from fastapi.responses import RedirectResponse, JSONResponse

from ..services.auth_service import LoginService
from ..services.security import verify_token_and_get_user
from ..database import models as db_models
from ..models import user as user_models
from ..common.config import settings
from ..common.logger import log

OAUTH_STATE_COOKIE_NAME = "oauth_state"

class AuthRoutes:
    """
    A class to encapsulate all authentication endpoints.
    """
    def __init__(self):
        self.router = APIRouter(tags=["Authentication"])
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
            "/auth/google",
            self.google_login,
            methods=["GET"],
            summary="Redirect to Google sign-in"
        )
        self.router.add_api_route(
            "/auth/google/callback",
            self.google_callback,
            methods=["GET"],
            summary="Google sign-in callback"
        )
        self.router.add_api_route(
            "/api/logout",
            self.logout,
            methods=["POST"],
            summary="Logout"
        )
        self.router.add_api_route(
            "/api/user",
            self.get_current_user,
            methods=["GET"],
            response_model=user_models.UserRead,
            summary="Current user"
        )

    async def google_login(
        self,
        login_service: Annotated[LoginService, Depends(LoginService)]
    ):
        """
        Sends the browser to Google's consent screen.
        The state is remembered in a short-lived cookie and checked on callback.
        """
        state = login_service.new_state()
        response = RedirectResponse(
            url=login_service.get_authorization_url(state),
            status_code=status.HTTP_302_FOUND
        )
        response.set_cookie(
            OAUTH_STATE_COOKIE_NAME,
            state,
            max_age=600,
            httponly=True,
            samesite="lax",
            secure=not settings.TEST_MODE
        )
        return response

    async def google_callback(
        self,
        request: Request,
        login_service: Annotated[LoginService, Depends(LoginService)],
        code: Optional[str] = None,
        state: Optional[str] = None
    ):
        """
        Exchanges the code, creates the tutor on first login, stores the
        access token in an http-only cookie and returns to the frontend.
        """
        expected_state = request.cookies.get(OAUTH_STATE_COOKIE_NAME)
        if not code or not state or state != expected_state:
            log.warning("Google callback rejected: missing code or state mismatch.")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid OAuth callback."
            )

        token = await login_service.login_with_google(code)

        response = RedirectResponse(url=settings.FRONTEND_URL, status_code=status.HTTP_302_FOUND)
        response.set_cookie(
            settings.ACCESS_TOKEN_COOKIE_NAME,
            token.access_token,
            max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            httponly=True,
            samesite="lax",
            secure=not settings.TEST_MODE
        )
        response.delete_cookie(OAUTH_STATE_COOKIE_NAME)
        return response

    async def logout(self):
        response = JSONResponse({"message": "Logged out successfully"})
        response.delete_cookie(settings.ACCESS_TOKEN_COOKIE_NAME)
        return response

    async def get_current_user(
        self,
        current_user: Annotated[db_models.Users, Depends(verify_token_and_get_user)]
    ):
        return current_user

# Create an instance of the class and export its router
auth_routes = AuthRoutes()
router = auth_routes.router
