'''
Google sign-in for tutors (OAuth 2.0 authorization-code flow).
'''
import secrets
from typing import Annotated
from urllib.parse import urlencode

import httpx
from fastapi import Depends, HTTPException, status

from .security import JWTHandler
from .user_service import UserService
from ..common.config import settings
from ..common.exceptions import OAuthExchangeError
from ..common.logger import log
from ..models import token as token_models
from ..models import user as user_models


class GoogleOAuthClient:
    """
    Thin client for Google's OAuth endpoints.
    """
    AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"
    USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
    SCOPES = ["openid", "profile", "email"]

    def build_authorization_url(self, state: str) -> str:
        params = {
            "client_id": settings.GOOGLE_CLIENT_ID,
            "redirect_uri": settings.GOOGLE_REDIRECT_URI,
            "response_type": "code",
            "scope": " ".join(self.SCOPES),
            "state": state,
            "access_type": "online",
            "prompt": "select_account",
        }
        return f"{self.AUTHORIZE_URL}?{urlencode(params)}"

    async def fetch_profile(self, code: str) -> user_models.GoogleProfile:
        """
        Exchanges an authorization code for an access token and
        fetches the account's profile with it.
        """
        try:
            async with httpx.AsyncClient() as client:
                token_response = await client.post(self.TOKEN_URL, data={
                    "code": code,
                    "client_id": settings.GOOGLE_CLIENT_ID,
                    "client_secret": settings.GOOGLE_CLIENT_SECRET,
                    "redirect_uri": settings.GOOGLE_REDIRECT_URI,
                    "grant_type": "authorization_code",
                })
                token_response.raise_for_status()
                access_token = token_response.json()["access_token"]

                profile_response = await client.get(
                    self.USERINFO_URL,
                    headers={"Authorization": f"Bearer {access_token}"}
                )
                profile_response.raise_for_status()
                return user_models.GoogleProfile(**profile_response.json())
        except httpx.HTTPStatusError as e:
            raise OAuthExchangeError(f"Google returned {e.response.status_code}: {e.response.text}") from e
        except (httpx.RequestError, KeyError) as e:
            raise OAuthExchangeError(f"Google OAuth exchange failed: {e}") from e


class LoginService:
    """
    Service for handling tutor login.
    Depends on the UserService to fetch or create the account.
    """
    def __init__(
        self,
        user_service: Annotated[UserService, Depends(UserService)],
        oauth_client: Annotated[GoogleOAuthClient, Depends(GoogleOAuthClient)]
    ):
        self.user_service = user_service
        self.oauth_client = oauth_client

    @staticmethod
    def new_state() -> str:
        return secrets.token_urlsafe(24)

    def get_authorization_url(self, state: str) -> str:
        return self.oauth_client.build_authorization_url(state)

    async def login_with_google(self, code: str) -> token_models.Token:
        log.info("Completing Google login.")
        try:
            profile = await self.oauth_client.fetch_profile(code)
            user = await self.user_service.get_or_create_from_google(profile)
        except (OAuthExchangeError, ValueError) as e:
            log.warning(f"Google login failed: {e}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Google login failed.",
            )

        access_token = JWTHandler.create_access_token(subject=user.email)
        log.info(f"Login successful for user: {user.email}")
        return token_models.Token(access_token=access_token, token_type="bearer")
