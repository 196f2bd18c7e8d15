"""Login/profile calls against the IBD API, persisting the token locally"""

import logging
from typing import Optional

import httpx

from ..schemas.auth import LoginRequest, LoginResult, UserProfile
from .token_store import TokenStore

logger = logging.getLogger(__name__)


class AuthServiceError(Exception):
    """The API answered but not with a usable login response"""


class AuthService:
    """
    Wraps the /auth endpoints.

    The client is expected to come from create_api_client so that requests
    after login carry the token this service stores.
    """

    def __init__(self, client: httpx.Client, store: Optional[TokenStore] = None):
        self.client = client
        self.store = store or TokenStore()

    def login(self, username: str, password: str) -> LoginResult:
        credentials = LoginRequest(username=username, password=password)
        response = self.client.post("/auth/login", json=credentials.model_dump())
        response.raise_for_status()

        data = response.json()
        token = data.get("token")
        if not token:
            raise AuthServiceError("Login response did not include a token")

        result = LoginResult(token=token, user=data.get("user"))
        self.store.set_token(token)
        logger.info(f"Logged in as {credentials.username}")
        return result

    def get_profile(self) -> Optional[UserProfile]:
        response = self.client.get("/auth/profile")
        response.raise_for_status()
        user = response.json().get("user")
        return UserProfile.model_validate(user) if user else None

    def logout(self) -> None:
        self.store.remove_token()
        logger.info("Stored token cleared")
