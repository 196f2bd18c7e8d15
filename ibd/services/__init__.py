# Services package
from .token_store import TokenStore, TokenStoreError
from .api_client import (
    CredentialHookError,
    create_api_client,
    create_async_api_client,
    store_token_provider,
)
from .auth_service import AuthService, AuthServiceError

__all__ = [
    "TokenStore", "TokenStoreError",
    "CredentialHookError", "create_api_client", "create_async_api_client", "store_token_provider",
    "AuthService", "AuthServiceError",
]
