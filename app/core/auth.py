"""
Identity delegation to Supabase Auth.

Bearer tokens are never verified locally: the provider's ``/auth/v1/user``
endpoint resolves a token to its user or rejects it.
"""
import logging
from typing import Any

import httpx
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class AuthenticatedUser(BaseModel):
    """User resolved from a bearer token."""

    id: str
    email: str | None = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def full_name(self) -> str:
        return self.user_metadata.get("full_name") or ""


class AuthProviderError(Exception):
    """The identity provider could not be reached or answered unexpectedly."""


class SupabaseAuthClient:
    """Resolves bearer tokens through the Supabase Auth REST API."""

    def __init__(
        self,
        supabase_url: str,
        anon_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.supabase_url = supabase_url.rstrip("/")
        self.anon_key = anon_key
        self.timeout = timeout
        self.transport = transport

    async def get_user(self, token: str) -> AuthenticatedUser | None:
        """
        Resolve a token to its user.

        Returns:
            AuthenticatedUser, or None when the provider rejects the token

        Raises:
            AuthProviderError: provider unreachable or unexpected response
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(
                    f"{self.supabase_url}/auth/v1/user",
                    headers={
                        "apikey": self.anon_key,
                        "Authorization": f"Bearer {token}",
                    },
                )
        except httpx.HTTPError as e:
            raise AuthProviderError(f"Identity provider unreachable: {e}") from e

        if response.status_code in (401, 403, 404):
            return None
        if not response.is_success:
            raise AuthProviderError(
                f"Identity provider returned {response.status_code}"
            )

        try:
            body = response.json()
        except ValueError as e:
            raise AuthProviderError("Identity provider returned invalid JSON") from e
        if not isinstance(body, dict):
            raise AuthProviderError("Identity provider returned an unexpected body")
        if not body.get("id"):
            return None
        try:
            return AuthenticatedUser.model_validate(body)
        except ValidationError as e:
            raise AuthProviderError(f"Identity provider returned an invalid user: {e}") from e


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token of a ``Bearer <token>`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
