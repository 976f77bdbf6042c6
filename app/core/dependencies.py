"""
FastAPI dependencies.
"""
import logging
from typing import AsyncGenerator

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import (
    AuthenticatedUser,
    AuthProviderError,
    SupabaseAuthClient,
    extract_bearer_token,
)
from app.core.config import Config
from app.core.exceptions import AuthenticationError, DatabaseUnavailable
from app.database.session_manager.db_session import Database
from app.services.estimators.emission_estimator import EmissionEstimator
from app.utils.constants import ErrorCode

logger = logging.getLogger(__name__)


def get_app_config(request: Request) -> Config:
    return request.app.state.config


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a session that commits when the request handler succeeds.

    Raises:
        DatabaseUnavailable: the database was never initialized
    """
    if not Database.is_initialized():
        raise DatabaseUnavailable()
    async with Database() as session:
        yield session


def get_emission_estimator(
    config: Config = Depends(get_app_config),
) -> EmissionEstimator:
    return EmissionEstimator.from_config(config)


def get_auth_client(
    config: Config = Depends(get_app_config),
) -> SupabaseAuthClient | None:
    """Auth client, or None when the identity provider is not configured."""
    if not config.supabase_url or not config.supabase_anon_key:
        return None
    return SupabaseAuthClient(config.supabase_url, config.supabase_anon_key)


async def get_current_user(
    authorization: str | None = Header(None),
    auth_client: SupabaseAuthClient | None = Depends(get_auth_client),
) -> AuthenticatedUser:
    """
    Require an authenticated user.

    Raises:
        AuthenticationError: missing, invalid or unverifiable token
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise AuthenticationError("Access token required", ErrorCode.MISSING_TOKEN)

    if auth_client is None:
        logger.error("Authentication requested but identity provider is not configured")
        raise AuthenticationError("Authentication failed")

    try:
        user = await auth_client.get_user(token)
    except AuthProviderError as e:
        logger.error(f"Authentication error: {e}")
        raise AuthenticationError("Authentication failed") from e

    if user is None:
        raise AuthenticationError("Invalid or expired token", ErrorCode.INVALID_TOKEN)
    return user


async def get_optional_user(
    authorization: str | None = Header(None),
    auth_client: SupabaseAuthClient | None = Depends(get_auth_client),
) -> AuthenticatedUser | None:
    """Resolve the user if a valid token is present; never fails the request."""
    token = extract_bearer_token(authorization)
    if token is None or auth_client is None:
        return None

    try:
        return await auth_client.get_user(token)
    except AuthProviderError as e:
        logger.warning(f"Optional auth error: {e}")
        return None
