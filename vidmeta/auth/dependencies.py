"""Authentication dependencies for FastAPI"""
import logging
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from vidmeta.database.connection import get_db
from vidmeta.database.models.user import User
from vidmeta.database.repositories.user_repository import UserRepository
from vidmeta.auth.jwt import JWTService, TokenStatus
from vidmeta.auth.security import SecurityService
from vidmeta.config import Settings, get_settings, settings
from vidmeta.exceptions import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)

# Bearer scheme for token extraction; missing header is handled below
bearer_scheme = HTTPBearer(auto_error=False)

# Initialize services
jwt_service = JWTService(
    secret_key=settings.JWT_SECRET,
    algorithm=settings.JWT_ALGORITHM,
    expire_minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES,
)

security_service = SecurityService(rounds=settings.BCRYPT_ROUNDS)


def get_jwt_service() -> JWTService:
    """Dependency returning the process-wide JWT service"""
    return jwt_service


def get_security_service() -> SecurityService:
    """Dependency returning the process-wide password hashing service"""
    return security_service


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
    tokens: JWTService = Depends(get_jwt_service),
) -> User:
    """
    Dependency to get current authenticated user from the bearer token

    Args:
        credentials: Parsed Authorization header
        db: Database session
        tokens: JWT service

    Returns:
        User: Current authenticated user

    Raises:
        AuthenticationError: token missing or expired, user gone (401)
        AuthorizationError: token malformed or badly signed (403)
    """
    if credentials is None:
        raise AuthenticationError("No token provided")

    result = tokens.validate(credentials.credentials)
    if result.status is TokenStatus.EXPIRED:
        logger.info("get_current_user: token expired")
        raise AuthenticationError("Token has expired", code="TOKEN_EXPIRED")
    if result.status is TokenStatus.MALFORMED:
        logger.warning("get_current_user: invalid token: %s", result.reason)
        raise AuthorizationError("Invalid token", code="INVALID_TOKEN")

    user_id = result.payload.user_id
    user = await UserRepository(db).get_by_id(user_id)
    if user is None:
        logger.warning("get_current_user: user %s not found in DB", user_id)
        raise AuthenticationError("User not found")

    return user


async def get_optional_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
    tokens: JWTService = Depends(get_jwt_service),
) -> Optional[User]:
    """
    Dependency to optionally get current user

    Returns None if no token or an unusable token is provided.
    """
    if credentials is None:
        return None

    try:
        return await get_current_user(credentials, db, tokens)
    except (AuthenticationError, AuthorizationError):
        return None


async def get_list_viewer(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
    tokens: JWTService = Depends(get_jwt_service),
    app_settings: Settings = Depends(get_settings),
) -> Optional[User]:
    """
    Caller of GET /videos according to VIDEOS_LIST_REQUIRES_AUTH

    Strict policy: same as get_current_user. Open policy: optional user.
    """
    if app_settings.VIDEOS_LIST_REQUIRES_AUTH:
        return await get_current_user(credentials, db, tokens)
    return await get_optional_current_user(credentials, db, tokens)
