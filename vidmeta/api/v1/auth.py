"""Authentication endpoints"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from vidmeta.auth.dependencies import get_db, get_jwt_service, get_security_service
from vidmeta.auth.jwt import JWTService
from vidmeta.auth.security import SecurityService
from vidmeta.schemas.user import Token, UserLogin, UserRegister, UserResponse
from vidmeta.services.auth_service import AuthService

router = APIRouter()


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
    security: SecurityService = Depends(get_security_service),
    tokens: JWTService = Depends(get_jwt_service),
) -> AuthService:
    return AuthService(db, security, tokens)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user

    - **email**: Valid, not yet registered email address
    - **password**: 6-128 characters
    - **name**: Optional display name
    """
    user = await service.register(
        email=user_data.email,
        password=user_data.password,
        name=user_data.name,
    )
    return UserResponse.model_validate(user)


@router.post("/login", response_model=Token)
async def login(
    credentials: UserLogin,
    service: AuthService = Depends(get_auth_service),
    tokens: JWTService = Depends(get_jwt_service),
):
    """
    Authenticate user and return a bearer token

    Unknown email and wrong password return the same 401 response.
    """
    token = await service.login(credentials.email, credentials.password)
    return Token(token=token, token_type="bearer", expires_in=tokens.expires_in)
