"""
Credential store & verifier: registration, login, token issuing
"""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidmeta.auth.jwt import JWTService
from vidmeta.auth.security import SecurityService
from vidmeta.database.models.user import User
from vidmeta.database.repositories.user_repository import UserRepository
from vidmeta.exceptions import AuthenticationError, ConflictError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class AuthService:
    """Регистрация и проверка учётных данных пользователей."""

    def __init__(
        self,
        session: AsyncSession,
        security: SecurityService,
        tokens: JWTService,
    ):
        self._session = session
        self._repo = UserRepository(session)
        self._security = security
        self._tokens = tokens

    async def register(self, email: str, password: str, name: Optional[str] = None) -> User:
        """
        Создание пользователя с bcrypt-хэшем пароля.

        Raises:
            ConflictError: email уже зарегистрирован
        """
        if await self._repo.get_by_email(email) is not None:
            raise ConflictError("Email already registered", code="DUPLICATE_EMAIL")

        user = await self._repo.create(
            email=email,
            hashed_password=self._security.hash_password(password),
            name=name,
        )
        try:
            await self._session.commit()
        except IntegrityError:
            # concurrent registration with the same email
            await self._session.rollback()
            raise ConflictError("Email already registered", code="DUPLICATE_EMAIL")

        logger.info("User registered", extra={"user_id": user.id})
        return user

    async def verify(self, email: str, password: str) -> User:
        """
        Проверка email и пароля.

        Unknown email and wrong password raise the same error after the same
        amount of hashing work.

        Raises:
            AuthenticationError: неверные учётные данные
        """
        user = await self._repo.get_by_email(email)
        if user is None:
            self._security.dummy_verify()
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE, code="INVALID_CREDENTIALS")
        if not self._security.verify_password(password, user.hashed_password):
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE, code="INVALID_CREDENTIALS")
        return user

    async def login(self, email: str, password: str) -> str:
        """Проверка учётных данных и выпуск токена."""
        user = await self.verify(email, password)
        logger.info("User logged in", extra={"user_id": user.id})
        return self._tokens.issue(user_id=user.id, email=user.email)
