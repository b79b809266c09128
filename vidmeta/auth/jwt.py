"""JWT service for session token issuing and validation"""
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel, ValidationError


class TokenPayload(BaseModel):
    """Token payload model"""
    user_id: int
    email: str
    exp: datetime
    iat: datetime


class TokenStatus(str, Enum):
    """Outcome of token validation"""
    VALID = "valid"
    EXPIRED = "expired"
    MALFORMED = "malformed"


class TokenValidation(BaseModel):
    """Tagged validation result; payload is set only when status is VALID"""
    status: TokenStatus
    payload: Optional[TokenPayload] = None
    reason: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.status is TokenStatus.VALID


class JWTService:
    """Service for JWT token operations"""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 1440,
    ):
        """
        Initialize JWT service

        Args:
            secret_key: Secret key for signing tokens
            algorithm: Algorithm to use for token encoding (default: HS256)
            expire_minutes: Token lifetime in minutes (default: one day)
        """
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds"""
        return self.expire_minutes * 60

    def issue(
        self,
        user_id: int,
        email: str,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Issue an access token for a user

        Args:
            user_id: User ID
            email: User email
            expires_delta: Custom lifetime (default: expire_minutes)

        Returns:
            Signed JWT string
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else timedelta(minutes=self.expire_minutes))

        to_encode = {
            "user_id": user_id,
            "email": email,
            "exp": expire,
            "iat": now,
        }

        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def validate(self, token: str) -> TokenValidation:
        """
        Validate signature, expiry and claims of a token

        Never raises: every failure is reported through the returned status.

        Args:
            token: JWT token string

        Returns:
            TokenValidation with VALID and the payload, EXPIRED, or MALFORMED
        """
        try:
            claims = self.decode_token(token)
        except ExpiredSignatureError:
            return TokenValidation(status=TokenStatus.EXPIRED, reason="Token has expired")
        except JWTError as e:
            return TokenValidation(status=TokenStatus.MALFORMED, reason=str(e))

        try:
            payload = TokenPayload(**claims)
        except (ValidationError, TypeError) as e:
            return TokenValidation(status=TokenStatus.MALFORMED, reason=f"Invalid claims: {e}")

        return TokenValidation(status=TokenStatus.VALID, payload=payload)

    def decode_token(self, token: str) -> Dict[str, Any]:
        """
        Decode and verify a token

        Args:
            token: JWT token string

        Returns:
            Dictionary with token payload

        Raises:
            ExpiredSignatureError: If token is expired
            JWTError: If signature or structure is invalid
        """
        return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
