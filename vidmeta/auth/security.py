"""Security service for password hashing and verification"""
from passlib.context import CryptContext

# bcrypt only uses the first 72 bytes of the password
BCRYPT_MAX_BYTES = 72


class SecurityService:
    """Service for security operations"""

    def __init__(self, rounds: int = 12):
        """
        Initialize security service with bcrypt context

        Args:
            rounds: bcrypt cost factor (log2 of iterations)
        """
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    @staticmethod
    def _truncate(password: str) -> str:
        password_bytes = password.encode('utf-8')
        if len(password_bytes) > BCRYPT_MAX_BYTES:
            password = password_bytes[:BCRYPT_MAX_BYTES].decode('utf-8', errors='ignore')
        return password

    def hash_password(self, password: str) -> str:
        """
        Hash a password using bcrypt (random salt per call)

        Args:
            password: Plain text password

        Returns:
            Hashed password string
        """
        return self.pwd_context.hash(self._truncate(password))

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against a hashed password

        Args:
            plain_password: Plain text password
            hashed_password: Hashed password

        Returns:
            True if password matches, False otherwise
        """
        return self.pwd_context.verify(self._truncate(plain_password), hashed_password)

    def dummy_verify(self) -> bool:
        """
        Spend the same time as a real verification and fail

        Used when the account does not exist so login timing does not reveal it.
        """
        self.pwd_context.dummy_verify()
        return False
