from pydantic_settings import BaseSettings
from typing import List
from functools import lru_cache


class Settings(BaseSettings):
    """Настройки приложения"""

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./vidmeta.db"
    DB_CREATE_TABLES: bool = True
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    # Cache
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_SOCKET_TIMEOUT: float = 1.0
    CACHE_BACKEND: str = "redis"  # redis or memory
    VIDEOS_CACHE_TTL: int = 60  # seconds
    VIDEOS_LIST_REQUIRES_AUTH: bool = False

    # JWT
    JWT_SECRET: str = "change-this-secret-key-minimum-32-characters"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440

    # Password hashing
    BCRYPT_ROUNDS: int = 12

    # Application
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    PROJECT_NAME: str = "Video Metadata API"
    VERSION: str = "1.0.0"

    # Monitoring
    ENABLE_METRICS: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def is_sqlite(self) -> bool:
        """SQLite не поддерживает настройки пула соединений"""
        return self.DATABASE_URL.startswith("sqlite")


@lru_cache()
def get_settings() -> Settings:
    """Получить настройки (кэшированные)"""
    return Settings()


settings = get_settings()
