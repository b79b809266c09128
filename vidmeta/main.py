"""
Главное приложение FastAPI
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
import logging

from vidmeta.config import settings
from vidmeta.api.v1.router import api_router
from vidmeta.exceptions import BackendUnavailable, VidmetaError
from vidmeta.logging_config import setup_logging
from vidmeta.middleware.logging_middleware import LoggingMiddleware
from vidmeta.monitoring.metrics import setup_metrics
from vidmeta.database.connection import init_db, close_db


# Настройка логирования
setup_logging(level=settings.LOG_LEVEL, use_json=settings.LOG_JSON)
logger = logging.getLogger(__name__)


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": {
                "code": code,
                "message": message
            }
        }
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan события приложения"""
    # Запуск
    logger.info("Starting Video Metadata API...")
    await init_db()
    logger.info("Database initialized")

    yield

    # Остановка
    logger.info("Shutting down Video Metadata API...")
    await close_db()
    logger.info("Database connection closed")


async def vidmeta_error_handler(request: Request, exc: VidmetaError):
    """Доменные ошибки -> HTTP статус и код"""
    if exc.status_code >= 500:
        logger.error(f"{exc.code}: {exc.message}")
    return error_response(exc.status_code, exc.code, exc.message)


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Ошибки БД -> 500 без деталей запроса"""
    logger.error(f"Database error: {exc}", exc_info=True)
    error = BackendUnavailable("Internal server error" if not settings.DEBUG else str(exc))
    return error_response(error.status_code, error.code, error.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Ошибки валидации запроса -> 400"""
    errors = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return error_response(400, "VALIDATION_ERROR", "; ".join(errors))


async def global_exception_handler(request: Request, exc: Exception):
    """Глобальный обработчик исключений"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return error_response(
        500,
        "INTERNAL_ERROR",
        "Internal server error" if not settings.DEBUG else str(exc)
    )


def create_app() -> FastAPI:
    """Создание приложения"""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="REST API сервис метаданных видео с read-through кэшем",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan
    )

    # CORS Middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Gzip Middleware
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Custom Middleware
    app.add_middleware(LoggingMiddleware)

    # Настройка метрик
    if settings.ENABLE_METRICS:
        setup_metrics(app)

    # Обработка исключений
    app.add_exception_handler(VidmetaError, vidmeta_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # API Routes
    app.include_router(api_router)

    @app.get("/")
    async def root():
        """Корневой endpoint"""
        return {
            "message": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "docs": "/docs" if settings.DEBUG else "disabled",
            "health": "/health"
        }

    return app


# Создание приложения
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "vidmeta.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
