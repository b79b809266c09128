"""
API Router
"""
from fastapi import APIRouter

from vidmeta.api.v1.auth import router as auth_router
from vidmeta.api.v1.health import router as health_router
from vidmeta.api.v1.users import router as users_router
from vidmeta.api.v1.videos import router as videos_router

api_router = APIRouter()

# Подключение роутеров
api_router.include_router(health_router, prefix="/health", tags=["Health"])
api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
api_router.include_router(users_router, prefix="/users", tags=["Users"])
api_router.include_router(videos_router, prefix="/videos", tags=["Videos"])
