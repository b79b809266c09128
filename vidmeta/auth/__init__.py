"""Authentication module"""
from vidmeta.auth.jwt import JWTService, TokenPayload, TokenStatus, TokenValidation
from vidmeta.auth.security import SecurityService

__all__ = ["JWTService", "TokenPayload", "TokenStatus", "TokenValidation", "SecurityService"]
