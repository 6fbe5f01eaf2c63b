"""
JWT authentication provider.
"""

from __future__ import annotations

from jose import JWTError

from app.core.config import Settings
from app.core.security import decode_access_token
from app.interfaces.auth_provider import IAuthProvider, User


class JwtAuthProvider(IAuthProvider):
    """Auth provider validating HS256 session tokens."""

    def __init__(self, settings: Settings):
        if not settings.JWT_SECRET:
            raise ValueError("JWT_SECRET must be set for jwt auth")
        self._settings = settings

    async def verify_token(self, token: str) -> User:
        claims = decode_access_token(token, self._settings)
        subject = claims.get("sub")
        if not subject:
            raise JWTError("Missing subject")
        email = claims.get("email")
        return User(
            id=str(subject),
            email=str(email) if email else None,
            display_name=claims.get("name") or None,
        )

    def is_enabled(self) -> bool:
        return True
