"""
Security helpers for JWT session tokens.

Tokens are issued by the identity service; this backend only verifies them.
"""

from __future__ import annotations

from jose import jwt

from app.core.config import Settings

ALGORITHM = "HS256"


def decode_access_token(token: str, settings: Settings) -> dict[str, object]:
    """Decode and verify a JWT. Raises jose.JWTError on any failure."""
    options = {"verify_iss": bool(settings.JWT_ISSUER)}
    return jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=[ALGORITHM],
        issuer=settings.JWT_ISSUER or None,
        options=options,
    )
