"""Caller identity for mutating endpoints.

Integrations authenticate with an API key and act anonymously; people send a
bearer JWT whose ``sub`` claim is their numeric user id. With neither
configured the API is open and every write is recorded without a user.
"""
from typing import Optional

import jwt
from fastapi import HTTPException, status

from stock_engine.config import Settings, get_settings


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def configured_api_keys(settings: Settings) -> frozenset:
    if not settings.API_KEYS:
        return frozenset()
    return frozenset(key.strip() for key in settings.API_KEYS.split(",") if key.strip())


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token


def decode_user_token(token: str, settings: Settings) -> dict:
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            options={"verify_aud": bool(settings.JWT_AUDIENCE)},
        )
    except jwt.PyJWTError as exc:
        raise _unauthorized("Invalid token") from exc


def subject_user_id(claims: dict) -> Optional[int]:
    try:
        return int(claims.get("sub"))
    except (TypeError, ValueError):
        return None


def resolve_user_id(
    api_key: Optional[str],
    authorization: Optional[str],
    settings: Optional[Settings] = None,
) -> Optional[int]:
    """User id to stamp on history and alert updates.

    Raises 401 when credentials are configured and the request carries none
    that match; a presented token is always verified.
    """
    settings = settings or get_settings()
    keys = configured_api_keys(settings)

    token = bearer_token(authorization)
    if token and settings.JWT_SECRET:
        return subject_user_id(decode_user_token(token, settings))
    if api_key and api_key in keys:
        return None
    if keys or settings.JWT_SECRET:
        raise _unauthorized("Not authenticated")
    return None


__all__ = [
    "bearer_token",
    "configured_api_keys",
    "decode_user_token",
    "resolve_user_id",
    "subject_user_id",
]
