"""
Request authentication against Supabase-issued JWTs
"""
from jose import JWTError, jwt
from fastapi import HTTPException, status, Header
from typing import Optional
from company_search.config import settings
import logging

logger = logging.getLogger(__name__)


def decode_token(token: str) -> dict:
    """
    Verify a Supabase access token

    Raises:
        JWTError: If the signature, expiry or audience is invalid
    """
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        audience=settings.jwt_audience,
    )


async def validate_jwt(authorization: Optional[str] = Header(None)) -> Optional[dict]:
    """
    Validate JWT token from Authorization header

    A no-op returning None unless settings.auth_required is set.

    Args:
        authorization: Authorization header value (Bearer <token>)

    Returns:
        Decoded JWT payload, or None when auth is disabled

    Raises:
        HTTPException: If token is invalid or missing
    """
    if not settings.auth_required:
        return None

    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format"
        )

    token = authorization[len("Bearer "):]

    try:
        return decode_token(token)

    except JWTError as e:
        logger.error(f"JWT validation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token"
        )
