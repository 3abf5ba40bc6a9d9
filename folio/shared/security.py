"""
Security Utilities
==================

Bearer token issuing and verification (JWT, via PyJWT).
"""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from folio.shared.context import TenantContext
from folio.shared.exceptions import UnauthorizedError

_SECRET_KEY: str = "default-insecure-key"
_ALGORITHM: str = "HS256"
_TOKEN_LIFETIME: timedelta = timedelta(hours=12)


def configure_security(secret_key: str, algorithm: str = "HS256", expire_hours: int = 12) -> None:
    """Configure security module with application secret and token lifetime."""
    global _SECRET_KEY, _ALGORITHM, _TOKEN_LIFETIME
    _SECRET_KEY = secret_key
    _ALGORITHM = algorithm
    _TOKEN_LIFETIME = timedelta(hours=expire_hours)


def create_access_token(
    user_id: str,
    tenant_id: str,
    role: str,
    expires_in: timedelta | None = None,
) -> str:
    """
    Issue a signed access token.

    Args:
        user_id: Subject of the token.
        tenant_id: School the user belongs to.
        role: User role (admin, principal, lab_assistant, instructor, student).
        expires_in: Token lifetime; defaults to the configured lifetime.

    Returns:
        str: Encoded JWT
    """
    now = datetime.now(UTC)
    payload = {
        "sub": user_id,
        "school_id": tenant_id,
        "role": role,
        "iat": now,
        "exp": now + (expires_in if expires_in is not None else _TOKEN_LIFETIME),
    }
    return jwt.encode(payload, _SECRET_KEY, algorithm=_ALGORITHM)


def decode_access_token(token: str) -> TenantContext:
    """
    Verify a bearer token and build the caller's tenant context.

    Raises:
        UnauthorizedError: If the token is invalid, expired, or lacks claims.
    """
    try:
        payload: dict[str, Any] = jwt.decode(token, _SECRET_KEY, algorithms=[_ALGORITHM])
    except jwt.ExpiredSignatureError as exc:
        raise UnauthorizedError("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise UnauthorizedError("Invalid token") from exc

    user_id = payload.get("sub") or payload.get("user_id")
    tenant_id = payload.get("school_id") or payload.get("schoolId")
    role = payload.get("role")
    if not user_id or not tenant_id or not role:
        raise UnauthorizedError("Token is missing required claims")

    return TenantContext(tenant_id=str(tenant_id), user_id=str(user_id), role=str(role))
