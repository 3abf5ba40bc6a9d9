"""
Authentication Middleware
=========================

Bearer token validation and tenant context injection.
"""

import logging
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from folio.shared.context import get_request_id, set_current_tenant
from folio.shared.exceptions import ErrorCode, UnauthorizedError
from folio.shared.security import decode_access_token

logger = logging.getLogger(__name__)

# Paths that don't require authentication
PUBLIC_PATHS = {
    "/",
    "/health",
    "/api/health",
    "/docs",
    "/redoc",
    "/openapi.json",
}


def _is_public_path(path: str) -> bool:
    """Check if a path is public (doesn't require auth)."""
    if path in PUBLIC_PATHS:
        return True
    # Prefix matches for documentation paths
    if path.startswith("/docs") or path.startswith("/redoc"):
        return True
    return False


def _cors_error_response(status_code: int, code: str, message: str, origin: str = "*") -> JSONResponse:
    """Create a JSONResponse with CORS headers for error responses."""
    content = {"success": False, "message": message, "code": code}
    request_id = get_request_id()
    if request_id:
        content["requestId"] = request_id

    response = JSONResponse(status_code=status_code, content=content)
    # Add CORS headers so browser can read the error
    response.headers["Access-Control-Allow-Origin"] = origin
    response.headers["Access-Control-Allow-Credentials"] = "true"
    response.headers["Access-Control-Allow-Methods"] = "*"
    response.headers["Access-Control-Allow-Headers"] = "*"
    return response


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """
    Middleware for bearer token authentication.

    Validates the Authorization header and sets the tenant context.
    Public paths bypass authentication.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process the request through authentication."""
        path = request.url.path
        origin = request.headers.get("Origin", "*")

        # Allow CORS preflight requests through without auth
        if request.method == "OPTIONS":
            return await call_next(request)

        if _is_public_path(path):
            return await call_next(request)

        authorization = request.headers.get("Authorization", "")
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            logger.warning(f"Missing bearer token for {request.method} {path}")
            return _cors_error_response(
                401,
                ErrorCode.UNAUTHORIZED.value,
                "Not authorized, no token",
                origin,
            )

        try:
            ctx = decode_access_token(token.strip())
        except UnauthorizedError as e:
            logger.warning(f"Rejected token for {request.method} {path}: {e.message}")
            return _cors_error_response(401, e.code.value, e.message, origin)

        set_current_tenant(ctx.tenant_id)

        # Store in request state for easy access
        request.state.tenant_context = ctx
        request.state.tenant_id = ctx.tenant_id
        request.state.user_id = ctx.user_id
        request.state.role = ctx.role

        logger.debug(
            f"Authenticated: tenant={ctx.tenant_id}, user={ctx.user_id}, role={ctx.role}, "
            f"path={request.method} {path}"
        )

        try:
            return await call_next(request)
        finally:
            set_current_tenant(None)
