"""
API Dependencies
================

FastAPI dependency injection utilities.
"""

from collections.abc import AsyncGenerator, Callable

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from folio.api.config import settings
from folio.core.admin_ops.application.audit_service import AuditRecorder, AuditService
from folio.core.folders.application.folder_service import FolderService
from folio.shared.context import TenantContext
from folio.shared.exceptions import ForbiddenError, UnauthorizedError

ADMIN = "admin"
PRINCIPAL = "principal"
LAB_ASSISTANT = "lab_assistant"
INSTRUCTOR = "instructor"
STUDENT = "student"

# Roles allowed to create, rename, move and copy folders
EDITOR_ROLES = (ADMIN, PRINCIPAL, LAB_ASSISTANT, INSTRUCTOR)
# Roles allowed to delete folders and browse the audit trail
MANAGER_ROLES = (ADMIN, PRINCIPAL)


def _get_session_maker():
    """Get the canonical session maker from the core database module."""
    from folio.core.database.session import get_session_maker

    return get_session_maker()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that yields a database session.

    Services commit their own work; anything left pending is committed when
    the request finishes and rolled back on error.
    """
    async with _get_session_maker()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_tenant_context(request: Request) -> TenantContext:
    """
    Dependency to retrieve the caller's tenant context.
    Derived from request state set by AuthenticationMiddleware.
    """
    ctx = getattr(request.state, "tenant_context", None)
    if ctx is None:
        raise UnauthorizedError("Not authorized")
    return ctx


def require_roles(*roles: str) -> Callable[..., TenantContext]:
    """
    Build a dependency that admits only the given roles.

    Usage:
        ctx: TenantContext = Depends(require_roles(*EDITOR_ROLES))
    """

    def _verify(ctx: TenantContext = Depends(get_tenant_context)) -> TenantContext:
        if ctx.role not in roles:
            raise ForbiddenError(
                f"User role '{ctx.role}' is not authorized to access this route",
                details={"required_roles": list(roles)},
            )
        return ctx

    return _verify


def get_folder_service(session: AsyncSession = Depends(get_db_session)) -> FolderService:
    return FolderService(session, max_breadcrumb_depth=settings.folders.max_breadcrumb_depth)


def get_audit_service(session: AsyncSession = Depends(get_db_session)) -> AuditService:
    return AuditService(session)


def get_audit_recorder(request: Request) -> AuditRecorder:
    """Audit recorder bound to the caller and client metadata."""
    client_ip = request.headers.get("X-Forwarded-For", "").split(",")[0].strip()
    if not client_ip and request.client:
        client_ip = request.client.host

    return AuditRecorder(
        session_factory=_get_session_maker(),
        ctx=getattr(request.state, "tenant_context", None),
        ip_address=client_ip or None,
        user_agent=request.headers.get("User-Agent"),
        enabled=settings.audit.enabled,
    )
