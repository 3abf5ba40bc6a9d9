"""
Audit Endpoints
===============

Read-only access to the tenant's audit trail for admins and principals.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query

from folio.api.config import settings
from folio.api.deps import MANAGER_ROLES, get_audit_service, require_roles
from folio.api.schemas.audit import (
    AuditLogListData,
    AuditLogOut,
    AuditStatsData,
    AuditVocabularyData,
    EntityHistoryData,
    Pagination,
)
from folio.api.schemas.base import ResponseSchema
from folio.core.admin_ops.application.audit_service import AuditLogFilters, AuditService
from folio.core.admin_ops.domain.audit import AuditAction, EntityType
from folio.shared.context import TenantContext

router = APIRouter(prefix="/audit", tags=["audit"])


@router.get("/logs", response_model=ResponseSchema[AuditLogListData])
async def list_audit_logs(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    action: str | None = Query(None),
    entity_type: str | None = Query(None, alias="entityType"),
    user_id: str | None = Query(None, alias="userId"),
    start_date: datetime | None = Query(None, alias="startDate"),
    end_date: datetime | None = Query(None, alias="endDate"),
    search: str | None = Query(None),
    ctx: TenantContext = Depends(require_roles(*MANAGER_ROLES)),
    service: AuditService = Depends(get_audit_service),
):
    """Paginated audit logs of the caller's tenant, newest first."""
    limit = min(limit or settings.audit.default_page_size, settings.audit.max_page_size)
    filters = AuditLogFilters(
        action=action,
        entity_type=entity_type,
        user_id=user_id,
        start_date=start_date,
        end_date=end_date,
        search=search,
    )

    result = await service.list_logs(ctx.tenant_id, filters, page=page, limit=limit)
    return ResponseSchema(
        data=AuditLogListData(
            logs=[AuditLogOut.model_validate(log) for log in result.logs],
            pagination=Pagination(
                page=result.page,
                limit=result.limit,
                total=result.total,
                total_pages=result.total_pages,
            ),
        )
    )


@router.get(
    "/logs/entity/{entity_type}/{entity_id}",
    response_model=ResponseSchema[EntityHistoryData],
)
async def entity_history(
    entity_type: str,
    entity_id: str,
    ctx: TenantContext = Depends(require_roles(*MANAGER_ROLES)),
    service: AuditService = Depends(get_audit_service),
):
    """Audit history of a single entity."""
    logs = await service.entity_history(
        ctx.tenant_id, entity_type, entity_id, limit=settings.audit.entity_history_limit
    )
    return ResponseSchema(data=EntityHistoryData(logs=[AuditLogOut.model_validate(log) for log in logs]))


@router.get("/stats", response_model=ResponseSchema[AuditStatsData])
async def audit_stats(
    ctx: TenantContext = Depends(require_roles(*MANAGER_ROLES)),
    service: AuditService = Depends(get_audit_service),
):
    """Audit volume for the last 24 hours, 7 days and all time."""
    stats = await service.stats(ctx.tenant_id)
    return ResponseSchema(data=AuditStatsData.model_validate(stats))


@router.get("/actions", response_model=ResponseSchema[AuditVocabularyData])
async def audit_actions(ctx: TenantContext = Depends(require_roles(*MANAGER_ROLES))):
    """Action and entity type values usable as audit log filters."""
    return ResponseSchema(
        data=AuditVocabularyData(
            actions=[action.value for action in AuditAction],
            entity_types=[entity_type.value for entity_type in EntityType],
        )
    )
