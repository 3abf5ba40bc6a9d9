"""
Audit Service
=============

Records user actions to the audit trail and serves audit queries.

Recording is fire-and-forget: each entry is written in its own short-lived
session, and a failed write is logged without affecting the caller.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from folio.core.admin_ops.domain.audit import AuditAction, AuditLog, EntityType
from folio.shared.context import TenantContext
from folio.shared.kernel.models.base import utcnow

logger = logging.getLogger(__name__)


@dataclass
class AuditEntry:
    """Request DTO for a single audit record."""

    action: AuditAction | str
    entity_type: EntityType | str
    entity_id: str | None = None
    entity_name: str | None = None
    details: dict[str, Any] | None = None


@dataclass
class AuditLogFilters:
    action: str | None = None
    entity_type: str | None = None
    user_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    search: str | None = None


@dataclass
class AuditLogPage:
    logs: list[AuditLog]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return -(-self.total // self.limit) if self.limit else 0


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


class AuditRecorder:
    """
    Writes audit entries on behalf of one request.

    Bound to the caller's context and client metadata so route handlers only
    describe *what* happened.
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        ctx: TenantContext | None,
        ip_address: str | None = None,
        user_agent: str | None = None,
        enabled: bool = True,
    ):
        self._session_factory = session_factory
        self._ctx = ctx
        self._ip_address = ip_address
        self._user_agent = user_agent
        self._enabled = enabled

    async def record(self, entry: AuditEntry) -> None:
        """Persist an audit entry. Never raises."""
        if not self._enabled:
            return

        log = AuditLog(
            tenant_id=self._ctx.tenant_id if self._ctx else None,
            user_id=self._ctx.user_id if self._ctx else None,
            action=_enum_value(entry.action),
            entity_type=_enum_value(entry.entity_type),
            entity_id=entry.entity_id,
            entity_name=entry.entity_name,
            details=entry.details,
            ip_address=self._ip_address,
            user_agent=self._user_agent,
        )

        try:
            async with self._session_factory() as session:
                session.add(log)
                await session.commit()
        except Exception as e:
            # Audit failures must not break the main flow
            logger.error(
                f"Failed to write audit log {log.action} {log.entity_type}:{log.entity_id}: {e}"
            )


class AuditService:
    """Read side of the audit trail, always scoped to one tenant."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_logs(
        self,
        tenant_id: str,
        filters: AuditLogFilters | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> AuditLogPage:
        """Paginated audit logs, newest first."""
        filters = filters or AuditLogFilters()
        conditions = [AuditLog.tenant_id == tenant_id]

        if filters.action:
            conditions.append(AuditLog.action == filters.action)
        if filters.entity_type:
            conditions.append(AuditLog.entity_type == filters.entity_type)
        if filters.user_id:
            conditions.append(AuditLog.user_id == filters.user_id)
        if filters.start_date:
            conditions.append(AuditLog.created_at >= filters.start_date)
        if filters.end_date:
            conditions.append(AuditLog.created_at <= filters.end_date)
        if filters.search:
            conditions.append(
                or_(
                    AuditLog.entity_name.icontains(filters.search, autoescape=True),
                    AuditLog.action.icontains(filters.search, autoescape=True),
                    AuditLog.entity_type.icontains(filters.search, autoescape=True),
                )
            )

        total = (
            await self.session.execute(select(func.count(AuditLog.id)).where(*conditions))
        ).scalar_one()

        query = (
            select(AuditLog)
            .where(*conditions)
            .order_by(AuditLog.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return AuditLogPage(logs=list(result.scalars().all()), page=page, limit=limit, total=total)

    async def entity_history(
        self, tenant_id: str, entity_type: str, entity_id: str, limit: int = 100
    ) -> list[AuditLog]:
        """Most recent audit entries for one entity."""
        query = (
            select(AuditLog)
            .where(
                AuditLog.tenant_id == tenant_id,
                AuditLog.entity_type == entity_type,
                AuditLog.entity_id == entity_id,
            )
            .order_by(AuditLog.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def stats(self, tenant_id: str, now: datetime | None = None) -> dict[str, Any]:
        """
        Audit volume summary.

        Returns totals for the last 24 hours, last 7 days and all time, plus
        per-action counts (24h) and per-entity-type counts (7d).
        """
        now = now or utcnow()
        last_24h = now - timedelta(hours=24)
        last_7d = now - timedelta(days=7)

        async def _count(since: datetime | None) -> int:
            query = select(func.count(AuditLog.id)).where(AuditLog.tenant_id == tenant_id)
            if since is not None:
                query = query.where(AuditLog.created_at >= since)
            return (await self.session.execute(query)).scalar_one()

        by_action = await self.session.execute(
            select(AuditLog.action, func.count(AuditLog.id))
            .where(AuditLog.tenant_id == tenant_id, AuditLog.created_at >= last_24h)
            .group_by(AuditLog.action)
        )
        by_entity = await self.session.execute(
            select(AuditLog.entity_type, func.count(AuditLog.id))
            .where(AuditLog.tenant_id == tenant_id, AuditLog.created_at >= last_7d)
            .group_by(AuditLog.entity_type)
        )

        return {
            "totals": {
                "last_24h": await _count(last_24h),
                "last_7d": await _count(last_7d),
                "all": await _count(None),
            },
            "by_action": [{"action": a, "count": c} for a, c in by_action.all()],
            "by_entity_type": [{"entity_type": e, "count": c} for e, c in by_entity.all()],
        }
