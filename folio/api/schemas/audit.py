"""
Audit Schemas
=============

Response models for audit log browsing.
"""

from datetime import datetime
from typing import Any

from pydantic import Field

from folio.api.schemas.base import CamelModel


class AuditLogOut(CamelModel):
    id: str
    tenant_id: str | None = None
    user_id: str | None = None
    action: str
    entity_type: str
    entity_id: str | None = None
    entity_name: str | None = None
    details: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime | None = None


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class AuditLogListData(CamelModel):
    logs: list[AuditLogOut]
    pagination: Pagination


class EntityHistoryData(CamelModel):
    logs: list[AuditLogOut]


class AuditTotals(CamelModel):
    last_24h: int = Field(alias="last24h")
    last_7d: int = Field(alias="last7d")
    all: int


class ActionCount(CamelModel):
    action: str
    count: int


class EntityTypeCount(CamelModel):
    entity_type: str
    count: int


class AuditStatsData(CamelModel):
    totals: AuditTotals
    by_action: list[ActionCount]
    by_entity_type: list[EntityTypeCount]


class AuditVocabularyData(CamelModel):
    actions: list[str]
    entity_types: list[str]
