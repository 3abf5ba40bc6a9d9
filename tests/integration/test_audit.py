"""
Audit Trail Tests
=================

- Recorder writes one row per mutation and never raises
- Audit queries: pagination, filters, entity history, stats
- /api/audit endpoints and their role restrictions
"""

from datetime import timedelta

from sqlalchemy import select

from folio.api.deps import get_audit_recorder
from folio.api.main import app
from folio.core.admin_ops.application.audit_service import (
    AuditEntry,
    AuditLogFilters,
    AuditRecorder,
    AuditService,
)
from folio.core.admin_ops.domain.audit import AuditAction, AuditLog, EntityType
from folio.core.database.session import get_session_maker
from folio.shared.kernel.models.base import utcnow


async def _record(ctx, action, entity_type=EntityType.FOLDER, entity_id="f1", name="Labs"):
    recorder = AuditRecorder(get_session_maker(), ctx, ip_address="10.0.0.1", user_agent="pytest")
    await recorder.record(
        AuditEntry(action=action, entity_type=entity_type, entity_id=entity_id, entity_name=name)
    )


class TestRecorder:
    async def test_record_persists_actor_and_client(self, ctx, db_session):
        await _record(ctx, AuditAction.CREATE)

        [log] = (await db_session.execute(select(AuditLog))).scalars().all()
        assert log.tenant_id == ctx.tenant_id
        assert log.user_id == ctx.user_id
        assert log.action == "create"
        assert log.entity_type == "folder"
        assert log.ip_address == "10.0.0.1"
        assert log.user_agent == "pytest"

    async def test_failures_are_swallowed(self, ctx):
        def broken_factory():
            raise RuntimeError("database unavailable")

        recorder = AuditRecorder(broken_factory, ctx)
        await recorder.record(AuditEntry(action=AuditAction.DELETE, entity_type=EntityType.FOLDER))

    async def test_disabled_recorder_writes_nothing(self, ctx, db_session):
        recorder = AuditRecorder(get_session_maker(), ctx, enabled=False)
        await recorder.record(AuditEntry(action=AuditAction.CREATE, entity_type=EntityType.FOLDER))

        assert (await db_session.execute(select(AuditLog))).scalars().all() == []


class TestAuditService:
    async def test_list_logs_filters_and_paginates(self, ctx, other_ctx, db_session):
        for i in range(3):
            await _record(ctx, AuditAction.CREATE, entity_id=f"f{i}", name=f"Folder {i}")
        await _record(ctx, AuditAction.DELETE, entity_id="f0", name="Folder 0")
        await _record(other_ctx, AuditAction.CREATE)

        service = AuditService(db_session)

        page = await service.list_logs(ctx.tenant_id, page=1, limit=2)
        assert page.total == 4
        assert page.total_pages == 2
        assert len(page.logs) == 2

        creates = await service.list_logs(ctx.tenant_id, AuditLogFilters(action="create"))
        assert creates.total == 3

        searched = await service.list_logs(ctx.tenant_id, AuditLogFilters(search="folder 1"))
        assert [log.entity_id for log in searched.logs] == ["f1"]

        literal = await service.list_logs(ctx.tenant_id, AuditLogFilters(search="%"))
        assert literal.total == 0

        future = await service.list_logs(
            ctx.tenant_id, AuditLogFilters(start_date=utcnow() + timedelta(days=1))
        )
        assert future.total == 0

    async def test_entity_history(self, ctx, db_session):
        await _record(ctx, AuditAction.CREATE, entity_id="f1")
        await _record(ctx, AuditAction.UPDATE, entity_id="f1")
        await _record(ctx, AuditAction.CREATE, entity_id="f2")

        history = await AuditService(db_session).entity_history(ctx.tenant_id, "folder", "f1")

        assert {log.action for log in history} == {"create", "update"}

    async def test_stats(self, ctx, other_ctx, db_session):
        await _record(ctx, AuditAction.CREATE)
        await _record(ctx, AuditAction.CREATE)
        await _record(ctx, AuditAction.COPY)
        await _record(other_ctx, AuditAction.DELETE)

        stats = await AuditService(db_session).stats(ctx.tenant_id)

        assert stats["totals"] == {"last_24h": 3, "last_7d": 3, "all": 3}
        by_action = {row["action"]: row["count"] for row in stats["by_action"]}
        assert by_action == {"create": 2, "copy": 1}
        assert stats["by_entity_type"] == [{"entity_type": "folder", "count": 3}]


class TestAuditApi:
    async def test_mutations_leave_audit_rows(self, client, admin_headers, db_session):
        response = await client.post("/api/folders", json={"name": "Labs"}, headers=admin_headers)
        folder_id = response.json()["data"]["folder"]["id"]
        await client.put(f"/api/folders/{folder_id}", json={"name": "Labs 2"}, headers=admin_headers)
        await client.delete(f"/api/folders/{folder_id}", headers=admin_headers)

        response = await client.get(
            f"/api/audit/logs/entity/folder/{folder_id}", headers=admin_headers
        )

        assert response.status_code == 200
        logs = response.json()["data"]["logs"]
        assert {log["action"] for log in logs} == {"create", "update", "delete"}
        assert all(log["userId"] == "user-admin" for log in logs)
        assert all(log["tenantId"] == "school-a" for log in logs)

    async def test_logs_endpoint_paginates(self, client, admin_headers):
        for name in ("A", "B", "C"):
            await client.post("/api/folders", json={"name": name}, headers=admin_headers)

        response = await client.get(
            "/api/audit/logs", params={"limit": 2, "action": "create"}, headers=admin_headers
        )

        data = response.json()["data"]
        assert len(data["logs"]) == 2
        assert data["pagination"] == {"page": 1, "limit": 2, "total": 3, "totalPages": 2}

    async def test_stats_endpoint(self, client, admin_headers):
        await client.post("/api/folders", json={"name": "A"}, headers=admin_headers)

        response = await client.get("/api/audit/stats", headers=admin_headers)

        data = response.json()["data"]
        assert data["totals"]["last24h"] == 1
        assert data["byAction"] == [{"action": "create", "count": 1}]

    async def test_actions_endpoint_lists_filter_values(self, client, admin_headers):
        response = await client.get("/api/audit/actions", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["actions"] == ["create", "update", "delete", "move", "copy"]
        assert data["entityTypes"] == ["folder", "document"]

    async def test_actions_endpoint_requires_manager_role(self, client, student_headers):
        response = await client.get("/api/audit/actions", headers=student_headers)
        assert response.status_code == 403

    async def test_audit_requires_manager_role(self, client, instructor_headers):
        response = await client.get("/api/audit/logs", headers=instructor_headers)
        assert response.status_code == 403

    async def test_audit_failure_does_not_change_response(self, client, admin_headers):
        def broken_factory():
            raise RuntimeError("audit store down")

        app.dependency_overrides[get_audit_recorder] = lambda: AuditRecorder(broken_factory, None)

        response = await client.post("/api/folders", json={"name": "Labs"}, headers=admin_headers)

        assert response.status_code == 201
        assert response.json()["data"]["folder"]["name"] == "Labs"
