"""
Request Context
===============

Context variables carrying per-request identity (request id, tenant, caller)
across the async call stack, plus the explicit ``TenantContext`` value that
hierarchy operations receive as a parameter.
"""

from contextvars import ContextVar
from dataclasses import dataclass

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_current_tenant: ContextVar[str | None] = ContextVar("current_tenant", default=None)


@dataclass(frozen=True)
class TenantContext:
    """
    Identity of the caller for a single operation.

    Every folder operation is scoped to ``tenant_id``; ``user_id`` is recorded
    as creator/uploader and audit actor.
    """

    tenant_id: str
    user_id: str
    role: str


def get_request_id() -> str | None:
    return _request_id.get()


def set_request_id(request_id: str | None) -> None:
    _request_id.set(request_id)


def get_current_tenant() -> str | None:
    return _current_tenant.get()


def set_current_tenant(tenant_id: str | None) -> None:
    _current_tenant.set(tenant_id)
