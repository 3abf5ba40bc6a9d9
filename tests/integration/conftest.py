import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from folio.api.main import app
from folio.shared.security import create_access_token

TENANT_ID = "school-a"
OTHER_TENANT_ID = "school-b"


@pytest_asyncio.fixture
async def client(engine):
    """HTTP client bound to the app, backed by the test database."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def _headers(role: str, tenant_id: str = TENANT_ID, user_id: str | None = None) -> dict[str, str]:
    token = create_access_token(user_id or f"user-{role}", tenant_id, role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    return _headers("admin")


@pytest.fixture
def instructor_headers():
    return _headers("instructor")


@pytest.fixture
def student_headers():
    return _headers("student")


@pytest.fixture
def other_tenant_headers():
    return _headers("admin", tenant_id=OTHER_TENANT_ID)
