"""
Shared Test Fixtures
====================

Every test runs against a fresh SQLite database file (via aiosqlite) so the
async SQLAlchemy stack is exercised without a PostgreSQL server.
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

import folio.core.database.session as session_mod
from folio.core.admin_ops.domain.audit import AuditLog  # noqa: F401
from folio.core.folders.domain.document import Document
from folio.core.folders.domain.folder import Folder
from folio.shared.context import TenantContext
from folio.shared.kernel.models.base import Base

TENANT_ID = "school-a"
OTHER_TENANT_ID = "school-b"


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Create the schema in a throwaway database and install it as the app engine."""
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'folio.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_mod.use_engine(test_engine)
    try:
        yield test_engine
    finally:
        session_mod.reset_engine()
        await test_engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine) -> AsyncSession:
    """
    Yields an async database session for testing.
    """
    async with session_mod.get_session_maker()() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def ctx() -> TenantContext:
    return TenantContext(tenant_id=TENANT_ID, user_id="user-admin", role="admin")


@pytest.fixture
def other_ctx() -> TenantContext:
    return TenantContext(tenant_id=OTHER_TENANT_ID, user_id="user-other", role="admin")


@pytest.fixture
def make_folder(db_session):
    """Insert a folder row directly, bypassing the service."""

    async def _make(name: str, parent: Folder | None = None, tenant_id: str = TENANT_ID) -> Folder:
        folder = Folder(
            tenant_id=tenant_id,
            name=name,
            parent_id=parent.id if parent else None,
            created_by_id="seed",
        )
        db_session.add(folder)
        await db_session.commit()
        return folder

    return _make


@pytest.fixture
def make_document(db_session):
    """Insert a document row directly. ``folder`` may be a Folder or its id."""

    async def _make(
        name: str,
        folder: Folder | str | None = None,
        file_size: int = 0,
        tenant_id: str = TENANT_ID,
        **fields,
    ) -> Document:
        document = Document(
            tenant_id=tenant_id,
            folder_id=folder.id if isinstance(folder, Folder) else folder,
            name=name,
            file_size=file_size,
            uploaded_by_id="seed",
            **fields,
        )
        db_session.add(document)
        await db_session.commit()
        return document

    return _make
