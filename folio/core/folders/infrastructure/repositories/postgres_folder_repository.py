from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from folio.core.folders.domain.document import Document
from folio.core.folders.domain.folder import Folder
from folio.core.folders.domain.ports.folder_repository import FolderRepository


class PostgresFolderRepository(FolderRepository):
    """
    PostgreSQL implementation of FolderRepository using SQLAlchemy.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, tenant_id: str, folder_id: str) -> Folder | None:
        """Retrieve a folder by ID, deleted or not."""
        result = await self._session.execute(
            select(Folder).where(Folder.id == folder_id, Folder.tenant_id == tenant_id)
        )
        return result.scalars().first()

    async def get_active(self, tenant_id: str, folder_id: str) -> Folder | None:
        """Retrieve a live folder by ID."""
        result = await self._session.execute(
            select(Folder).where(
                Folder.id == folder_id,
                Folder.tenant_id == tenant_id,
                Folder.deleted_at.is_(None),
            )
        )
        return result.scalars().first()

    async def get_parent_id(self, tenant_id: str, folder_id: str) -> str | None:
        result = await self._session.execute(
            select(Folder.parent_id).where(Folder.id == folder_id, Folder.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def list_folders(
        self, tenant_id: str, parent_id: str | None = None, search: str | None = None
    ) -> list[Folder]:
        query = select(Folder).where(Folder.tenant_id == tenant_id, Folder.deleted_at.is_(None))

        if search:
            # Searching ignores the hierarchy; % and _ match literally
            query = query.where(Folder.name.icontains(search, autoescape=True))
        elif parent_id:
            query = query.where(Folder.parent_id == parent_id)
        else:
            query = query.where(Folder.parent_id.is_(None))

        result = await self._session.execute(query.order_by(Folder.name))
        return list(result.scalars().all())

    async def list_child_ids(self, tenant_id: str, folder_id: str) -> list[str]:
        result = await self._session.execute(
            select(Folder.id).where(
                Folder.parent_id == folder_id,
                Folder.tenant_id == tenant_id,
                Folder.deleted_at.is_(None),
            )
        )
        return list(result.scalars().all())

    async def list_children(self, tenant_id: str, folder_id: str) -> list[Folder]:
        result = await self._session.execute(
            select(Folder)
            .where(
                Folder.parent_id == folder_id,
                Folder.tenant_id == tenant_id,
                Folder.deleted_at.is_(None),
            )
            .order_by(Folder.name)
        )
        return list(result.scalars().all())

    async def list_documents(self, tenant_id: str, folder_id: str) -> list[Document]:
        result = await self._session.execute(
            select(Document)
            .where(
                Document.folder_id == folder_id,
                Document.tenant_id == tenant_id,
                Document.deleted_at.is_(None),
            )
            .order_by(Document.name)
        )
        return list(result.scalars().all())

    async def count_documents(self, tenant_id: str, folder_id: str) -> int:
        result = await self._session.execute(
            select(func.count(Document.id)).where(
                Document.folder_id == folder_id,
                Document.tenant_id == tenant_id,
                Document.deleted_at.is_(None),
            )
        )
        return result.scalar_one()

    async def count_children(self, tenant_id: str, folder_id: str) -> int:
        result = await self._session.execute(
            select(func.count(Folder.id)).where(
                Folder.parent_id == folder_id,
                Folder.tenant_id == tenant_id,
                Folder.deleted_at.is_(None),
            )
        )
        return result.scalar_one()

    async def sum_document_sizes(self, tenant_id: str, folder_id: str) -> int:
        result = await self._session.execute(
            select(func.coalesce(func.sum(Document.file_size), 0)).where(
                Document.folder_id == folder_id,
                Document.tenant_id == tenant_id,
                Document.deleted_at.is_(None),
            )
        )
        return int(result.scalar_one())

    async def add(self, entity: Folder | Document) -> None:
        self._session.add(entity)
        await self._session.flush()

    async def reparent_children(
        self, tenant_id: str, folder_id: str, new_parent_id: str | None
    ) -> int:
        stmt = (
            update(Folder)
            .where(
                Folder.parent_id == folder_id,
                Folder.tenant_id == tenant_id,
                Folder.deleted_at.is_(None),
            )
            .values(parent_id=new_parent_id)
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    async def reparent_documents(
        self, tenant_id: str, folder_id: str, new_folder_id: str | None
    ) -> int:
        stmt = (
            update(Document)
            .where(
                Document.folder_id == folder_id,
                Document.tenant_id == tenant_id,
                Document.deleted_at.is_(None),
            )
            .values(folder_id=new_folder_id)
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    async def mark_deleted(self, folder: Folder, deleted_at: datetime) -> None:
        folder.deleted_at = deleted_at
        await self._session.flush()

    async def move_documents(
        self, tenant_id: str, document_ids: list[str], folder_id: str | None
    ) -> int:
        if not document_ids:
            return 0

        stmt = (
            update(Document)
            .where(
                Document.id.in_(document_ids),
                Document.tenant_id == tenant_id,
                Document.deleted_at.is_(None),
            )
            .values(folder_id=folder_id)
        )
        result = await self._session.execute(stmt)
        return result.rowcount
