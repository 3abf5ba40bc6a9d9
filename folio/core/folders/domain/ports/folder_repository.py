from datetime import datetime
from typing import Protocol

from folio.core.folders.domain.document import Document
from folio.core.folders.domain.folder import Folder


class FolderRepository(Protocol):
    """
    Port for folder hierarchy persistence.

    All lookups are tenant-scoped. Methods named ``*_active`` / ``list_*``
    exclude soft-deleted rows; ``get`` and ``get_parent_id`` see deleted rows
    too so that tree walks can follow any persisted link.
    """

    async def get(self, tenant_id: str, folder_id: str) -> Folder | None:
        """Retrieve a folder by ID, deleted or not."""
        ...

    async def get_active(self, tenant_id: str, folder_id: str) -> Folder | None:
        """Retrieve a live folder by ID."""
        ...

    async def get_parent_id(self, tenant_id: str, folder_id: str) -> str | None:
        """Return the parent ID of a folder (None at root or when missing)."""
        ...

    async def list_folders(
        self, tenant_id: str, parent_id: str | None = None, search: str | None = None
    ) -> list[Folder]:
        """List live folders at one level, or tenant-wide by name when searching."""
        ...

    async def list_child_ids(self, tenant_id: str, folder_id: str) -> list[str]:
        """IDs of live direct child folders."""
        ...

    async def list_children(self, tenant_id: str, folder_id: str) -> list[Folder]:
        """Live direct child folders."""
        ...

    async def list_documents(self, tenant_id: str, folder_id: str) -> list[Document]:
        """Live documents directly inside a folder."""
        ...

    async def count_documents(self, tenant_id: str, folder_id: str) -> int:
        ...

    async def count_children(self, tenant_id: str, folder_id: str) -> int:
        ...

    async def sum_document_sizes(self, tenant_id: str, folder_id: str) -> int:
        """Total ``file_size`` of live documents directly inside a folder."""
        ...

    async def add(self, entity: Folder | Document) -> None:
        """Stage a new folder or document and flush it."""
        ...

    async def reparent_children(
        self, tenant_id: str, folder_id: str, new_parent_id: str | None
    ) -> int:
        """Move live child folders of ``folder_id`` under ``new_parent_id``."""
        ...

    async def reparent_documents(
        self, tenant_id: str, folder_id: str, new_folder_id: str | None
    ) -> int:
        """Move live documents of ``folder_id`` into ``new_folder_id``."""
        ...

    async def mark_deleted(self, folder: Folder, deleted_at: datetime) -> None:
        ...

    async def move_documents(
        self, tenant_id: str, document_ids: list[str], folder_id: str | None
    ) -> int:
        """Assign live tenant documents among ``document_ids`` to a folder."""
        ...
