"""
In-memory stand-in for the folder repository port, for unit tests of the
hierarchy algorithms that only need parent links and document sizes.
"""

import pytest

from folio.core.folders.domain.folder import Folder


class InMemoryFolderRepository:
    def __init__(self, tenant_id: str = "t1"):
        self.tenant_id = tenant_id
        self.folders: dict[str, Folder] = {}
        self.sizes: dict[str, list[int]] = {}
        self.deleted: set[str] = set()
        self.parent_lookups = 0

    def add_folder(self, folder_id: str, parent_id: str | None = None, name: str | None = None):
        folder = Folder(
            id=folder_id, tenant_id=self.tenant_id, name=name or folder_id, parent_id=parent_id
        )
        self.folders[folder_id] = folder
        return folder

    def add_document(self, folder_id: str, size: int) -> None:
        self.sizes.setdefault(folder_id, []).append(size)

    async def get(self, tenant_id, folder_id):
        folder = self.folders.get(folder_id)
        if folder is None or folder.tenant_id != tenant_id:
            return None
        return folder

    async def get_active(self, tenant_id, folder_id):
        if folder_id in self.deleted:
            return None
        return await self.get(tenant_id, folder_id)

    async def get_parent_id(self, tenant_id, folder_id):
        self.parent_lookups += 1
        folder = await self.get(tenant_id, folder_id)
        return folder.parent_id if folder else None

    async def list_child_ids(self, tenant_id, folder_id):
        return [
            f.id
            for f in self.folders.values()
            if f.parent_id == folder_id and f.tenant_id == tenant_id and f.id not in self.deleted
        ]

    async def sum_document_sizes(self, tenant_id, folder_id):
        return sum(self.sizes.get(folder_id, []))


@pytest.fixture
def repo() -> InMemoryFolderRepository:
    return InMemoryFolderRepository()
