"""
Folder Size Aggregation
=======================

Recursive roll-up of document sizes through the folder tree.
"""

from folio.core.folders.domain.ports.folder_repository import FolderRepository


class SizeAggregator:
    """
    Computes the total size of a folder subtree.

    Size(F) = sum of live direct documents of F + Size(child) for every live
    direct child. Recomputed from the store on every call.
    """

    def __init__(self, repository: FolderRepository):
        self._repository = repository

    async def total_size(self, tenant_id: str, folder_id: str) -> int:
        """
        Return the total byte size of ``folder_id`` and its descendants.

        An unknown folder is treated as empty and yields 0.
        """
        return await self._walk(tenant_id, folder_id, set())

    async def _walk(self, tenant_id: str, folder_id: str, visited: set[str]) -> int:
        if folder_id in visited:
            return 0
        visited.add(folder_id)

        total = await self._repository.sum_document_sizes(tenant_id, folder_id)
        for child_id in await self._repository.list_child_ids(tenant_id, folder_id):
            total += await self._walk(tenant_id, child_id, visited)
        return total
