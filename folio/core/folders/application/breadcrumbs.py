"""
Breadcrumb Resolution
=====================

Builds the root-first path from the tenant root to a folder.
"""

import logging
from dataclasses import dataclass

from folio.core.folders.domain.folder import Folder
from folio.core.folders.domain.ports.folder_repository import FolderRepository

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256


@dataclass(frozen=True)
class Breadcrumb:
    id: str
    name: str


class BreadcrumbResolver:
    """
    Walks parent links from a folder up to the root.

    The walk is bounded by a visited set and ``max_depth`` so a corrupted
    hierarchy yields a truncated path instead of an endless loop.
    """

    def __init__(self, repository: FolderRepository, max_depth: int = DEFAULT_MAX_DEPTH):
        self._repository = repository
        self._max_depth = max_depth

    async def resolve(self, tenant_id: str, folder: Folder) -> list[Breadcrumb]:
        path = [Breadcrumb(id=folder.id, name=folder.name)]
        visited = {folder.id}
        parent_id = folder.parent_id

        while parent_id is not None:
            if parent_id in visited or len(path) >= self._max_depth:
                logger.warning(
                    f"Breadcrumb walk for folder {folder.id} stopped at {parent_id} "
                    f"(cycle or depth limit {self._max_depth})"
                )
                break

            parent = await self._repository.get(tenant_id, parent_id)
            if parent is None:
                break

            path.append(Breadcrumb(id=parent.id, name=parent.name))
            visited.add(parent.id)
            parent_id = parent.parent_id

        path.reverse()
        return path
