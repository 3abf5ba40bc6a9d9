"""
Cycle Guard
===========

Validates that re-parenting a folder keeps the hierarchy acyclic.
"""

import logging

from folio.core.folders.domain.ports.folder_repository import FolderRepository
from folio.shared.exceptions import InvalidOperationError

logger = logging.getLogger(__name__)


class CycleGuard:
    """
    Rejects moves that would make a folder its own ancestor.
    """

    def __init__(self, repository: FolderRepository):
        self._repository = repository

    async def creates_cycle(
        self, tenant_id: str, folder_id: str, new_parent_id: str | None
    ) -> bool:
        """
        Check whether moving ``folder_id`` under ``new_parent_id`` creates a cycle.

        Walks up from the proposed parent until the root. Moving to the root
        never creates a cycle.
        """
        if new_parent_id is None:
            return False
        if new_parent_id == folder_id:
            return True

        seen: set[str] = set()
        current: str | None = new_parent_id
        while current is not None:
            if current in seen:
                # Existing chain is already corrupt; refuse to extend it
                logger.warning(
                    f"Parent chain of folder {new_parent_id} loops at {current} "
                    f"(tenant={tenant_id})"
                )
                return True
            seen.add(current)

            parent_id = await self._repository.get_parent_id(tenant_id, current)
            if parent_id == folder_id:
                return True
            current = parent_id

        return False

    async def ensure_can_move(
        self, tenant_id: str, folder_id: str, new_parent_id: str | None
    ) -> None:
        """
        Raise if the move is illegal.

        Raises:
            InvalidOperationError: If the target is the folder itself or one
                of its descendants.
        """
        if new_parent_id == folder_id:
            raise InvalidOperationError("Cannot move folder into itself")
        if await self.creates_cycle(tenant_id, folder_id, new_parent_id):
            raise InvalidOperationError("Cannot move folder into its own subfolder")
