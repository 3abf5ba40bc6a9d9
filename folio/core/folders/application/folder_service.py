"""
Folder Hierarchy Service
========================

Application layer operations on the per-tenant folder tree: listing, detail,
create, rename/move, soft delete, deep copy, bulk folder moves and moving
documents between folders.

Every operation takes an explicit ``TenantContext``; nothing here reads or
writes rows of another tenant.
"""

import logging
from dataclasses import dataclass, field
from typing import Final

from sqlalchemy.ext.asyncio import AsyncSession

from folio.core.folders.application.breadcrumbs import (
    DEFAULT_MAX_DEPTH,
    Breadcrumb,
    BreadcrumbResolver,
)
from folio.core.folders.application.cycle_guard import CycleGuard
from folio.core.folders.application.size_aggregator import SizeAggregator
from folio.core.folders.domain.document import Document
from folio.core.folders.domain.folder import Folder
from folio.core.folders.domain.ports.folder_repository import FolderRepository
from folio.core.folders.infrastructure.repositories.postgres_folder_repository import (
    PostgresFolderRepository,
)
from folio.shared.context import TenantContext
from folio.shared.exceptions import InvalidOperationError, NotFoundError
from folio.shared.formatting import format_size
from folio.shared.kernel.models.base import utcnow

logger = logging.getLogger(__name__)

ROOT: Final = "root"
COPY_SUFFIX: Final = " (Copy)"


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = _Unset()


def resolve_folder_ref(value: str | None) -> str | None:
    """Map the root sentinel (``"root"``, empty or null) to None."""
    if not value or value == ROOT:
        return None
    return value


# -----------------------------------------------------------------------------
# DTOs
# -----------------------------------------------------------------------------


@dataclass
class FolderSummary:
    """A folder annotated with direct counts and recursive size."""

    folder: Folder
    document_count: int
    subfolder_count: int
    total_size: int

    @property
    def total_size_formatted(self) -> str:
        return format_size(self.total_size)


@dataclass
class FolderDetail:
    folder: Folder
    parent: Folder | None
    breadcrumbs: list[Breadcrumb]


@dataclass
class DeleteFolderResult:
    folder: Folder
    moved_folders: int
    moved_documents: int


@dataclass
class BulkMoveResult:
    moved_ids: list[str] = field(default_factory=list)
    skipped_ids: list[str] = field(default_factory=list)

    @property
    def moved_count(self) -> int:
        return len(self.moved_ids)


@dataclass
class CopyFolderResult:
    folder: Folder
    folders_copied: int
    documents_copied: int


@dataclass
class _SubtreeSnapshot:
    folder: Folder
    documents: list[Document]
    children: list["_SubtreeSnapshot"]


# -----------------------------------------------------------------------------
# Service
# -----------------------------------------------------------------------------


class FolderService:
    """
    Hierarchy operations over folders and their documents.

    Validation always happens before any mutation. Each mutating operation
    commits once at the end; soft delete applies its three statements in a
    single transaction and rolls back on any failure.
    """

    def __init__(
        self,
        session: AsyncSession,
        repository: FolderRepository | None = None,
        max_breadcrumb_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self._session = session
        self._repository = repository or PostgresFolderRepository(session)
        self._sizes = SizeAggregator(self._repository)
        self._cycle_guard = CycleGuard(self._repository)
        self._breadcrumbs = BreadcrumbResolver(self._repository, max_depth=max_breadcrumb_depth)

    # -- reads ----------------------------------------------------------------

    async def list_folders(
        self,
        ctx: TenantContext,
        parent_id: str | None = None,
        search: str | None = None,
    ) -> list[FolderSummary]:
        """
        List folders at one level, or search by name across the tenant.

        When ``search`` is given the hierarchy is ignored.
        """
        folders = await self._repository.list_folders(
            ctx.tenant_id, parent_id=resolve_folder_ref(parent_id), search=search
        )

        summaries = []
        for folder in folders:
            summaries.append(
                FolderSummary(
                    folder=folder,
                    document_count=await self._repository.count_documents(
                        ctx.tenant_id, folder.id
                    ),
                    subfolder_count=await self._repository.count_children(
                        ctx.tenant_id, folder.id
                    ),
                    total_size=await self._sizes.total_size(ctx.tenant_id, folder.id),
                )
            )
        return summaries

    async def get_folder(self, ctx: TenantContext, folder_id: str) -> FolderDetail:
        folder = await self._require_folder(ctx, folder_id, "Folder not found")

        parent = None
        if folder.parent_id:
            parent = await self._repository.get(ctx.tenant_id, folder.parent_id)

        breadcrumbs = await self._breadcrumbs.resolve(ctx.tenant_id, folder)
        return FolderDetail(folder=folder, parent=parent, breadcrumbs=breadcrumbs)

    async def folder_size(self, ctx: TenantContext, folder_id: str) -> int:
        return await self._sizes.total_size(ctx.tenant_id, folder_id)

    # -- create / update ------------------------------------------------------

    async def create_folder(
        self, ctx: TenantContext, name: str | None, parent_id: str | None = None
    ) -> Folder:
        """
        Create a folder at the root or under a live parent.

        Raises:
            InvalidOperationError: If the name is blank.
            NotFoundError: If the parent does not exist in this tenant.
        """
        clean_name = self._clean_name(name)
        parent_id = resolve_folder_ref(parent_id)
        if parent_id:
            await self._require_folder(ctx, parent_id, "Parent folder not found")

        folder = Folder(
            tenant_id=ctx.tenant_id,
            name=clean_name,
            parent_id=parent_id,
            created_by_id=ctx.user_id,
        )
        await self._repository.add(folder)
        await self._session.commit()
        await self._session.refresh(folder)

        logger.info(f"Created folder {folder.id} '{folder.name}' (tenant={ctx.tenant_id})")
        return folder

    async def update_folder(
        self,
        ctx: TenantContext,
        folder_id: str,
        name: str | None = None,
        parent_id: str | None | _Unset = UNSET,
    ) -> Folder:
        """
        Rename and/or move a folder.

        ``name=None`` keeps the current name. ``parent_id`` left as ``UNSET``
        keeps the current parent; None, ``""`` or ``"root"`` moves to root.

        Raises:
            NotFoundError: If the folder or the new parent does not exist.
            InvalidOperationError: If the name is blank or the move would
                create a cycle.
        """
        folder = await self._require_folder(ctx, folder_id, "Folder not found")

        new_name = folder.name if name is None else self._clean_name(name)

        new_parent_id = folder.parent_id
        if not isinstance(parent_id, _Unset):
            new_parent_id = resolve_folder_ref(parent_id)
            if new_parent_id is not None:
                if new_parent_id == folder.id:
                    raise InvalidOperationError("Cannot move folder into itself")
                await self._require_folder(ctx, new_parent_id, "Parent folder not found")
                await self._cycle_guard.ensure_can_move(ctx.tenant_id, folder.id, new_parent_id)

        folder.name = new_name
        folder.parent_id = new_parent_id
        await self._session.commit()
        await self._session.refresh(folder)
        return folder

    # -- delete ---------------------------------------------------------------

    async def delete_folder(self, ctx: TenantContext, folder_id: str) -> DeleteFolderResult:
        """
        Soft-delete a folder, lifting its contents one level up.

        Direct child folders and direct documents are re-parented to the
        deleted folder's parent in the same transaction that marks it deleted.
        """
        folder = await self._require_folder(ctx, folder_id, "Folder not found")
        new_parent_id = folder.parent_id

        try:
            moved_documents = await self._repository.reparent_documents(
                ctx.tenant_id, folder.id, new_parent_id
            )
            moved_folders = await self._repository.reparent_children(
                ctx.tenant_id, folder.id, new_parent_id
            )
            await self._repository.mark_deleted(folder, utcnow())
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            logger.exception(f"Failed to delete folder {folder_id} (tenant={ctx.tenant_id})")
            raise

        logger.info(
            f"Deleted folder {folder.id}: moved {moved_folders} folder(s) and "
            f"{moved_documents} document(s) to {new_parent_id or 'root'}"
        )
        return DeleteFolderResult(
            folder=folder, moved_folders=moved_folders, moved_documents=moved_documents
        )

    # -- moves ----------------------------------------------------------------

    async def move_documents(
        self, ctx: TenantContext, target_folder_id: str | None, document_ids: list[str] | None
    ) -> int:
        """
        Move documents into a folder (or the root).

        Unknown, deleted or foreign document IDs are ignored; the return value
        is the number of documents actually moved.
        """
        if not document_ids:
            raise InvalidOperationError("Document IDs required")

        target_id = resolve_folder_ref(target_folder_id)
        if target_id:
            await self._require_folder(ctx, target_id, "Target folder not found")

        moved = await self._repository.move_documents(ctx.tenant_id, list(document_ids), target_id)
        await self._session.commit()
        return moved

    async def bulk_move(
        self, ctx: TenantContext, folder_ids: list[str] | None, target_folder_id: str | None
    ) -> BulkMoveResult:
        """
        Move several folders under one target.

        Folders that are the target itself, would create a cycle, or are not
        live folders of the tenant are skipped rather than failing the batch.
        """
        if not folder_ids:
            raise InvalidOperationError("Folder IDs required")

        target_id = resolve_folder_ref(target_folder_id)
        if target_id:
            await self._require_folder(ctx, target_id, "Target folder not found")

        result = BulkMoveResult()
        # repeated ids are handled once, in first-seen order
        for folder_id in dict.fromkeys(folder_ids):
            if folder_id == target_id:
                result.skipped_ids.append(folder_id)
                continue

            folder = await self._repository.get_active(ctx.tenant_id, folder_id)
            if folder is None:
                result.skipped_ids.append(folder_id)
                continue

            if await self._cycle_guard.creates_cycle(ctx.tenant_id, folder_id, target_id):
                result.skipped_ids.append(folder_id)
                continue

            folder.parent_id = target_id
            await self._session.flush()
            result.moved_ids.append(folder_id)

        await self._session.commit()

        if result.skipped_ids:
            logger.info(f"Bulk move skipped {len(result.skipped_ids)} folder(s): {result.skipped_ids}")
        return result

    # -- copy -----------------------------------------------------------------

    async def copy_folder(
        self, ctx: TenantContext, source_folder_id: str, target_folder_id: str | None
    ) -> CopyFolderResult:
        """
        Deep-copy a folder with its live documents and subfolders.

        Only the top copied folder gets the " (Copy)" suffix. Documents are
        duplicated as new rows that share the stored file reference. The
        source subtree is read completely before anything is written.
        """
        source = await self._require_folder(ctx, source_folder_id, "Source folder not found")

        target_id = resolve_folder_ref(target_folder_id)
        if target_id:
            await self._require_folder(ctx, target_id, "Target folder not found")
            if target_id == source.id:
                raise InvalidOperationError("Cannot copy folder into itself")

        snapshot = await self._snapshot(ctx.tenant_id, source, set())

        counts = {"folders": 0, "documents": 0}
        copied = await self._materialize(
            ctx, snapshot, target_id, f"{source.name}{COPY_SUFFIX}", counts
        )
        await self._session.commit()
        await self._session.refresh(copied)

        logger.info(
            f"Copied folder {source.id} to {target_id or 'root'} as {copied.id}: "
            f"{counts['folders']} folder(s), {counts['documents']} document(s)"
        )
        return CopyFolderResult(
            folder=copied,
            folders_copied=counts["folders"],
            documents_copied=counts["documents"],
        )

    async def _snapshot(
        self, tenant_id: str, folder: Folder, visited: set[str]
    ) -> _SubtreeSnapshot:
        visited.add(folder.id)
        documents = await self._repository.list_documents(tenant_id, folder.id)

        children = []
        for child in await self._repository.list_children(tenant_id, folder.id):
            if child.id in visited:
                continue
            children.append(await self._snapshot(tenant_id, child, visited))

        return _SubtreeSnapshot(folder=folder, documents=documents, children=children)

    async def _materialize(
        self,
        ctx: TenantContext,
        node: _SubtreeSnapshot,
        parent_id: str | None,
        name: str,
        counts: dict[str, int],
    ) -> Folder:
        new_folder = Folder(
            tenant_id=ctx.tenant_id,
            name=name,
            parent_id=parent_id,
            created_by_id=ctx.user_id,
        )
        await self._repository.add(new_folder)
        counts["folders"] += 1

        for doc in node.documents:
            await self._repository.add(
                Document(
                    tenant_id=ctx.tenant_id,
                    folder_id=new_folder.id,
                    name=doc.name,
                    description=doc.description,
                    file_type=doc.file_type,
                    file_size=doc.file_size,
                    url=doc.url,
                    public_id=doc.public_id,
                    category=doc.category,
                    is_public=doc.is_public,
                    uploaded_by_id=ctx.user_id,
                )
            )
            counts["documents"] += 1

        for child in node.children:
            await self._materialize(ctx, child, new_folder.id, child.folder.name, counts)

        return new_folder

    # -- helpers --------------------------------------------------------------

    async def _require_folder(self, ctx: TenantContext, folder_id: str, message: str) -> Folder:
        folder = await self._repository.get_active(ctx.tenant_id, folder_id)
        if folder is None:
            raise NotFoundError(message, details={"resource": "Folder", "identifier": folder_id})
        return folder

    @staticmethod
    def _clean_name(name: str | None) -> str:
        clean = (name or "").strip()
        if not clean:
            raise InvalidOperationError("Folder name is required")
        return clean
