"""
Folder Endpoints
================

Tenant-scoped folder hierarchy: listing, detail, create, rename/move, soft
delete, deep copy, bulk folder moves and moving documents into a folder.
"""

from fastapi import APIRouter, Depends, Query, status

from folio.api.deps import (
    EDITOR_ROLES,
    MANAGER_ROLES,
    get_audit_recorder,
    get_folder_service,
    get_tenant_context,
    require_roles,
)
from folio.api.schemas.base import ResponseSchema
from folio.api.schemas.folders import (
    BulkMoveData,
    BulkMoveRequest,
    CopyFolderData,
    CopyFolderRequest,
    DeleteFolderData,
    FolderCreate,
    FolderData,
    FolderDetailData,
    FolderDetailOut,
    FolderListData,
    FolderOut,
    FolderRef,
    FolderSummaryOut,
    FolderUpdate,
    MoveDocumentsRequest,
    MovedCountData,
)
from folio.core.admin_ops.application.audit_service import AuditEntry, AuditRecorder
from folio.core.admin_ops.domain.audit import AuditAction, EntityType
from folio.core.folders.application.folder_service import UNSET, FolderService, FolderSummary
from folio.shared.context import TenantContext

router = APIRouter()


def _summary_out(summary: FolderSummary) -> FolderSummaryOut:
    return FolderSummaryOut(
        **FolderOut.model_validate(summary.folder).model_dump(),
        document_count=summary.document_count,
        subfolder_count=summary.subfolder_count,
        total_size=summary.total_size,
        total_size_formatted=summary.total_size_formatted,
    )


@router.get("", response_model=ResponseSchema[FolderListData])
async def list_folders(
    parent_id: str | None = Query(None, alias="parentId"),
    search: str | None = Query(None),
    ctx: TenantContext = Depends(get_tenant_context),
    service: FolderService = Depends(get_folder_service),
):
    """
    List folders at one level (root when ``parentId`` is omitted or "root"),
    or search by name across the whole tenant.
    """
    summaries = await service.list_folders(ctx, parent_id=parent_id, search=search)
    return ResponseSchema(data=FolderListData(folders=[_summary_out(s) for s in summaries]))


@router.get("/{folder_id}", response_model=ResponseSchema[FolderDetailData])
async def get_folder(
    folder_id: str,
    ctx: TenantContext = Depends(get_tenant_context),
    service: FolderService = Depends(get_folder_service),
):
    """Get a folder with its parent and breadcrumb path."""
    detail = await service.get_folder(ctx, folder_id)

    folder_out = FolderDetailOut(
        **FolderOut.model_validate(detail.folder).model_dump(),
        parent=FolderRef(id=detail.parent.id, name=detail.parent.name) if detail.parent else None,
    )
    breadcrumbs = [FolderRef(id=b.id, name=b.name) for b in detail.breadcrumbs]
    return ResponseSchema(data=FolderDetailData(folder=folder_out, breadcrumbs=breadcrumbs))


@router.post(
    "",
    response_model=ResponseSchema[FolderData],
    status_code=status.HTTP_201_CREATED,
)
async def create_folder(
    folder_in: FolderCreate,
    ctx: TenantContext = Depends(require_roles(*EDITOR_ROLES)),
    service: FolderService = Depends(get_folder_service),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """Create a folder at the root or under ``parentId``."""
    folder = await service.create_folder(ctx, folder_in.name, folder_in.parent_id)

    await audit.record(
        AuditEntry(
            action=AuditAction.CREATE,
            entity_type=EntityType.FOLDER,
            entity_id=folder.id,
            entity_name=folder.name,
            details={"parentId": folder.parent_id},
        )
    )
    return ResponseSchema(message="Folder created", data=FolderData(folder=FolderOut.model_validate(folder)))


@router.put("/{folder_id}", response_model=ResponseSchema[FolderData])
async def update_folder(
    folder_id: str,
    folder_in: FolderUpdate,
    ctx: TenantContext = Depends(require_roles(*EDITOR_ROLES)),
    service: FolderService = Depends(get_folder_service),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """
    Rename and/or move a folder.

    An omitted ``parentId`` keeps the current parent; null, "" or "root"
    moves the folder to the root.
    """
    fields = folder_in.model_fields_set
    parent_id = folder_in.parent_id if "parent_id" in fields else UNSET

    folder = await service.update_folder(ctx, folder_id, name=folder_in.name, parent_id=parent_id)

    changes = {}
    if "name" in fields:
        changes["name"] = folder.name
    if "parent_id" in fields:
        changes["parentId"] = folder.parent_id
    await audit.record(
        AuditEntry(
            action=AuditAction.MOVE if "parent_id" in fields else AuditAction.UPDATE,
            entity_type=EntityType.FOLDER,
            entity_id=folder.id,
            entity_name=folder.name,
            details=changes,
        )
    )
    return ResponseSchema(message="Folder updated", data=FolderData(folder=FolderOut.model_validate(folder)))


@router.delete("/{folder_id}", response_model=ResponseSchema[DeleteFolderData])
async def delete_folder(
    folder_id: str,
    ctx: TenantContext = Depends(require_roles(*MANAGER_ROLES)),
    service: FolderService = Depends(get_folder_service),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """
    Soft-delete a folder.

    Its direct subfolders and documents move up to the deleted folder's parent.
    """
    result = await service.delete_folder(ctx, folder_id)

    await audit.record(
        AuditEntry(
            action=AuditAction.DELETE,
            entity_type=EntityType.FOLDER,
            entity_id=result.folder.id,
            entity_name=result.folder.name,
            details={
                "parentId": result.folder.parent_id,
                "movedFolders": result.moved_folders,
                "movedDocuments": result.moved_documents,
            },
        )
    )
    return ResponseSchema(
        message="Folder deleted. Contents moved to parent folder.",
        data=DeleteFolderData(
            id=result.folder.id,
            moved_folders=result.moved_folders,
            moved_documents=result.moved_documents,
        ),
    )


@router.post("/bulk-move", response_model=ResponseSchema[BulkMoveData])
async def bulk_move_folders(
    request: BulkMoveRequest,
    ctx: TenantContext = Depends(require_roles(*EDITOR_ROLES)),
    service: FolderService = Depends(get_folder_service),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """
    Move several folders under one target ("root" for the root).

    Folders that would end up inside themselves are skipped and reported.
    """
    result = await service.bulk_move(ctx, request.folder_ids, request.target_folder_id)

    await audit.record(
        AuditEntry(
            action=AuditAction.MOVE,
            entity_type=EntityType.FOLDER,
            details={
                "folderIds": result.moved_ids,
                "skippedIds": result.skipped_ids,
                "targetFolderId": request.target_folder_id,
            },
        )
    )
    return ResponseSchema(
        message=f"Moved {result.moved_count} folder(s)",
        data=BulkMoveData(moved_count=result.moved_count, skipped_ids=result.skipped_ids),
    )


@router.post("/{folder_id}/move-documents", response_model=ResponseSchema[MovedCountData])
async def move_documents(
    folder_id: str,
    request: MoveDocumentsRequest,
    ctx: TenantContext = Depends(require_roles(*EDITOR_ROLES)),
    service: FolderService = Depends(get_folder_service),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """Move documents into this folder; ``folder_id`` may be "root"."""
    moved = await service.move_documents(ctx, folder_id, request.document_ids)

    await audit.record(
        AuditEntry(
            action=AuditAction.MOVE,
            entity_type=EntityType.DOCUMENT,
            details={
                "documentIds": request.document_ids,
                "targetFolderId": folder_id,
                "movedCount": moved,
            },
        )
    )
    return ResponseSchema(
        message=f"Moved {moved} document(s)",
        data=MovedCountData(moved_count=moved),
    )


@router.post("/{folder_id}/copy", response_model=ResponseSchema[CopyFolderData])
async def copy_folder(
    folder_id: str,
    request: CopyFolderRequest,
    ctx: TenantContext = Depends(require_roles(*EDITOR_ROLES)),
    service: FolderService = Depends(get_folder_service),
    audit: AuditRecorder = Depends(get_audit_recorder),
):
    """Deep-copy a folder with its documents and subfolders into a target."""
    result = await service.copy_folder(ctx, folder_id, request.target_folder_id)

    await audit.record(
        AuditEntry(
            action=AuditAction.COPY,
            entity_type=EntityType.FOLDER,
            entity_id=folder_id,
            entity_name=result.folder.name,
            details={
                "copyId": result.folder.id,
                "targetFolderId": result.folder.parent_id,
                "foldersCopied": result.folders_copied,
                "documentsCopied": result.documents_copied,
            },
        )
    )
    return ResponseSchema(
        message="Folder copied successfully",
        data=CopyFolderData(
            folder=FolderOut.model_validate(result.folder),
            folders_copied=result.folders_copied,
            documents_copied=result.documents_copied,
        ),
    )
