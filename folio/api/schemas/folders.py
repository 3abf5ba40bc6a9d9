"""
Folder Schemas
==============

Request and response models for the folder hierarchy endpoints.
"""

from datetime import datetime

from pydantic import Field

from folio.api.schemas.base import CamelModel

# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------


class FolderCreate(CamelModel):
    name: str | None = None
    parent_id: str | None = None


class FolderUpdate(CamelModel):
    """
    Partial update. Omitted fields keep their value; an explicit
    ``parentId`` of null, "" or "root" moves the folder to the root.
    """

    name: str | None = None
    parent_id: str | None = None


class MoveDocumentsRequest(CamelModel):
    document_ids: list[str] = Field(default_factory=list)


class CopyFolderRequest(CamelModel):
    target_folder_id: str | None = None


class BulkMoveRequest(CamelModel):
    folder_ids: list[str] = Field(default_factory=list)
    target_folder_id: str | None = None


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------


class FolderOut(CamelModel):
    id: str
    tenant_id: str
    name: str
    parent_id: str | None = None
    created_by_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FolderSummaryOut(FolderOut):
    document_count: int = 0
    subfolder_count: int = 0
    total_size: int = 0
    total_size_formatted: str = "-"


class FolderRef(CamelModel):
    id: str
    name: str


class FolderDetailOut(FolderOut):
    parent: FolderRef | None = None


class FolderListData(CamelModel):
    folders: list[FolderSummaryOut]


class FolderData(CamelModel):
    folder: FolderOut


class FolderDetailData(CamelModel):
    folder: FolderDetailOut
    breadcrumbs: list[FolderRef]


class DeleteFolderData(CamelModel):
    id: str
    moved_folders: int
    moved_documents: int


class MovedCountData(CamelModel):
    moved_count: int


class BulkMoveData(CamelModel):
    moved_count: int
    skipped_ids: list[str] = Field(default_factory=list)


class CopyFolderData(CamelModel):
    folder: FolderOut
    folders_copied: int
    documents_copied: int
