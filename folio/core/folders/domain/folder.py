"""
Folder Model
============

Database model for document folders. Folders form a per-tenant tree through
the self-referencing ``parent_id`` column.
"""

from uuid import uuid4

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from folio.shared.kernel.models.base import Base, SoftDeleteMixin, TimestampMixin


class Folder(Base, TimestampMixin, SoftDeleteMixin):
    """
    Represents a folder for organizing documents.

    ``parent_id`` is null for folders at the tenant root. Deleting a folder
    only sets ``deleted_at``; its children are re-linked to its parent.
    """

    __tablename__ = "document_folders"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid4()))
    tenant_id: Mapped[str] = mapped_column(String, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)

    parent_id: Mapped[str | None] = mapped_column(
        ForeignKey("document_folders.id"), nullable=True, index=True
    )
    created_by_id: Mapped[str | None] = mapped_column(String, nullable=True)

    def __repr__(self):
        return f"<Folder(id={self.id}, name={self.name}, parent_id={self.parent_id})>"
