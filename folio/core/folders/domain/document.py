"""
Document Model
==============

Database model for stored documents. The file itself lives in external
storage and is referenced by ``url`` / ``public_id`` only.
"""

from uuid import uuid4

from sqlalchemy import BigInteger, Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from folio.shared.kernel.models.base import Base, SoftDeleteMixin, TimestampMixin


class Document(Base, TimestampMixin, SoftDeleteMixin):
    """
    Represents an uploaded document.
    """

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid4()))
    tenant_id: Mapped[str] = mapped_column(String, index=True, nullable=False)

    # Null folder means the tenant root
    folder_id: Mapped[str | None] = mapped_column(
        ForeignKey("document_folders.id"), nullable=True, index=True
    )

    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    file_type: Mapped[str | None] = mapped_column(String, nullable=True)
    file_size: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)

    # External storage reference
    url: Mapped[str | None] = mapped_column(String, nullable=True)
    public_id: Mapped[str | None] = mapped_column(String, nullable=True)

    category: Mapped[str | None] = mapped_column(String, nullable=True)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    uploaded_by_id: Mapped[str | None] = mapped_column(String, nullable=True)

    def __repr__(self):
        return f"<Document(id={self.id}, name={self.name}, folder_id={self.folder_id})>"
