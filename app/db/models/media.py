from __future__ import annotations
from typing import TYPE_CHECKING
import uuid
from datetime import datetime, timezone

from fastapi_users_db_sqlalchemy.generics import GUID
from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..base import Base

if TYPE_CHECKING:
    from .folder import Folder


class Media(Base):
    """
    A media item as far as the folder hierarchy cares about it.

    Upload, storage and processing live elsewhere; this table only records
    which folder an item is attached to.
    """

    __tablename__ = "media"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    mime_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    uploaded_by: Mapped[uuid.UUID] = mapped_column(
        GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    # Media without a folder live at the library root.
    folder_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("media_folders.id"), nullable=True, index=True
    )
    folder: Mapped["Folder"] = relationship(back_populates="media")

    def __repr__(self) -> str:
        return f"<Media(id={self.id}, title='{self.title}', folder_id={self.folder_id})>"
