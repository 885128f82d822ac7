from __future__ import annotations
from typing import TYPE_CHECKING
import uuid
from datetime import datetime, timezone

from fastapi_users_db_sqlalchemy.generics import GUID
from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..base import Base

if TYPE_CHECKING:
    from .media import Media


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Folder(Base):
    __tablename__ = "media_folders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[uuid.UUID] = mapped_column(
        GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    # --- Relationships ---

    # Self-referencing relationship for sub-folders. No cascade: a folder
    # with children can't be deleted.
    parent_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("media_folders.id"), nullable=True, index=True
    )

    # The `remote_side=[id]` is crucial for SQLAlchemy to understand how to join a table to itself.
    parent: Mapped["Folder"] = relationship(back_populates="children", remote_side=[id])
    children: Mapped[list["Folder"]] = relationship(
        back_populates="parent", passive_deletes=True
    )

    media: Mapped[list["Media"]] = relationship(
        back_populates="folder", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name='{self.name}', slug='{self.slug}')>"
