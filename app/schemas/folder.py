from __future__ import annotations
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from .base import BaseSchema
from .media import MediaOut

FOLDER_NAME_MAX_LENGTH = 255

# --- Input Schemas ---


class FolderCreate(BaseModel):
    """Schema for creating a new folder."""

    name: str
    description: str | None = None
    parent_id: int | None = None


class FolderUpdate(BaseModel):
    """Schema for renaming a folder or changing its description. Moves go through FolderMove."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    description: str | None = None


class FolderMove(BaseModel):
    """Schema for moving a folder. ``parent_id=None`` moves it to the root."""

    parent_id: int | None = None


# --- Output Schemas ---


class FolderOut(BaseSchema):
    """A single folder, without its children."""

    id: int
    name: str
    slug: str
    description: str | None = None
    parent_id: int | None
    created_by: uuid.UUID
    created_at: datetime
    updated_at: datetime


class FolderTreeOut(BaseSchema):
    """
    Schema for returning a folder, including its children.
    This is a recursive schema.
    """

    id: int
    name: str
    slug: str
    parent_id: int | None
    children: list["FolderTreeOut"] = Field(default_factory=list)


class FolderPathOut(BaseModel):
    """Breadcrumb view of a folder: its ``/``-joined path and the chain it is built from."""

    id: int
    path: str
    breadcrumbs: list[FolderOut]


class FolderDetailOut(FolderOut):
    """A folder with its parent, direct children and the media filed in it."""

    parent: FolderOut | None = None
    children: list[FolderOut] = Field(default_factory=list)
    media: list[MediaOut] = Field(default_factory=list)
