import uuid
from datetime import datetime

from .base import BaseSchema


class MediaOut(BaseSchema):
    """A media item as listed inside a folder."""

    id: int
    title: str
    file_name: str
    mime_type: str | None = None
    folder_id: int | None
    uploaded_by: uuid.UUID
    created_at: datetime
