from typing import Literal
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from ..models.media import Media
from .crud_base import base_get, _validate_pagination, _validate_order_by_field

_UNSET = object()


async def get_media(
    db: AsyncSession,
    *,
    id: int | list[int] | None = None,
    folder_id: int | list[int] | None | object = _UNSET,
    limit: int | None = 100,
    offset: int = 0,
    order_by: str = "created_at",
    order_direction: Literal["asc", "desc"] = "desc",
    first: bool = False,
) -> list[Media] | Media | None:
    """
    Retrieve media items, optionally restricted to one or more folders.

    Pass ``folder_id=None`` to get items that are not in any folder.
    """
    _validate_pagination(limit, offset)

    if order_direction not in ("asc", "desc"):
        raise ValueError("order_direction must be 'asc' or 'desc'")

    _validate_order_by_field(Media, order_by)

    filters = {}
    if id is not None:
        filters["id"] = id
    if folder_id is not _UNSET:
        filters["folder_id"] = folder_id

    return await base_get(
        db,
        Media,
        filters=filters,
        limit=limit,
        offset=offset,
        order_by=order_by,
        order_direction=order_direction,
        first=first,
    )


async def count_media_in_folder(db: AsyncSession, folder_id: int) -> int:
    """Count media items attached directly to a folder."""
    result = await db.execute(
        select(func.count(Media.id)).where(Media.folder_id == folder_id)
    )
    return result.scalar()

