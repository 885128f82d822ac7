from typing import Literal
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from ..models.folder import Folder
from .crud_base import (
    base_get,
    base_update,
    _validate_pagination,
    _validate_order_by_field,
)

_UNSET = object()


async def get_folders(
    db: AsyncSession,
    *,
    # model params
    id: int | list[int] | None = None,
    name: str | None = None,
    slug: str | None = None,
    parent_id: int | list[int] | None | object = _UNSET,
    # Pagination
    limit: int | None = 100,
    offset: int = 0,
    # Ordering
    order_by: str = "name",
    order_direction: Literal["asc", "desc"] = "asc",
    # Return type control
    first: bool = False,
) -> list[Folder] | Folder | None:
    """
    Retrieve folders with flexible filtering, pagination, and ordering.

    Args:
        id: Single folder ID or list of folder IDs for IN clause
        name: Filter by exact folder name
        slug: Filter by exact slug
        parent_id: Single parent folder ID, list of parent IDs, or None for root folders
        limit: Maximum number of results (None = unlimited, default 100)
        offset: Number of results to skip (for pagination)
        order_by: Field to order by
        order_direction: Sort direction ('asc' or 'desc')
        first: If True, return single Folder or None instead of list

    Returns:
        - If first=True: Single Folder instance or None
        - If first=False: List of Folder instances (empty list if no matches)
    """
    _validate_pagination(limit, offset)

    if order_direction not in ("asc", "desc"):
        raise ValueError("order_direction must be 'asc' or 'desc'")

    _validate_order_by_field(Folder, order_by)

    filters = {}
    if id is not None:
        filters["id"] = id
    if name is not None:
        filters["name"] = name
    if slug is not None:
        filters["slug"] = slug
    if parent_id is not _UNSET:
        filters["parent_id"] = parent_id

    return await base_get(
        db,
        Folder,
        filters=filters,
        limit=limit,
        offset=offset,
        order_by=order_by,
        order_direction=order_direction,
        first=first,
    )


async def get_folder(db: AsyncSession, folder_id: int) -> Folder | None:
    """Return the folder with the given ID, or None."""
    return await get_folders(db, id=folder_id, first=True)


async def get_children(
    db: AsyncSession, parent_id: int | list[int] | None
) -> list[Folder]:
    """Return the direct children of one folder (or of several, for an IN lookup)."""
    return await get_folders(db, parent_id=parent_id, limit=None)


async def count_children(db: AsyncSession, folder_id: int) -> int:
    """Count direct children of a folder."""
    result = await db.execute(
        select(func.count(Folder.id)).where(Folder.parent_id == folder_id)
    )
    return result.scalar()


async def get_slugs_with_prefix(
    db: AsyncSession, base_slug: str, exclude_id: int | None = None
) -> set[str]:
    """
    Return existing slugs that equal ``base_slug`` or start with ``base_slug-``.

    Args:
        base_slug: Slug derived from a folder name, before disambiguation
        exclude_id: Folder whose own slug should not count as taken (rename)
    """
    query = select(Folder.slug).where(
        or_(Folder.slug == base_slug, Folder.slug.like(f"{base_slug}-%"))
    )
    if exclude_id is not None:
        query = query.where(Folder.id != exclude_id)
    result = await db.execute(query)
    return set(result.scalars().all())


async def create_folder(db_session: AsyncSession, folder_to_create: Folder) -> Folder:
    """
    Creates a new folder in the database.

    Args:
        db_session: Database session
        folder_to_create: Folder instance to create

    Returns:
        The created and refreshed Folder instance
    """
    db_session.add(folder_to_create)
    await db_session.commit()
    await db_session.refresh(folder_to_create)
    return folder_to_create


async def update_folder(db_session: AsyncSession, folder: Folder) -> Folder:
    """
    Updates a folder instance in the database.

    Args:
        db_session: Database session
        folder: The folder instance with modified attributes

    Returns:
        The refreshed folder instance
    """
    return await base_update(db_session, folder)


async def delete_folder(db_session: AsyncSession, folder_to_delete: Folder) -> None:
    """
    Deletes a specific folder instance from the database.

    Args:
        db_session: Database session
        folder_to_delete: The folder instance to delete
    """
    await db_session.delete(folder_to_delete)
    await db_session.commit()


async def count_folders(db: AsyncSession) -> int:
    """Count all folders."""
    result = await db.execute(select(func.count(Folder.id)))
    return result.scalar()
