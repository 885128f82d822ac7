"""
Media folder hierarchy service.

Owns the folder tree rules: unique slugs, cycle-free moves, and deletes
guarded by a non-empty check. Persistence goes through crud_folder and
crud_media only.
"""

import asyncio
import logging
import uuid
from collections import deque

from slugify import slugify
from sqlalchemy.ext.asyncio import AsyncSession

from app.schemas.base import PaginatedResponse

from ..auth.models import User
from ..core.exceptions import (
    ConflictError,
    CycleError,
    IntegrityError,
    NotFoundError,
    ValidationError,
)
from ..db.crud import crud_folder, crud_media
from ..db.models.folder import Folder
from ..schemas.folder import (
    FOLDER_NAME_MAX_LENGTH,
    FolderCreate,
    FolderDetailOut,
    FolderOut,
    FolderPathOut,
    FolderTreeOut,
    FolderUpdate,
)
from ..schemas.media import MediaOut

logger = logging.getLogger(__name__)

DEFAULT_SLUG = "folder"
# Leaves room for a "-N" suffix inside the 255 character column.
SLUG_BASE_MAX_LENGTH = 240
PATH_SEPARATOR = "/"


class _TreeLock:
    """Lock held by every write to the folder table, rebuilt if the event loop changes."""

    def __init__(self):
        self._loop: asyncio.AbstractEventLoop | None = None
        self._lock: asyncio.Lock | None = None

    def get(self) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        if self._loop is not loop:
            self._loop, self._lock = loop, asyncio.Lock()
        return self._lock


_tree_lock = _TreeLock()


# --- Pure helpers ---


def _validate_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Folder name is required.")
    if len(name) > FOLDER_NAME_MAX_LENGTH:
        raise ValidationError(
            f"Folder name cannot exceed {FOLDER_NAME_MAX_LENGTH} characters."
        )
    return name


def _base_slug(name: str) -> str:
    return slugify(name, max_length=SLUG_BASE_MAX_LENGTH) or DEFAULT_SLUG


def _next_available_slug(base_slug: str, taken: set[str]) -> str:
    """Return ``base_slug`` or ``base_slug-N`` for the smallest free N >= 1."""
    if base_slug not in taken:
        return base_slug
    counter = 1
    while f"{base_slug}-{counter}" in taken:
        counter += 1
    return f"{base_slug}-{counter}"


def _assert_not_cycle(
    folders_by_id: dict[int, Folder], moving_id: int, new_parent_id: int | None
):
    """
    Reject a move that would make ``moving_id`` its own ancestor.

    Walks up from ``new_parent_id`` to a root. Revisiting a node or
    hitting a missing parent means the stored tree is already broken.
    """
    if new_parent_id == moving_id:
        raise CycleError("Folder cannot be its own parent.")

    visited: set[int] = set()
    cur = new_parent_id
    while cur is not None:
        if cur == moving_id:
            raise CycleError()
        if cur in visited:
            raise IntegrityError(f"Cycle detected in parent links at folder {cur}.")
        visited.add(cur)
        folder = folders_by_id.get(cur)
        if folder is None:
            raise IntegrityError(f"Folder {cur} is referenced as a parent but missing.")
        cur = folder.parent_id


def _build_tree(folders: list[Folder]) -> list[FolderTreeOut]:
    nodes: dict[int, FolderTreeOut] = {}
    children_map: dict[int | None, list[int]] = {}
    for f in folders:
        nodes[f.id] = FolderTreeOut(
            id=f.id,
            name=f.name,
            slug=f.slug,
            parent_id=f.parent_id,
            children=[],
        )
        children_map.setdefault(f.parent_id, []).append(f.id)

    def sorted_children(parent_id: int | None) -> list[FolderTreeOut]:
        return sorted(
            (nodes[cid] for cid in children_map.get(parent_id, [])),
            key=lambda node: (node.name, node.id),
        )

    # Iterative; trees can be nested deeper than the recursion limit.
    roots = sorted_children(None)
    queue = deque(roots)
    while queue:
        node = queue.popleft()
        node.children.extend(sorted_children(node.id))
        queue.extend(node.children)
    return roots


async def _unique_slug(
    db: AsyncSession, name: str, exclude_id: int | None = None
) -> str:
    base_slug = _base_slug(name)
    taken = await crud_folder.get_slugs_with_prefix(db, base_slug, exclude_id=exclude_id)
    return _next_available_slug(base_slug, taken)


async def _get_parent_or_fail(db: AsyncSession, parent_id: int) -> Folder:
    parent = await crud_folder.get_folder(db, parent_id)
    if not parent:
        raise ValidationError("The selected parent folder does not exist.")
    return parent


# --- Reads ---


async def get_folder_by_id(folder_id: int, db: AsyncSession) -> Folder:
    folder = await crud_folder.get_folder(db, folder_id)
    if not folder:
        raise NotFoundError("Folder not found")
    return folder


async def get_folder_detail(folder_id: int, db: AsyncSession) -> FolderDetailOut:
    """A folder together with its parent, direct children and media items."""
    folder = await get_folder_by_id(folder_id, db)
    parent = (
        await crud_folder.get_folder(db, folder.parent_id)
        if folder.parent_id is not None
        else None
    )
    children = await crud_folder.get_children(db, folder_id)
    media = await crud_media.get_media(db, folder_id=folder_id, limit=None)

    return FolderDetailOut(
        **FolderOut.model_validate(folder).model_dump(),
        parent=FolderOut.model_validate(parent) if parent else None,
        children=[FolderOut.model_validate(c) for c in children],
        media=[MediaOut.model_validate(m) for m in media],
    )


async def list_folders(
    db: AsyncSession, limit: int | None = 100, offset: int = 0
) -> PaginatedResponse[FolderOut]:
    """Flat folder listing ordered by name."""
    folders = await crud_folder.get_folders(db, limit=limit, offset=offset)
    total = await crud_folder.count_folders(db)
    return PaginatedResponse[FolderOut](
        total=total,
        items=[FolderOut.model_validate(f) for f in folders],
        limit=limit if limit is not None else total,
        offset=offset,
        has_more=offset + len(folders) < total,
    )


async def get_tree(db: AsyncSession) -> list[FolderTreeOut]:
    folders = await crud_folder.get_folders(db, limit=None)
    return _build_tree(folders)


async def get_children(folder_id: int, db: AsyncSession) -> list[Folder]:
    await get_folder_by_id(folder_id, db)
    return await crud_folder.get_children(db, folder_id)


async def get_ancestors(folder_id: int, db: AsyncSession) -> list[Folder]:
    """
    Return the ancestor chain of a folder, root first.

    A root folder has no ancestors. Raises IntegrityError if the parent
    links loop back on themselves or point at a missing folder.
    """
    folder = await get_folder_by_id(folder_id, db)
    chain: list[Folder] = []
    visited = {folder.id}
    cur = folder.parent_id
    while cur is not None:
        if cur in visited:
            logger.error(f"Parent links of folder {folder_id} loop at folder {cur}")
            raise IntegrityError(f"Cycle detected in parent links at folder {cur}.")
        visited.add(cur)
        parent = await crud_folder.get_folder(db, cur)
        if parent is None:
            logger.error(f"Folder {folder_id} has a dangling ancestor {cur}")
            raise IntegrityError(f"Folder {cur} is referenced as a parent but missing.")
        chain.append(parent)
        cur = parent.parent_id
    chain.reverse()
    return chain


async def get_descendants(folder_id: int, db: AsyncSession) -> list[Folder]:
    """Return every folder below ``folder_id``, breadth-first, one query per level."""
    await get_folder_by_id(folder_id, db)
    descendants: list[Folder] = []
    seen = {folder_id}
    level = [folder_id]
    while level:
        children = await crud_folder.get_children(db, level)
        level = []
        for child in children:
            if child.id in seen:
                logger.error(f"Folder {child.id} reached twice below folder {folder_id}")
                raise IntegrityError(
                    f"Cycle detected in parent links at folder {child.id}."
                )
            seen.add(child.id)
            descendants.append(child)
            level.append(child.id)
    return descendants


async def get_full_path(folder_id: int, db: AsyncSession) -> str:
    return (await get_path(folder_id, db)).path


async def get_path(folder_id: int, db: AsyncSession) -> FolderPathOut:
    """Breadcrumbs for a folder: ancestors plus itself, and the joined path."""
    folder = await get_folder_by_id(folder_id, db)
    breadcrumbs = await get_ancestors(folder_id, db)
    breadcrumbs.append(folder)
    return FolderPathOut(
        id=folder.id,
        path=PATH_SEPARATOR.join(f.name for f in breadcrumbs),
        breadcrumbs=[FolderOut.model_validate(f) for f in breadcrumbs],
    )


# --- Writes ---


async def create_folder(
    payload: FolderCreate, db: AsyncSession, created_by: uuid.UUID
) -> Folder:
    name = _validate_name(payload.name)

    async with _tree_lock.get():
        if payload.parent_id is not None:
            await _get_parent_or_fail(db, payload.parent_id)

        if await db.get(User, created_by) is None:
            raise ValidationError("The folder creator does not exist.")

        slug = await _unique_slug(db, name)
        folder = await crud_folder.create_folder(
            db,
            Folder(
                name=name,
                slug=slug,
                description=payload.description,
                parent_id=payload.parent_id,
                created_by=created_by,
            ),
        )

    logger.info(
        f"Created folder {folder.id} '{folder.slug}' under parent {folder.parent_id}"
    )
    return folder


async def update_folder(
    folder_id: int, payload: FolderUpdate, db: AsyncSession
) -> Folder:
    """
    Rename a folder and/or change its description.

    The slug is regenerated only when the name actually changes; the
    folder's own current slug does not count as a collision.
    """
    async with _tree_lock.get():
        folder = await get_folder_by_id(folder_id, db)

        if "name" in payload.model_fields_set:
            name = _validate_name(payload.name)
            if name != folder.name:
                folder.slug = await _unique_slug(db, name, exclude_id=folder.id)
                folder.name = name

        if "description" in payload.model_fields_set:
            folder.description = payload.description

        folder = await crud_folder.update_folder(db, folder)

    logger.info(f"Updated folder {folder.id} '{folder.slug}'")
    return folder


async def move_folder(
    folder_id: int, new_parent_id: int | None, db: AsyncSession
) -> Folder:
    """
    Move a folder under ``new_parent_id`` (or to the root when None).

    Raises:
        NotFoundError: folder does not exist
        ValidationError: new parent does not exist
        CycleError: new parent is the folder itself or one of its descendants
        IntegrityError: stored parent links are already corrupt
    """
    async with _tree_lock.get():
        folder = await get_folder_by_id(folder_id, db)

        if new_parent_id is not None:
            if new_parent_id == folder_id:
                raise CycleError("Folder cannot be its own parent.")
            await _get_parent_or_fail(db, new_parent_id)
            all_folders = await crud_folder.get_folders(db, limit=None)
            by_id = {f.id: f for f in all_folders}
            try:
                _assert_not_cycle(by_id, folder_id, new_parent_id)
            except IntegrityError as exc:
                logger.error(f"Refusing to move folder {folder_id}: {exc.message}")
                raise

        old_parent_id = folder.parent_id
        folder.parent_id = new_parent_id
        folder = await crud_folder.update_folder(db, folder)

    logger.info(f"Moved folder {folder_id} from parent {old_parent_id} to {new_parent_id}")
    return folder


async def delete_folder_by_id(folder_id: int, db_session: AsyncSession) -> None:
    """
    Deletes a folder by its ID.

    Only empty folders can be deleted. The check is shallow: direct
    children and directly attached media block the delete, deeper
    content is reached only through those children.

    Args:
        folder_id: Folder ID to delete
        db_session: Database session

    Raises:
        NotFoundError: If folder not found
        ConflictError: If the folder has subfolders or media items
    """
    async with _tree_lock.get():
        folder = await get_folder_by_id(folder_id, db_session)

        if await crud_folder.count_children(db_session, folder_id) > 0:
            raise ConflictError("children")
        if await crud_media.count_media_in_folder(db_session, folder_id) > 0:
            raise ConflictError("media")

        await crud_folder.delete_folder(db_session, folder)

    logger.info(f"Deleted folder {folder_id}")
