from fastapi import APIRouter, Query, status
from ..dependencies import DBSessionDep, CurrentUserDep
from ..schemas.base import PaginatedResponse
from ..schemas.folder import (
    FolderCreate,
    FolderDetailOut,
    FolderMove,
    FolderOut,
    FolderPathOut,
    FolderTreeOut,
    FolderUpdate,
)
from ..services import folder_service

router = APIRouter(prefix="/folders", tags=["Folders"])


@router.get("/", response_model=PaginatedResponse[FolderOut])
async def list_folders(
    db_session: DBSessionDep,
    user: CurrentUserDep,
    limit: int = Query(100, ge=0, le=1000),
    offset: int = Query(0, ge=0),
):
    return await folder_service.list_folders(db_session, limit=limit, offset=offset)


@router.get("/tree", response_model=list[FolderTreeOut])
async def read_folder_tree(db_session: DBSessionDep, user: CurrentUserDep):
    return await folder_service.get_tree(db_session)


@router.post("/", response_model=FolderOut, status_code=status.HTTP_201_CREATED)
async def create_folder(
    payload: FolderCreate, db_session: DBSessionDep, user: CurrentUserDep
):
    return await folder_service.create_folder(payload, db_session, created_by=user.id)


@router.get("/{folder_id}", response_model=FolderDetailOut)
async def read_folder_by_id(
    folder_id: int, db_session: DBSessionDep, user: CurrentUserDep
):
    """Folder with its parent, direct children and media items."""
    return await folder_service.get_folder_detail(folder_id, db_session)


@router.patch("/{folder_id}", response_model=FolderOut)
async def rename_folder(
    folder_id: int,
    payload: FolderUpdate,
    db_session: DBSessionDep,
    user: CurrentUserDep,
):
    return await folder_service.update_folder(folder_id, payload, db_session)


@router.post("/{folder_id}/move", response_model=FolderOut)
async def move_folder(
    folder_id: int,
    payload: FolderMove,
    db_session: DBSessionDep,
    user: CurrentUserDep,
):
    return await folder_service.move_folder(folder_id, payload.parent_id, db_session)


@router.delete("/{folder_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_folder(folder_id: int, db_session: DBSessionDep, user: CurrentUserDep):
    """
    Delete a folder by its ID.
    Fails with 409 while the folder still has subfolders or media items.
    """
    await folder_service.delete_folder_by_id(folder_id, db_session)


@router.get("/{folder_id}/children", response_model=list[FolderOut])
async def read_folder_children(
    folder_id: int, db_session: DBSessionDep, user: CurrentUserDep
):
    return await folder_service.get_children(folder_id, db_session)


@router.get("/{folder_id}/ancestors", response_model=list[FolderOut])
async def read_folder_ancestors(
    folder_id: int, db_session: DBSessionDep, user: CurrentUserDep
):
    return await folder_service.get_ancestors(folder_id, db_session)


@router.get("/{folder_id}/descendants", response_model=list[FolderOut])
async def read_folder_descendants(
    folder_id: int, db_session: DBSessionDep, user: CurrentUserDep
):
    return await folder_service.get_descendants(folder_id, db_session)


@router.get("/{folder_id}/path", response_model=FolderPathOut)
async def read_folder_path(
    folder_id: int, db_session: DBSessionDep, user: CurrentUserDep
):
    return await folder_service.get_path(folder_id, db_session)
