from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class BaseSchema(BaseModel):
    """Output schemas read straight from ORM objects."""

    model_config = ConfigDict(from_attributes=True)


class PaginatedResponse(BaseModel, Generic[T]):
    """
    Generic base schema for paginated responses.

    Usage:
        response_model=PaginatedResponse[FolderOut]
    """

    total: int
    items: list[T]
    limit: int
    offset: int
    has_more: bool
