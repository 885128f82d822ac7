from .folder import Folder
from .media import Media
from app.auth.models import User

__all__ = [
    "User",
    "Folder",
    "Media",
]
