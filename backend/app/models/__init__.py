from .user import User
from .photo import Photo
from .tag import Tag
from .search_history import SearchHistoryEntry

__all__ = [
    "User",
    "Photo",
    "Tag",
    "SearchHistoryEntry",
]
