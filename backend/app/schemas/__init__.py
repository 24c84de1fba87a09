from app.schemas.photo import (
    PhotoCreate,
    PhotoSaved,
    TaggedPhoto,
    TagSearchResponse,
    ExternalImage,
    ExternalSearchResponse,
)
from app.schemas.tag import TagsAdd, TagsAdded
from app.schemas.search_history import SearchHistoryItem, SearchHistoryResponse

__all__ = [
    "PhotoCreate",
    "PhotoSaved",
    "TaggedPhoto",
    "TagSearchResponse",
    "ExternalImage",
    "ExternalSearchResponse",
    "TagsAdd",
    "TagsAdded",
    "SearchHistoryItem",
    "SearchHistoryResponse",
]
