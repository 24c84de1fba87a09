"""
Input validation for photo, tag and search operations.

Every check here runs before a record is constructed or a query is issued,
so a failure never leaves a partial write behind.
"""

from enum import Enum
from typing import Any, List, Optional

from app.core.config import settings
from app.core.exceptions import (
    InvalidRequestError,
    InvalidSortOrderError,
    InvalidTagsError,
    InvalidUrlError,
    InvalidUserIdError,
    TagLimitExceededError,
)

MAX_DB_INTEGER = 2147483647  # Max PostgreSQL integer


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


def is_provider_image_url(image_url: Any, prefix: Optional[str] = None) -> bool:
    """Return True when the URL is hosted on the image provider's CDN."""
    prefix = prefix or settings.PROVIDER_IMAGE_URL_PREFIX
    return isinstance(image_url, str) and image_url.startswith(prefix)


def validate_image_url(image_url: Any, prefix: Optional[str] = None) -> str:
    if not is_provider_image_url(image_url, prefix):
        raise InvalidUrlError("Invalid image URL")
    return image_url


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def validate_new_photo_tags(
    tags: Any, max_tags: Optional[int] = None, max_length: Optional[int] = None
) -> List[str]:
    """
    Validate the tags sent along with a new photo.

    Args:
        tags: Tag names as received from the client
        max_tags: Maximum number of tags (default: MAX_TAGS_PER_PHOTO)
        max_length: Maximum characters per tag (default: MAX_TAG_LENGTH)

    Returns:
        The trimmed tag names, in input order

    Raises:
        InvalidTagsError: If the tags are not a list of short, non-empty strings
    """
    max_tags = max_tags or settings.MAX_TAGS_PER_PHOTO
    max_length = max_length or settings.MAX_TAG_LENGTH

    if not _is_sequence(tags):
        raise InvalidTagsError("tags must be an array.")
    if len(tags) > max_tags:
        raise InvalidTagsError(f"photo can have maximum {max_tags} tags.")
    return _clean_names(tags, max_length)


def validate_tag_names(tags: Any, max_length: Optional[int] = None) -> List[str]:
    """Validate tags added to an existing photo. At least one tag is required."""
    max_length = max_length or settings.MAX_TAG_LENGTH

    if not _is_sequence(tags) or len(tags) == 0:
        raise InvalidTagsError("Tags must be non-empty strings.")
    return _clean_names(tags, max_length)


def _clean_names(tags, max_length: int) -> List[str]:
    names = []
    for tag in tags:
        if not isinstance(tag, str) or not tag.strip():
            raise InvalidTagsError("Tags must be non-empty strings.")
        name = tag.strip()
        if len(name) > max_length:
            raise InvalidTagsError(
                f"Each tag must be at most {max_length} characters long."
            )
        names.append(name)
    return names


def ensure_tag_capacity(existing: int, incoming: int, limit: Optional[int] = None):
    """Raise TagLimitExceededError if a photo would end up over the tag limit."""
    limit = limit or settings.MAX_TAGS_PER_PHOTO
    if existing + incoming > limit:
        raise TagLimitExceededError(f"A photo can have maximum of {limit} tags.")


def parse_sort_order(sort: Optional[str]) -> SortOrder:
    if sort is None:
        return SortOrder.ASC
    if not isinstance(sort, str):
        raise InvalidSortOrderError("Invalid sort order")
    try:
        return SortOrder(sort.strip().upper())
    except ValueError:
        raise InvalidSortOrderError("Invalid sort order")


def parse_user_id(value: Any) -> int:
    """
    Parse a user ID given as an int or a decimal string.

    Raises:
        InvalidUserIdError: If the value is missing, not an integer or out of range
    """
    if value is None or isinstance(value, bool):
        raise InvalidUserIdError("Valid userId is required.")
    if isinstance(value, int):
        user_id = value
    elif isinstance(value, str):
        try:
            user_id = int(value.strip())
        except ValueError:
            raise InvalidUserIdError("Valid userId is required.")
    else:
        raise InvalidUserIdError("Valid userId is required.")

    if user_id < 1 or user_id > MAX_DB_INTEGER:
        raise InvalidUserIdError("Valid userId is required.")
    return user_id


def require_single_tag(tags: Any) -> str:
    """Accept exactly one tag name; lists of tags are rejected."""
    if not isinstance(tags, str) or not tags.strip():
        raise InvalidRequestError("A single valid tag must be provided.")
    return tags.strip()
