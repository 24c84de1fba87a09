from typing import Any, Dict, List, Optional
import logging

from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import NotFoundError, PersistenceError
from app.core.logging_config import log_event
from app.models.photo import Photo
from app.models.tag import Tag
from app.services.search_history import SearchHistoryLog
from app.services.tag_store import TagStore
from app.services.validation import (
    SortOrder,
    parse_sort_order,
    parse_user_id,
    require_single_tag,
)

logger = logging.getLogger(__name__)


class TagSearchEngine:
    """
    Retrieves saved photos carrying a single tag.

    A search runs in order: validate the request, resolve the tag, filter and
    sort the photos, then record the query in the user's history. History is
    written only when photos were found, and a failed history write never
    fails the search.
    """

    def __init__(self, db: Session):
        self.db = db
        self.tag_store = TagStore(db)
        self.history = SearchHistoryLog(db)

    def search(
        self, tags: Any, sort: Optional[str] = None, user_id: Any = None
    ) -> List[Dict]:
        tag_name = require_single_tag(tags)
        order = parse_sort_order(sort)
        # A blank user_id (e.g. "?user_id=") means no user was given
        if isinstance(user_id, str) and not user_id.strip():
            user_id = None
        if user_id is not None:
            user_id = parse_user_id(user_id)

        if self.tag_store.find_by_name(tag_name) is None:
            raise NotFoundError("Tag not found.")

        photos = self._find_photos(tag_name, order, user_id)
        if not photos:
            raise NotFoundError(
                "No photos found with the specified tag for this user."
            )

        results = [
            {
                "image_url": photo.image_url,
                "description": photo.description,
                "date_saved": photo.date_saved,
                "tags": [tag.name for tag in photo.tags],
            }
            for photo in photos
        ]

        if user_id is not None:
            self._log_search(user_id, tag_name)

        return results

    def _find_photos(
        self, tag_name: str, order: SortOrder, user_id: Optional[int]
    ) -> List[Photo]:
        query = (
            self.db.query(Photo)
            .options(selectinload(Photo.tags))
            .filter(Photo.tags.any(Tag.name == tag_name))
        )
        if user_id is not None:
            query = query.filter(Photo.owner_id == user_id)

        if order == SortOrder.DESC:
            query = query.order_by(Photo.date_saved.desc(), Photo.id.desc())
        else:
            query = query.order_by(Photo.date_saved.asc(), Photo.id.asc())

        return query.all()

    def _log_search(self, user_id: int, tag_name: str) -> None:
        try:
            self.history.append(user_id, tag_name)
        except PersistenceError:
            # The photos are already loaded; the response goes out regardless
            logger.warning(
                f"Search history not recorded for user {user_id}, query '{tag_name}'"
            )
            return

        log_event(
            event_type="search.logged",
            message=f"User {user_id} searched tag '{tag_name}'",
            user_id=user_id,
            query=tag_name,
        )
