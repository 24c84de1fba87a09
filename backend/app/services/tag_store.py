from contextlib import contextmanager
from typing import List, Optional
import logging
import threading

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import NotFoundError, PersistenceError
from app.core.logging_config import log_event
from app.models.photo import Photo
from app.models.tag import Tag
from app.services.validation import ensure_tag_capacity, validate_tag_names

logger = logging.getLogger(__name__)

# Striped in-process locks keyed by photo id; the database row lock covers
# other processes on engines that support SELECT ... FOR UPDATE.
_LOCK_STRIPES = 64
_photo_locks = [threading.Lock() for _ in range(_LOCK_STRIPES)]


@contextmanager
def photo_lock(photo_id: int):
    lock = _photo_locks[hash(photo_id) % _LOCK_STRIPES]
    with lock:
        yield


class TagStore:
    """Owns Tag rows and the per-photo tag limit."""

    def __init__(self, db: Session, max_tags: Optional[int] = None):
        self.db = db
        self.max_tags = max_tags or settings.MAX_TAGS_PER_PHOTO

    def find_by_name(self, name: str) -> Optional[Tag]:
        """Exact, case-sensitive lookup of a tag by name."""
        return self.db.query(Tag).filter(Tag.name == name).order_by(Tag.id).first()

    def count_for_photo(self, photo_id: int) -> int:
        return (
            self.db.query(func.count(Tag.id)).filter(Tag.photo_id == photo_id).scalar()
        )

    def names_for_photo(self, photo_id: int) -> List[str]:
        rows = (
            self.db.query(Tag.name)
            .filter(Tag.photo_id == photo_id)
            .order_by(Tag.id)
            .all()
        )
        return [row.name for row in rows]

    def insert_tags(self, photo_id: int, names: List[str]) -> List[Tag]:
        """
        Count the photo's tags and stage new ones if they fit under the limit.

        The caller owns the transaction and must hold ``photo_lock(photo_id)``
        so the count and the insert are not interleaved with another writer.
        Nothing is staged when the limit would be exceeded.
        """
        current_count = self.count_for_photo(photo_id)
        ensure_tag_capacity(current_count, len(names), self.max_tags)

        tags = [Tag(name=name, photo_id=photo_id) for name in names]
        self.db.add_all(tags)
        self.db.flush()
        return tags

    def add_tags(self, photo_id: int, tags) -> List[Tag]:
        """
        Add tags to an existing photo.

        - Validates the tag names before touching the database
        - Locks the photo row, counts its tags and inserts in one transaction
        - Rejects the whole batch if the photo would exceed the tag limit
        """
        names = validate_tag_names(tags)

        with photo_lock(photo_id):
            try:
                photo = (
                    self.db.query(Photo)
                    .filter(Photo.id == photo_id)
                    .with_for_update()
                    .first()
                )
                if photo is None:
                    raise NotFoundError("Photo not found.")

                created = self.insert_tags(photo_id, names)
                self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(f"Error adding tags to photo {photo_id}: {str(e)}")
                raise PersistenceError() from e
            except Exception:
                self.db.rollback()
                raise

        log_event(
            event_type="tags.added",
            message=f"Added {len(created)} tags to photo {photo_id}",
            photo_id=photo_id,
            tag_count=len(created),
        )
        return created
