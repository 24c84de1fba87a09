from typing import Any, List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import PersistenceError
from app.core.logging_config import log_event
from app.models.photo import Photo
from app.services.tag_store import TagStore, photo_lock
from app.services.validation import (
    is_provider_image_url,
    parse_user_id,
    validate_image_url,
    validate_new_photo_tags,
)

logger = logging.getLogger(__name__)


class PhotoStore:
    """Owns Photo rows and their creation from provider-hosted image URLs."""

    def __init__(self, db: Session, image_url_prefix: Optional[str] = None):
        self.db = db
        self.image_url_prefix = image_url_prefix or settings.PROVIDER_IMAGE_URL_PREFIX

    def validate_url(self, image_url: Any) -> bool:
        return is_provider_image_url(image_url, self.image_url_prefix)

    def get(self, photo_id: int) -> Optional[Photo]:
        return self.db.query(Photo).filter(Photo.id == photo_id).first()

    def create(
        self,
        image_url: Any,
        description: Optional[str] = None,
        alt_description: Optional[str] = None,
        tags: Any = None,
        owner_id: Any = None,
    ) -> Photo:
        """
        Save a provider photo for a user, with optional tags.

        The photo is committed first and its tags in a second transaction. If
        the tag insert fails the photo stays saved without tags and a
        PersistenceError is raised.

        Raises:
            InvalidUrlError: If the URL is not hosted by the image provider
            InvalidTagsError: If tags is not a list of at most 5 short strings
            InvalidUserIdError: If owner_id is missing or not an integer
            PersistenceError: If a database write fails
        """
        validate_image_url(image_url, self.image_url_prefix)
        names: List[str] = []
        if tags is not None:
            names = validate_new_photo_tags(tags)
        owner_id = parse_user_id(owner_id)

        photo = Photo(
            image_url=image_url,
            description=description,
            alt_description=alt_description,
            owner_id=owner_id,
        )
        try:
            self.db.add(photo)
            self.db.commit()
            self.db.refresh(photo)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error saving photo for user {owner_id}: {str(e)}")
            raise PersistenceError() from e

        if names:
            tag_store = TagStore(self.db)
            with photo_lock(photo.id):
                try:
                    tag_store.insert_tags(photo.id, names)
                    self.db.commit()
                except SQLAlchemyError as e:
                    self.db.rollback()
                    logger.error(
                        f"Photo {photo.id} saved but its tags were not: {str(e)}"
                    )
                    raise PersistenceError() from e

        log_event(
            event_type="photo.saved",
            message=f"User {owner_id} saved photo {photo.id} with {len(names)} tags",
            user_id=owner_id,
            photo_id=photo.id,
        )
        return photo
