from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import List, Optional

from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import InvalidRequestError
from app.core.rate_limit import limiter
from app.schemas.photo import (
    PhotoCreate,
    PhotoSaved,
    TagSearchResponse,
    ExternalSearchResponse,
)
from app.schemas.tag import TagsAdd, TagsAdded
from app.services.photo_store import PhotoStore
from app.services.tag_search import TagSearchEngine
from app.services.tag_store import TagStore
from app.services.unsplash_client import search_external_images

router = APIRouter()


@router.post("/", response_model=PhotoSaved, status_code=201)
@limiter.limit(settings.DEFAULT_RATE_LIMIT)
async def save_photo(
    request: Request,
    photo_data: PhotoCreate,
    db: Session = Depends(get_db),
):
    """
    Save a provider photo for a user.

    - Only images hosted by the provider are accepted
    - Up to 5 tags of at most 20 characters each may be attached
    """
    photo = PhotoStore(db).create(
        image_url=photo_data.image_url,
        description=photo_data.description,
        alt_description=photo_data.alt_description,
        tags=photo_data.tags,
        owner_id=photo_data.user_id,
    )
    return {"message": "Photo saved successfully", "photo_id": photo.id}


@router.post("/{photo_id}/tags", response_model=TagsAdded, status_code=201)
@limiter.limit(settings.DEFAULT_RATE_LIMIT)
async def add_tags_to_photo(
    request: Request,
    photo_id: int,
    tag_data: TagsAdd,
    db: Session = Depends(get_db),
):
    """Add tags to a saved photo without going over its tag limit."""
    TagStore(db).add_tags(photo_id, tag_data.tags)
    return {"message": "Tags added successfully."}


@router.get(
    "/search",
    response_model=ExternalSearchResponse,
    response_model_exclude_none=True,
)
@limiter.limit(settings.DEFAULT_RATE_LIMIT)
async def search_photos(
    request: Request,
    query: Optional[str] = Query(None, max_length=200, description="Search term"),
):
    """Search the image provider for photos matching a free-text query."""
    if not query or not query.strip():
        raise InvalidRequestError("A search term is required.")
    return await search_external_images(query.strip())


@router.get("/tag/search", response_model=TagSearchResponse)
@limiter.limit(settings.DEFAULT_RATE_LIMIT)
async def search_photos_by_tag(
    request: Request,
    tags: Optional[List[str]] = Query(None, description="A single tag name"),
    sort: Optional[str] = Query("ASC", description="ASC or DESC by save date"),
    user_id: Optional[str] = Query(None, description="Restrict to this user's photos"),
    db: Session = Depends(get_db),
):
    """
    Get saved photos carrying a tag, ordered by save date.

    - Exactly one tag may be given
    - When user_id is given, only that user's photos are returned and the
      search is recorded in their history
    """
    # A repeated ?tags= parameter stays a list and is rejected by the engine
    tag = tags[0] if tags and len(tags) == 1 else tags
    photos = TagSearchEngine(db).search(tag, sort=sort, user_id=user_id)
    return {"photos": photos}
