from pydantic import BaseModel
from datetime import datetime
from typing import Any, Optional, List


class PhotoCreate(BaseModel):
    image_url: Any = None
    description: Optional[str] = None
    alt_description: Optional[str] = None
    # Shape is checked by the photo store so bad tags map to a 400, not a 422
    tags: Optional[Any] = None
    user_id: Any = None


class PhotoSaved(BaseModel):
    message: str
    photo_id: int


class TaggedPhoto(BaseModel):
    """A photo as returned by tag search."""

    image_url: str
    description: Optional[str] = None
    date_saved: datetime
    tags: List[str] = []


class TagSearchResponse(BaseModel):
    photos: List[TaggedPhoto]


class ExternalImage(BaseModel):
    image_url: str
    description: str
    alt_description: str


class ExternalSearchResponse(BaseModel):
    photos: Optional[List[ExternalImage]] = None
    message: Optional[str] = None
