from pydantic import BaseModel
from typing import Any


class TagsAdd(BaseModel):
    tags: Any = None


class TagsAdded(BaseModel):
    message: str
