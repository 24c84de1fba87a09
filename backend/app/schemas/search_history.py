from pydantic import BaseModel
from datetime import datetime
from typing import List


class SearchHistoryItem(BaseModel):
    query: str
    timestamp: datetime


class SearchHistoryResponse(BaseModel):
    history: List[SearchHistoryItem]
