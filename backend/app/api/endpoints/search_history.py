from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import Optional

from app.core.config import settings
from app.core.database import get_db
from app.core.rate_limit import limiter
from app.schemas.search_history import SearchHistoryResponse
from app.services.search_history import SearchHistoryLog

router = APIRouter()


@router.get("", response_model=SearchHistoryResponse)
@limiter.limit(settings.DEFAULT_RATE_LIMIT)
async def get_search_history(
    request: Request,
    user_id: Optional[str] = Query(None, description="User whose searches to list"),
    db: Session = Depends(get_db),
):
    """Get a user's tag searches, most recent first."""
    return {"history": SearchHistoryLog(db).list_for_user(user_id)}
