from typing import Any, Dict, List
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    InvalidRequestError,
    InvalidUserIdError,
    PersistenceError,
)
from app.models.search_history import SearchHistoryEntry
from app.services.validation import parse_user_id

logger = logging.getLogger(__name__)


class SearchHistoryLog:
    """Append-only log of the tag searches each user has run."""

    def __init__(self, db: Session):
        self.db = db

    def append(self, user_id: int, query: str) -> SearchHistoryEntry:
        """Record one search. Callers supply a non-empty query."""
        if user_id is None:
            raise InvalidUserIdError("Valid userId is required.")
        if query is None or not str(query).strip():
            raise InvalidRequestError("A search query is required.")

        entry = SearchHistoryEntry(user_id=user_id, query=query)
        try:
            self.db.add(entry)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error logging search for user {user_id}: {str(e)}")
            raise PersistenceError() from e
        return entry

    def list_for_user(self, user_id: Any) -> List[Dict]:
        """Return the user's searches, most recent first."""
        user_id = parse_user_id(user_id)

        entries = (
            self.db.query(SearchHistoryEntry.query, SearchHistoryEntry.created_at)
            .filter(SearchHistoryEntry.user_id == user_id)
            .order_by(
                SearchHistoryEntry.created_at.desc(), SearchHistoryEntry.id.desc()
            )
            .all()
        )
        return [
            {"query": entry.query, "timestamp": entry.created_at} for entry in entries
        ]
