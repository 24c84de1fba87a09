from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from app.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    photos = relationship(
        "Photo",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    search_history = relationship("SearchHistoryEntry", back_populates="user")
