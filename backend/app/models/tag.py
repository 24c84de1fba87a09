from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from app.core.config import settings
from app.core.database import Base


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, index=True)
    # Stored trimmed; length follows the validation limit at table creation
    name = Column(String(settings.MAX_TAG_LENGTH), nullable=False, index=True)
    photo_id = Column(
        Integer,
        ForeignKey("photos.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    photo = relationship("Photo", back_populates="tags")
