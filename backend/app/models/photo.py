from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from app.core.database import Base


class Photo(Base):
    __tablename__ = "photos"

    id = Column(Integer, primary_key=True, index=True)
    image_url = Column(String, nullable=False)
    description = Column(String, nullable=True)
    alt_description = Column(String, nullable=True)
    date_saved = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    owner_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    owner = relationship("User", back_populates="photos")
    tags = relationship(
        "Tag",
        back_populates="photo",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Tag.id",
    )

    def __repr__(self):
        return f"<Photo id={self.id} owner={self.owner_id}>"
