from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text

from babybook.models.base import BaseModel


class Photo(BaseModel):
    __tablename__ = "photos"

    url = Column(String, nullable=False)  # Public URL in object storage
    caption = Column(Text)
    taken_at = Column(DateTime(timezone=True))
    location = Column(String)
    tags = Column(JSON, default=list)
    is_favorite = Column(Boolean, default=False, nullable=False)
    visibility = Column(String, nullable=False, default="private")

    # Foreign keys
    album_id = Column(Integer, ForeignKey("albums.id", ondelete="SET NULL"))
    user_id = Column(String(36), ForeignKey("users.id"))
