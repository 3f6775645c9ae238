from sqlalchemy import Column, Date, ForeignKey, JSON, String, Text

from babybook.models.base import BaseModel


class Milestone(BaseModel):
    __tablename__ = "milestones"

    title = Column(String, nullable=False)
    happened_on = Column(Date, nullable=False)
    description = Column(Text)
    tags = Column(JSON, default=list)
    media_urls = Column(JSON, default=list)
    visibility = Column(String, nullable=False, default="private")

    user_id = Column(String(36), ForeignKey("users.id"))
