from sqlalchemy import Column, Date, String

from babybook.models.base import BaseModel


class Album(BaseModel):
    __tablename__ = "albums"

    name = Column(String, nullable=False)
    visibility = Column(String, nullable=False, default="private")
    event_date = Column(Date)
