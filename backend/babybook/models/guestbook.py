from sqlalchemy import Column, String, Text

from babybook.models.base import BaseModel


class GuestbookEntry(BaseModel):
    __tablename__ = "guestbook_entries"

    name = Column(String, nullable=False)
    relation = Column(String)
    message = Column(Text, nullable=False)
    photo_url = Column(String)
    status = Column(String, nullable=False, default="pending")  # pending | approved | rejected
