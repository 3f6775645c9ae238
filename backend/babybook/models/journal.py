from sqlalchemy import Column, Date, DateTime, ForeignKey, JSON, String, Text

from babybook.models.base import BaseModel


class JournalEntry(BaseModel):
    __tablename__ = "journal_entries"

    title = Column(String, nullable=False)
    entry_date = Column(Date, nullable=False)
    content_html = Column(Text, nullable=False)
    mood = Column(String)
    tags = Column(JSON, default=list)
    attachments = Column(JSON, default=list)
    status = Column(String, nullable=False, default="draft")  # draft | scheduled | published
    publish_at = Column(DateTime(timezone=True))
    visibility = Column(String, nullable=False, default="private")

    user_id = Column(String(36), ForeignKey("users.id"))
