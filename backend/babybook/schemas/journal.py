from datetime import date
from typing import List, Optional

from pydantic import BaseModel


class JournalPreview(BaseModel):
    """A journal entry as shown on the public site: plain-text preview only."""
    id: int
    title: str
    entry_date: date
    day: int
    month_year: str
    preview: str
    accent: str
    mood: Optional[str] = None
    tags: List[str] = []
