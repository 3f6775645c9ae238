from typing import Optional
from pydantic import BaseModel
from datetime import date, datetime


class Album(BaseModel):
    id: int
    name: str
    visibility: str = "private"
    event_date: Optional[date] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
