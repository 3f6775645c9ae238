from datetime import date
from typing import List, Optional

from pydantic import BaseModel


# Shared properties
class MilestoneBase(BaseModel):
    title: str
    happened_on: Optional[date] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = []
    visibility: str = "private"


# Properties to return to client
class Milestone(MilestoneBase):
    id: int
    media_urls: Optional[List[str]] = []

    class Config:
        from_attributes = True
