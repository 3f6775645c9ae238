from typing import Optional, List
from pydantic import BaseModel
from datetime import datetime


# Shared properties
class PhotoBase(BaseModel):
    caption: Optional[str] = None
    taken_at: Optional[datetime] = None
    location: Optional[str] = None
    tags: Optional[List[str]] = []
    visibility: str = "private"


# Properties to return to client
class Photo(PhotoBase):
    id: int
    url: str
    is_favorite: bool = False

    class Config:
        from_attributes = True


class GalleryPage(BaseModel):
    page: int
    page_size: int
    total: int
    has_more: bool
    items: List[Photo] = []
