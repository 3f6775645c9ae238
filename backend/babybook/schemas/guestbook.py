from datetime import datetime
from typing import Optional

from pydantic import BaseModel


# Properties to receive on submission; anything else the client sends is ignored
class GuestbookSubmit(BaseModel):
    name: str = ""
    relation: str = ""
    message: str = ""


class GuestbookEntry(BaseModel):
    id: int
    name: str
    relation: Optional[str] = None
    message: str
    created_at: datetime

    class Config:
        from_attributes = True


class GuestbookSubmitResult(BaseModel):
    ok: bool
    message: str
