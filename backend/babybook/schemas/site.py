from typing import Optional

from pydantic import BaseModel


class SiteSettings(BaseModel):
    hero_title: Optional[str] = None
    hero_subtitle: Optional[str] = None
    profile_image_url: Optional[str] = None
    profile_ring_color: Optional[str] = None
    birth_date: Optional[str] = None
    age: Optional[str] = None


class Token(BaseModel):
    access_token: str
    token_type: str
