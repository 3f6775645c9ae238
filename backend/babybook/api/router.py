from fastapi import APIRouter

from babybook.api.endpoints import albums, guestbook, journal, login, milestones, photos
from babybook.api.pages import admin, auth, site

api_router = APIRouter()
api_router.include_router(login.router, tags=["login"])
api_router.include_router(milestones.router, tags=["milestones"])
api_router.include_router(photos.router, tags=["gallery"])
api_router.include_router(journal.router, tags=["journal"])
api_router.include_router(guestbook.router, tags=["guestbook"])
api_router.include_router(albums.router, tags=["albums"])

page_router = APIRouter(include_in_schema=False)
page_router.include_router(site.router)
page_router.include_router(auth.router)
page_router.include_router(admin.router)
