from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from babybook import schemas
from babybook.api import deps
from babybook.db.client import BackendClient
from babybook.services.gallery import GALLERY_PAGE_SIZE, GalleryPager, policy_for
from babybook.services.roles import Role

router = APIRouter()


@router.get("/gallery", response_model=schemas.GalleryPage)
def read_gallery(
        backend: BackendClient = Depends(deps.get_backend),
        page: int = Query(0, ge=0),
        page_size: int = Query(GALLERY_PAGE_SIZE, ge=1, le=100),
        role: Role = Depends(deps.get_role),
) -> Any:
    """
    One page of the gallery. Private photos are included for members and admins.
    """
    pager = GalleryPager(backend, include_private=policy_for(role).include_private, page_size=page_size)
    section = pager.load_gallery(page, append=False)
    if not section.ok:
        raise HTTPException(status_code=502, detail=section.error)

    return schemas.GalleryPage(
        page=page,
        page_size=page_size,
        total=pager.total,
        has_more=pager.has_more,
        items=pager.items,
    )
