from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException

from babybook import schemas
from babybook.api import deps
from babybook.db.client import BackendClient
from babybook.services.public import load_public_milestones, load_site_settings

router = APIRouter()


@router.get("/milestones", response_model=List[schemas.Milestone])
def read_milestones(backend: BackendClient = Depends(deps.get_backend)) -> Any:
    """
    Retrieve public milestones, oldest first.
    """
    section = load_public_milestones(backend)
    if not section.ok:
        raise HTTPException(status_code=502, detail=section.error)
    return section.data


@router.get("/site-settings", response_model=schemas.SiteSettings)
def read_site_settings(backend: BackendClient = Depends(deps.get_backend)) -> Any:
    """
    Hero text, profile image and the computed age.
    """
    section = load_site_settings(backend)
    if not section.ok:
        raise HTTPException(status_code=502, detail=section.error)
    return section.data
