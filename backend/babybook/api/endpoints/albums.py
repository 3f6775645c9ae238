from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException

from babybook import schemas
from babybook.api import deps
from babybook.db.auth import Session
from babybook.db.client import BackendClient
from babybook.services.admin import AdminConsole

router = APIRouter()


@router.get("/albums", response_model=List[schemas.Album])
def read_albums(
        backend: BackendClient = Depends(deps.get_backend),
        current_admin: Session = Depends(deps.get_current_admin),
) -> Any:
    """
    Retrieve albums, newest first. Admin only.
    """
    section = AdminConsole(backend, current_admin).list_albums()
    if not section.ok:
        raise HTTPException(status_code=502, detail=section.error)
    return section.data
