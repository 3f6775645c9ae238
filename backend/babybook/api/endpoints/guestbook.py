from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Response

from babybook import schemas
from babybook.api import deps
from babybook.db.client import BackendClient
from babybook.services.guestbook import MISSING_FIELDS_MESSAGE, submit_guestbook_entry
from babybook.services.public import load_approved_guestbook

router = APIRouter()


@router.get("/guestbook", response_model=List[schemas.GuestbookEntry])
def read_guestbook(backend: BackendClient = Depends(deps.get_backend)) -> Any:
    """
    Retrieve approved guestbook messages, newest first.
    """
    section = load_approved_guestbook(backend)
    if not section.ok:
        raise HTTPException(status_code=502, detail=section.error)
    return section.data


@router.post("/guestbook", response_model=schemas.GuestbookSubmitResult, status_code=201)
def create_guestbook_entry(
        *,
        backend: BackendClient = Depends(deps.get_backend),
        entry_in: schemas.GuestbookSubmit,
        response: Response,
) -> Any:
    """
    Submit a message for moderation.
    """
    result = submit_guestbook_entry(backend, entry_in.name, entry_in.relation, entry_in.message)
    if not result.ok:
        response.status_code = 400 if result.message == MISSING_FIELDS_MESSAGE else 503
    return schemas.GuestbookSubmitResult(ok=result.ok, message=result.message)
