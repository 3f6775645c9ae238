from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException

from babybook import schemas
from babybook.api import deps
from babybook.db.client import BackendClient
from babybook.services.gallery import policy_for
from babybook.services.journal import load_journal
from babybook.services.roles import Role

router = APIRouter()


@router.get("/journal", response_model=List[schemas.JournalPreview])
def read_journal(
        backend: BackendClient = Depends(deps.get_backend),
        role: Role = Depends(deps.get_role),
) -> Any:
    """
    Latest journal previews. Members and admins only.
    """
    policy = policy_for(role)
    if not policy.load_journal:
        raise HTTPException(status_code=403, detail=policy.journal_notice)

    section = load_journal(backend, policy)
    if not section.ok:
        raise HTTPException(status_code=502, detail=section.error)
    return section.data
