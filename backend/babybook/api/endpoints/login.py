from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm

from babybook import schemas
from babybook.api import deps
from babybook.db.client import BackendClient
from babybook.db.errors import AuthError

router = APIRouter()


@router.post("/login/access-token", response_model=schemas.Token)
def login_access_token(
        backend: BackendClient = Depends(deps.get_backend),
        form_data: OAuth2PasswordRequestForm = Depends(),
) -> Any:
    """
    OAuth2 compatible token login, get an access token for future requests.
    """
    try:
        session = backend.auth.sign_in_with_password(form_data.username, form_data.password)
    except AuthError as exc:
        raise HTTPException(status_code=400, detail=exc.message)
    return {"access_token": session.access_token, "token_type": "bearer"}
