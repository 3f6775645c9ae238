import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from babybook.api.deps import SESSION_COOKIE, get_access_token, get_backend, safe_next
from babybook.api.templating import templates
from babybook.db.client import BackendClient
from babybook.db.errors import AuthError, BackendError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request, next: Optional[str] = None):
    return templates.TemplateResponse(request, "login.html", {"next": safe_next(next), "error": None, "email": ""})


@router.post("/login", response_class=HTMLResponse)
def login(
        request: Request,
        email: str = Form(""),
        password: str = Form(""),
        next: Optional[str] = Form(None),
        backend: BackendClient = Depends(get_backend),
):
    target = safe_next(next)
    try:
        session = backend.auth.sign_in_with_password(email, password)
    except AuthError as exc:
        logger.warning("Failed login for %r: %s", email, exc.message)
        return templates.TemplateResponse(
            request,
            "login.html",
            {"next": target, "error": exc.message, "email": email},
            status_code=400,
        )

    response = RedirectResponse(target, status_code=303)
    response.set_cookie(
        SESSION_COOKIE,
        session.access_token,
        max_age=backend.auth.session_minutes * 60,
        httponly=True,
        samesite="lax",
    )
    return response


@router.post("/logout")
def logout(
        token: Optional[str] = Depends(get_access_token),
        backend: BackendClient = Depends(get_backend),
):
    try:
        backend.auth.sign_out(token)
    except BackendError as exc:
        logger.error("Sign-out failed: %s", exc.message)
    response = RedirectResponse("/", status_code=303)
    response.delete_cookie(SESSION_COOKIE)
    return response
