import logging
from typing import Optional
from urllib.parse import quote

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from babybook.config import settings
from babybook.db.auth import Session
from babybook.db.client import BackendClient
from babybook.db.errors import BackendError
from babybook.services.roles import Role, resolve_role

logger = logging.getLogger(__name__)

SESSION_COOKIE = "access_token"

reusable_oauth2 = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/login/access-token", auto_error=False)


class LoginRequired(Exception):
    """Raised by HTML routes that need a signed-in visitor."""

    def __init__(self, next_path: str):
        self.next_path = next_path


class AdminCheckFailed(Exception):
    def __init__(self, message: str):
        self.message = message


def login_url(next_path: str) -> str:
    return f"/login?next={quote(next_path, safe='')}"


def safe_next(next_path: Optional[str], default: str = "/") -> str:
    """Only same-site paths are valid redirect targets."""
    if not next_path or not next_path.startswith("/") or next_path.startswith("//") or "\\" in next_path:
        return default
    return next_path


def get_backend(request: Request) -> BackendClient:
    return request.app.state.backend


def get_settings(request: Request):
    return request.app.state.settings


def get_access_token(request: Request, bearer: Optional[str] = Depends(reusable_oauth2)) -> Optional[str]:
    return bearer or request.cookies.get(SESSION_COOKIE)


def get_session(
        backend: BackendClient = Depends(get_backend),
        token: Optional[str] = Depends(get_access_token),
) -> Optional[Session]:
    return backend.auth.get_session(token)


def get_role(
        backend: BackendClient = Depends(get_backend),
        session: Optional[Session] = Depends(get_session),
) -> Role:
    return resolve_role(backend, session)


def get_current_session(session: Optional[Session] = Depends(get_session)) -> Session:
    if session is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return session


def get_current_admin(
        backend: BackendClient = Depends(get_backend),
        session: Session = Depends(get_current_session),
) -> Session:
    if resolve_role(backend, session) is not Role.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not enough permissions")
    return session


def require_admin_page(
        request: Request,
        backend: BackendClient = Depends(get_backend),
        session: Optional[Session] = Depends(get_session),
) -> Session:
    """Admin gate for HTML pages: login redirect, or an explanation page."""
    if session is None:
        raise LoginRequired("/admin")

    try:
        admin = (
            backend.table("admins")
            .select("user_id,email")
            .eq("user_id", session.user.id)
            .maybe_single()
            .execute()
        )
    except BackendError as exc:
        logger.error("Admin check failed for %s: %s", session.user.id, exc.message)
        raise AdminCheckFailed("Error checking admin access: " + (exc.message or "unknown"))
    if not admin.data:
        logger.warning("Non-admin %s tried to open %s", session.user.id, request.url.path)
        raise AdminCheckFailed("❌ Not authorized (you are logged in, but not an admin).")
    return session
