import enum
import logging
from typing import Optional

from babybook.db.auth import Session
from babybook.db.client import BackendClient
from babybook.db.errors import BackendError

logger = logging.getLogger(__name__)


class Role(str, enum.Enum):
    ANONYMOUS = "anonymous"
    UNPRIVILEGED = "unprivileged"
    MEMBER = "member"
    ADMIN = "admin"

    @property
    def can_see_private(self) -> bool:
        return self in (Role.MEMBER, Role.ADMIN)


def _has_row(backend: BackendClient, table: str, user_id: str) -> bool:
    result = backend.table(table).select("user_id").eq("user_id", user_id).maybe_single().execute()
    return result.data is not None


def resolve_role(backend: BackendClient, session: Optional[Session]) -> Role:
    """
    Who is looking at the page.

    Admins are checked before members, so someone in both tables is an
    admin. A failed lookup counts as not authorized.
    """
    if session is None:
        return Role.ANONYMOUS

    user_id = session.user.id
    try:
        if _has_row(backend, "admins", user_id):
            return Role.ADMIN
        if _has_row(backend, "members", user_id):
            return Role.MEMBER
    except BackendError as exc:
        logger.error("Role check failed for user %s: %s", user_id, exc.message)
    return Role.UNPRIVILEGED
