import logging
from dataclasses import dataclass

from babybook.db.client import BackendClient
from babybook.db.errors import BackendError

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Please fill in all fields."
RETRY_MESSAGE = "Could not submit right now. Try again."
THANK_YOU_MESSAGE = "Thank you! Your message is submitted for approval."


@dataclass
class SubmissionResult:
    ok: bool
    message: str


def submit_guestbook_entry(backend: BackendClient, name: str, relation: str, message: str) -> SubmissionResult:
    """Queue a visitor message for moderation.

    The stored status is always ``pending``; visitors never see backend
    error details.
    """
    name, relation, message = (name or "").strip(), (relation or "").strip(), (message or "").strip()
    if not name or not relation or not message:
        return SubmissionResult(ok=False, message=MISSING_FIELDS_MESSAGE)

    try:
        backend.table("guestbook_entries").insert({
            "name": name,
            "relation": relation,
            "message": message,
            "status": "pending",
        }).execute()
    except BackendError as exc:
        logger.error("Guestbook submission failed: %s", exc.describe())
        return SubmissionResult(ok=False, message=RETRY_MESSAGE)

    logger.info("Guestbook entry from %r queued for approval", name)
    return SubmissionResult(ok=True, message=THANK_YOU_MESSAGE)
