import logging
from typing import Any, Dict

from babybook.core.text import journal_accent, preview_text, strip_html
from babybook.db.client import BackendClient
from babybook.db.errors import BackendError
from babybook.services.gallery import VisibilityPolicy
from babybook.services.sections import Section

logger = logging.getLogger(__name__)

JOURNAL_LIMIT = 10


def journal_card(entry: Dict[str, Any]) -> Dict[str, Any]:
    entry_date = entry["entry_date"]
    return {
        "id": entry["id"],
        "title": entry["title"],
        "entry_date": entry_date,
        "day": entry_date.day,
        "month_year": entry_date.strftime("%B %Y"),
        "preview": preview_text(strip_html(entry.get("content_html"))),
        "accent": journal_accent(entry["id"]),
        "mood": entry.get("mood"),
        "tags": entry.get("tags") or [],
    }


def load_journal(backend: BackendClient, policy: VisibilityPolicy) -> Section:
    """Latest journal previews, or a locked section with no query issued."""
    if not policy.load_journal:
        return Section(data=[])

    try:
        result = (
            backend.table("journal_entries")
            .select("id,title,entry_date,content_html,mood,tags,visibility,status,publish_at")
            .order("entry_date", desc=True)
            .limit(JOURNAL_LIMIT)
            .execute()
        )
    except BackendError as exc:
        logger.error("Journal error: %s", exc.message)
        return Section(data=[], error=exc.message)
    return Section(data=[journal_card(entry) for entry in result.data])
