import logging
import random
from datetime import date
from typing import Optional

from babybook.core.age import format_age
from babybook.core.palette import header_colors, readable_text_color
from babybook.db.client import BackendClient
from babybook.db.errors import BackendError
from babybook.services.sections import Section

logger = logging.getLogger(__name__)

SITE_SETTING_KEYS = ["hero_title", "hero_subtitle", "profile_image_url", "profile_ring_color", "birth_date"]
PUBLIC_MILESTONE_LIMIT = 12
APPROVED_GUESTBOOK_LIMIT = 20


def load_site_settings(backend: BackendClient, today: Optional[date] = None) -> Section:
    """Hero text, profile image and ring colour, plus the age chip from ``birth_date``.

    Every key is optional; missing or non-text values are left out.
    """
    try:
        result = backend.table("site_settings").select("key,value").in_("key", SITE_SETTING_KEYS).execute()
    except BackendError as exc:
        logger.warning("site_settings load warning: %s", exc.message)
        return Section(data={}, error=exc.message)

    settings = {}
    for row in result.data:
        value = row["value"]
        if not value:
            continue
        if not isinstance(value, str):
            logger.warning("Ignoring non-text site setting %s=%r", row["key"], value)
            continue
        settings[row["key"]] = value
    if settings.get("birth_date"):
        try:
            settings["age"] = format_age(settings["birth_date"], today=today)
        except ValueError:
            logger.warning("Ignoring unparseable birth_date %r", settings["birth_date"])
    return Section(data=settings)


def load_public_milestones(backend: BackendClient, rng: Optional[random.Random] = None) -> Section:
    """Public milestones, oldest first so the latest one renders last."""
    try:
        result = (
            backend.table("milestones")
            .select("id,title,happened_on,description,tags,visibility")
            .eq("visibility", "public")
            .order("happened_on")
            .limit(PUBLIC_MILESTONE_LIMIT)
            .execute()
        )
    except BackendError as exc:
        logger.error("Milestones load error: %s", exc.message)
        return Section(data=[], error=exc.message)

    milestones = result.data
    for milestone, color in zip(milestones, header_colors(len(milestones), rng=rng)):
        milestone["header_color"] = color
        milestone["icon_color"] = readable_text_color(color)
    return Section(data=milestones)


def load_approved_guestbook(backend: BackendClient) -> Section:
    try:
        result = (
            backend.table("guestbook_entries")
            .select("id,name,relation,message,created_at")
            .eq("status", "approved")
            .order("created_at", desc=True)
            .limit(APPROVED_GUESTBOOK_LIMIT)
            .execute()
        )
    except BackendError as exc:
        logger.error("Guestbook error: %s", exc.message)
        return Section(data=[], error=exc.message)
    return Section(data=result.data)
