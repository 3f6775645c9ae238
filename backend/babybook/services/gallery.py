"""
Role-gated gallery loading.

``GalleryPager`` holds the pagination counters for one rendering of the
gallery and feeds the lightbox from the same rows it renders.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from babybook.core.lightbox import Lightbox, LightboxItem
from babybook.core.text import format_date
from babybook.db.client import BackendClient
from babybook.db.errors import BackendError
from babybook.services.roles import Role
from babybook.services.sections import Section

logger = logging.getLogger(__name__)

GALLERY_PAGE_SIZE = 12
GALLERY_COLUMNS = "id,url,caption,taken_at,location,tags,is_favorite,visibility"


@dataclass(frozen=True)
class VisibilityPolicy:
    include_private: bool
    load_journal: bool
    gallery_notice: Optional[str] = None
    journal_notice: Optional[str] = None


def policy_for(role: Role) -> VisibilityPolicy:
    if role is Role.ANONYMOUS:
        return VisibilityPolicy(
            include_private=False,
            load_journal=False,
            gallery_notice="🔒 More photos are invite-only. Please login.",
            journal_notice="🔒 Journal is invite-only. Please login.",
        )
    if role is Role.UNPRIVILEGED:
        return VisibilityPolicy(
            include_private=False,
            load_journal=False,
            gallery_notice="🔒 This gallery is invite-only. You’ve not been added yet.",
            journal_notice="🔒 This journal is invite-only. Please contact the parents.",
        )
    if role.can_see_private:
        return VisibilityPolicy(include_private=True, load_journal=True)
    raise ValueError(f"Unknown role: {role}")


def lightbox_item(photo: Dict[str, Any]) -> LightboxItem:
    caption = " • ".join(part for part in [(photo.get("caption") or "").strip(), format_date(photo.get("taken_at"))] if part)
    return LightboxItem(src=photo["url"], caption=caption)


class GalleryPager:
    def __init__(self, backend: BackendClient, include_private: bool, page_size: int = GALLERY_PAGE_SIZE):
        self.backend = backend
        self.include_private = include_private
        self.page_size = page_size
        self.page = 0
        self.total = 0
        self.has_more = False
        self.items: List[Dict[str, Any]] = []
        self.lightbox = Lightbox()

    @property
    def show_load_more(self) -> bool:
        return self.has_more and self.total > 0

    def load_gallery(self, page: int, append: bool) -> Section:
        start = page * self.page_size
        query = self.backend.table("photos").select(GALLERY_COLUMNS, count="exact")
        if not self.include_private:
            query = query.eq("visibility", "public")
        try:
            result = (
                query.order("taken_at", desc=True)
                .order("id", desc=True)
                .range(start, start + self.page_size - 1)
                .execute()
            )
        except BackendError as exc:
            logger.error("Gallery error: %s", exc.message)
            return Section(data=self.items, error=exc.message)

        rows = result.data
        if append:
            self.items.extend(rows)
            self.lightbox.append_items([lightbox_item(p) for p in rows])
        else:
            self.items = list(rows)
            self.lightbox.set_items([lightbox_item(p) for p in rows])

        self.page = page
        self.total = result.count or 0
        self.has_more = (page + 1) * self.page_size < self.total
        return Section(data=self.items)

    def load_first(self) -> Section:
        return self.load_gallery(0, append=False)

    def load_more(self) -> Section:
        if not self.has_more:
            return Section(data=self.items)
        return self.load_gallery(self.page + 1, append=True)

    def load_through(self, last_page: int) -> Section:
        """Render pages ``0..last_page`` as if "load more" had been pressed that many times."""
        section = self.load_first()
        while section.ok and self.page < last_page and self.has_more:
            section = self.load_more()
        return section
