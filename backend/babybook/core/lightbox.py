"""
Full-screen gallery viewer state.

The gallery renderer calls ``set_items`` with exactly the photos it put on
the page, so the lightbox always mirrors what the visitor can see.
"""
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class LightboxItem:
    src: str
    caption: str = ""


class Lightbox:
    def __init__(self, items: Optional[List[LightboxItem]] = None):
        self.items: List[LightboxItem] = list(items or [])
        self.index = 0
        self.is_open = False

    def set_items(self, items: List[LightboxItem]) -> None:
        self.items = list(items)
        if self.index >= len(self.items):
            self.index = max(len(self.items) - 1, 0)
        if not self.items:
            self.is_open = False

    def append_items(self, items: List[LightboxItem]) -> None:
        self.set_items(self.items + list(items))

    @property
    def current(self) -> Optional[LightboxItem]:
        if not self.is_open or not self.items:
            return None
        return self.items[self.index]

    @property
    def show_navigation(self) -> bool:
        return len(self.items) > 1

    def open_at(self, index: int) -> None:
        if not self.items:
            return
        self.index = max(0, min(index, len(self.items) - 1))
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def prev(self) -> None:
        if not self.items:
            return
        self.open_at((self.index - 1 + len(self.items)) % len(self.items))

    def next(self) -> None:
        if not self.items:
            return
        self.open_at((self.index + 1) % len(self.items))

    def handle_key(self, key: str) -> None:
        """Keyboard navigation; ignored while the lightbox is closed."""
        if not self.is_open:
            return
        if key == "Escape":
            self.close()
        elif key == "ArrowLeft":
            self.prev()
        elif key == "ArrowRight":
            self.next()
