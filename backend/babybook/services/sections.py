from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class Section:
    """Outcome of loading one part of a page.

    Each section is loaded on its own; a failed section carries ``error``
    and an empty payload so the rest of the page still renders.
    """
    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
