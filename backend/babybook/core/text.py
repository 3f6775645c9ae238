import re
from datetime import date, datetime
from html.parser import HTMLParser
from typing import List, Optional, Sequence, Union

PREVIEW_LENGTH = 600
JOURNAL_ACCENTS = ["bg-red-100", "bg-blue-100", "bg-green-100", "bg-purple-100"]

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.\-_]")


class _TextCollector(HTMLParser):
    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.parts: List[str] = []

    def handle_data(self, data: str) -> None:
        self.parts.append(data)


def strip_html(html: Optional[str]) -> str:
    """Text content of an HTML fragment: entities decoded, whitespace and stray
    ``<``/``>`` in the text kept as written.
    """
    collector = _TextCollector()
    collector.feed(html or "")
    collector.close()
    return "".join(collector.parts).strip()


def preview_text(text: str, limit: int = PREVIEW_LENGTH) -> str:
    """
    Shorten ``text`` to at most ``limit`` characters plus an ellipsis.

    The cut moves back to the last space when that space lies past 60% of
    the limit, so words are only split when the text has no usable break.
    """
    if len(text) <= limit:
        return text
    preview = text[:limit]
    last_space = preview.rfind(" ")
    if last_space > int(limit * 0.6):
        preview = preview[:last_space]
    return preview + "…"


def journal_accent(entry_id: Optional[int], accents: Sequence[str] = JOURNAL_ACCENTS) -> str:
    return accents[(entry_id or 0) % len(accents)]


def format_date(value: Union[date, datetime, str, None]) -> str:
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def split_csv(value: Optional[str]) -> List[str]:
    return [part.strip() for part in (value or "").split(",") if part.strip()]


def safe_file_name(name: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("_", name)
