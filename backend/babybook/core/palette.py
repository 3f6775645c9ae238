import random
from typing import List, Optional, Sequence

MILESTONE_HEADER_COLORS = [
    "#FEF3C7",  # soft yellow
    "#DBEAFE",  # baby blue
    "#E9D5FF",  # lavender
    "#FCE7F3",  # pink
    "#D1FAE5",  # mint
    "#FFE4E6",  # peach
    "#E0E7FF",  # soft indigo
]


def yiq_brightness(hex_color: str) -> float:
    c = (hex_color or "").lstrip("#")
    r, g, b = int(c[0:2], 16), int(c[2:4], 16), int(c[4:6], 16)
    return (r * 299 + g * 587 + b * 114) / 1000


def readable_text_color(hex_color: str) -> str:
    return "#0f172a" if yiq_brightness(hex_color) >= 150 else "#ffffff"


def header_colors(
        count: int,
        colors: Sequence[str] = MILESTONE_HEADER_COLORS,
        rng: Optional[random.Random] = None,
) -> List[str]:
    """Random colours for ``count`` cards, never the same colour twice in a row."""
    rng = rng or random.Random()
    picked: List[str] = []
    last = None
    for _ in range(count):
        choices = [c for c in colors if c != last] or list(colors)
        last = rng.choice(choices)
        picked.append(last)
    return picked
