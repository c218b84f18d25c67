"""Line wrapping and manual pagination for fixed-page output.

Widths are whatever unit ``measure`` returns; the PDF renderer binds it to
the glyph metrics of the active font, tests bind it to simple callables.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable

Measure = Callable[[str], float]

_NEWLINES = re.compile(r"\r\n|\r|\n")


def normalize_newlines(text: str) -> str:
    """Replace embedded line breaks with spaces."""
    return _NEWLINES.sub(" ", text)


def wrap_text(
    text: str,
    max_width: float,
    measure: Measure,
    first_line_width: float | None = None,
) -> list[str]:
    """Greedily wrap ``text`` into lines no wider than ``max_width``.

    Breaks only at single spaces; runs of spaces and tabs inside a line are
    kept, only the ends of each line are trimmed. A word that is wider than
    the limit on its own is placed alone on a line and left unsplit. Empty
    input yields one empty line so the caller still advances the cursor.
    """
    text = normalize_newlines(text).strip()
    if not text:
        return [""]

    lines: list[str] = []
    limit = max_width if first_line_width is None else first_line_width
    current: str | None = None
    for token in text.split(" "):
        if current is None:
            current = token
            continue
        candidate = f"{current} {token}"
        if token and current.strip() and measure(candidate.strip()) > limit:
            lines.append(current.strip())
            limit = max_width
            current = token
        else:
            current = candidate
    lines.append(current.strip())
    return lines


@dataclass
class PageCursor:
    """Vertical position on the current page, in top-down coordinates.

    ``y`` is the baseline of the next line. A line may start only while
    ``y <= bottom_limit``; past that a new page begins and ``y`` returns
    to ``top``.
    """

    top: float
    bottom_limit: float
    line_height: float
    on_new_page: Callable[[int], None] | None = None
    page: int = 1
    y: float = field(init=False)

    def __post_init__(self) -> None:
        self.y = self.top

    def needs_break(self, reserve: float = 0.0) -> bool:
        return self.y > self.bottom_limit - reserve

    def new_page(self) -> None:
        self.page += 1
        self.y = self.top
        if self.on_new_page is not None:
            self.on_new_page(self.page)

    def ensure_room(self, reserve: float = 0.0) -> bool:
        """Break to a new page if fewer than ``reserve`` units remain."""
        if self.needs_break(reserve):
            self.new_page()
            return True
        return False

    def advance(self, amount: float) -> None:
        self.y += amount

    def place_line(self) -> float:
        """Reserve one line and return the baseline it should be drawn at."""
        self.ensure_room()
        baseline = self.y
        self.y += self.line_height
        return baseline
