"""
Markup parsing for card back text.

Supports a small markdown-like subset:

    ## Header line
    * Bullet item
    Paragraph text, possibly spanning
    several lines until a blank line.

Inline emphasis uses **bold** or __bold__ (same marker on both sides).
Nested or escaped markers are not supported.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

HEADER_MARKER = "## "
BULLET_MARKER = "* "
EMPHASIS_MARKERS = ("**", "__")


class BlockKind(enum.Enum):
    HEADER = "header"
    PARAGRAPH = "paragraph"
    BULLET = "bullet"


@dataclass(frozen=True)
class Segment:
    """A run of text sharing one emphasis state."""
    text: str
    is_bold: bool = False


@dataclass(frozen=True)
class Block:
    """One structural unit of source text."""
    kind: BlockKind
    segments: tuple[Segment, ...] = ()

    @property
    def text(self) -> str:
        """Block text with emphasis markers stripped."""
        return "".join(seg.text for seg in self.segments)


def _normalize(text: str) -> str:
    return " ".join(text.split())


def split_emphasis(raw: str) -> list[Segment]:
    """Split raw block text into alternating plain and bold segments.

    Scans left to right. At every position where a marker starts, the
    nearest identical closing marker ends the bold span. A marker with no
    closing partner is kept as literal text.

    Args:
        raw: Block text with inline markers

    Returns:
        Segments in source order. Empty input gives an empty list.
    """
    segments: list[Segment] = []
    plain_start = 0
    i = 0
    n = len(raw)

    while i < n:
        marker = next((m for m in EMPHASIS_MARKERS if raw.startswith(m, i)), None)
        if marker is None:
            i += 1
            continue

        close = raw.find(marker, i + len(marker))
        if close == -1:
            # Unterminated: the first marker char is literal, keep scanning
            i += 1
            continue

        if i > plain_start:
            segments.append(Segment(raw[plain_start:i], False))
        inner = raw[i + len(marker):close]
        if inner:
            segments.append(Segment(inner, True))

        i = close + len(marker)
        plain_start = i

    if plain_start < n:
        segments.append(Segment(raw[plain_start:], False))

    return segments


def _make_block(kind: BlockKind, raw: str) -> Block:
    return Block(kind, tuple(split_emphasis(_normalize(raw))))


def parse_markup(text: str) -> list[Block]:
    """Parse card text into header, bullet and paragraph blocks.

    Consecutive non-blank lines are joined with single spaces into one
    paragraph. Header and bullet lines, and blank lines, end the pending
    paragraph.
    """
    blocks: list[Block] = []
    pending: list[str] = []

    def flush() -> None:
        if pending:
            blocks.append(_make_block(BlockKind.PARAGRAPH, " ".join(pending)))
            pending.clear()

    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith(HEADER_MARKER):
            flush()
            blocks.append(_make_block(BlockKind.HEADER, stripped[len(HEADER_MARKER):]))
        elif stripped.startswith(BULLET_MARKER):
            flush()
            blocks.append(_make_block(BlockKind.BULLET, stripped[len(BULLET_MARKER):]))
        elif not stripped:
            flush()
        else:
            pending.append(stripped)

    flush()
    return blocks
