"""
Greedy word-wrap layout for parsed card text.

Widths are estimated from character counts (font_size * 0.5 per char), so
no font files are needed. Output is plain data (Line and Run objects) that
the SVG binder turns into <tspan> nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from cardforge.text.markup import Block, BlockKind

LINE_HEIGHT_FACTOR = 1.2
CHAR_WIDTH_FACTOR = 0.5
BULLET_GAP_FACTOR = 0.3     # spacing before a bullet block, in line heights
BLOCK_GAP_FACTOR = 0.6      # spacing before any other block
BULLET_INDENT = 5
BULLET_PREFIX = "• "

ANCHOR_MIDDLE = "middle"
ANCHOR_START = "start"


@dataclass(frozen=True)
class Geometry:
    """Numeric layout parameters for one text region."""
    base_x: float = 0.0
    base_y: float = 0.0
    font_size: float = 12.0
    max_width: float = 144.0

    @property
    def line_height(self) -> float:
        return self.font_size * LINE_HEIGHT_FACTOR

    @property
    def avg_char_width(self) -> float:
        return self.font_size * CHAR_WIDTH_FACTOR


@dataclass(frozen=True)
class Run:
    """A styled text fragment destined for one <tspan>."""
    text: str
    is_bold: bool = False
    is_marker: bool = False


@dataclass
class Line:
    """A physical output line. Runs share the line's position and anchor."""
    x: float
    y: float
    anchor: str
    kind: BlockKind
    runs: list[Run] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)

    def width(self, geometry: Geometry) -> float:
        """Estimated width of the line's words and spaces (prefix excluded)."""
        return estimate_width(
            "".join(run.text for run in self.runs if not run.is_marker),
            geometry,
        )


def estimate_width(text: str, geometry: Geometry) -> float:
    return len(text) * geometry.avg_char_width


def _words(block: Block) -> list[list[Run]]:
    """Split a block into words, each a list of styled pieces.

    Whitespace separates words; segment boundaries do not, so "foo**bar**"
    is one word made of a plain and a bold piece.
    """
    words: list[list[Run]] = []
    current: list[Run] = []
    for segment in block.segments:
        piece = ""
        for ch in segment.text:
            if ch.isspace():
                if piece:
                    current.append(Run(piece, segment.is_bold))
                    piece = ""
                if current:
                    words.append(current)
                    current = []
            else:
                piece += ch
        if piece:
            current.append(Run(piece, segment.is_bold))
    if current:
        words.append(current)
    return words


def _new_line(block: Block, geometry: Geometry, y: float, first: bool) -> Line:
    if block.kind is BlockKind.BULLET:
        line = Line(geometry.base_x + BULLET_INDENT, y, ANCHOR_START, block.kind)
        if first:
            line.runs.append(Run(BULLET_PREFIX, is_marker=True))
        return line
    return Line(geometry.base_x + geometry.max_width / 2, y, ANCHOR_MIDDLE, block.kind)


def layout_blocks(blocks: Iterable[Block], geometry: Geometry) -> list[Line]:
    """Lay out blocks as wrapped lines inside geometry.max_width.

    Args:
        blocks: Parsed blocks in document order
        geometry: Region origin, font size and wrap width

    Returns:
        Lines in block order, each with a fixed y and its runs in
        placement order.
    """
    lines: list[Line] = []
    line_height = geometry.line_height
    space_width = estimate_width(" ", geometry)
    y = geometry.base_y + geometry.font_size

    for index, block in enumerate(blocks):
        if index > 0:
            gap = BULLET_GAP_FACTOR if block.kind is BlockKind.BULLET else BLOCK_GAP_FACTOR
            y += line_height * gap

        line = _new_line(block, geometry, y, first=True)
        line_width = 0.0
        placed = 0

        for word in _words(block):
            word_width = estimate_width("".join(p.text for p in word), geometry)

            if placed and line_width + space_width + word_width > geometry.max_width:
                lines.append(line)
                y += line_height
                line = _new_line(block, geometry, y, first=False)
                line_width = 0.0
                placed = 0

            if placed:
                line.runs.append(Run(" "))
                line_width += space_width
            line.runs.extend(word)
            line_width += word_width
            placed += 1

        lines.append(line)
        y += line_height

    return lines


def describe_lines(lines: Sequence[Line]) -> list[str]:
    """Render lines as readable rows.

    Bold runs are listed as start:end character offsets into the line text
    in their own column, so literal asterisks in the text stay unambiguous:

        y=  12.00 x=  72.00 middle bold=6:11 | Hello world
    """
    out = []
    for line in lines:
        spans = []
        offset = 0
        for run in line.runs:
            if run.is_bold:
                spans.append(f"{offset}:{offset + len(run.text)}")
            offset += len(run.text)
        bold = ",".join(spans) or "-"
        out.append(f"y={line.y:7.2f} x={line.x:7.2f} {line.anchor:<6} bold={bold} | {line.text}")
    return out
