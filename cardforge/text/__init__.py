"""Markup parsing and text layout for card back text."""

from cardforge.text.markup import (
    Block,
    BlockKind,
    Segment,
    parse_markup,
    split_emphasis,
)
from cardforge.text.layout import (
    Geometry,
    Line,
    Run,
    describe_lines,
    estimate_width,
    layout_blocks,
)

__all__ = [
    # markup.py
    "Block",
    "BlockKind",
    "Segment",
    "parse_markup",
    "split_emphasis",
    # layout.py
    "Geometry",
    "Line",
    "Run",
    "describe_lines",
    "estimate_width",
    "layout_blocks",
]
