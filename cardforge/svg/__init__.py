"""SVG template binding."""

from cardforge.svg.binder import SVG_NS, XLINK_NS, TemplateBinder

__all__ = [
    "SVG_NS",
    "XLINK_NS",
    "TemplateBinder",
]
