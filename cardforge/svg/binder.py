"""
SVG template binding.

A TemplateBinder owns one working copy of a template tree. It finds
insertion points by selector, clears them, and builds <tspan> nodes from
laid-out lines. Create one binder per card so edits never leak between
cards.

Selectors:
    "#card-title"   element whose id attribute is card-title
    "image"         first element with that tag (namespace ignored)
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from typing import Iterable, Optional

from cardforge.errors import TemplateError
from cardforge.text.layout import Geometry, Line

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
XML_SPACE = "{http://www.w3.org/XML/1998/namespace}space"

ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)

_NUMBER_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?|-?\.\d+)")
_RESERVED_PREFIX_RE = re.compile(r"ns\d+$")


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _parse_number(value: Optional[str], default: float) -> float:
    """Parse a leading SVG number, ignoring units ("12px" -> 12.0)."""
    if not value:
        return default
    m = _NUMBER_RE.match(value)
    if not m:
        return default
    return float(m.group(1))


def _format_number(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def _declared_prefixes(svg_text: str) -> dict[str, str]:
    """Prefixed namespaces the template declares (inkscape:, sodipodi:, ...)."""
    parser = ET.XMLPullParser(events=("start-ns",))
    parser.feed(svg_text)
    parser.close()
    prefixes = {}
    for _event, (prefix, uri) in parser.read_events():
        # ElementTree reserves ns0, ns1 ... for its own generated prefixes
        if prefix and uri not in (SVG_NS, XLINK_NS) and not _RESERVED_PREFIX_RE.match(prefix):
            prefixes[prefix] = uri
    return prefixes


class TemplateBinder:
    """Working copy of an SVG template with named insertion points."""

    def __init__(self, svg_text: str):
        try:
            parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
            self.root = ET.fromstring(svg_text, parser=parser)
        except ET.ParseError as e:
            raise TemplateError(f"Invalid SVG template: {e}") from e
        self._prefixes = _declared_prefixes(svg_text)

        # Keep new nodes in the template's own namespace
        if self.root.tag.startswith("{"):
            self._ns = self.root.tag[1:].split("}", 1)[0]
        else:
            self._ns = None

    def _tag(self, name: str) -> str:
        return f"{{{self._ns}}}{name}" if self._ns else name

    def find(self, selector: str) -> Optional[ET.Element]:
        """Locate an insertion point, or None if nothing matches."""
        if selector.startswith("#"):
            wanted = selector[1:]
            for el in self.root.iter():
                if el.get("id") == wanted:
                    return el
            return None
        for el in self.root.iter():
            if isinstance(el.tag, str) and _local_name(el.tag) == selector:
                return el
        return None

    def clear(self, element: ET.Element) -> None:
        """Remove all children and text, keeping attributes."""
        for child in list(element):
            element.remove(child)
        element.text = None

    def set_text(self, element: ET.Element, text: str) -> None:
        self.clear(element)
        element.text = text

    def set_attribute(self, element: ET.Element, name: str, value: str) -> None:
        element.set(name, value)

    def set_href(self, element: ET.Element, url: str) -> None:
        """Point an <image> (or <use>) at url."""
        element.set(f"{{{XLINK_NS}}}href", url)
        if element.get("href") is not None:
            element.set("href", url)

    def new_text_run(
        self,
        text: Optional[str],
        bold: bool = False,
        x: Optional[float] = None,
        y: Optional[float] = None,
        anchor: Optional[str] = None,
        fill: Optional[str] = None,
    ) -> ET.Element:
        """Build a detached <tspan> node."""
        tspan = ET.Element(self._tag("tspan"))
        if x is not None:
            tspan.set("x", _format_number(x))
        if y is not None:
            tspan.set("y", _format_number(y))
        if anchor:
            tspan.set("text-anchor", anchor)
        if bold:
            tspan.set("font-weight", "bold")
        if fill:
            tspan.set("fill", fill)
        tspan.text = text
        return tspan

    def append_child(self, parent: ET.Element, child: ET.Element) -> ET.Element:
        parent.append(child)
        return child

    def render_lines(
        self,
        container: ET.Element,
        lines: Iterable[Line],
        bold_color: Optional[str] = None,
    ) -> int:
        """Materialize laid-out lines as nested <tspan> nodes.

        Each line becomes a positioned <tspan>; each run becomes a child
        <tspan>, bold runs carrying font-weight and bold_color.

        Returns:
            Number of line nodes appended
        """
        count = 0
        for line in lines:
            line_node = self.new_text_run(None, x=line.x, y=line.y, anchor=line.anchor)
            line_node.set(XML_SPACE, "preserve")
            for run in line.runs:
                run_node = self.new_text_run(
                    run.text,
                    bold=run.is_bold,
                    fill=bold_color if run.is_bold else None,
                )
                self.append_child(line_node, run_node)
            self.append_child(container, line_node)
            count += 1
        logger.debug(f"Rendered {count} lines into <{_local_name(container.tag)}>")
        return count

    def geometry_for(
        self,
        container: ET.Element,
        max_width: float,
        default_font_size: float,
    ) -> Geometry:
        """Read the text region origin and font size from a container node."""
        font_size = _parse_number(container.get("font-size"), default_font_size)
        if font_size <= 0:
            font_size = default_font_size
        return Geometry(
            base_x=_parse_number(container.get("x"), 0.0),
            base_y=_parse_number(container.get("y"), 0.0),
            font_size=font_size,
            max_width=max_width,
        )

    def to_string(self) -> str:
        """Serialize the working tree, keeping the template's own prefixes."""
        for prefix, uri in self._prefixes.items():
            ET.register_namespace(prefix, uri)
        return ET.tostring(self.root, encoding="unicode")
