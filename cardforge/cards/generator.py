"""
Card generator for cardforge.

Merges CSV records into an SVG template:
  - title      upper-cased into the title node, filled with the title color
  - backtext   parsed as markup, word-wrapped, and written as <tspan> lines
  - photo_url  set as the image node's href
  - bg_color   set as the background node's fill

Extra selector roles (e.g. "level") copy the record field of the same name
into the matching node's text.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Optional

from cardforge.cards.records import Record, read_records
from cardforge.config import GeneratorConfig, is_valid_paint
from cardforge.errors import CardForgeError, TemplateError, TemplateNotLoadedError
from cardforge.svg.binder import TemplateBinder
from cardforge.text.layout import layout_blocks
from cardforge.text.markup import parse_markup

logger = logging.getLogger(__name__)

_FILENAME_RE = re.compile(r"[^a-z0-9]")


class CardGenerator:
    """Render records into copies of one SVG template."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()
        self.template: Optional[str] = None
        self.template_path: Optional[Path] = None

    @property
    def extension(self) -> str:
        if self.template_path is None or not self.template_path.suffix:
            return ".svg"
        return self.template_path.suffix

    def load_template(self, template_path: str | Path) -> None:
        """Read the template and check that it parses."""
        path = Path(template_path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            raise TemplateError(f"Cannot read template {path}: {e}") from e
        self.load_template_text(text)
        self.template_path = path
        logger.info(f"Loaded template {path}")

    def load_template_text(self, text: str) -> None:
        binder = TemplateBinder(text)
        for role, selector in self.config.selectors.items():
            if binder.find(selector) is None:
                logger.warning(f"Template has no element for '{role}' ({selector})")
        self.template = text

    def _require_template(self) -> str:
        if self.template is None:
            raise TemplateNotLoadedError()
        return self.template

    def _lookup(self, binder: TemplateBinder, role: str):
        selector = self.config.selectors.get(role)
        if not selector:
            return None
        element = binder.find(selector)
        if element is None:
            logger.warning(f"No element matches {role} selector {selector!r}, skipping")
        return element

    def _bind_backtext(self, binder: TemplateBinder, text: str) -> None:
        container = self._lookup(binder, "backtext")
        if container is None:
            return
        layout = self.config.layout
        geometry = binder.geometry_for(container, layout.max_width, layout.default_font_size)
        lines = layout_blocks(parse_markup(text), geometry)
        binder.clear(container)
        binder.render_lines(container, lines, bold_color=self.config.styles.bold_color)

    def generate_card(self, record: Record) -> str:
        """Render one record and return the SVG document text."""
        binder = TemplateBinder(self._require_template())
        styles = self.config.styles

        title = record.get("title")
        if title:
            element = self._lookup(binder, "title")
            if element is not None:
                binder.set_text(element, title.upper())
                binder.set_attribute(element, "fill", styles.title_color)

        backtext = record.get("backtext")
        if backtext:
            self._bind_backtext(binder, backtext)

        photo_url = record.get("photo_url")
        if photo_url:
            element = self._lookup(binder, "photo")
            if element is not None:
                binder.set_href(element, photo_url)

        bg_color = record.get("bg_color")
        if bg_color:
            if not is_valid_paint(bg_color):
                logger.warning(f"Ignoring invalid bg_color {bg_color!r} for {title or 'untitled card'}")
            else:
                element = self._lookup(binder, "background")
                if element is not None:
                    binder.set_attribute(element, "fill", bg_color)

        for role in self.config.extra_roles():
            value = record.get(role)
            if value:
                element = self._lookup(binder, role)
                if element is not None:
                    binder.set_text(element, value)

        return binder.to_string()

    def card_filename(self, record: Record, index: Optional[int] = None) -> str:
        """Output filename: card_<slug of title><template extension>.

        Records without a title fall back to card_<index>.
        """
        title = record.get("title")
        if title:
            stem = _FILENAME_RE.sub("_", title.lower())
        elif index is not None:
            stem = f"{index:03d}"
        else:
            raise CardForgeError("Record has no title and no index to name it by")
        return f"card_{stem}{self.extension}"

    def _plan_filenames(self, records: list[Record]) -> list[str]:
        """One distinct filename per record, suffixing _2, _3 ... on clashes."""
        taken: set[str] = set()
        names = []
        for i, record in enumerate(records, start=1):
            name = self.card_filename(record, index=i)
            if not record.get("title"):
                logger.warning(f"Record {i} has no title, writing {name}")
            if name in taken:
                stem, suffix = name[: -len(self.extension)], self.extension
                n = 2
                while f"{stem}_{n}{suffix}" in taken:
                    n += 1
                renamed = f"{stem}_{n}{suffix}"
                logger.warning(f"Duplicate filename {name}, writing {renamed}")
                name = renamed
            taken.add(name)
            names.append(name)
        return names

    def generate_cards(
        self,
        csv_path: str | Path,
        output_dir: str | Path,
        parallel: int = 1,
    ) -> list[Path]:
        """Render every record in csv_path into output_dir.

        Args:
            csv_path: CSV file with a header row
            output_dir: Directory for card files (created if needed)
            parallel: Number of worker threads

        Returns:
            Paths written, in record order
        """
        self._require_template()
        records = read_records(csv_path)

        out_dir = Path(output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        targets = [out_dir / name for name in self._plan_filenames(records)]

        def write_one(record: Record, target: Path) -> Path:
            svg = self.generate_card(record)
            with open(target, "w", encoding="utf-8") as f:
                f.write(svg)
            return target

        if parallel <= 1:
            for record, target in zip(records, targets):
                write_one(record, target)
                logger.info(f"Wrote {target.name}")
        else:
            with ThreadPoolExecutor(max_workers=parallel) as executor:
                futures = {
                    executor.submit(write_one, record, target): target
                    for record, target in zip(records, targets)
                }
                for future in as_completed(futures):
                    logger.info(f"Wrote {future.result().name}")

        logger.info(f"Generated {len(targets)} cards in {out_dir}")
        return targets

