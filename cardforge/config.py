"""
Configuration for card generation.

Settings come from (later wins):
  1. Built-in defaults (GeneratorConfig())
  2. A YAML file (--config or $CARDFORGE_CONFIG)
  3. Environment overrides, optionally from a .env file

Example YAML:

    selectors:
      title: "#card-title"
      backtext: "#card-backtext"
      level: "#card-level"      # extra roles copy the matching record field
    styles:
      title_color: "#FFFFFF"
      bold_color: "#c68411"
    layout:
      max_width: 144
      default_font_size: 12
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from PIL import ImageColor

from cardforge.errors import ConfigError

logger = logging.getLogger(__name__)

CORE_ROLES = ("title", "backtext", "photo", "background")


def _default_selectors() -> dict[str, str]:
    return {
        "title": "#card-title",
        "backtext": "#card-backtext",
        "photo": "#card-photo",
        "background": "#card-background",
    }


def is_valid_color(value: str) -> bool:
    """True if Pillow can parse value as a color (hex, rgb(), named)."""
    if not isinstance(value, str):
        return False
    try:
        ImageColor.getrgb(value)
    except ValueError:
        return False
    return True


# SVG paint keywords Pillow has no color for
PAINT_KEYWORDS = ("none", "transparent", "currentcolor")


def is_valid_paint(value: str) -> bool:
    """True if value can go in an SVG fill: a color, a paint keyword or url(...)."""
    if not isinstance(value, str):
        return False
    paint = value.strip()
    if paint.lower() in PAINT_KEYWORDS:
        return True
    if paint.startswith("url(") and paint.endswith(")") and len(paint) > 5:
        return True
    return is_valid_color(paint)


@dataclass(frozen=True)
class CardStyle:
    title_color: str = "#FFFFFF"
    bold_color: str = "#c68411"


@dataclass(frozen=True)
class LayoutSettings:
    max_width: float = 144.0
    default_font_size: float = 12.0


@dataclass(frozen=True)
class GeneratorConfig:
    """Immutable settings handed to CardGenerator at construction."""
    selectors: dict[str, str] = field(default_factory=_default_selectors)
    styles: CardStyle = field(default_factory=CardStyle)
    layout: LayoutSettings = field(default_factory=LayoutSettings)

    def __post_init__(self):
        object.__setattr__(self, "selectors", MappingProxyType(dict(self.selectors)))

    def extra_roles(self) -> dict[str, str]:
        """Selector roles beyond the four core ones."""
        return {k: v for k, v in self.selectors.items() if k not in CORE_ROLES}


def _build_section(cls, data: Any, section: str):
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ConfigError(f"'{section}' must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"Unknown keys in '{section}': {', '.join(sorted(unknown))}")
    return cls(**data)


def _validate(config: GeneratorConfig) -> None:
    for name in ("max_width", "default_font_size"):
        value = getattr(config.layout, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"layout.{name} must be a number, got {value!r}")
    for name in ("title_color", "bold_color"):
        value = getattr(config.styles, name)
        if not is_valid_paint(value):
            raise ConfigError(f"Invalid color for {name}: {value!r}")
    if config.layout.max_width <= 0:
        raise ConfigError("layout.max_width must be positive")
    if config.layout.default_font_size <= 0:
        raise ConfigError("layout.default_font_size must be positive")
    for role, selector in config.selectors.items():
        if not isinstance(selector, str) or not selector:
            raise ConfigError(f"Selector for '{role}' must be a non-empty string")


def config_from_dict(data: dict) -> GeneratorConfig:
    """Build a config from parsed YAML, filling gaps with defaults."""
    unknown = set(data) - {"selectors", "styles", "layout"}
    if unknown:
        raise ConfigError(f"Unknown config sections: {', '.join(sorted(unknown))}")

    selectors = _default_selectors()
    raw_selectors = data.get("selectors") or {}
    if not isinstance(raw_selectors, dict):
        raise ConfigError("'selectors' must be a mapping")
    selectors.update(raw_selectors)

    try:
        config = GeneratorConfig(
            selectors=selectors,
            styles=_build_section(CardStyle, data.get("styles"), "styles"),
            layout=_build_section(LayoutSettings, data.get("layout"), "layout"),
        )
    except TypeError as e:
        raise ConfigError(str(e)) from e

    _validate(config)
    return config


def _apply_env(data: dict) -> dict:
    styles = dict(data.get("styles") or {})
    layout = dict(data.get("layout") or {})

    if os.environ.get("CARDFORGE_TITLE_COLOR"):
        styles["title_color"] = os.environ["CARDFORGE_TITLE_COLOR"]
    if os.environ.get("CARDFORGE_BOLD_COLOR"):
        styles["bold_color"] = os.environ["CARDFORGE_BOLD_COLOR"]
    if os.environ.get("CARDFORGE_MAX_WIDTH"):
        try:
            layout["max_width"] = float(os.environ["CARDFORGE_MAX_WIDTH"])
        except ValueError as e:
            raise ConfigError(f"CARDFORGE_MAX_WIDTH is not a number: {e}") from e

    merged = dict(data)
    if styles:
        merged["styles"] = styles
    if layout:
        merged["layout"] = layout
    return merged


def load_config(path: Optional[str | Path] = None) -> GeneratorConfig:
    """Load configuration from YAML and the environment.

    Args:
        path: YAML file (default: $CARDFORGE_CONFIG, else built-in defaults)

    Returns:
        Validated GeneratorConfig
    """
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    path = path or os.environ.get("CARDFORGE_CONFIG")
    data: dict = {}
    if path:
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config root must be a mapping: {path}")
        logger.info(f"Loaded config from {path}")

    return config_from_dict(_apply_env(data))
