"""Cardforge - render tabular records into SVG cards.

Exports are lazily loaded so `python -m cardforge.<module>` does not pull in
the whole package.
"""

__version__ = "0.1.0"

__all__ = [
    # text
    "parse_markup",
    "split_emphasis",
    "layout_blocks",
    "Geometry",
    # cards
    "CardGenerator",
    "read_records",
    # config
    "GeneratorConfig",
    "load_config",
]


def __getattr__(name: str):
    """Lazy import for module exports."""
    if name in ("parse_markup", "split_emphasis", "layout_blocks", "Geometry"):
        from cardforge import text
        return getattr(text, name)
    elif name in ("CardGenerator", "read_records"):
        from cardforge import cards
        return getattr(cards, name)
    elif name in ("GeneratorConfig", "load_config"):
        from cardforge import config
        return getattr(config, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
