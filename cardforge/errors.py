"""Exceptions raised by cardforge."""


class CardForgeError(Exception):
    """Base class for all cardforge errors."""
    pass


class TemplateNotLoadedError(CardForgeError):
    """A card was requested before load_template() was called."""

    def __init__(self, message: str = "Template not loaded"):
        super().__init__(message)


class TemplateError(CardForgeError):
    """The SVG template could not be read or parsed."""
    pass


class RecordError(CardForgeError):
    """The tabular input could not be parsed into records."""
    pass


class ConfigError(CardForgeError):
    """Invalid configuration file or override."""
    pass
