"""Module de configuration du format."""

from confkit.config.options import DEFAULT_OPTIONS, FormatOptions
from confkit.config.loader import (
    OptionsLoader,
    FileOptionsLoader,
    load_options
)

__all__ = [
    "FormatOptions",
    "DEFAULT_OPTIONS",
    "OptionsLoader",
    "FileOptionsLoader",
    "load_options",
]
