"""Module de gestion des erreurs."""

from confkit.errors.exceptions import (BinaryFormatError,
                                       ConfkitError,
                                       ConversionError,
                                       ConversionErrorKind,
                                       OptionsError,
                                       ParseError,
                                       ParseErrorKind)


__all__ = [
    "ConfkitError",
    "ParseError",
    "ParseErrorKind",
    "ConversionError",
    "ConversionErrorKind",
    "OptionsError",
    "BinaryFormatError",
]
