"""
confkit - Bibliothèque de fichiers de configuration lisibles (style INI).

Modules disponibles:
- logging: Gestion des logs (Logger, FileLogger)
- errors: Hiérarchie d'exceptions (ParseError, ConversionError, ...)
- config: Options de format (FormatOptions) et leur chargement (TOML, JSON)
- conversion: Conversion des valeurs brutes vers des types natifs
  (ConverterRegistry, ValueType, scalar_to, array_to, ...)
- parsing: Parsing, rendu texte et forme binaire
- document: Modèle en mémoire (Configuration, Section, Setting) et
  gestion de fichiers (ConfigurationFileManager)
- mapping: Correspondance entre sections et objets Python
"""

__version__ = "1.0.0"

from confkit.logging import Logger, FileLogger
from confkit.errors import (
    ConfkitError,
    ParseError,
    ParseErrorKind,
    ConversionError,
    ConversionErrorKind,
    OptionsError,
    BinaryFormatError,
)
from confkit.config import (
    FormatOptions,
    DEFAULT_OPTIONS,
    OptionsLoader,
    FileOptionsLoader,
    load_options,
)
from confkit.conversion import (
    ValueType,
    TypeConverter,
    FunctionConverter,
    ConverterRegistry,
    ValueCodec,
    scalar_to,
    scalar_from,
    array_to,
    array_from,
    is_array_value,
)
from confkit.document import (
    DEFAULT_SECTION_NAME,
    Setting,
    Section,
    Configuration,
    ConfigurationManager,
    ConfigurationFileManager,
)
from confkit.parsing import (
    ConfigurationReader,
    find_comment,
    parse,
    render,
    read_binary,
    write_binary,
)
from confkit.mapping import (
    ignored,
    section_from_object,
    map_to_object,
    create_object,
)

__all__ = [
    # Logging
    "Logger",
    "FileLogger",
    # Erreurs
    "ConfkitError",
    "ParseError",
    "ParseErrorKind",
    "ConversionError",
    "ConversionErrorKind",
    "OptionsError",
    "BinaryFormatError",
    # Options
    "FormatOptions",
    "DEFAULT_OPTIONS",
    "OptionsLoader",
    "FileOptionsLoader",
    "load_options",
    # Conversion
    "ValueType",
    "TypeConverter",
    "FunctionConverter",
    "ConverterRegistry",
    "ValueCodec",
    "scalar_to",
    "scalar_from",
    "array_to",
    "array_from",
    "is_array_value",
    # Document
    "DEFAULT_SECTION_NAME",
    "Setting",
    "Section",
    "Configuration",
    "ConfigurationManager",
    "ConfigurationFileManager",
    # Parsing
    "ConfigurationReader",
    "find_comment",
    "parse",
    "render",
    "read_binary",
    "write_binary",
    # Mapping
    "ignored",
    "section_from_object",
    "map_to_object",
    "create_object",
]
