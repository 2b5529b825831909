"""Module de conversion des valeurs.

Les valeurs des paramètres sont stockées sous forme de texte brut ;
ce module les convertit à la demande vers des types natifs (scalaires
et tableaux) au moyen d'un registre de convertisseurs extensible.

Example:
    >>> from confkit.conversion import (
    ...     ConverterRegistry, ValueType, array_to, scalar_to
    ... )
    >>> registry = ConverterRegistry()
    >>> scalar_to("42", ValueType.UINT8, registry)
    42
    >>> array_to("{1, 2, 3}", int, registry)
    [1, 2, 3]
"""

from confkit.conversion.base import FunctionConverter, TypeConverter
from confkit.conversion.builtin import (
    BoolConverter,
    CharConverter,
    DateConverter,
    DateTimeConverter,
    DecimalConverter,
    EnumConverter,
    FloatConverter,
    IntegerConverter,
    StringConverter,
    TimeConverter,
    TimedeltaConverter,
    default_converters,
)
from confkit.conversion.codec import (
    ValueCodec,
    array_from,
    array_to,
    builtin_registry,
    is_array_value,
    scalar_from,
    scalar_to,
    split_array,
)
from confkit.conversion.registry import ConverterRegistry
from confkit.conversion.types import (
    INTEGER_RANGES,
    TypeTag,
    ValueType,
    is_array_tag,
    normalize_tag,
)

__all__ = [
    # Tags
    "ValueType",
    "TypeTag",
    "INTEGER_RANGES",
    "normalize_tag",
    "is_array_tag",
    # Convertisseurs
    "TypeConverter",
    "FunctionConverter",
    "BoolConverter",
    "IntegerConverter",
    "FloatConverter",
    "DecimalConverter",
    "StringConverter",
    "CharConverter",
    "DateTimeConverter",
    "DateConverter",
    "TimeConverter",
    "TimedeltaConverter",
    "EnumConverter",
    "default_converters",
    # Registre
    "ConverterRegistry",
    "builtin_registry",
    # Codec
    "ValueCodec",
    "scalar_to",
    "scalar_from",
    "array_to",
    "array_from",
    "is_array_value",
    "split_array",
]
