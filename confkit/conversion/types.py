"""Identifiants de types pour la conversion des valeurs.

Les convertisseurs sont indexés par un tag explicite : soit un membre de
ValueType (types scalaires intégrés, y compris les entiers à largeur fixe),
soit une classe Python pour les types personnalisés. Les classes natives
courantes (bool, int, float, str, ...) sont des alias des tags intégrés.
"""

import datetime
import decimal
import typing
from enum import Enum
from typing import Any


class ValueType(Enum):
    """Types scalaires pris en charge nativement."""

    BOOL = "bool"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    INT = "int"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    DECIMAL = "decimal"
    STRING = "string"
    CHAR = "char"
    DATETIME = "datetime"
    DATE = "date"
    TIME = "time"
    TIMEDELTA = "timedelta"


#: Bornes inclusives des entiers à largeur fixe.
INTEGER_RANGES: dict[ValueType, tuple[int, int]] = {
    ValueType.INT8: (-2 ** 7, 2 ** 7 - 1),
    ValueType.INT16: (-2 ** 15, 2 ** 15 - 1),
    ValueType.INT32: (-2 ** 31, 2 ** 31 - 1),
    ValueType.INT64: (-2 ** 63, 2 ** 63 - 1),
    ValueType.UINT8: (0, 2 ** 8 - 1),
    ValueType.UINT16: (0, 2 ** 16 - 1),
    ValueType.UINT32: (0, 2 ** 32 - 1),
    ValueType.UINT64: (0, 2 ** 64 - 1),
}

_NATIVE_ALIASES: dict[type, ValueType] = {
    bool: ValueType.BOOL,
    int: ValueType.INT,
    float: ValueType.FLOAT64,
    decimal.Decimal: ValueType.DECIMAL,
    str: ValueType.STRING,
    datetime.datetime: ValueType.DATETIME,
    datetime.date: ValueType.DATE,
    datetime.time: ValueType.TIME,
    datetime.timedelta: ValueType.TIMEDELTA,
}

#: Un tag est un membre de ValueType ou une classe Python.
TypeTag = Any


def normalize_tag(tag: TypeTag) -> TypeTag:
    """Ramène une classe native à son tag intégré.

    Args:
        tag: Membre de ValueType ou classe.

    Returns:
        Le tag ValueType correspondant, ou le tag inchangé.
    """
    if isinstance(tag, type):
        return _NATIVE_ALIASES.get(tag, tag)
    return tag


def is_array_tag(tag: TypeTag) -> bool:
    """Indique si un tag désigne un tableau (list, tuple, list[int], ...)."""
    if tag in (list, tuple):
        return True
    return typing.get_origin(tag) in (list, tuple)


def array_element_tag(tag: TypeTag) -> TypeTag | None:
    """Retourne le tag des éléments d'un tag tableau, ou None s'il est nu."""
    args = typing.get_args(tag)
    if not args:
        return None
    return args[0]


def infer_tag(value: Any) -> TypeTag:
    """Déduit le tag d'une valeur native par son type exact."""
    return normalize_tag(type(value))
