"""Convertisseurs intégrés pour les types scalaires courants.

Toutes les représentations sont indépendantes de la locale et stables
en aller-retour pour les valeurs représentables.
"""

import datetime
import decimal
import re
import struct
from enum import Enum
from typing import Any, Optional

from confkit.conversion.base import TypeConverter
from confkit.conversion.types import INTEGER_RANGES, TypeTag, ValueType

TRUE_WORDS = frozenset({"true", "yes", "on", "y", "1"})
FALSE_WORDS = frozenset({"false", "no", "off", "n", "0"})

_TIMEDELTA_PATTERN = re.compile(
    r"^(?P<sign>-)?(?:(?P<days>\d+)\.)?(?P<hours>\d+):(?P<minutes>\d{2})"
    r":(?P<seconds>\d{2})(?:\.(?P<micro>\d{1,6}))?$"
)


class BoolConverter(TypeConverter):
    """Booléens : true/false, yes/no, on/off, y/n, 1/0."""

    convertible_type = ValueType.BOOL

    def to_string(self, value: Any) -> str:
        if not isinstance(value, bool):
            raise TypeError(f"bool attendu, reçu {type(value).__name__}")
        return "True" if value else "False"

    def from_string(self, text: str, target: TypeTag) -> bool:
        word = text.strip().lower()
        if word in TRUE_WORDS:
            return True
        if word in FALSE_WORDS:
            return False
        raise ValueError(f"booléen invalide : {text!r}")


class IntegerConverter(TypeConverter):
    """Entiers décimaux, bornés selon la largeur du tag."""

    def __init__(self, tag: ValueType = ValueType.INT) -> None:
        self.convertible_type = tag
        self.bounds = INTEGER_RANGES.get(tag)

    def _check(self, value: int) -> int:
        if self.bounds is not None:
            low, high = self.bounds
            if not low <= value <= high:
                raise ValueError(
                    f"{value} hors plage [{low}, {high}]"
                )
        return value

    def to_string(self, value: Any) -> str:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"int attendu, reçu {type(value).__name__}")
        return str(self._check(value))

    def from_string(self, text: str, target: TypeTag) -> int:
        return self._check(int(text.strip(), 10))


class FloatConverter(TypeConverter):
    """Flottants double ou simple précision, rendus via repr()."""

    def __init__(self, tag: ValueType = ValueType.FLOAT64) -> None:
        self.convertible_type = tag
        self.single = tag is ValueType.FLOAT32

    def _narrow(self, value: float) -> float:
        if self.single:
            try:
                return struct.unpack("<f", struct.pack("<f", value))[0]
            except (OverflowError, struct.error) as e:
                raise ValueError(f"{value} hors plage float32") from e
        return value

    def to_string(self, value: Any) -> str:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"float attendu, reçu {type(value).__name__}")
        return repr(self._narrow(float(value)))

    def from_string(self, text: str, target: TypeTag) -> float:
        return self._narrow(float(text.strip()))


class DecimalConverter(TypeConverter):
    convertible_type = ValueType.DECIMAL

    def to_string(self, value: Any) -> str:
        return str(decimal.Decimal(value))

    def from_string(self, text: str, target: TypeTag) -> decimal.Decimal:
        try:
            return decimal.Decimal(text.strip())
        except decimal.InvalidOperation as e:
            raise ValueError(f"décimal invalide : {text!r}") from e


class StringConverter(TypeConverter):
    """Chaînes stockées telles quelles, sans guillemets ni échappement."""

    convertible_type = ValueType.STRING

    def to_string(self, value: Any) -> str:
        return str(value)

    def from_string(self, text: str, target: TypeTag) -> str:
        return text


class CharConverter(TypeConverter):
    convertible_type = ValueType.CHAR

    def to_string(self, value: Any) -> str:
        if not isinstance(value, str) or len(value) != 1:
            raise ValueError(f"un seul caractère attendu : {value!r}")
        return value

    def from_string(self, text: str, target: TypeTag) -> str:
        if len(text) != 1:
            raise ValueError(f"un seul caractère attendu : {text!r}")
        return text


class DateTimeConverter(TypeConverter):
    """Dates et heures en ISO 8601 ou selon un motif strftime."""

    convertible_type = ValueType.DATETIME

    def __init__(self, fmt: Optional[str] = None) -> None:
        self.fmt = fmt

    def to_string(self, value: Any) -> str:
        if not isinstance(value, datetime.datetime):
            raise TypeError(
                f"datetime attendu, reçu {type(value).__name__}"
            )
        if self.fmt:
            return value.strftime(self.fmt)
        return value.isoformat()

    def from_string(self, text: str, target: TypeTag) -> datetime.datetime:
        if self.fmt:
            return datetime.datetime.strptime(text.strip(), self.fmt)
        return datetime.datetime.fromisoformat(text.strip())


class DateConverter(TypeConverter):
    convertible_type = ValueType.DATE

    def to_string(self, value: Any) -> str:
        if isinstance(value, datetime.datetime):
            value = value.date()
        return value.isoformat()

    def from_string(self, text: str, target: TypeTag) -> datetime.date:
        return datetime.date.fromisoformat(text.strip())


class TimeConverter(TypeConverter):
    convertible_type = ValueType.TIME

    def to_string(self, value: Any) -> str:
        return value.isoformat()

    def from_string(self, text: str, target: TypeTag) -> datetime.time:
        return datetime.time.fromisoformat(text.strip())


class TimedeltaConverter(TypeConverter):
    """Durées au format [-][J.]HH:MM:SS[.ffffff]."""

    convertible_type = ValueType.TIMEDELTA

    def to_string(self, value: Any) -> str:
        if not isinstance(value, datetime.timedelta):
            raise TypeError(
                f"timedelta attendu, reçu {type(value).__name__}"
            )
        sign = "-" if value < datetime.timedelta(0) else ""
        value = abs(value)
        hours, rest = divmod(value.seconds, 3600)
        minutes, seconds = divmod(rest, 60)
        text = f"{sign}"
        if value.days:
            text += f"{value.days}."
        text += f"{hours:02d}:{minutes:02d}:{seconds:02d}"
        if value.microseconds:
            text += f".{value.microseconds:06d}"
        return text

    def from_string(self, text: str, target: TypeTag) -> datetime.timedelta:
        match = _TIMEDELTA_PATTERN.match(text.strip())
        if not match:
            raise ValueError(f"durée invalide : {text!r}")
        parts = match.groupdict()
        delta = datetime.timedelta(
            days=int(parts["days"] or 0),
            hours=int(parts["hours"]),
            minutes=int(parts["minutes"]),
            seconds=int(parts["seconds"]),
            microseconds=int((parts["micro"] or "0").ljust(6, "0")),
        )
        return -delta if parts["sign"] else delta


class EnumConverter(TypeConverter):
    """Énumérations, par nom de membre (insensible à la casse) ou valeur."""

    convertible_type = Enum

    def to_string(self, value: Any) -> str:
        if not isinstance(value, Enum):
            raise TypeError(f"Enum attendu, reçu {type(value).__name__}")
        return value.name

    def from_string(self, text: str, target: TypeTag) -> Enum:
        name = text.strip()
        members = target.__members__
        if name in members:
            return members[name]
        for member_name, member in members.items():
            if member_name.lower() == name.lower():
                return member
        for member in target:
            if str(member.value) == name:
                return member
        raise ValueError(
            f"{name!r} n'est pas un membre de {target.__name__}"
        )


def default_converters(
    date_time_format: Optional[str] = None,
) -> list[TypeConverter]:
    """Construit la liste des convertisseurs intégrés.

    Args:
        date_time_format: Motif strftime des dates ; ISO 8601 si None.

    Returns:
        Un convertisseur par tag de ValueType.
    """
    converters: list[TypeConverter] = [
        BoolConverter(),
        IntegerConverter(ValueType.INT),
        FloatConverter(ValueType.FLOAT32),
        FloatConverter(ValueType.FLOAT64),
        DecimalConverter(),
        StringConverter(),
        CharConverter(),
        DateTimeConverter(date_time_format),
        DateConverter(),
        TimeConverter(),
        TimedeltaConverter(),
    ]
    converters.extend(IntegerConverter(tag) for tag in INTEGER_RANGES)
    return converters
