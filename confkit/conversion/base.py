"""Interface abstraite des convertisseurs de valeurs."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from confkit.conversion.types import TypeTag


class TypeConverter(ABC):
    """
    Interface pour un convertisseur bidirectionnel type natif <-> texte.

    Un convertisseur lève ValueError ou TypeError lorsque la valeur
    ne peut pas être convertie ; le codec transforme ces exceptions
    en ConversionError.

    Example:
        >>> class PointConverter(TypeConverter):
        ...     convertible_type = Point
        ...
        ...     def to_string(self, value):
        ...         return f"{value.x};{value.y}"
        ...
        ...     def from_string(self, text, target):
        ...         x, y = text.split(";")
        ...         return Point(int(x), int(y))
    """

    #: Tag sous lequel le convertisseur s'enregistre par défaut.
    convertible_type: TypeTag = None

    @abstractmethod
    def to_string(self, value: Any) -> str:
        """
        Convertit une valeur native en texte brut.

        Args:
            value: Valeur native

        Returns:
            Représentation textuelle canonique
        """
        pass

    @abstractmethod
    def from_string(self, text: str, target: TypeTag) -> Any:
        """
        Convertit un texte brut en valeur native.

        Args:
            text: Valeur brute
            target: Tag demandé (utile aux convertisseurs partagés
                entre plusieurs types)

        Returns:
            Valeur native
        """
        pass


class FunctionConverter(TypeConverter):
    """Convertisseur construit à partir de deux fonctions.

    Example:
        >>> registry.register(FunctionConverter(
        ...     Path, to_string=str, from_string=Path
        ... ))
    """

    def __init__(
        self,
        convertible_type: TypeTag,
        to_string: Callable[[Any], str],
        from_string: Callable[[str], Any],
    ) -> None:
        self.convertible_type = convertible_type
        self._to_string = to_string
        self._from_string = from_string

    def to_string(self, value: Any) -> str:
        return self._to_string(value)

    def from_string(self, text: str, target: TypeTag) -> Any:
        return self._from_string(text)
