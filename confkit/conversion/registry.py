"""Registre des convertisseurs de valeurs."""

import threading
from enum import Enum
from typing import Any, Optional

from confkit.conversion.base import TypeConverter
from confkit.conversion.builtin import EnumConverter, default_converters
from confkit.conversion.types import TypeTag, normalize_tag
from confkit.errors import ConversionError, ConversionErrorKind


class ConverterRegistry:
    """Associe un tag de type à son convertisseur.

    Le registre est un objet explicite, transmis aux fonctions de
    conversion : deux registres sont indépendants. Il contient au plus
    un convertisseur par tag ; un nouvel enregistrement remplace le
    précédent. L'enregistrement et la recherche sont protégés par un
    verrou.

    Attributes:
        date_time_format: Motif strftime utilisé par le convertisseur
            de dates intégré (ISO 8601 si None).

    Example:
        >>> registry = ConverterRegistry()
        >>> registry.register(PointConverter())
        >>> Point in registry
        True
    """

    def __init__(
        self,
        register_defaults: bool = True,
        date_time_format: Optional[str] = None,
    ) -> None:
        """Initialise le registre.

        Args:
            register_defaults: Enregistrer les convertisseurs intégrés.
            date_time_format: Motif strftime des dates.
        """
        self.date_time_format = date_time_format
        self._converters: dict[TypeTag, TypeConverter] = {}
        self._lock = threading.RLock()
        self._enum_converter = EnumConverter()

        if register_defaults:
            for converter in default_converters(date_time_format):
                self.register(converter)

    @classmethod
    def from_options(cls, options: Any) -> "ConverterRegistry":
        """Crée un registre intégré adapté à des FormatOptions."""
        return cls(date_time_format=options.date_time_format)

    def register(
        self, converter: TypeConverter, tag: TypeTag = None
    ) -> None:
        """Enregistre un convertisseur.

        Args:
            converter: Convertisseur à enregistrer.
            tag: Tag cible ; par défaut converter.convertible_type.

        Raises:
            ValueError: Si aucun tag n'est connu pour ce convertisseur.
        """
        key = tag if tag is not None else converter.convertible_type
        if key is None:
            raise ValueError(
                f"Aucun type convertible pour {type(converter).__name__}"
            )
        with self._lock:
            self._converters[normalize_tag(key)] = converter

    def register_converter(
        self, tag: TypeTag, converter: TypeConverter
    ) -> None:
        """Enregistre un convertisseur pour un tag explicite."""
        self.register(converter, tag)

    def unregister(self, tag: TypeTag) -> bool:
        """Retire le convertisseur d'un tag.

        Returns:
            True si un convertisseur a été retiré, False sinon.
        """
        with self._lock:
            return self._converters.pop(normalize_tag(tag), None) is not None

    def get(self, tag: TypeTag) -> Optional[TypeConverter]:
        """Retourne le convertisseur d'un tag (correspondance exacte).

        Les énumérations sans convertisseur dédié utilisent la règle
        intégrée par nom de membre.
        """
        key = normalize_tag(tag)
        with self._lock:
            converter = self._converters.get(key)
        if converter is None and isinstance(key, type) and issubclass(key, Enum):
            return self._enum_converter
        return converter

    def resolve(self, tag: TypeTag, raw: Any) -> TypeConverter:
        """Retourne le convertisseur d'un tag ou lève ConversionError.

        Args:
            tag: Tag demandé.
            raw: Valeur en cause, reprise dans le message d'erreur.

        Raises:
            ConversionError: NO_CONVERTER_REGISTERED si aucun
                convertisseur ne correspond.
        """
        converter = self.get(tag)
        if converter is None:
            raise ConversionError(
                raw, tag, ConversionErrorKind.NO_CONVERTER_REGISTERED,
                "aucun convertisseur enregistré pour ce type",
            )
        return converter

    def tags(self) -> list[TypeTag]:
        """Liste des tags enregistrés."""
        with self._lock:
            return list(self._converters)

    def copy(self) -> "ConverterRegistry":
        """Retourne une copie indépendante du registre."""
        clone = ConverterRegistry(
            register_defaults=False, date_time_format=self.date_time_format
        )
        with self._lock:
            clone._converters = dict(self._converters)
        return clone

    def __contains__(self, tag: TypeTag) -> bool:
        with self._lock:
            return normalize_tag(tag) in self._converters

    def __len__(self) -> int:
        with self._lock:
            return len(self._converters)
