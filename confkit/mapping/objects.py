"""Correspondance entre sections et objets Python.

Les champs d'une dataclass (ou les attributs publics d'un objet
ordinaire) deviennent des paramètres ; le type annoté de chaque champ
choisit le convertisseur utilisé pour relire la valeur.

Un champ est exclu de la correspondance s'il est déclaré avec ignored(),
s'il est listé dans l'attribut de classe __confkit_ignore__ ou si son
nom commence par '_'.
"""

import dataclasses
import types
import typing
from dataclasses import MISSING, fields, is_dataclass
from typing import Any, Optional, Union

from confkit.conversion.registry import ConverterRegistry
from confkit.conversion.types import TypeTag, array_element_tag, is_array_tag
from confkit.document.model import Section, Setting

#: Clé de métadonnée marquant un champ de dataclass à ignorer.
IGNORE_KEY = "confkit_ignore"


def ignored(default: Any = MISSING, **kwargs: Any) -> Any:
    """Déclare un champ de dataclass exclu de la correspondance.

    Example:
        >>> @dataclass
        ... class Window:
        ...     width: int = 800
        ...     cache: dict = ignored(default_factory=dict)
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[IGNORE_KEY] = True
    return dataclasses.field(default=default, metadata=metadata, **kwargs)


def _ignored_names(cls: type) -> set[str]:
    names: set[str] = set()
    for klass in cls.__mro__:
        names.update(getattr(klass, "__confkit_ignore__", ()))
    return names


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        return dict(getattr(cls, "__annotations__", {}))


def mapped_fields(target: Any) -> dict[str, Optional[TypeTag]]:
    """Retourne les champs à faire correspondre et leur type annoté.

    Args:
        target: Classe ou instance (dataclass ou objet ordinaire).

    Returns:
        Dictionnaire ordonné {nom: type annoté ou None}.
    """
    cls = target if isinstance(target, type) else type(target)
    hints = _type_hints(cls)
    skipped = _ignored_names(cls)

    if is_dataclass(cls):
        names = [
            f.name for f in fields(cls)
            if not f.metadata.get(IGNORE_KEY)
        ]
    else:
        names = list(hints)
        if not isinstance(target, type):
            names += [n for n in vars(target) if n not in hints]

    return {
        name: hints.get(name)
        for name in names
        if not name.startswith("_") and name not in skipped
    }


def _unwrap_optional(tag: Any) -> Any:
    origin = typing.get_origin(tag)
    if origin is Union or origin is types.UnionType:
        args = [a for a in typing.get_args(tag) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tag


def _is_optional(tag: Any) -> bool:
    return type(None) in typing.get_args(tag)


def _read_setting(setting: Setting, tag: Any, current: Any,
                  registry: Optional[ConverterRegistry]) -> Any:
    if tag is None:
        tag = type(current) if current is not None else str
    if _is_optional(tag) and setting.is_empty:
        return None
    tag = _unwrap_optional(tag)

    if is_array_tag(tag):
        element = array_element_tag(tag) or str
        values = setting.get_values(element, registry)
        if tag is tuple or typing.get_origin(tag) is tuple:
            return tuple(values)
        return values
    return setting.get_value(tag, registry)


def section_from_object(
    name: str,
    obj: Any,
    registry: Optional[ConverterRegistry] = None,
) -> Section:
    """Crée une section à partir des champs d'un objet.

    Les listes et tuples deviennent des tableaux. Un champ valant None
    n'est écrit que s'il est annoté Optional (valeur vide) ; sinon il est
    omis et garde sa valeur par défaut à la relecture.

    Raises:
        ConversionError: Si un champ n'a pas de convertisseur.
    """
    section = Section(name)
    for field_name, tag in mapped_fields(obj).items():
        value = getattr(obj, field_name, None)
        if value is None and not _is_optional(tag):
            continue
        setting = Setting(field_name)
        tag = _unwrap_optional(tag) if tag is not None else None
        if isinstance(value, (list, tuple)):
            element = array_element_tag(tag) if is_array_tag(tag) else None
            setting.set_values(value, element, registry)
        else:
            setting.set_value(
                value, tag if isinstance(tag, type) else None, registry
            )
        section.add(setting)
    return section


def map_to_object(
    section: Section,
    obj: Any,
    registry: Optional[ConverterRegistry] = None,
) -> Any:
    """Renseigne un objet à partir des paramètres d'une section.

    Les champs sans paramètre correspondant gardent leur valeur. Une
    dataclass figée est recopiée via dataclasses.replace.

    Returns:
        L'objet renseigné (une nouvelle instance pour une dataclass figée).

    Raises:
        ConversionError: Si une valeur ne peut pas être convertie.
    """
    values = {}
    for field_name, tag in mapped_fields(obj).items():
        setting = section.get(field_name)
        if setting is None:
            continue
        current = getattr(obj, field_name, None)
        values[field_name] = _read_setting(setting, tag, current, registry)

    if is_dataclass(obj) and type(obj).__dataclass_params__.frozen:
        return dataclasses.replace(obj, **values)
    for field_name, value in values.items():
        setattr(obj, field_name, value)
    return obj


def create_object(
    section: Section,
    cls: type,
    registry: Optional[ConverterRegistry] = None,
) -> Any:
    """Crée une instance de cls à partir des paramètres d'une section.

    Pour une dataclass, les paramètres présents sont passés au
    constructeur ; les autres champs prennent leur valeur par défaut.
    Les autres classes sont instanciées sans argument puis renseignées.

    Raises:
        ConversionError: Si une valeur ne peut pas être convertie.
        TypeError: Si un champ obligatoire n'a pas de paramètre.
    """
    if not is_dataclass(cls):
        return map_to_object(section, cls(), registry)

    init_names = {f.name for f in fields(cls) if f.init}
    kwargs = {}
    for field_name, tag in mapped_fields(cls).items():
        setting = section.get(field_name)
        if setting is None or field_name not in init_names:
            continue
        kwargs[field_name] = _read_setting(setting, tag, None, registry)
    return cls(**kwargs)
