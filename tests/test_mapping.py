"""Tests pour la correspondance entre sections et objets Python."""

import datetime
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import pytest

from confkit import Configuration, Section, Setting, parse
from confkit.conversion import ConverterRegistry, FunctionConverter
from confkit.errors import ConversionError, ConversionErrorKind
from confkit.mapping import (
    create_object,
    ignored,
    map_to_object,
    mapped_fields,
    section_from_object,
)


@dataclass
class Window:
    title: str = "main"
    width: int = 800
    ratio: float = 1.5
    visible: bool = True
    tags: list[str] = field(default_factory=list)
    opened: Optional[datetime.datetime] = None
    cache: dict = ignored(default_factory=dict)
    _state: int = 0


@dataclass(frozen=True)
class Limits:
    low: int = 0
    high: int = 10
    steps: tuple[int, ...] = ()


class Plain:
    __confkit_ignore__ = ("secret",)

    def __init__(self):
        self.name = "x"
        self.count = 0
        self.secret = "s"
        self._private = 1


@dataclass
class Storage:
    root: Path = Path("/tmp")


@dataclass
class Endpoint:
    host: str = "localhost"
    port: int = None


class TestMappedFields:
    """Tests pour mapped_fields."""

    def test_dataclass_fields(self):
        """Vérifie que les champs ignorés et privés sont exclus."""
        assert list(mapped_fields(Window)) == [
            "title", "width", "ratio", "visible", "tags", "opened"
        ]

    def test_plain_object_fields(self):
        """Vérifie les attributs publics d'un objet ordinaire."""
        assert mapped_fields(Plain()) == {"name": None, "count": None}


class TestSectionFromObject:
    """Tests pour section_from_object."""

    def test_dataclass(self):
        """Vérifie la conversion de chaque champ en paramètre."""
        section = section_from_object("Window", Window(tags=["a", "b"]))

        assert section.name == "Window"
        assert [(s.name, s.raw_value) for s in section] == [
            ("title", "main"),
            ("width", "800"),
            ("ratio", "1.5"),
            ("visible", "True"),
            ("tags", "{a,b}"),
            ("opened", ""),
        ]

    def test_section_classmethod(self):
        """Vérifie Section.from_object avec un tuple."""
        section = Section.from_object("limits", Limits(steps=(1, 2)))
        assert section["steps"].raw_value == "{1,2}"

    def test_missing_converter(self):
        """Vérifie l'erreur pour un type sans convertisseur."""
        with pytest.raises(ConversionError) as exc:
            section_from_object("storage", Storage())
        assert exc.value.kind is ConversionErrorKind.NO_CONVERTER_REGISTERED

    def test_custom_converter(self):
        """Vérifie l'usage d'un convertisseur enregistré."""
        registry = ConverterRegistry()
        registry.register(FunctionConverter(Path, str, Path))

        section = section_from_object("storage", Storage(), registry)

        assert section["root"].raw_value == "/tmp"
        assert create_object(section, Storage, registry) == Storage()

    def test_none_without_optional_is_skipped(self):
        """Vérifie qu'un champ None non Optional est omis."""
        section = section_from_object("endpoint", Endpoint())

        assert [s.name for s in section] == ["host"]
        assert create_object(section, Endpoint) == Endpoint()

    def test_none_without_optional_after_render(self):
        """Vérifie la relecture du texte d'un champ None non Optional."""
        cfg = Configuration()
        cfg.add(section_from_object("endpoint", Endpoint(host="db")))

        section = parse(cfg.to_string())["endpoint"]

        assert create_object(section, Endpoint) == Endpoint(host="db")


class TestCreateObject:
    """Tests pour create_object et map_to_object."""

    def test_round_trip(self):
        """Vérifie qu'un objet survit à l'aller-retour par une section."""
        window = Window(
            title="editor",
            width=1024,
            tags=["x", "y"],
            opened=datetime.datetime(2024, 5, 6, 7, 8, 9),
        )
        section = section_from_object("Window", window)

        assert create_object(section, Window) == window

    def test_missing_settings_keep_defaults(self):
        """Vérifie que les champs absents gardent leur défaut."""
        section = parse("[Window]\nwidth = 640\n")["Window"]

        window = section.to_object(Window)

        assert window == Window(width=640)

    def test_empty_optional_is_none(self):
        """Vérifie qu'une valeur vide donne None pour un Optional."""
        section = parse("[Window]\nopened =\n")["Window"]
        assert create_object(section, Window).opened is None

    def test_ignored_field_not_read(self):
        """Vérifie que les champs ignorés ne sont pas relus."""
        section = parse("[Window]\ncache = {a}\n_state = 5\n")["Window"]
        window = create_object(section, Window)
        assert window.cache == {}
        assert window._state == 0

    def test_invalid_value(self):
        """Vérifie l'erreur de format sur une valeur invalide."""
        section = parse("[Window]\nwidth = wide\n")["Window"]
        with pytest.raises(ConversionError) as exc:
            create_object(section, Window)
        assert exc.value.kind is ConversionErrorKind.INVALID_FORMAT

    def test_frozen_dataclass(self):
        """Vérifie qu'une dataclass figée est recopiée."""
        section = parse("[limits]\nhigh = 20\nsteps = {5, 10}\n")["limits"]
        original = Limits()

        updated = map_to_object(section, original)

        assert updated == Limits(high=20, steps=(5, 10))
        assert original == Limits()

    def test_map_onto_existing_dataclass(self):
        """Vérifie la mise à jour en place d'une dataclass."""
        window = Window(title="kept")
        section = parse("[w]\nwidth = 320\nvisible = no\n")["w"]

        result = section.map_to(window)

        assert result is window
        assert (window.title, window.width, window.visible) == (
            "kept", 320, False
        )

    def test_plain_object(self):
        """Vérifie la création d'un objet ordinaire."""
        section = Section("plain")
        section.add(Setting("name", "y"))
        section.add(Setting("count", "4"))
        section.add(Setting("secret", "leaked"))

        obj = create_object(section, Plain)

        assert (obj.name, obj.count, obj.secret) == ("y", 4, "s")

    def test_plain_object_to_section(self):
        """Vérifie qu'un attribut ignoré n'est pas écrit."""
        section = section_from_object("plain", Plain())
        assert [s.name for s in section] == ["name", "count"]
