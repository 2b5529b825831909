"""Tests pour le modèle en mémoire (Configuration, Section, Setting)."""

import pytest

from confkit import Configuration, Section, Setting
from confkit.config import FormatOptions
from confkit.conversion import ConverterRegistry, FunctionConverter
from confkit.document.model import ConfigurationElement
from confkit.errors import ConversionError, ConversionErrorKind


class TestConfigurationElement:
    """Tests pour la classe de base des éléments."""

    def test_cannot_instantiate(self):
        """Vérifie que la classe de base est abstraite."""
        with pytest.raises(TypeError):
            ConfigurationElement("x")


class TestSetting:
    """Tests pour Setting."""

    @pytest.mark.parametrize("name", ["", "   "])
    def test_name_required(self, name):
        """Vérifie qu'un nom vide est refusé."""
        with pytest.raises(ValueError):
            Setting(name)

    def test_name_is_read_only(self):
        """Vérifie que le nom ne peut pas être réaffecté."""
        setting = Setting("k")
        with pytest.raises(AttributeError):
            setting.name = "other"

    def test_none_value_is_empty(self):
        """Vérifie que None donne une valeur vide."""
        setting = Setting("k", None)
        assert setting.raw_value == ""
        assert setting.is_empty

    def test_get_value(self):
        """Vérifie la lecture typée d'un scalaire."""
        assert Setting("port", "8080").get_value(int) == 8080

    def test_get_value_or_default(self):
        """Vérifie le repli sur la valeur par défaut."""
        assert Setting("port", "abc").get_value_or_default(int, 7) == 7
        assert Setting("port", "8").get_value_or_default(int, 7) == 8

    def test_array(self):
        """Vérifie la lecture d'un tableau."""
        setting = Setting("ports", "{80, 443, 8080}")
        assert setting.is_array
        assert setting.array_size() == 3
        assert setting.get_values(int) == [80, 443, 8080]

    def test_scalar_array_size(self):
        """Vérifie la taille -1 pour un scalaire."""
        assert Setting("k", "42").array_size() == -1

    def test_get_value_on_array_fails(self):
        """Vérifie l'erreur de forme sur un tableau lu en scalaire."""
        with pytest.raises(ConversionError) as exc:
            Setting("ports", "{1, 2}").get_value(int)
        assert exc.value.kind is ConversionErrorKind.SHAPE_MISMATCH

    def test_set_value_list_becomes_array(self):
        """Vérifie qu'une liste est écrite en tableau."""
        setting = Setting("k")
        setting.set_value(["a", "b"])
        assert setting.raw_value == "{a,b}"
        setting.set_values((1.5,))
        assert setting.raw_value == "{1.5}"

    def test_failed_set_value_keeps_raw(self):
        """Vérifie que l'échec d'écriture garde la valeur brute."""
        setting = Setting("k", "5")
        with pytest.raises(ConversionError) as exc:
            setting.set_value(object())
        assert exc.value.kind is ConversionErrorKind.NO_CONVERTER_REGISTERED
        assert setting.raw_value == "5"

    def test_array_size_with_custom_separator(self):
        """Vérifie le séparateur d'éléments configuré."""
        options = FormatOptions(array_element_separator="|")
        assert Setting("k", "{a|b,c}").array_size(options) == 2


class TestSection:
    """Tests pour Section."""

    def test_name_is_trimmed(self):
        """Vérifie que le nom est débarrassé de ses espaces."""
        assert Section("  s  ").name == "s"

    def test_getitem_creates_setting(self):
        """Vérifie la création implicite d'un paramètre."""
        section = Section("s")
        setting = section["k"]
        assert section.contains("k")
        assert section["k"] is setting
        assert section[0] is setting
        assert len(section) == 1

    def test_add_same_object_twice(self):
        """Vérifie le refus d'un paramètre déjà ajouté."""
        section = Section("s")
        setting = section.add(Setting("k"))
        with pytest.raises(ValueError):
            section.add(setting)

    def test_duplicate_names(self):
        """Vérifie l'accès au premier de plusieurs homonymes."""
        section = Section("s")
        first = section.add(Setting("k", "1"))
        second = section.add(Setting("k", "2"))

        assert section.get("k") is first
        assert section.get_settings_named("k") == [first, second]
        assert section.remove("k") is True
        assert section.get("k") is second

    def test_remove_all_named(self):
        """Vérifie la suppression de tous les homonymes."""
        section = Section("s")
        for value in ("1", "2", "3"):
            section.add(Setting("k", value))
        section.add(Setting("other"))

        assert section.remove_all_named("k") == 3
        assert [s.name for s in section] == ["other"]
        assert section.remove_all_named("k") == 0

    def test_remove_by_object(self):
        """Vérifie la suppression par identité."""
        section = Section("s")
        setting = section.add(Setting("k"))
        assert section.remove(setting) is True
        assert section.remove(setting) is False

    def test_add_setting(self):
        """Vérifie add_setting avec et sans valeur."""
        section = Section("s")
        section.add_setting("port", 8080)
        section.add_setting("name")
        assert section["port"].raw_value == "8080"
        assert section["name"].raw_value == ""

    def test_membership_and_clear(self):
        """Vérifie l'opérateur in et clear."""
        section = Section("s")
        section["k"]
        assert "k" in section
        assert 3 not in section
        section.clear()
        assert len(section) == 0

    def test_settings_is_a_copy(self):
        """Vérifie que settings retourne une copie."""
        section = Section("s")
        section.settings.append(Setting("k"))
        assert len(section) == 0

    def test_empty_name_is_default(self):
        """Vérifie la section par défaut sans nom."""
        assert Section("").is_default
        assert not Section("s").is_default


class TestConfiguration:
    """Tests pour Configuration."""

    def test_getitem_creates_section(self):
        """Vérifie la création implicite d'une section."""
        cfg = Configuration()
        section = cfg["s"]
        assert cfg.contains("s")
        assert cfg["s"] is section
        assert cfg[0] is section

    def test_contains_setting(self):
        """Vérifie contains sur une section et un paramètre."""
        cfg = Configuration()
        cfg["s"]["k"]
        assert cfg.contains("s", "k")
        assert not cfg.contains("s", "x")
        assert not cfg.contains("x")
        assert "s" in cfg

    def test_duplicate_sections(self):
        """Vérifie la gestion des sections homonymes."""
        cfg = Configuration()
        first = cfg.add(Section("A"))
        second = cfg.add(Section("A"))

        assert cfg.get_sections_named("A") == [first, second]
        assert cfg.remove("A") is True
        assert cfg.get("A") is second
        assert cfg.remove_all_named("A") == 1
        assert len(cfg) == 0

    def test_add_same_section_twice(self):
        """Vérifie le refus d'une section déjà ajoutée."""
        cfg = Configuration()
        section = cfg.add_section("s")
        with pytest.raises(ValueError):
            cfg.add(section)

    def test_default_section(self):
        """Vérifie l'accès à la section par défaut."""
        cfg = Configuration()
        assert cfg.default_section is None
        cfg.add_section("")
        assert cfg.default_section is cfg[0]

    def test_typed_access(self):
        """Vérifie set_value et get_value au niveau du document."""
        cfg = Configuration()
        cfg.set_value("server", "port", 8080)
        cfg.set_value("server", "hosts", ["a", "b"])

        assert cfg.get_value("server", "port", int) == 8080
        assert cfg["server"]["hosts"].raw_value == "{a,b}"

    def test_document_registry(self):
        """Vérifie le registre propre au document."""
        registry = ConverterRegistry()
        registry.register(FunctionConverter(complex, str, complex))
        cfg = Configuration(registry=registry)

        cfg.set_value("math", "z", 1 + 2j)

        assert cfg["math"]["z"].raw_value == "(1+2j)"
        assert cfg.get_value("math", "z", complex) == 1 + 2j

    def test_document_date_format(self):
        """Vérifie le format de date des options du document."""
        import datetime

        cfg = Configuration(FormatOptions(date_time_format="%Y%m%d"))
        cfg.set_value("s", "day", datetime.datetime(2024, 3, 1))

        assert cfg["s"]["day"].raw_value == "20240301"

    def test_clear(self):
        """Vérifie la suppression de toutes les sections."""
        cfg = Configuration()
        cfg["a"]
        cfg["b"]
        cfg.clear()
        assert len(cfg) == 0
        assert cfg.sections == []
