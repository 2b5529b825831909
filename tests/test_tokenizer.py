"""Tests unitaires pour le découpage des lignes de section et de paramètre."""

import pytest

from confkit.errors import ParseError, ParseErrorKind
from confkit.parsing.tokenizer import (
    is_section_line,
    parse_section_line,
    parse_setting_line,
)


class TestSectionLine:
    """Tests pour parse_section_line."""

    def test_simple_section(self):
        """Vérifie la lecture d'un nom de section simple."""
        assert parse_section_line("[General]", 1) == "General"

    def test_name_is_trimmed(self):
        """Vérifie que le nom de section est débarrassé de ses espaces."""
        assert parse_section_line("[  My Section  ]", 1) == "My Section"

    def test_name_with_brackets(self):
        """Le crochet fermant est le dernier de la ligne."""
        assert parse_section_line("[a[b]c]", 1) == "a[b]c"

    def test_empty_name(self):
        """Vérifie qu'une section sans nom est acceptée."""
        assert parse_section_line("[]", 1) == ""

    def test_trailing_comment_is_accepted(self):
        """Vérifie qu'un commentaire peut suivre la section."""
        assert parse_section_line("[s] # note", 1) == "s"

    def test_unterminated_section(self):
        """Vérifie l'erreur pour un crochet fermant absent."""
        with pytest.raises(ParseError) as exc:
            parse_section_line("[General", 4)
        assert exc.value.kind is ParseErrorKind.UNTERMINATED_SECTION
        assert exc.value.line_number == 4

    def test_unexpected_trailing_token(self):
        """Vérifie l'erreur pour du texte après la section."""
        with pytest.raises(ParseError) as exc:
            parse_section_line("[s] garbage", 7)
        assert exc.value.kind is ParseErrorKind.UNEXPECTED_TRAILING_TOKEN
        assert exc.value.line_number == 7
        assert "garbage" in exc.value.reason

    def test_is_section_line(self):
        """Vérifie la détection d'une ligne de section."""
        assert is_section_line("  [s]")
        assert not is_section_line("key = [s]")


class TestSettingLine:
    """Tests pour parse_setting_line."""

    def test_bare_name(self):
        """Vérifie le découpage nom = valeur avec espaces."""
        assert parse_setting_line("  key  =  value  ", 1) == ("key", "value")

    def test_value_keeps_inner_equals(self):
        """Vérifie que seul le premier signe égal sépare."""
        assert parse_setting_line("url = a=b", 1) == ("url", "a=b")

    def test_empty_value(self):
        """Vérifie qu'une valeur absente donne une chaîne vide."""
        assert parse_setting_line("key =", 1) == ("key", "")

    def test_quoted_name_with_equals(self):
        """Vérifie un nom entre guillemets contenant un signe égal."""
        assert parse_setting_line('"a=b" = 1', 1) == ("a=b", "1")

    def test_quoted_name_is_not_trimmed(self):
        """Vérifie que les espaces d'un nom entre guillemets restent."""
        assert parse_setting_line('"  spaced " = x', 1) == ("  spaced ", "x")

    def test_quoted_name_with_escaped_quote(self):
        """Vérifie le guillemet échappé dans un nom."""
        assert parse_setting_line('"say \\"hi\\"" = 1', 1) == ('say "hi"', "1")

    def test_quoted_name_ending_with_backslash(self):
        """Vérifie une barre oblique inverse doublée en fin de nom."""
        assert parse_setting_line('"C:\\\\dir\\\\" = 1', 1) == (
            "C:\\dir\\", "1"
        )

    def test_quoted_name_with_escaped_backslash_and_quote(self):
        """Vérifie une barre oblique inverse suivie d'un guillemet échappé."""
        assert parse_setting_line('"a\\\\\\"b" = 1', 1) == (
            'a\\"b', "1"
        )

    def test_unterminated_quoted_name(self):
        """Vérifie l'erreur pour un nom entre guillemets non fermé."""
        with pytest.raises(ParseError) as exc:
            parse_setting_line('"abc = 1', 3)
        assert exc.value.kind is ParseErrorKind.UNTERMINATED_QUOTED_NAME
        assert exc.value.line_number == 3

    def test_missing_assignment(self):
        """Vérifie l'erreur pour une ligne sans signe égal."""
        with pytest.raises(ParseError) as exc:
            parse_setting_line("just text", 2)
        assert exc.value.kind is ParseErrorKind.MISSING_ASSIGNMENT

    def test_missing_assignment_after_quoted_name(self):
        """Vérifie l'erreur après un nom entre guillemets."""
        with pytest.raises(ParseError) as exc:
            parse_setting_line('"a=b" 1', 2)
        assert exc.value.kind is ParseErrorKind.MISSING_ASSIGNMENT

    @pytest.mark.parametrize("line", ["= value", '"" = value', '"  " = v'])
    def test_empty_name(self, line):
        """Vérifie l'erreur pour un nom vide."""
        with pytest.raises(ParseError) as exc:
            parse_setting_line(line, 9)
        assert exc.value.kind is ParseErrorKind.EMPTY_NAME
        assert exc.value.line_number == 9
