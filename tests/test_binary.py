"""Tests pour la forme binaire."""

import io

import pytest

from confkit import Configuration, parse
from confkit.errors import BinaryFormatError
from confkit.parsing import BinaryReader, BinaryWriter, read_binary, write_binary


def to_bytes(cfg):
    stream = io.BytesIO()
    write_binary(cfg, stream)
    return stream.getvalue()


class TestPrimitives:
    """Tests des types primitifs."""

    def test_int32_little_endian(self):
        """Vérifie l'ordre des octets d'un entier."""
        stream = io.BytesIO()
        BinaryWriter(stream).write_int32(258)
        assert stream.getvalue() == b"\x02\x01\x00\x00"

    def test_short_string_prefix(self):
        """Vérifie le préfixe de longueur d'une chaîne courte."""
        stream = io.BytesIO()
        BinaryWriter(stream).write_string("abc")
        assert stream.getvalue() == b"\x03abc"

    def test_long_string_prefix(self):
        """Vérifie le préfixe de longueur d'une chaîne longue."""
        stream = io.BytesIO()
        BinaryWriter(stream).write_string("x" * 200)
        data = stream.getvalue()
        assert data[:2] == b"\xc8\x01"
        assert BinaryReader(io.BytesIO(data)).read_string() == "x" * 200

    def test_string_length_counts_bytes(self):
        """Vérifie que la longueur compte les octets UTF-8."""
        stream = io.BytesIO()
        BinaryWriter(stream).write_string("é")
        assert stream.getvalue() == b"\x02\xc3\xa9"

    def test_multibyte_char(self):
        """Vérifie un caractère codé sur plusieurs octets."""
        stream = io.BytesIO()
        writer = BinaryWriter(stream)
        writer.write_char("€")
        writer.write_char("#")
        reader = BinaryReader(io.BytesIO(stream.getvalue()))
        assert reader.read_char() == "€"
        assert reader.read_char() == "#"

    def test_negative_count_rejected(self):
        """Vérifie le refus d'un compteur négatif."""
        stream = io.BytesIO()
        BinaryWriter(stream).write_int32(-1)
        with pytest.raises(BinaryFormatError, match="négatif"):
            BinaryReader(io.BytesIO(stream.getvalue())).read_int32()


class TestDocument:
    """Tests de l'écriture et de la relecture d'un document."""

    def test_layout_of_minimal_document(self):
        """Vérifie la disposition d'un document minimal."""
        cfg = Configuration()
        cfg.add_section("s")

        assert to_bytes(cfg) == (
            b"\x01\x00\x00\x00"  # une section
            b"\x01s"             # nom
            b"\x00\x00\x00\x00"  # aucun paramètre
            b"\x00\x00"          # aucun commentaire
        )

    def test_layout_with_comment(self):
        """Vérifie la disposition avec un commentaire."""
        cfg = Configuration()
        cfg.add_section("s").comment = "c"

        assert to_bytes(cfg)[10:] == b"\x01#\x01c\x00"

    def test_round_trip(self):
        """Vérifie l'aller-retour binaire."""
        source = (
            "top = 1\n"
            "# a\n#\n# b\n"
            "[s] # c\n"
            "k = {1, 2} # d\n"
            '"a=b" = é\n'
            "empty =\n"
            "[s]\n"
            "k = dup\n"
        )
        cfg = parse(source)

        loaded = read_binary(io.BytesIO(to_bytes(cfg)))

        assert loaded.to_string() == cfg.to_string()
        assert len(loaded.get_sections_named("s")) == 2
        assert loaded["s"]["k"].comment == "d"
        assert loaded["s"].pre_comment == "a\n\nb"

    def test_empty_document(self):
        """Vérifie un document vide."""
        loaded = read_binary(io.BytesIO(to_bytes(Configuration())))
        assert len(loaded) == 0

    def test_truncated_stream(self):
        """Vérifie l'erreur pour un flux tronqué."""
        data = to_bytes(parse("[s]\nk = value\n"))
        for size in (0, 3, len(data) - 1):
            with pytest.raises(BinaryFormatError):
                read_binary(io.BytesIO(data[:size]))

    def test_invalid_utf8(self):
        """Vérifie l'erreur pour un texte UTF-8 invalide."""
        data = b"\x01\x00\x00\x00" + b"\x01\xff"
        with pytest.raises(BinaryFormatError, match="UTF-8"):
            read_binary(io.BytesIO(data))

    def test_binary_file(self, tmp_path):
        """Vérifie l'aller-retour par un fichier binaire."""
        path = tmp_path / "app.bin"
        cfg = parse("[s]\nk = v # c\n")

        cfg.save_to_binary_file(path)
        loaded = Configuration.load_from_binary_file(path)

        assert loaded.to_string() == cfg.to_string()
