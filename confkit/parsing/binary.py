"""Forme binaire d'un document, pour un rechargement rapide.

Disposition (petit-boutiste) :

- int32 : nombre de sections ;
- par section : nom, int32 nombre de paramètres, commentaires ;
- par paramètre : nom, valeur brute, commentaires.

Commentaires : un octet booléen de présence du commentaire en ligne,
suivi s'il vaut 1 d'un caractère de commentaire (UTF-8, conservé pour
compatibilité, ignoré à la lecture) et du texte ; puis la même chose
pour le bloc de commentaire précédent.

Chaînes : longueur en octets codée sur 7 bits par octet (bit de poids
fort = octet suivant), puis les octets UTF-8.
"""

import struct
from typing import IO, Optional

from confkit.config.options import DEFAULT_OPTIONS, FormatOptions
from confkit.conversion.registry import ConverterRegistry
from confkit.document.model import (
    Configuration,
    ConfigurationElement,
    Section,
    Setting,
)
from confkit.errors import BinaryFormatError

_INT32 = struct.Struct("<i")


class BinaryWriter:
    """Écrit les types primitifs du format binaire dans un flux."""

    def __init__(self, stream: IO[bytes]) -> None:
        self.stream = stream

    def write_int32(self, value: int) -> None:
        self.stream.write(_INT32.pack(value))

    def write_bool(self, value: bool) -> None:
        self.stream.write(b"\x01" if value else b"\x00")

    def write_char(self, value: str) -> None:
        self.stream.write(value.encode("utf-8"))

    def write_string(self, value: str) -> None:
        data = value.encode("utf-8")
        length = len(data)
        prefix = bytearray()
        while length >= 0x80:
            prefix.append((length & 0x7F) | 0x80)
            length >>= 7
        prefix.append(length)
        self.stream.write(bytes(prefix) + data)


class BinaryReader:
    """Lit les types primitifs du format binaire depuis un flux."""

    def __init__(self, stream: IO[bytes]) -> None:
        self.stream = stream

    def _read(self, size: int) -> bytes:
        data = self.stream.read(size)
        if len(data) != size:
            raise BinaryFormatError(
                f"Flux tronqué : {size} octet(s) attendu(s), {len(data)} lu(s)"
            )
        return data

    def read_int32(self) -> int:
        value = _INT32.unpack(self._read(4))[0]
        if value < 0:
            raise BinaryFormatError(f"Compteur négatif : {value}")
        return value

    def read_bool(self) -> bool:
        return self._read(1) != b"\x00"

    def read_char(self) -> str:
        first = self._read(1)
        lead = first[0]
        if lead < 0x80:
            extra = 0
        elif lead >> 5 == 0b110:
            extra = 1
        elif lead >> 4 == 0b1110:
            extra = 2
        elif lead >> 3 == 0b11110:
            extra = 3
        else:
            raise BinaryFormatError(f"Octet UTF-8 invalide : {lead:#x}")
        return self._decode(first + self._read(extra))

    def read_string(self) -> str:
        length = 0
        shift = 0
        while True:
            byte = self._read(1)[0]
            length |= (byte & 0x7F) << shift
            if not byte & 0x80:
                break
            shift += 7
            if shift > 28:
                raise BinaryFormatError("Longueur de chaîne invalide")
        return self._decode(self._read(length))

    @staticmethod
    def _decode(data: bytes) -> str:
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise BinaryFormatError(f"Chaîne UTF-8 invalide : {e}") from e


def _write_comments(writer: BinaryWriter, element: ConfigurationElement,
                    marker: str) -> None:
    for text in (element.comment, element.pre_comment):
        writer.write_bool(text is not None)
        if text is not None:
            writer.write_char(marker)
            writer.write_string(text)


def _read_comments(reader: BinaryReader, element: ConfigurationElement) -> None:
    if reader.read_bool():
        reader.read_char()
        element.comment = reader.read_string()
    if reader.read_bool():
        reader.read_char()
        element.pre_comment = reader.read_string()


def write_binary(
    config: Configuration,
    stream: IO[bytes],
    options: Optional[FormatOptions] = None,
) -> None:
    """Écrit un document sous forme binaire."""
    marker = (options or config.options).preferred_comment_char
    writer = BinaryWriter(stream)
    writer.write_int32(len(config))
    for section in config:
        writer.write_string(section.name)
        writer.write_int32(len(section))
        _write_comments(writer, section, marker)
        for setting in section:
            writer.write_string(setting.name)
            writer.write_string(setting.raw_value)
            _write_comments(writer, setting, marker)


def read_binary(
    stream: IO[bytes],
    options: Optional[FormatOptions] = None,
    registry: Optional[ConverterRegistry] = None,
) -> Configuration:
    """Relit un document écrit par write_binary.

    Raises:
        BinaryFormatError: Si le flux est tronqué ou corrompu.
    """
    reader = BinaryReader(stream)
    config = Configuration(options or DEFAULT_OPTIONS, registry)
    for _ in range(reader.read_int32()):
        section = Section(reader.read_string())
        setting_count = reader.read_int32()
        _read_comments(reader, section)
        for _ in range(setting_count):
            name = reader.read_string()
            try:
                setting = Setting(name, reader.read_string())
            except ValueError as e:
                raise BinaryFormatError(str(e)) from e
            _read_comments(reader, setting)
            section.add(setting)
        config.add(section)
    return config
