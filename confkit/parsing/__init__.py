"""Module de parsing et de rendu du format texte (et de sa forme binaire)."""

from confkit.parsing.binary import (
    BinaryReader,
    BinaryWriter,
    read_binary,
    write_binary,
)
from confkit.parsing.comments import CommentMatch, find_comment
from confkit.parsing.reader import ConfigurationReader, parse
from confkit.parsing.tokenizer import (
    SettingToken,
    is_section_line,
    parse_section_line,
    parse_setting_line,
)
from confkit.parsing.writer import render, render_section

__all__ = [
    # Commentaires
    "CommentMatch",
    "find_comment",
    # Lignes
    "SettingToken",
    "is_section_line",
    "parse_section_line",
    "parse_setting_line",
    # Document
    "ConfigurationReader",
    "parse",
    "render",
    "render_section",
    # Binaire
    "BinaryReader",
    "BinaryWriter",
    "read_binary",
    "write_binary",
]
