"""Classification et découpage d'une ligne sans commentaire.

Formes reconnues :

- section : ``[nom]`` ; le crochet fermant est le dernier ``]`` de la
  ligne, le nom peut donc contenir des crochets ;
- paramètre : ``nom = valeur`` (le nom ne contient pas ``=``) ou
  ``"nom" = valeur`` (nom pris tel quel, ``\\"`` pour un guillemet et
  ``\\\\`` pour une barre oblique inverse).
"""

import re
from collections.abc import Collection
from typing import NamedTuple

from confkit.errors import ParseError, ParseErrorKind
from confkit.parsing.comments import DEFAULT_COMMENT_CHARS, is_escaped

_NAME_ESCAPE = re.compile(r'\\([\\"])')


class SettingToken(NamedTuple):
    """Nom et valeur brute extraits d'une ligne de paramètre."""

    name: str
    value: str


def is_section_line(line: str) -> bool:
    """Indique si une ligne déclare une section."""
    return line.strip().startswith("[")


def parse_section_line(
    line: str,
    line_number: int,
    comment_chars: Collection[str] = DEFAULT_COMMENT_CHARS,
) -> str:
    """Extrait le nom d'une ligne de section.

    Args:
        line: Ligne commençant par ``[``.
        line_number: Numéro de ligne pour les erreurs.
        comment_chars: Caractères de commentaire acceptés après ``]``.

    Returns:
        Nom de la section, sans espaces autour.

    Raises:
        ParseError: UNTERMINATED_SECTION sans ``]`` ;
            UNEXPECTED_TRAILING_TOKEN si autre chose qu'un commentaire
            suit le crochet fermant.
    """
    line = line.strip()
    closing = line.rfind("]")
    if closing < 0:
        raise ParseError(
            ParseErrorKind.UNTERMINATED_SECTION,
            "crochet fermant manquant",
            line_number,
        )

    trailing = line[closing + 1:].strip()
    if trailing and trailing[0] not in comment_chars:
        raise ParseError(
            ParseErrorKind.UNEXPECTED_TRAILING_TOKEN,
            f"élément inattendu '{trailing}'",
            line_number,
        )

    return line[1:closing].strip()


def _closing_quote(line: str) -> int:
    index = 0
    while True:
        index = line.find('"', index + 1)
        if index < 0 or not is_escaped(line, index):
            return index


def parse_setting_line(line: str, line_number: int) -> SettingToken:
    """Extrait le nom et la valeur brute d'une ligne de paramètre.

    Args:
        line: Ligne sans commentaire en ligne.
        line_number: Numéro de ligne pour les erreurs.

    Returns:
        SettingToken(nom, valeur). La valeur est débarrassée de ses
        espaces et vaut "" si rien ne suit le signe égal.

    Raises:
        ParseError: UNTERMINATED_QUOTED_NAME, MISSING_ASSIGNMENT ou
            EMPTY_NAME.
    """
    line = line.strip()

    if line.startswith('"'):
        closing = _closing_quote(line)
        if closing < 0:
            raise ParseError(
                ParseErrorKind.UNTERMINATED_QUOTED_NAME,
                "guillemet fermant attendu",
                line_number,
            )
        name = _NAME_ESCAPE.sub(r"\1", line[1:closing])
        equals = line.find("=", closing + 1)
    else:
        equals = line.find("=")
        name = line[:equals].strip() if equals >= 0 else ""

    if equals < 0:
        raise ParseError(
            ParseErrorKind.MISSING_ASSIGNMENT,
            "affectation attendue ('=')",
            line_number,
        )

    if not name.strip():
        raise ParseError(
            ParseErrorKind.EMPTY_NAME,
            "nom de paramètre attendu",
            line_number,
        )

    return SettingToken(name, line[equals + 1:].strip())
