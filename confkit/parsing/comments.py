"""Repérage des commentaires dans une ligne de configuration.

Un caractère de commentaire ouvre un commentaire s'il n'est ni entre
guillemets ni échappé par une barre oblique inverse. Un guillemet
échappé (\\") ne compte pas comme délimiteur ; une barre oblique inverse
doublée (\\\\) n'échappe pas le caractère qui la suit. Les
points-virgules d'une chaîne de connexion entre guillemets restent
donc dans la valeur.
"""

from collections.abc import Collection
from typing import NamedTuple, Optional

DEFAULT_COMMENT_CHARS = ("#", ";")

#: Index retourné quand la ligne ne contient aucun commentaire.
NO_COMMENT = -1


class CommentMatch(NamedTuple):
    """Résultat de find_comment.

    Attributes:
        text: Texte du commentaire sans les espaces de tête, ou None.
        index: Position du caractère de commentaire ; 0 pour une ligne
            entièrement commentée, -1 sans commentaire.
    """

    text: Optional[str]
    index: int

    @property
    def is_full_line(self) -> bool:
        return self.index == 0

    @property
    def is_inline(self) -> bool:
        return self.index > 0


def is_escaped(line: str, index: int) -> bool:
    """Indique si le caractère à index est précédé d'un nombre impair de
    barres obliques inverses.
    """
    run = 0
    while index - run > 0 and line[index - run - 1] == "\\":
        run += 1
    return run % 2 == 1


def find_comment(
    line: str,
    comment_chars: Collection[str] = DEFAULT_COMMENT_CHARS,
) -> CommentMatch:
    """Cherche le premier caractère de commentaire effectif d'une ligne.

    Args:
        line: Ligne déjà débarrassée de ses espaces de tête et de fin.
        comment_chars: Caractères qui ouvrent un commentaire.

    Returns:
        CommentMatch(texte, index). Le texte est la fin de ligne après le
        caractère de commentaire, sans espaces de tête (chaîne vide si le
        caractère termine la ligne).

    Example:
        >>> find_comment('key = "a;b" ; note')
        CommentMatch(text='note', index=12)
        >>> find_comment("key = val\\\\#ue")
        CommentMatch(text=None, index=-1)
    """
    quote_count = 0
    for index, char in enumerate(line):
        escaped = is_escaped(line, index)
        if char in comment_chars and quote_count % 2 == 0 and not escaped:
            return CommentMatch(line[index + 1:].lstrip(), index)
        if char == '"' and not escaped:
            quote_count += 1
    return CommentMatch(None, NO_COMMENT)
