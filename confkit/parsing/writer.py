"""Rendu textuel d'un document de configuration."""

from typing import Optional

from confkit.config.options import DEFAULT_OPTIONS, FormatOptions
from confkit.document.model import Configuration, Section


def _omit_header(section: Section, position: int, include_comments: bool) -> bool:
    """La section implicite en tête de document s'écrit sans en-tête."""
    if position != 0 or not section.is_default:
        return False
    if not include_comments:
        return True
    return section.comment is None and section.pre_comment is None


def render_section(
    section: Section,
    include_comments: bool = True,
    options: Optional[FormatOptions] = None,
    with_header: bool = True,
) -> str:
    """Rend une section et ses paramètres, une ligne par élément."""
    options = options or DEFAULT_OPTIONS
    lines = []
    if with_header:
        lines.append(section.to_string(include_comments, options))
    lines.extend(
        setting.to_string(include_comments, options) for setting in section
    )
    return "\n".join(lines)


def render(
    config: Configuration,
    include_comments: bool = True,
    options: Optional[FormatOptions] = None,
) -> str:
    """Rend un document complet.

    Les sections sont séparées par une ligne vide. La section implicite
    placée en tête s'écrit sans en-tête (ses paramètres précèdent la
    première section) ; ailleurs, elle s'écrit ``[]``.

    Args:
        config: Document à rendre.
        include_comments: Inclure les commentaires.
        options: Options de format ; celles du document si None.

    Returns:
        Texte terminé par un saut de ligne, ou "" pour un document vide.

    Raises:
        ValueError: Si un nom de section ou une valeur contient un
            caractère de commentaire non protégé ; le texte ne se
            relirait pas à l'identique.
    """
    options = options or config.options
    blocks = []
    for position, section in enumerate(config):
        omit_header = _omit_header(section, position, include_comments)
        if omit_header and len(section) == 0:
            continue
        blocks.append(render_section(
            section, include_comments, options, with_header=not omit_header
        ))
    if not blocks:
        return ""
    return "\n\n".join(blocks) + "\n"
