"""Assemblage d'un document à partir du texte source.

Le texte est lu ligne par ligne :

- ligne vide : ignorée ;
- ligne entièrement commentée : ajoutée au bloc de commentaire en
  attente ;
- en-tête de section : le bloc en attente est rattaché à la nouvelle
  section, qui devient la section courante ;
- paramètre : rattaché à la section courante avec le bloc en attente et
  son commentaire en ligne. Avant tout en-tête, la section implicite
  (nom vide) est utilisée, sauf si les options l'interdisent.

Le parsing s'arrête à la première erreur ; aucun document partiel n'est
retourné.
"""

from typing import Optional

from confkit.config.options import DEFAULT_OPTIONS, FormatOptions
from confkit.conversion.registry import ConverterRegistry
from confkit.document.model import (
    DEFAULT_SECTION_NAME,
    Configuration,
    Section,
    Setting,
)
from confkit.errors import ParseError, ParseErrorKind
from confkit.logging.base import Logger
from confkit.parsing.comments import find_comment
from confkit.parsing.tokenizer import (
    is_section_line,
    parse_section_line,
    parse_setting_line,
)


def _split_lines(source: str) -> list[str]:
    return source.replace("\r\n", "\n").replace("\r", "\n").split("\n")


class ConfigurationReader:
    """Construit une Configuration à partir d'un texte.

    Attributes:
        options: Options de format.
        logger: Logger optionnel (avertissements sur les doublons,
            erreurs de parsing).

    Example:
        >>> reader = ConfigurationReader(FormatOptions(strict_uniqueness=True))
        >>> cfg = reader.read("[server]\\nport = 8080\\n")
        >>> cfg["server"]["port"].get_value(int)
        8080
    """

    def __init__(
        self,
        options: Optional[FormatOptions] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self.options = options or DEFAULT_OPTIONS
        self.logger = logger

    def read(
        self,
        source: str,
        registry: Optional[ConverterRegistry] = None,
    ) -> Configuration:
        """Analyse un texte complet.

        Args:
            source: Texte de configuration.
            registry: Registre à attacher au document ; un registre
                intégré neuf si None.

        Returns:
            Le document assemblé.

        Raises:
            ParseError: À la première ligne mal formée.
        """
        try:
            config = self._parse(source, registry)
        except ParseError as e:
            if self.logger:
                self.logger.log_error(f"Parsing impossible : {e}")
            raise

        if self.logger:
            self.logger.log_debug(
                f"{len(config)} section(s) lue(s)"
            )
        return config

    def _parse(
        self,
        source: str,
        registry: Optional[ConverterRegistry],
    ) -> Configuration:
        options = self.options
        config = Configuration(options, registry)
        current: Optional[Section] = None
        pre_comments: list[str] = []

        for line_number, line in enumerate(_split_lines(source), start=1):
            line = line.strip()
            if not line:
                continue

            comment, comment_index = find_comment(line, options.comment_chars)

            if comment_index == 0:
                if not options.ignore_pre_comments:
                    pre_comments.append(comment)
                continue

            content = line
            if comment_index > 0:
                content = line[:comment_index].strip()

            pre_comment = None
            if pre_comments and not options.ignore_pre_comments:
                pre_comment = "\n".join(pre_comments)

            if is_section_line(content):
                name = parse_section_line(
                    content, line_number, options.comment_chars
                )
                if config.contains(name):
                    self._duplicate(
                        ParseErrorKind.DUPLICATE_SECTION,
                        f"la section '{name}' est déjà déclarée",
                        line_number,
                    )
                current = Section(name, pre_comment=pre_comment)
                if not options.ignore_inline_comments:
                    current.comment = comment
                config.add(current)
            else:
                name, value = parse_setting_line(
                    line if options.ignore_inline_comments else content,
                    line_number,
                )
                if current is None:
                    if not options.allow_default_section:
                        raise ParseError(
                            ParseErrorKind.SETTING_OUTSIDE_SECTION,
                            f"le paramètre '{name}' doit être dans une section",
                            line_number,
                        )
                    current = config.add(Section(DEFAULT_SECTION_NAME))
                if current.contains(name):
                    self._duplicate(
                        ParseErrorKind.DUPLICATE_SETTING,
                        f"le paramètre '{name}' est déjà déclaré dans "
                        f"la section '{current.name}'",
                        line_number,
                    )
                setting = Setting(name, value, pre_comment=pre_comment)
                if not options.ignore_inline_comments:
                    setting.comment = comment
                current.add(setting)

            pre_comments.clear()

        return config

    def _duplicate(self, kind: ParseErrorKind, reason: str,
                   line_number: int) -> None:
        if self.options.strict_uniqueness:
            raise ParseError(kind, reason, line_number)
        if self.logger:
            self.logger.log_warning(f"Ligne {line_number} : {reason}")


def parse(
    source: str,
    options: Optional[FormatOptions] = None,
    registry: Optional[ConverterRegistry] = None,
    logger: Optional[Logger] = None,
) -> Configuration:
    """Analyse un texte de configuration (fonction utilitaire).

    Raises:
        ParseError: À la première ligne mal formée.
    """
    return ConfigurationReader(options, logger).read(source, registry)
