"""Options de format du texte de configuration.

Ce module définit FormatOptions, le modèle Pydantic immuable qui regroupe
tous les réglages du parser et du rendu : caractères de commentaire,
séparateur des tableaux, politique d'unicité, section par défaut, etc.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class FormatOptions(BaseModel):
    """Réglages du format de configuration.

    Attributes:
        comment_chars: Caractères qui ouvrent un commentaire.
        preferred_comment_char: Caractère utilisé lors du rendu.
        array_element_separator: Séparateur des éléments d'un tableau.
        ignore_inline_comments: Si True, un commentaire en fin de ligne
            reste dans la valeur du paramètre.
        ignore_pre_comments: Si True, les lignes de commentaire seules
            sont ignorées.
        strict_uniqueness: Si True, un nom de section ou de paramètre
            en double lève une ParseError.
        allow_default_section: Si False, un paramètre placé avant toute
            section lève une ParseError.
        space_between_equals: Rendu "nom = valeur" au lieu de "nom=valeur".
        date_time_format: Motif strftime des dates ; ISO 8601 si None.
        encoding: Encodage des fichiers texte.

    Example:
        >>> options = FormatOptions(comment_chars=("#",), strict_uniqueness=True)
        >>> options.preferred_comment_char
        '#'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    comment_chars: tuple[str, ...] = ("#", ";")
    preferred_comment_char: str = "#"
    array_element_separator: str = ","
    ignore_inline_comments: bool = False
    ignore_pre_comments: bool = False
    strict_uniqueness: bool = False
    allow_default_section: bool = True
    space_between_equals: bool = True
    date_time_format: Optional[str] = None
    encoding: str = "utf-8"

    @field_validator("comment_chars")
    @classmethod
    def _single_chars(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("Au moins un caractère de commentaire est requis")
        for char in value:
            if len(char) != 1:
                raise ValueError(
                    f"Caractère de commentaire invalide : {char!r}"
                )
            if char in "[]=\"{}\\":
                raise ValueError(
                    f"Caractère réservé par le format : {char!r}"
                )
        return value

    @field_validator("array_element_separator")
    @classmethod
    def _single_separator(cls, value: str) -> str:
        if len(value) != 1 or value in "{}\"\\":
            raise ValueError(f"Séparateur de tableau invalide : {value!r}")
        return value

    @model_validator(mode="after")
    def _preferred_is_valid(self) -> "FormatOptions":
        if self.preferred_comment_char not in self.comment_chars:
            raise ValueError(
                f"preferred_comment_char={self.preferred_comment_char!r} "
                f"absent de comment_chars {list(self.comment_chars)}"
            )
        if self.array_element_separator in self.comment_chars:
            raise ValueError(
                "Le séparateur de tableau ne peut pas être un caractère "
                "de commentaire"
            )
        return self


DEFAULT_OPTIONS = FormatOptions()
