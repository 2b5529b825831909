"""
Exceptions personnalisées de confkit.

Les erreurs de parsing sont fatales pour l'appel en cours ; les erreurs
de conversion sont locales à une seule lecture ou écriture de valeur.
"""

from enum import Enum
from typing import Any


class ConfkitError(Exception):
    """Exception de base pour toutes les erreurs de confkit."""
    pass


class ParseErrorKind(Enum):
    """Cause d'une erreur de parsing."""

    UNTERMINATED_SECTION = "unterminated_section"
    UNEXPECTED_TRAILING_TOKEN = "unexpected_trailing_token"
    MISSING_ASSIGNMENT = "missing_assignment"
    EMPTY_NAME = "empty_name"
    DUPLICATE_SECTION = "duplicate_section"
    DUPLICATE_SETTING = "duplicate_setting"
    UNTERMINATED_QUOTED_NAME = "unterminated_quoted_name"
    SETTING_OUTSIDE_SECTION = "setting_outside_section"


class ParseError(ConfkitError):
    """Texte de configuration mal formé.

    Attributes:
        kind: Cause de l'erreur.
        reason: Description lisible de la cause.
        line_number: Numéro de ligne (à partir de 1) de l'erreur.
    """

    def __init__(self, kind: ParseErrorKind, reason: str,
                 line_number: int) -> None:
        self.kind = kind
        self.reason = reason
        self.line_number = line_number
        super().__init__(f"Ligne {line_number} : {reason}")


class ConversionErrorKind(Enum):
    """Cause d'une erreur de conversion."""

    NO_CONVERTER_REGISTERED = "no_converter_registered"
    INVALID_FORMAT = "invalid_format"
    SHAPE_MISMATCH = "shape_mismatch"


class ConversionError(ConfkitError, ValueError):
    """Conversion impossible entre une valeur brute et un type natif.

    Attributes:
        raw: Valeur brute (ou valeur native) en cause.
        target: Type cible demandé.
        kind: Cause de l'erreur.
    """

    def __init__(self, raw: Any, target: Any, kind: ConversionErrorKind,
                 reason: str | None = None) -> None:
        self.raw = raw
        self.target = target
        self.kind = kind
        message = (
            f"Impossible de convertir {raw!r} en {type_name(target)}"
        )
        if reason:
            message += f" : {reason}"
        super().__init__(message)


class OptionsError(ConfkitError):
    """Fichier d'options invalide ou illisible."""
    pass


class BinaryFormatError(ConfkitError):
    """Flux binaire tronqué ou corrompu."""
    pass


def type_name(target: Any) -> str:
    """Retourne un nom lisible pour un type cible (classe ou tag)."""
    if isinstance(target, Enum):
        return f"{type(target).__name__}.{target.name}"
    if isinstance(target, type):
        return target.__qualname__
    return str(target)
