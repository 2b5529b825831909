"""Codec des valeurs : texte brut <-> valeurs natives, scalaires et tableaux.

Une valeur brute est un tableau si et seulement si sa forme textuelle
est {elem1, elem2, ...} : l'accolade ouvrante ferme sur le dernier
caractère. Les virgules à l'intérieur d'un tableau imbriqué ou d'un
élément entre guillemets ne séparent pas les éléments.
"""

from collections.abc import Sequence
from typing import Any, Optional

from confkit.config.options import DEFAULT_OPTIONS, FormatOptions
from confkit.conversion.registry import ConverterRegistry
from confkit.conversion.types import (
    TypeTag,
    array_element_tag,
    infer_tag,
    is_array_tag,
)
from confkit.errors import ConversionError, ConversionErrorKind

_builtin_registry: Optional[ConverterRegistry] = None


def builtin_registry() -> ConverterRegistry:
    """Registre intégré partagé, utilisé quand aucun registre n'est fourni."""
    global _builtin_registry
    if _builtin_registry is None:
        _builtin_registry = ConverterRegistry()
    return _builtin_registry


def _matching_brace(text: str, start: int) -> int:
    """Index de l'accolade fermant celle de start, ou -1."""
    depth = 0
    in_quotes = False
    i = start
    while i < len(text):
        char = text[i]
        if in_quotes:
            if char == "\\":
                i += 1
            elif char == '"':
                in_quotes = False
        elif char == '"':
            in_quotes = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def is_array_value(raw: str) -> bool:
    """Indique si une valeur brute a la forme d'un tableau."""
    text = raw.strip()
    if len(text) < 2 or text[0] != "{" or text[-1] != "}":
        return False
    return _matching_brace(text, 0) == len(text) - 1


def split_array(raw: str, separator: str = ",") -> list[str]:
    """Découpe un tableau brut en éléments bruts, sans les convertir.

    Args:
        raw: Valeur brute de forme {a, b, c}.
        separator: Séparateur des éléments.

    Returns:
        Éléments nettoyés des espaces environnants.

    Raises:
        ValueError: Si la valeur n'a pas la forme d'un tableau.
    """
    if not is_array_value(raw):
        raise ValueError(f"{raw!r} n'est pas un tableau")
    inner = raw.strip()[1:-1]
    if not inner.strip():
        return []

    elements: list[str] = []
    current: list[str] = []
    depth = 0
    in_quotes = False
    i = 0
    while i < len(inner):
        char = inner[i]
        if in_quotes:
            current.append(char)
            if char == "\\" and i + 1 < len(inner):
                i += 1
                current.append(inner[i])
            elif char == '"':
                in_quotes = False
        elif char == separator and depth == 0:
            elements.append("".join(current).strip())
            current = []
        else:
            if char == '"':
                in_quotes = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
            current.append(char)
        i += 1
    elements.append("".join(current).strip())
    return elements


def _is_quoted(element: str) -> bool:
    return len(element) >= 2 and element[0] == '"' and element[-1] == '"'


def _unquote(element: str) -> str:
    if _is_quoted(element):
        body = element[1:-1]
        out: list[str] = []
        i = 0
        while i < len(body):
            if body[i] == "\\" and i + 1 < len(body):
                i += 1
            out.append(body[i])
            i += 1
        return "".join(out)
    return element


def _quote_if_needed(text: str, options: FormatOptions) -> str:
    special = {options.array_element_separator, "{", "}", '"'}
    special.update(options.comment_chars)
    if text and text == text.strip() and not special.intersection(text):
        return text
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class ValueCodec:
    """Convertit les valeurs brutes à l'aide d'un registre explicite.

    Attributes:
        registry: Registre des convertisseurs.
        options: Options de format (séparateur, caractères de commentaire).
    """

    def __init__(
        self,
        registry: Optional[ConverterRegistry] = None,
        options: Optional[FormatOptions] = None,
    ) -> None:
        self.registry = registry if registry is not None else builtin_registry()
        self.options = options if options is not None else DEFAULT_OPTIONS

    def _convert(self, text: str, tag: TypeTag) -> Any:
        converter = self.registry.resolve(tag, text)
        try:
            return converter.from_string(text, tag)
        except ConversionError:
            raise
        except (ValueError, TypeError, ArithmeticError) as e:
            raise ConversionError(
                text, tag, ConversionErrorKind.INVALID_FORMAT, str(e)
            ) from e

    def _format(self, value: Any, tag: TypeTag) -> str:
        converter = self.registry.resolve(tag, value)
        try:
            return converter.to_string(value)
        except ConversionError:
            raise
        except (ValueError, TypeError, ArithmeticError, AttributeError) as e:
            raise ConversionError(
                value, tag, ConversionErrorKind.INVALID_FORMAT, str(e)
            ) from e

    def scalar_to(self, raw: str, tag: TypeTag) -> Any:
        """Convertit une valeur brute scalaire vers le type demandé.

        Raises:
            ConversionError: SHAPE_MISMATCH si le tag désigne un tableau
                ou si la valeur brute est un tableau, y compris pour
                les chaînes (Setting.raw_value donne le texte brut) ;
                sinon NO_CONVERTER_REGISTERED ou INVALID_FORMAT.
        """
        if is_array_tag(tag):
            raise ConversionError(
                raw, tag, ConversionErrorKind.SHAPE_MISMATCH,
                "type tableau demandé ; utiliser array_to",
            )
        if is_array_value(raw):
            raise ConversionError(
                raw, tag, ConversionErrorKind.SHAPE_MISMATCH,
                "la valeur est un tableau ; utiliser array_to",
            )
        return self._convert(raw, tag)

    def _scalar_text(self, value: Any, tag: TypeTag) -> str:
        if value is None:
            return ""
        if is_array_tag(tag) or isinstance(value, (list, tuple)):
            raise ConversionError(
                value, tag if tag is not None else type(value),
                ConversionErrorKind.SHAPE_MISMATCH,
                "valeur tableau ; utiliser array_from",
            )
        return self._format(value, infer_tag(value) if tag is None else tag)

    def scalar_from(self, value: Any, tag: TypeTag = None) -> str:
        """Convertit une valeur native scalaire en texte brut.

        Args:
            value: Valeur native ; None donne une chaîne vide.
            tag: Tag du type ; déduit du type exact de value si None.

        Raises:
            ConversionError: SHAPE_MISMATCH pour une séquence, ou si le
                texte produit a la forme d'un tableau (il ne se
                relirait pas comme un scalaire).
        """
        text = self._scalar_text(value, tag)
        if is_array_value(text):
            raise ConversionError(
                value, tag, ConversionErrorKind.SHAPE_MISMATCH,
                "le texte produit a la forme d'un tableau",
            )
        return text

    def array_to(self, raw: str, element_tag: TypeTag) -> list[Any]:
        """Convertit un tableau brut en liste de valeurs natives.

        Args:
            raw: Valeur brute de forme {a, b, c}.
            element_tag: Tag des éléments ; list[T] pour un tableau
                de tableaux.

        Raises:
            ConversionError: SHAPE_MISMATCH si la valeur n'est pas un
                tableau ou si le tag des éléments est un tableau nu ;
                sinon l'erreur du premier élément en échec.
        """
        if not is_array_value(raw):
            raise ConversionError(
                raw, element_tag, ConversionErrorKind.SHAPE_MISMATCH,
                "la valeur n'est pas un tableau ; utiliser scalar_to",
            )
        nested = is_array_tag(element_tag)
        if nested and array_element_tag(element_tag) is None:
            raise ConversionError(
                raw, element_tag, ConversionErrorKind.SHAPE_MISMATCH,
                "type des éléments imbriqués non précisé",
            )

        values = []
        for index, element in enumerate(
            split_array(raw, self.options.array_element_separator)
        ):
            try:
                if nested:
                    values.append(
                        self.array_to(element, array_element_tag(element_tag))
                    )
                elif _is_quoted(element):
                    # un élément entre guillemets est toujours un scalaire
                    values.append(
                        self._convert(_unquote(element), element_tag)
                    )
                else:
                    values.append(self.scalar_to(element, element_tag))
            except ConversionError as e:
                raise ConversionError(
                    element, element_tag, e.kind,
                    f"élément {index} de {raw!r}",
                ) from e
        return values

    def array_from(
        self, values: Sequence[Any], element_tag: TypeTag = None
    ) -> str:
        """Convertit une séquence de valeurs natives en tableau brut.

        Args:
            values: Liste ou tuple ; les éléments séquence deviennent
                des tableaux imbriqués.
            element_tag: Tag des éléments ; déduit de chaque élément
                si None.

        Raises:
            ConversionError: SHAPE_MISMATCH si values n'est pas une
                liste ou un tuple.
        """
        if not isinstance(values, (list, tuple)):
            raise ConversionError(
                values, element_tag, ConversionErrorKind.SHAPE_MISMATCH,
                "liste ou tuple attendu ; utiliser scalar_from",
            )
        inner_tag = (
            array_element_tag(element_tag) if is_array_tag(element_tag) else None
        )
        parts = []
        for value in values:
            if isinstance(value, (list, tuple)):
                parts.append(self.array_from(value, inner_tag))
            else:
                parts.append(_quote_if_needed(
                    self._scalar_text(value, element_tag), self.options
                ))
        return "{" + self.options.array_element_separator.join(parts) + "}"


def scalar_to(raw: str, tag: TypeTag,
              registry: Optional[ConverterRegistry] = None) -> Any:
    """Convertit une valeur brute scalaire (voir ValueCodec.scalar_to)."""
    return ValueCodec(registry).scalar_to(raw, tag)


def scalar_from(value: Any, tag: TypeTag = None,
                registry: Optional[ConverterRegistry] = None) -> str:
    """Convertit une valeur native scalaire (voir ValueCodec.scalar_from)."""
    return ValueCodec(registry).scalar_from(value, tag)


def array_to(raw: str, element_tag: TypeTag,
             registry: Optional[ConverterRegistry] = None) -> list[Any]:
    """Convertit un tableau brut (voir ValueCodec.array_to)."""
    return ValueCodec(registry).array_to(raw, element_tag)


def array_from(values: Sequence[Any], element_tag: TypeTag = None,
               registry: Optional[ConverterRegistry] = None) -> str:
    """Convertit une séquence native (voir ValueCodec.array_from)."""
    return ValueCodec(registry).array_from(values, element_tag)
