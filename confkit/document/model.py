"""Modèle en mémoire d'une configuration : sections et paramètres.

Une Configuration possède une suite ordonnée de Section ; chaque Section
possède une suite ordonnée de Setting. Les noms de section et de
paramètre peuvent se répéter ; la recherche par nom retourne le premier
élément correspondant.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import IO, Any, Optional, Union

from confkit.config.options import DEFAULT_OPTIONS, FormatOptions
from confkit.conversion.codec import ValueCodec, is_array_value, split_array
from confkit.conversion.registry import ConverterRegistry
from confkit.conversion.types import TypeTag
from confkit.errors import ConversionError

#: Nom de la section implicite des paramètres placés avant toute section.
DEFAULT_SECTION_NAME = ""


def _format_name(name: str, options: FormatOptions) -> str:
    """Met un nom de paramètre entre guillemets s'il ne peut pas rester nu."""
    needs_quotes = (
        "=" in name
        or '"' in name
        or name != name.strip()
        or name.startswith("[")
        or any(char in name for char in options.comment_chars)
    )
    if not needs_quotes:
        return name
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _check_markers(text: str, options: FormatOptions) -> str:
    """Refuse une ligne qu'un commentaire couperait à la relecture."""
    from confkit.parsing.comments import NO_COMMENT, find_comment
    if find_comment(text, options.comment_chars).index != NO_COMMENT:
        raise ValueError(
            f"{text!r} contient un caractère de commentaire non protégé"
        )
    return text


class ConfigurationElement(ABC):
    """Base commune des sections et des paramètres.

    Attributes:
        comment: Commentaire en fin de ligne, ou None.
        pre_comment: Bloc de commentaire des lignes précédentes
            (lignes séparées par "\\n"), ou None.
    """

    def __init__(
        self,
        name: str,
        comment: Optional[str] = None,
        pre_comment: Optional[str] = None,
    ) -> None:
        if name is None:
            raise ValueError("Le nom ne peut pas être None")
        self._name = name
        self.comment = comment
        self.pre_comment = pre_comment

    @property
    def name(self) -> str:
        """Nom de l'élément (lecture seule)."""
        return self._name

    @abstractmethod
    def _expression(self, options: FormatOptions) -> str:
        """Retourne la ligne de l'élément, sans commentaire.

        Raises:
            ValueError: Si la ligne contient un caractère de commentaire
                non protégé, qui la couperait à la relecture.
        """
        pass

    def to_string(
        self,
        include_comments: bool = False,
        options: Optional[FormatOptions] = None,
    ) -> str:
        """Retourne la ligne textuelle de l'élément.

        Args:
            include_comments: Inclure le commentaire en ligne et le
                bloc de commentaire précédent.
            options: Options de format (caractère de commentaire, ...).

        Returns:
            Texte prêt à être écrit dans un fichier de configuration.

        Raises:
            ValueError: Si le nom ou la valeur contient un caractère de
                commentaire non protégé.
        """
        options = options or DEFAULT_OPTIONS
        text = self._expression(options)
        if not include_comments:
            return text

        marker = options.preferred_comment_char
        if self.comment is not None:
            text = f"{text} {marker} {self.comment}".rstrip()
        if self.pre_comment is not None:
            lines = [
                f"{marker} {line}".rstrip()
                for line in self.pre_comment.split("\n")
            ]
            text = "\n".join(lines + [text])
        return text

    def __str__(self) -> str:
        return self.to_string(False)


class Setting(ConfigurationElement):
    """Paramètre nommé dont la valeur est stockée sous forme de texte brut.

    Example:
        >>> setting = Setting("ports", "{80, 443}")
        >>> setting.is_array
        True
        >>> setting.get_values(int)
        [80, 443]
    """

    def __init__(
        self,
        name: str,
        raw_value: Any = "",
        comment: Optional[str] = None,
        pre_comment: Optional[str] = None,
    ) -> None:
        if not name or not name.strip():
            raise ValueError("Un paramètre doit avoir un nom")
        super().__init__(name, comment, pre_comment)
        self._raw_value = ""
        self.raw_value = raw_value

    @property
    def raw_value(self) -> str:
        """Valeur brute ; None est stocké comme chaîne vide."""
        return self._raw_value

    @raw_value.setter
    def raw_value(self, value: Any) -> None:
        self._raw_value = "" if value is None else str(value)

    @property
    def is_array(self) -> bool:
        """True si la valeur brute a la forme {a, b, ...}."""
        return is_array_value(self._raw_value)

    @property
    def is_empty(self) -> bool:
        return self._raw_value == ""

    def array_size(self, options: Optional[FormatOptions] = None) -> int:
        """Nombre d'éléments du tableau, ou -1 si la valeur n'en est pas un."""
        if not self.is_array:
            return -1
        separator = (options or DEFAULT_OPTIONS).array_element_separator
        return len(split_array(self._raw_value, separator))

    def get_value(
        self,
        tag: TypeTag,
        registry: Optional[ConverterRegistry] = None,
        options: Optional[FormatOptions] = None,
    ) -> Any:
        """Convertit la valeur scalaire vers le type demandé.

        Raises:
            ConversionError: Si la conversion échoue ou si la valeur
                est un tableau.
        """
        return ValueCodec(registry, options).scalar_to(self._raw_value, tag)

    def get_value_or_default(
        self,
        tag: TypeTag,
        default: Any = None,
        registry: Optional[ConverterRegistry] = None,
        options: Optional[FormatOptions] = None,
    ) -> Any:
        """Comme get_value, mais retourne default en cas d'échec."""
        try:
            return self.get_value(tag, registry, options)
        except ConversionError:
            return default

    def get_values(
        self,
        tag: TypeTag,
        registry: Optional[ConverterRegistry] = None,
        options: Optional[FormatOptions] = None,
    ) -> list[Any]:
        """Convertit la valeur tableau en liste d'éléments du type demandé.

        Raises:
            ConversionError: Si un élément échoue ou si la valeur
                n'est pas un tableau.
        """
        return ValueCodec(registry, options).array_to(self._raw_value, tag)

    def set_value(
        self,
        value: Any,
        tag: TypeTag = None,
        registry: Optional[ConverterRegistry] = None,
        options: Optional[FormatOptions] = None,
    ) -> None:
        """Remplace la valeur ; une liste ou un tuple devient un tableau.

        En cas d'échec, la valeur brute reste inchangée.
        """
        codec = ValueCodec(registry, options)
        if isinstance(value, (list, tuple)):
            self._raw_value = codec.array_from(value, tag)
        else:
            self._raw_value = codec.scalar_from(value, tag)

    def set_values(
        self,
        values: Sequence[Any],
        tag: TypeTag = None,
        registry: Optional[ConverterRegistry] = None,
        options: Optional[FormatOptions] = None,
    ) -> None:
        """Remplace la valeur par un tableau."""
        self._raw_value = ValueCodec(registry, options).array_from(values, tag)

    def _expression(self, options: FormatOptions) -> str:
        equals = " = " if options.space_between_equals else "="
        text = f"{_format_name(self.name, options)}{equals}{self._raw_value}"
        if options.ignore_inline_comments:
            return text.rstrip()
        return _check_markers(text.rstrip(), options)

    def __repr__(self) -> str:
        return f"Setting({self.name!r}, {self._raw_value!r})"


class Section(ConfigurationElement):
    """Section nommée contenant une suite ordonnée de paramètres.

    L'accès par nom via [] crée le paramètre s'il n'existe pas.

    Example:
        >>> section = Section("server")
        >>> section["port"].set_value(8080)
        >>> section["port"].raw_value
        '8080'
    """

    def __init__(
        self,
        name: str,
        comment: Optional[str] = None,
        pre_comment: Optional[str] = None,
    ) -> None:
        super().__init__(name.strip() if name else DEFAULT_SECTION_NAME,
                         comment, pre_comment)
        self._settings: list[Setting] = []

    @property
    def is_default(self) -> bool:
        """True pour la section implicite sans en-tête."""
        return self.name == DEFAULT_SECTION_NAME

    @property
    def settings(self) -> list[Setting]:
        """Copie de la liste des paramètres."""
        return list(self._settings)

    def add(self, setting: Setting) -> Setting:
        """Ajoute un paramètre en fin de section.

        Raises:
            ValueError: Si ce paramètre (même objet) est déjà présent.
        """
        if any(s is setting for s in self._settings):
            raise ValueError(
                f"Le paramètre '{setting.name}' est déjà dans la section"
            )
        self._settings.append(setting)
        return setting

    def add_setting(self, name: str, value: Any = None, **kwargs: Any) -> Setting:
        """Crée, ajoute et retourne un paramètre.

        Args:
            name: Nom du paramètre.
            value: Valeur native ; convertie via Setting.set_value.
            **kwargs: Transmis à Setting.set_value (tag, registry, options).
        """
        setting = Setting(name)
        if value is not None:
            setting.set_value(value, **kwargs)
        return self.add(setting)

    def get(self, name: str) -> Optional[Setting]:
        """Retourne le premier paramètre de ce nom, ou None."""
        for setting in self._settings:
            if setting.name == name:
                return setting
        return None

    def get_settings_named(self, name: str) -> list[Setting]:
        """Retourne tous les paramètres de ce nom, dans l'ordre."""
        return [s for s in self._settings if s.name == name]

    def contains(self, name: str) -> bool:
        return self.get(name) is not None

    def remove(self, item: Union[str, Setting]) -> bool:
        """Retire le premier paramètre de ce nom (ou cet objet).

        Returns:
            True si un paramètre a été retiré.
        """
        for index, setting in enumerate(self._settings):
            if setting is item or (isinstance(item, str) and setting.name == item):
                del self._settings[index]
                return True
        return False

    def remove_all_named(self, name: str) -> int:
        """Retire tous les paramètres de ce nom et retourne leur nombre."""
        before = len(self._settings)
        self._settings = [s for s in self._settings if s.name != name]
        return before - len(self._settings)

    def clear(self) -> None:
        self._settings.clear()

    @classmethod
    def from_object(
        cls,
        name: str,
        obj: Any,
        registry: Optional[ConverterRegistry] = None,
    ) -> "Section":
        """Crée une section à partir des champs d'un objet."""
        from confkit.mapping import section_from_object
        return section_from_object(name, obj, registry)

    def to_object(
        self,
        target_cls: type,
        registry: Optional[ConverterRegistry] = None,
    ) -> Any:
        """Crée une instance de target_cls à partir des paramètres."""
        from confkit.mapping import create_object
        return create_object(self, target_cls, registry)

    def map_to(
        self,
        obj: Any,
        registry: Optional[ConverterRegistry] = None,
    ) -> Any:
        """Renseigne un objet existant à partir des paramètres."""
        from confkit.mapping import map_to_object
        return map_to_object(self, obj, registry)

    def _expression(self, options: FormatOptions) -> str:
        return _check_markers(f"[{self.name}]", options)

    def __getitem__(self, key: Union[str, int]) -> Setting:
        if isinstance(key, int):
            return self._settings[key]
        setting = self.get(key)
        if setting is None:
            setting = self.add(Setting(key))
        return setting

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.contains(name)

    def __iter__(self) -> Iterator[Setting]:
        return iter(list(self._settings))

    def __len__(self) -> int:
        return len(self._settings)

    def __repr__(self) -> str:
        return f"Section({self.name!r}, settings={len(self._settings)})"


class Configuration:
    """Document de configuration : suite ordonnée de sections.

    Attributes:
        options: Options de format utilisées pour le parsing et le rendu.
        registry: Registre des convertisseurs propre à ce document.

    Example:
        >>> cfg = Configuration()
        >>> cfg["server"]["port"].set_value(8080)
        >>> print(cfg.to_string())
        [server]
        port = 8080
    """

    def __init__(
        self,
        options: Optional[FormatOptions] = None,
        registry: Optional[ConverterRegistry] = None,
    ) -> None:
        self.options = options or DEFAULT_OPTIONS
        self.registry = (
            registry if registry is not None
            else ConverterRegistry.from_options(self.options)
        )
        self._sections: list[Section] = []

    @property
    def sections(self) -> list[Section]:
        """Copie de la liste des sections."""
        return list(self._sections)

    @property
    def default_section(self) -> Optional[Section]:
        """Section implicite, si le document en contient une."""
        return self.get(DEFAULT_SECTION_NAME)

    def add(self, section: Section) -> Section:
        """Ajoute une section en fin de document.

        Raises:
            ValueError: Si cette section (même objet) est déjà présente.
        """
        if any(s is section for s in self._sections):
            raise ValueError(
                f"La section '{section.name}' est déjà dans la configuration"
            )
        self._sections.append(section)
        return section

    def add_section(self, name: str) -> Section:
        """Crée, ajoute et retourne une section."""
        return self.add(Section(name))

    def get(self, name: str) -> Optional[Section]:
        """Retourne la première section de ce nom, ou None."""
        for section in self._sections:
            if section.name == name:
                return section
        return None

    def get_sections_named(self, name: str) -> list[Section]:
        """Retourne toutes les sections de ce nom, dans l'ordre."""
        return [s for s in self._sections if s.name == name]

    def contains(self, name: str, setting_name: Optional[str] = None) -> bool:
        """Teste la présence d'une section, ou d'un paramètre dans celle-ci."""
        section = self.get(name)
        if section is None:
            return False
        return setting_name is None or section.contains(setting_name)

    def remove(self, item: Union[str, Section]) -> bool:
        """Retire la première section de ce nom (ou cet objet)."""
        for index, section in enumerate(self._sections):
            if section is item or (isinstance(item, str) and section.name == item):
                del self._sections[index]
                return True
        return False

    def remove_all_named(self, name: str) -> int:
        """Retire toutes les sections de ce nom et retourne leur nombre."""
        before = len(self._sections)
        self._sections = [s for s in self._sections if s.name != name]
        return before - len(self._sections)

    def clear(self) -> None:
        self._sections.clear()

    def get_value(self, section: str, setting: str, tag: TypeTag) -> Any:
        """Lit une valeur scalaire avec le registre du document."""
        return self[section][setting].get_value(tag, self.registry, self.options)

    def set_value(self, section: str, setting: str, value: Any,
                  tag: TypeTag = None) -> None:
        """Écrit une valeur (scalaire ou tableau) avec le registre du document."""
        self[section][setting].set_value(value, tag, self.registry, self.options)

    # Chargement

    @classmethod
    def load_from_string(
        cls,
        source: str,
        options: Optional[FormatOptions] = None,
        registry: Optional[ConverterRegistry] = None,
    ) -> "Configuration":
        """Analyse un texte de configuration.

        Raises:
            ParseError: À la première ligne mal formée.
        """
        from confkit.parsing.reader import ConfigurationReader
        return ConfigurationReader(options).read(source, registry=registry)

    @classmethod
    def load_from_stream(
        cls,
        stream: IO[str],
        options: Optional[FormatOptions] = None,
        registry: Optional[ConverterRegistry] = None,
    ) -> "Configuration":
        """Analyse le contenu complet d'un flux texte."""
        return cls.load_from_string(stream.read(), options, registry)

    @classmethod
    def load_from_file(
        cls,
        path: Union[str, Path],
        options: Optional[FormatOptions] = None,
        registry: Optional[ConverterRegistry] = None,
    ) -> "Configuration":
        """Analyse un fichier texte (encodage issu des options)."""
        options = options or DEFAULT_OPTIONS
        with open(path, "r", encoding=options.encoding) as f:
            return cls.load_from_stream(f, options, registry)

    @classmethod
    def load_from_binary_stream(
        cls,
        stream: IO[bytes],
        options: Optional[FormatOptions] = None,
        registry: Optional[ConverterRegistry] = None,
    ) -> "Configuration":
        """Relit un document écrit par save_to_binary_stream."""
        from confkit.parsing.binary import read_binary
        return read_binary(stream, options, registry)

    @classmethod
    def load_from_binary_file(
        cls,
        path: Union[str, Path],
        options: Optional[FormatOptions] = None,
        registry: Optional[ConverterRegistry] = None,
    ) -> "Configuration":
        with open(path, "rb") as f:
            return cls.load_from_binary_stream(f, options, registry)

    # Sauvegarde

    def to_string(self, include_comments: bool = True) -> str:
        """Rend le document en texte."""
        from confkit.parsing.writer import render
        return render(self, include_comments, self.options)

    def save_to_stream(self, stream: IO[str], include_comments: bool = True) -> None:
        stream.write(self.to_string(include_comments))

    def save_to_file(self, path: Union[str, Path],
                     include_comments: bool = True) -> None:
        with open(path, "w", encoding=self.options.encoding) as f:
            self.save_to_stream(f, include_comments)

    def save_to_binary_stream(self, stream: IO[bytes]) -> None:
        from confkit.parsing.binary import write_binary
        write_binary(self, stream, self.options)

    def save_to_binary_file(self, path: Union[str, Path]) -> None:
        with open(path, "wb") as f:
            self.save_to_binary_stream(f)

    def __getitem__(self, key: Union[str, int]) -> Section:
        if isinstance(key, int):
            return self._sections[key]
        section = self.get(key)
        if section is None:
            section = self.add(Section(key))
        return section

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.contains(name)

    def __iter__(self) -> Iterator[Section]:
        return iter(list(self._sections))

    def __len__(self) -> int:
        return len(self._sections)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Configuration(sections={len(self._sections)})"
