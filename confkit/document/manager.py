"""Gestionnaire de fichiers de configuration.

Ce module fournit ConfigurationFileManager, qui lit, écrit et met à jour
des fichiers de configuration texte ou binaires en traçant les
opérations via un Logger injecté.
"""

from pathlib import Path
from typing import Optional, Union

from confkit.config.options import DEFAULT_OPTIONS, FormatOptions
from confkit.conversion.registry import ConverterRegistry
from confkit.document.base import ConfigurationManager
from confkit.document.model import Configuration, Section
from confkit.errors import ParseError
from confkit.logging.base import Logger


class ConfigurationFileManager(ConfigurationManager):
    """Gestionnaire de fichiers de configuration.

    Attributes:
        logger: Instance de Logger pour tracer les opérations.
        options: Options de format utilisées en lecture et en écriture.
        registry: Registre attaché aux documents lus (un registre
            intégré neuf par document si None).

    Example:
        >>> from confkit import FileLogger
        >>> logger = FileLogger("/var/log/app.log")
        >>> manager = ConfigurationFileManager(logger)
        >>> cfg = manager.read(Path("/etc/app/app.cfg"))
        >>> print(cfg["server"]["port"].get_value(int))
    """

    def __init__(
        self,
        logger: Logger,
        options: Optional[FormatOptions] = None,
        registry: Optional[ConverterRegistry] = None,
    ) -> None:
        """Initialise le gestionnaire.

        Args:
            logger: Instance de Logger pour les messages.
            options: Options de format.
            registry: Registre des convertisseurs.
        """
        self.logger = logger
        self.options = options or DEFAULT_OPTIONS
        self.registry = registry

    def read(self, path: Union[str, Path]) -> Configuration:
        """Lit un fichier texte et retourne le document.

        Raises:
            FileNotFoundError: Si le fichier n'existe pas.
            ParseError: Si le fichier est mal formé.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Fichier non trouvé : {path}")

        try:
            config = Configuration.load_from_file(
                path, self.options, self.registry
            )
        except ParseError as e:
            self.logger.log_error(f"Fichier {path} invalide : {e}")
            raise

        self.logger.log_info(f"Fichier {path} lu avec succès.")
        return config

    def write(
        self,
        path: Union[str, Path],
        config: Configuration,
        include_comments: bool = True,
    ) -> None:
        """Écrit un document dans un fichier texte."""
        path = Path(path)
        with open(path, "w", encoding=self.options.encoding) as f:
            f.write(config.to_string(include_comments))
        self.logger.log_info(f"Fichier {path} écrit avec succès.")

    def read_binary(self, path: Union[str, Path]) -> Configuration:
        """Lit un fichier binaire écrit par write_binary.

        Raises:
            FileNotFoundError: Si le fichier n'existe pas.
            BinaryFormatError: Si le fichier est tronqué ou corrompu.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Fichier non trouvé : {path}")
        config = Configuration.load_from_binary_file(
            path, self.options, self.registry
        )
        self.logger.log_info(f"Fichier binaire {path} lu avec succès.")
        return config

    def write_binary(self, path: Union[str, Path], config: Configuration) -> None:
        """Écrit un document dans un fichier binaire."""
        path = Path(path)
        config.save_to_binary_file(path)
        self.logger.log_info(f"Fichier binaire {path} écrit avec succès.")

    def write_section(self, path: Union[str, Path], section: Section) -> None:
        """Écrit ou remplace une section dans un fichier.

        Si le fichier existe, la première section de même nom est
        remplacée (ou la section est ajoutée). Sinon, un nouveau
        fichier est créé.
        """
        path = Path(path)
        config = self._read_or_new(path)
        existing = config.get(section.name)
        if existing is not None:
            self._replace(config, existing, section)
        else:
            config.add(section)
        self.write(path, config)
        self.logger.log_info(f"Section [{section.name}] écrite dans {path}.")

    def update_section(self, path: Union[str, Path], section: Section) -> bool:
        """Met à jour une section dans un fichier existant.

        Compare les valeurs brutes actuelles avec les nouvelles et
        n'écrit que si des modifications sont nécessaires.

        Returns:
            True si des modifications ont été effectuées, False sinon.
        """
        path = Path(path)
        config = self._read_or_new(path)
        target = config[section.name]

        updated = False
        for setting in section:
            current = target[setting.name]
            if current.raw_value != setting.raw_value:
                current.raw_value = setting.raw_value
                updated = True
                self.logger.log_info(
                    f"Modification : {setting.name} mis à jour"
                )

        if updated:
            self.write(path, config)
            self.logger.log_info(f"Fichier {path} mis à jour.")
        else:
            self.logger.log_info(
                f"Fichier {path} déjà configuré avec les valeurs cibles."
            )
        return updated

    def _read_or_new(self, path: Path) -> Configuration:
        if path.exists():
            return self.read(path)
        return Configuration(self.options, self.registry)

    @staticmethod
    def _replace(config: Configuration, old: Section, new: Section) -> None:
        sections = config.sections
        index = next(i for i, s in enumerate(sections) if s is old)
        config.clear()
        for position, section in enumerate(sections):
            config.add(new if position == index else section)
