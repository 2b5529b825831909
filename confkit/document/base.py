"""Interface abstraite pour la gestion de fichiers de configuration."""

from abc import ABC, abstractmethod
from pathlib import Path

from confkit.document.model import Configuration, Section


class ConfigurationManager(ABC):
    """Interface pour la gestion de fichiers de configuration.

    Gère les opérations de lecture, écriture et mise à jour
    de fichiers texte ou binaires.
    """

    @abstractmethod
    def read(self, path: Path) -> Configuration:
        """Lit un fichier texte et retourne le document.

        Args:
            path: Chemin du fichier.

        Returns:
            Document analysé.

        Raises:
            FileNotFoundError: Si le fichier n'existe pas.
            ParseError: Si le fichier est mal formé.
        """
        pass

    @abstractmethod
    def write(self, path: Path, config: Configuration) -> None:
        """Écrit un document dans un fichier texte.

        Args:
            path: Chemin du fichier de destination.
            config: Document à écrire.
        """
        pass

    @abstractmethod
    def update_section(self, path: Path, section: Section) -> bool:
        """Met à jour une section dans un fichier existant.

        Args:
            path: Chemin du fichier.
            section: Section portant les nouvelles valeurs.

        Returns:
            True si des modifications ont été effectuées, False sinon.
        """
        pass
