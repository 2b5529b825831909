"""Module du document de configuration.

Classes principales:
    - Setting: Paramètre nommé à valeur brute textuelle
    - Section: Section nommée, suite ordonnée de paramètres
    - Configuration: Document, suite ordonnée de sections
    - ConfigurationManager: Interface de gestion de fichiers
    - ConfigurationFileManager: Lecture/écriture de fichiers avec logging

Example:
    >>> from confkit.document import Configuration
    >>> cfg = Configuration.load_from_string("[db]\\nport = 5432\\n")
    >>> cfg["db"]["port"].get_value(int)
    5432
"""

from confkit.document.model import (
    DEFAULT_SECTION_NAME,
    Configuration,
    ConfigurationElement,
    Section,
    Setting,
)
from confkit.document.base import ConfigurationManager
from confkit.document.manager import ConfigurationFileManager

__all__ = [
    "DEFAULT_SECTION_NAME",
    "ConfigurationElement",
    "Setting",
    "Section",
    "Configuration",
    "ConfigurationManager",
    "ConfigurationFileManager",
]
