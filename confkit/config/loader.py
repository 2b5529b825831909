"""Chargement des options de format depuis un fichier TOML ou JSON."""

import json
import tomllib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from confkit.config.options import FormatOptions
from confkit.errors import OptionsError

#: Table optionnelle regroupant les options dans un fichier partagé.
OPTIONS_TABLE = "confkit"


class OptionsLoader(ABC):
    """
    Interface abstraite pour le chargement des options de format.

    Permet l'injection de dépendance et facilite les tests
    en permettant de substituer l'implémentation réelle par un mock.
    """

    @abstractmethod
    def load(self, options_path: Union[str, Path]) -> FormatOptions:
        """
        Charge un fichier d'options.

        Args:
            options_path: Chemin vers le fichier d'options

        Returns:
            Instance FormatOptions validée

        Raises:
            FileNotFoundError: Si le fichier n'existe pas
            OptionsError: Si le fichier est illisible ou invalide
        """
        pass


class FileOptionsLoader(OptionsLoader):
    """
    Chargeur d'options depuis fichiers TOML ou JSON.

    Le format est détecté par l'extension du fichier. Les options
    peuvent se trouver à la racine du document ou dans une table
    [confkit], ce qui permet de les ranger dans le fichier de
    configuration d'une application.
    """

    def load(self, options_path: Union[str, Path]) -> FormatOptions:
        """
        Charge et valide un fichier d'options TOML ou JSON.

        Args:
            options_path: Chemin vers le fichier d'options

        Returns:
            Instance FormatOptions validée

        Raises:
            FileNotFoundError: Si le fichier n'existe pas
            OptionsError: Si l'extension n'est pas supportée, si le
                fichier est mal formé ou si une option est invalide
        """
        path = Path(options_path)

        if not path.exists():
            raise FileNotFoundError(
                f"Fichier d'options non trouvé: {path}"
            )

        raw_options = self._read_raw(path)
        if isinstance(raw_options.get(OPTIONS_TABLE), dict):
            raw_options = raw_options[OPTIONS_TABLE]

        try:
            return FormatOptions.model_validate(raw_options)
        except ValidationError as e:
            raise OptionsError(
                f"Options invalides dans {path}: {e}"
            ) from e

    @staticmethod
    def _read_raw(path: Path) -> Dict[str, Any]:
        """Lit le fichier brut selon son extension.

        Args:
            path: Chemin du fichier.

        Returns:
            Dictionnaire brut.

        Raises:
            OptionsError: Si l'extension n'est pas supportée ou si le
                contenu ne peut pas être décodé.
        """
        suffix = path.suffix.lower()

        try:
            if suffix == ".toml":
                with open(path, "rb") as f:
                    return tomllib.load(f)
            if suffix == ".json":
                with open(path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise OptionsError(
                        f"Le fichier {path} doit contenir un objet JSON"
                    )
                return data
        except (tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
            raise OptionsError(f"Fichier d'options mal formé {path}: {e}") from e

        raise OptionsError(
            f"Extension non supportée: {suffix}. "
            "Utilisez .toml ou .json"
        )


_default_loader = FileOptionsLoader()


def load_options(options_path: Union[str, Path]) -> FormatOptions:
    """
    Charge un fichier d'options (fonction utilitaire).

    Utilise l'implémentation FileOptionsLoader par défaut.

    Args:
        options_path: Chemin vers le fichier d'options

    Returns:
        Instance FormatOptions validée
    """
    return _default_loader.load(options_path)
