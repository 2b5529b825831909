"""Interface abstraite pour le logging."""

from abc import ABC, abstractmethod


class Logger(ABC):
    """Interface pour le système de logging de confkit.

    Les composants qui lisent ou écrivent des fichiers reçoivent
    une instance par injection ; sans logger, ils restent muets.
    """

    @abstractmethod
    def log_debug(self, message: str) -> None:
        """Log un message de trace (détail du parsing)."""
        pass

    @abstractmethod
    def log_info(self, message: str) -> None:
        """Log un message d'information."""
        pass

    @abstractmethod
    def log_warning(self, message: str) -> None:
        """Log un avertissement."""
        pass

    @abstractmethod
    def log_error(self, message: str) -> None:
        """Log une erreur."""
        pass
