"""Module de logging."""

from confkit.logging.base import Logger
from confkit.logging.file_logger import FileLogger

__all__ = [
    "Logger",
    "FileLogger",
]
