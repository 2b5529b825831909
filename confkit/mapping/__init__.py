"""Module de correspondance entre sections et objets Python.

Example:
    >>> from dataclasses import dataclass, field
    >>> from confkit.mapping import create_object, section_from_object
    >>>
    >>> @dataclass
    ... class Server:
    ...     host: str = "localhost"
    ...     ports: list[int] = field(default_factory=list)
    >>>
    >>> section = section_from_object("Server", Server("example.org", [80]))
    >>> section["ports"].raw_value
    '{80}'
    >>> create_object(section, Server)
    Server(host='example.org', ports=[80])
"""

from confkit.mapping.objects import (
    IGNORE_KEY,
    create_object,
    ignored,
    map_to_object,
    mapped_fields,
    section_from_object,
)

__all__ = [
    "IGNORE_KEY",
    "ignored",
    "mapped_fields",
    "section_from_object",
    "map_to_object",
    "create_object",
]
