from __future__ import annotations

from abc import ABC, abstractmethod


class Location(ABC):
    """Port for the external location that carries the serialized query string."""

    @abstractmethod
    def read_query_string(self) -> str: ...

    @abstractmethod
    def replace_query_string(self, query_string: str) -> None:
        """Replace the current query string without adding a history entry."""
        ...
