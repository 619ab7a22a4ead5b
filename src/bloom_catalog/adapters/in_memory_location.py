from __future__ import annotations

from bloom_catalog.ports.location import Location


class InMemoryLocation(Location):
    """Location held in memory; records every write for inspection."""

    def __init__(self, query_string: str = "") -> None:
        self._query_string = query_string.lstrip("?")
        self.writes: list[str] = []

    def read_query_string(self) -> str:
        return self._query_string

    def replace_query_string(self, query_string: str) -> None:
        self._query_string = query_string.lstrip("?")
        self.writes.append(self._query_string)
