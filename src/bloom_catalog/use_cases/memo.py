"""Explicit memoization keyed by a content hash of the dependency inputs."""

from __future__ import annotations

import dataclasses
import hashlib
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


def _canonical(value: Any) -> Any:
    # Sets iterate in hash order, so they are sorted to keep the fingerprint stable
    if isinstance(value, (set, frozenset)):
        return ("set", tuple(sorted((_canonical(v) for v in value), key=repr)))
    if isinstance(value, Enum):
        return value.value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return (
            type(value).__name__,
            tuple((f.name, _canonical(getattr(value, f.name))) for f in dataclasses.fields(value)),
        )
    if isinstance(value, (list, tuple)):
        return tuple(_canonical(v) for v in value)
    return value


def content_hash(*parts: Any) -> str:
    """Stable sha256 fingerprint of arbitrarily nested dataclasses, sequences and sets."""
    digest = hashlib.sha256()
    for part in parts:
        digest.update(repr(_canonical(part)).encode("utf-8"))
        digest.update(b"\x1f")
    return digest.hexdigest()


class HashMemo(Generic[T]):
    """
    Single-slot memo owned by the component that uses it.

    Invalidation rule: a lookup whose key hash differs from the stored one
    recomputes and replaces the slot. There is no other expiry.
    """

    def __init__(self) -> None:
        self._key: str | None = None
        self._value: T | None = None
        self.hits = 0
        self.misses = 0

    def get(self, key: str, compute: Callable[[], T]) -> T:
        if self._key == key:
            self.hits += 1
            return self._value  # type: ignore[return-value]

        self.misses += 1
        value = compute()
        self._key = key
        self._value = value
        return value

    def invalidate(self) -> None:
        self._key = None
        self._value = None
