"""Invocation-scoped compile cache for Cascada.

Maps (render scope, structural node key) -> MemoEntry so that a subtree
repeated within one stylesheet is rendered once. A fresh cache is built for
every compile() call and dropped when it returns; nothing is shared across
calls, since cached text depends on the options in force.

Thread Safety:
    CompileCache is not thread-safe and never needs to be: each compile()
    call owns its cache.

Example:
    >>> cache = CompileCache()
    >>> key = cache.key_for(None, rule)
    >>> cache.get(key) is None
    True
    >>> cache.put(key, MemoEntry("a{color:red;}"))
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cascada.utils.hashing import node_key

if TYPE_CHECKING:
    from cascada.nodes import Node
    from cascada.sourcemap.tracker import RecordedMapping

CacheKey = tuple[Hashable, str]


@dataclass(frozen=True, slots=True)
class MemoEntry:
    """Rendered text of a subtree plus the mappings it recorded, if tracked."""

    code: str
    mappings: tuple[RecordedMapping, ...] = ()


class CompileCache:
    """In-memory memo table using a dict, with hit/miss counters.

    Unbounded: it lives for exactly one compile() call.
    """

    __slots__ = ("_data", "hits", "misses")

    def __init__(self) -> None:
        self._data: dict[CacheKey, MemoEntry] = {}
        self.hits = 0
        self.misses = 0

    @staticmethod
    def key_for(scope: Hashable, node: Node) -> CacheKey:
        """Build the cache key for ``node`` rendered in ``scope``."""
        return (scope, node_key(node))

    def get(self, key: CacheKey) -> MemoEntry | None:
        """Return the cached entry if present, else None, counting the outcome."""
        entry = self._data.get(key)
        if entry is None:
            self.misses += 1
        else:
            self.hits += 1
        return entry

    def put(self, key: CacheKey, entry: MemoEntry) -> None:
        """Store a rendered subtree."""
        self._data[key] = entry

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data


__all__ = [
    "CacheKey",
    "CompileCache",
    "MemoEntry",
]
