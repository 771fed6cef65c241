"""Structural hashing for Cascada nodes.

Provides the canonical key used by the compile cache. Two nodes that are
equal by value always produce the same key, whatever their identity.

Example:
    >>> from cascada.nodes import Declaration
    >>> a = Declaration(property="color", value="red")
    >>> b = Declaration(property="color", value="red")
    >>> node_key(a) == node_key(b)
    True
"""

import hashlib
from dataclasses import fields, is_dataclass
from typing import Any


def node_key(node: Any) -> str:
    """Deterministic structural key for a node or subtree.

    Walks dataclass fields in declaration order, so the key never depends on
    object identity or dict insertion order. Every token is length-prefixed
    to keep adjacent strings from running together.

    Args:
        node: Any Cascada node (or nested value: tuple, list, dict, scalar)

    Returns:
        Hex SHA-256 digest
    """

    def feed(hasher: Any, tag: bytes, payload: str = "") -> None:
        data = payload.encode("utf-8")
        hasher.update(tag)
        hasher.update(str(len(data)).encode("ascii"))
        hasher.update(b":")
        hasher.update(data)

    def update(hasher: Any, value: Any) -> None:
        if is_dataclass(value) and not isinstance(value, type):
            feed(hasher, b"D", type(value).__name__)
            for field in fields(value):
                feed(hasher, b"F", field.name)
                update(hasher, getattr(value, field.name))
            hasher.update(b")")
            return

        if isinstance(value, (tuple, list)):
            hasher.update(b"[")
            for item in value:
                update(hasher, item)
            hasher.update(b"]")
            return

        if isinstance(value, dict):
            hasher.update(b"{")
            for key in sorted(value, key=repr):
                update(hasher, key)
                update(hasher, value[key])
            hasher.update(b"}")
            return

        if value is None:
            hasher.update(b"N")
            return

        if isinstance(value, str):
            feed(hasher, b"S", value)
            return

        feed(hasher, type(value).__name__.encode("utf-8"), repr(value))

    hasher = hashlib.sha256()
    update(hasher, node)
    return hasher.hexdigest()
