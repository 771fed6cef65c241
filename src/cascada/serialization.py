"""AST serialization: JSON round-trip for Cascada nodes.

Converts typed nodes to/from the JSON AST shape used by CSS tooling:

    {"type": "stylesheet", "stylesheet": {"rules": [
        {"type": "rule", "selectors": ["a"],
         "declarations": [{"type": "declaration", "property": "color", "value": "red"}],
         "position": {"start": {"line": 1, "column": 1}, "end": {"line": 1, "column": 17},
                      "source": "site.css"}}
    ]}}

Useful for:
- Compiling trees produced by another tool (compile() accepts this shape)
- Caching trees on disk
- Debugging and inspection

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from collections.abc import Mapping
from dataclasses import fields
from typing import Any

from cascada.location import SourceLocation
from cascada.nodes import NODE_TYPES, Node

# Node fields whose JSON key differs from the Python attribute name.
_FIELD_KEYS = {"import_": "import"}

# Extra spellings accepted on input only.
_INPUT_ALIASES = {"property": ("prop",)}

# Node type assumed for untyped children of these fields.
_DEFAULT_CHILD_KIND = {"declarations": "declaration", "keyframes": "keyframe"}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node to a JSON-compatible dict.

    Args:
        node: Any Cascada node.

    Returns:
        Dict with ``type``, the node's fields and, when known, ``position``.

    """
    body: dict[str, Any] = {}
    for f in fields(node):
        if f.name == "location":
            continue
        body[_FIELD_KEYS.get(f.name, f.name)] = _serialize_value(getattr(node, f.name))

    result: dict[str, Any] = {"type": node.kind}
    if node.kind == "stylesheet":
        result["stylesheet"] = body
    else:
        result.update(body)
    if node.location is not None:
        result["position"] = _location_to_dict(node.location)
    return result


def _serialize_value(value: Any) -> Any:
    if isinstance(value, Node):
        return to_dict(value)
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, None
    return value


def _location_to_dict(loc: SourceLocation) -> dict[str, Any]:
    result: dict[str, Any] = {"start": {"line": loc.lineno, "column": loc.col_offset}}
    if loc.end_lineno is not None:
        result["end"] = {"line": loc.end_lineno, "column": loc.end_col_offset}
    if loc.source_file is not None:
        result["source"] = loc.source_file
    if loc.content is not None:
        result["content"] = loc.content
    return result


def from_dict(data: Mapping[str, Any]) -> Node:
    """Reconstruct a typed node from a dict.

    Uses the ``type`` discriminator to pick the node class. Never mutates
    ``data``.

    Args:
        data: Dict in JSON AST shape (as produced by to_dict or a CSS parser).

    Returns:
        Typed node (frozen dataclass).

    Raises:
        ValueError: If ``type`` is missing or unknown, or required fields
            are absent.

    """
    return _from_dict(data, None)


def _from_dict(data: Mapping[str, Any], default_kind: str | None) -> Node:
    kind = data.get("type", default_kind)
    if kind is None:
        msg = "Missing 'type' field in serialized node"
        raise ValueError(msg)

    node_cls = NODE_TYPES.get(kind)
    if node_cls is None:
        msg = f"Unknown node type: {kind!r}"
        raise ValueError(msg)

    body = data
    if kind == "stylesheet" and isinstance(data.get("stylesheet"), Mapping):
        body = data["stylesheet"]

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name == "location":
            continue
        for key in (_FIELD_KEYS.get(f.name, f.name), *_INPUT_ALIASES.get(f.name, ())):
            if key in body:
                kwargs[f.name] = _deserialize_value(body[key], _DEFAULT_CHILD_KIND.get(key))
                break

    position = data.get("position")
    if position:
        kwargs["location"] = _location_from_dict(position)

    try:
        return node_cls(**kwargs)
    except TypeError as e:
        msg = f"Invalid {kind!r} node: {e}"
        raise ValueError(msg) from e


def _deserialize_value(value: Any, default_kind: str | None = None) -> Any:
    if isinstance(value, Mapping) and ("type" in value or default_kind is not None):
        return _from_dict(value, default_kind)
    if isinstance(value, list | tuple):
        return tuple(_deserialize_value(item, default_kind) for item in value)
    return value


def _location_from_dict(position: Mapping[str, Any]) -> SourceLocation:
    start = position.get("start") or {}
    end = position.get("end") or {}
    return SourceLocation(
        lineno=int(start.get("line", 0)),
        col_offset=int(start.get("column", 0)),
        end_lineno=end.get("line"),
        end_col_offset=end.get("column"),
        source_file=position.get("source"),
        content=position.get("content"),
    )


def to_json(node: Node, *, indent: int | None = None) -> str:
    """Serialize a node to a JSON string.

    Output has sorted keys, so equal trees produce identical text.

    """
    return json.dumps(to_dict(node), indent=indent, sort_keys=True)


def from_json(json_str: str) -> Node:
    """Deserialize a node from a JSON string.

    Raises:
        ValueError: On invalid JSON or an invalid tree.

    """
    data = json.loads(json_str)
    if not isinstance(data, dict):
        msg = "Serialized node must be a JSON object"
        raise ValueError(msg)
    return from_dict(data)


__all__ = [
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
]
