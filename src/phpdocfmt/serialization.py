"""Convert type trees to and from JSON-compatible builtins."""

from __future__ import annotations

import json
from dataclasses import fields
from typing import Any

from phpdocfmt.types import CallableParameter, TupleDictEntry, TypeNode

# Kind format: {"kind": "<kind>", <field>: <value>, ...}
_KIND_KEY = "kind"

# Records that are part of a tree without being type nodes themselves
_RECORDS: dict[str, type[TupleDictEntry] | type[CallableParameter]] = {
    "tuple-dict-entry": TupleDictEntry,
    "callable-parameter": CallableParameter,
}
_RECORD_KINDS = {cls: kind for kind, cls in _RECORDS.items()}


def to_builtins(obj: Any) -> Any:
    """Convert a type tree to dicts, lists and primitives.

    Every node becomes a dict carrying its kind tag plus one key per field;
    tuples become lists.
    """
    if isinstance(obj, TypeNode):
        return _encode_fields(obj, type(obj).kind)
    if isinstance(obj, TupleDictEntry | CallableParameter):
        return _encode_fields(obj, _RECORD_KINDS[type(obj)])
    if isinstance(obj, tuple | list):
        return [to_builtins(item) for item in obj]
    return obj


def _encode_fields(obj: Any, kind: str) -> dict[str, Any]:
    result: dict[str, Any] = {_KIND_KEY: kind}
    for f in fields(obj):
        result[f.name] = to_builtins(getattr(obj, f.name))
    return result


def from_builtins(data: dict[str, Any]) -> TypeNode:
    """Rebuild a type tree from the output of to_builtins.

    Raises:
        KeyError: If the 'kind' field is missing
        ValueError: If the kind is unknown or the data is not a type node

    """
    node = _decode(data)
    if not isinstance(node, TypeNode):
        msg = f"Expected a type node, got {type(node).__name__}"
        raise ValueError(msg)
    return node


def _decode(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(_decode(item) for item in value)
    if not isinstance(value, dict):
        return value

    if _KIND_KEY not in value:
        msg = f"Missing required '{_KIND_KEY}' field"
        raise KeyError(msg)
    kind = value[_KIND_KEY]
    cls = TypeNode.registry.get(kind) or _RECORDS.get(kind)
    if cls is None:
        msg = f"Unknown kind '{kind}'"
        raise ValueError(msg)

    field_values = {
        f.name: _decode(value[f.name]) for f in fields(cls) if f.name in value
    }
    return cls(**field_values)


def to_json(node: TypeNode, *, indent: int | None = 2) -> str:
    """Serialize a type tree to a JSON string.

    Args:
        node: The tree to serialize
        indent: JSON indentation level (default 2, None for compact)

    """
    return json.dumps(to_builtins(node), indent=indent)


def from_json(s: str) -> TypeNode:
    """Deserialize a JSON string produced by to_json.

    Raises:
        ValueError: If the JSON doesn't contain a valid tagged object

    """
    data = json.loads(s)
    if not isinstance(data, dict):
        msg = f"Expected JSON object with '{_KIND_KEY}' field"
        raise ValueError(msg)
    return from_builtins(data)
