"""
Declaration document parser - builds reader trees from JSON-compatible dicts.

Reader trees are normally declared in Python with builder functions. This
module accepts the same declarations written as data, so a schema can live in
a JSON file next to the documents it describes (this is what the CLI uses).
It drives the builders, so every declaration rule applies unchanged.

Declaration format:
    ```json
    {
        "type": "object",
        "strict": false,
        "types": {
            "dimensions": {"type": "object", "fields": [
                {"name": "width", "type": "number"},
                {"name": "height", "type": "number"}
            ]}
        },
        "fields": [
            {"name": "kind", "key": "widgetType", "type": "string"},
            {"name": "tags", "type": "array", "of": "string"},
            {"name": "size", "type": "dimensions", "nullable": true},
            {"name": "id", "type": "one_of", "options": [{"type": "string"}, {"type": "number"}]},
            {"name": "flags", "type": "array", "member": {"type": "literal", "value": true}}
        ]
    }
    ```

Usage:
    ```python
    from structured_reader.schema import parse_schema

    reader = parse_schema({"type": "object", "fields": [{"name": "a", "type": "string"}]})
    ```
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from structured_reader.exceptions import DeclarationError
from structured_reader.schema.builder import Builder
from structured_reader.schema.registry import DEFAULT_READER_SET, ReaderSet, ReaderSetBuilder
from structured_reader.schema.types import Reader

NODE_KEYS = frozenset({"type", "name", "key", "nullable", "strict", "fields", "of", "member", "options", "value"})
ROOT_KEYS = NODE_KEYS | {"types"}


def parse_schema(declaration: Dict[str, Any], reader_set: Optional[ReaderSet] = None) -> Reader:
    """
    Parse a declaration document into a reader tree.

    Args:
        declaration: Declaration dict (see module docstring)
        reader_set: Registry to resolve type names with; custom callback types
            must be registered here since callbacks cannot be written as data

    Returns:
        Reader: Root of the frozen reader tree

    Raises:
        DeclarationError: If the declaration is malformed

    Example:
        ```python
        reader = parse_schema({"type": "array", "of": "number"})
        ```
    """
    if not isinstance(declaration, dict):
        raise DeclarationError(f"declaration must be an object, got {type(declaration).__name__}")

    reader_set = reader_set if reader_set is not None else DEFAULT_READER_SET
    _check_keys(declaration, ROOT_KEYS)

    # Options a type does not take (e.g. "strict" on a string) surface as
    # TypeError from its factory
    try:
        types = declaration.get("types")
        if types:
            reader_set = reader_set.extend(lambda r: _register_types(r, types))

        type_name, args, kwargs = _translate({k: v for k, v in declaration.items() if k != "types"})
        return reader_set.reader(type_name, *args, **kwargs)
    except TypeError as e:
        raise DeclarationError(f"invalid declaration: {e}") from e


def load_schema_file(schema_path: Union[str, Path], reader_set: Optional[ReaderSet] = None) -> Reader:
    """
    Load a declaration document from a JSON file and parse it.

    Args:
        schema_path: Path to the declaration file
        reader_set: Registry to resolve type names with

    Returns:
        Reader: Root of the frozen reader tree

    Raises:
        ValueError: If the file doesn't exist or isn't valid JSON
        DeclarationError: If the declaration is malformed
    """
    schema_path = Path(schema_path)
    if not schema_path.exists():
        raise ValueError(f"Schema file not found: {schema_path}")

    try:
        with open(schema_path) as f:
            declaration = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in schema file: {e}")

    return parse_schema(declaration, reader_set)


def _register_types(builder: ReaderSetBuilder, types: Dict[str, Any]) -> None:
    if not isinstance(types, dict):
        raise DeclarationError("types must be an object mapping names to declarations")

    for type_name, node in types.items():
        _check_node(node)
        base_type, args, kwargs = _translate(node)
        builder.define(type_name, base_type, *args, **kwargs)


def _translate(node: Dict[str, Any]) -> Tuple[str, List[Any], Dict[str, Any]]:
    """
    Translate one declaration node into a builder call.

    Returns:
        Tuple of (type_name, args, kwargs) for ReaderSet.reader()
    """
    type_name = node["type"]
    args: List[Any] = []
    kwargs: Dict[str, Any] = {}

    if "fields" in node:
        args.append(_fields_declaration(node["fields"]))
    if "member" in node:
        args.append(_member_declaration(node["member"]))
    if "options" in node:
        args.append(_options_declaration(node["options"]))

    for option in ("of", "strict", "nullable", "value"):
        if option in node:
            kwargs[option] = node[option]

    return type_name, args, kwargs


def _fields_declaration(fields: List[Dict[str, Any]]) -> Callable[[Builder], None]:
    if not isinstance(fields, list):
        raise DeclarationError("fields must be a list")
    for node in fields:
        _check_node(node)
        if "name" not in node:
            raise DeclarationError(f"field declaration is missing a name: {node}")

    def declare(builder: Builder) -> None:
        for node in fields:
            type_name, args, kwargs = _translate(node)
            if node.get("key") is not None:
                kwargs["key"] = node["key"]
            builder.add(type_name, node["name"], *args, **kwargs)

    return declare


def _member_declaration(member: Dict[str, Any]) -> Callable[[Builder], None]:
    _check_node(member)

    def declare(builder: Builder) -> None:
        type_name, args, kwargs = _translate(member)
        builder.add(type_name, *args, **kwargs)

    return declare


def _options_declaration(options: List[Dict[str, Any]]) -> Callable[[Builder], None]:
    if not isinstance(options, list):
        raise DeclarationError("options must be a list")
    for node in options:
        _check_node(node)

    def declare(builder: Builder) -> None:
        for node in options:
            type_name, args, kwargs = _translate(node)
            builder.add(type_name, *args, **kwargs)

    return declare


def _check_node(node: Any) -> None:
    if not isinstance(node, dict):
        raise DeclarationError(f"declaration must be an object, got {node!r}")
    _check_keys(node, NODE_KEYS)


def _check_keys(node: Dict[str, Any], allowed: frozenset) -> None:
    if "type" not in node:
        raise DeclarationError(f"declaration is missing a type: {node}")

    unknown = sorted(set(node) - allowed)
    if unknown:
        raise DeclarationError(f"unknown declaration keys {unknown} in {node}")
