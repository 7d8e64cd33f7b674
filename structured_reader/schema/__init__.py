"""
Schema declaration module.

This module holds the reader tree (the schema), the registry that maps type
names to readers, and the builders schema authors use to declare trees.

Components:
    - fragments: Classification of decoded fragments (FragmentKind)
    - types: Reader definitions (ObjectReader, ArrayReader, OneOfReader, ...)
    - builder: Object/Array/OneOf builders used by declaring functions
    - registry: ReaderSet, the explicit type-name registry
    - parser: Build reader trees from declaration documents (dicts / JSON files)

Example:
    ```python
    from structured_reader.schema import DEFAULT_READER_SET, declare_object

    def person(p):
        p.string("first_name")
        p.string("last_name")

    reader = declare_object(DEFAULT_READER_SET, person)

    # Or from a declaration document
    from structured_reader.schema import parse_schema
    reader = parse_schema({"type": "object", "fields": [{"name": "first_name", "type": "string"}]})
    ```
"""

from structured_reader.schema.builder import (
    ArrayBuilder,
    ObjectBuilder,
    OneOfBuilder,
    declare_array,
    declare_object,
    declare_one_of,
)
from structured_reader.schema.fragments import FragmentKind, kind_of
from structured_reader.schema.parser import load_schema_file, parse_schema
from structured_reader.schema.registry import DEFAULT_READER_SET, ReaderSet, ReaderSetBuilder
from structured_reader.schema.types import (
    ArrayReader,
    BooleanReader,
    CustomReader,
    Field,
    LiteralReader,
    NullReader,
    NumberReader,
    ObjectReader,
    OneOfReader,
    RawReader,
    Reader,
    StringReader,
    TimeReader,
)

__all__ = [
    "ArrayBuilder",
    "ObjectBuilder",
    "OneOfBuilder",
    "declare_array",
    "declare_object",
    "declare_one_of",
    "FragmentKind",
    "kind_of",
    "load_schema_file",
    "parse_schema",
    "DEFAULT_READER_SET",
    "ReaderSet",
    "ReaderSetBuilder",
    "ArrayReader",
    "BooleanReader",
    "CustomReader",
    "Field",
    "LiteralReader",
    "NullReader",
    "NumberReader",
    "ObjectReader",
    "OneOfReader",
    "RawReader",
    "Reader",
    "StringReader",
    "TimeReader",
]
