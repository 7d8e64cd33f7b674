"""
structured_reader: Typed Reading and Validation of Loosely-Typed JSON

structured_reader turns decoded JSON (or any tree of mappings, sequences and
scalars) into typed records according to a declared schema, or reports
exactly where and why the data does not fit.

Key Features:
    - Schemas declared once with plain Python functions, then frozen
    - read(): typed records, or WrongTypeError with the failing path
    - validate(): every error in one pass, in schema order
    - select(): pick a value by glob path such as ".widgets[*].price"
    - Unions, nullable fields, strict objects, custom readers and named types

Quick Start:
    ```python
    import structured_reader

    def widget(w):
        w.string("kind", key="widgetType")
        w.number("price")
        w.string("description", nullable=True)
        w.array("tags", of="string")

    def document(o):
        o.collection("widgets", widget)

    reader = structured_reader.json(document)

    result = reader.read('{"widgets": [{"widgetType": "squorzit", "price": 99.99, "tags": []}]}')
    print(result.widgets[0].kind)  # "squorzit"

    report = reader.validate({"widgets": [{"price": "free"}]})
    print(report.errors)
    # [('.widgets[0].widgetType', 'expected a String'),
    #  ('.widgets[0].price', 'expected a Number'),
    #  ('.widgets[0].tags', 'expected an Array')]
    ```

Architecture:
    1. Builders: declaring functions -> frozen reader tree (schema)
    2. ReaderSet: explicit registry of type names, extendable per scope
    3. Readers: one read(fragment, traversal) per node type
    4. Traversals: Throwing / Collecting / Selecting effect policies
"""

__version__ = "0.1.0"

from structured_reader.api import json, reader_set  # noqa: F401
from structured_reader.exceptions import DeclarationError, Error, WrongTypeError  # noqa: F401
from structured_reader.reader import JSONReader  # noqa: F401
from structured_reader.validation.validator import ValidationError, ValidationResult  # noqa: F401

__all__ = [
    "json",
    "reader_set",
    "JSONReader",
    "Error",
    "DeclarationError",
    "WrongTypeError",
    "ValidationError",
    "ValidationResult",
]
