"""
High-level Python API for structured_reader.

This module provides the user-facing declaration entry points.
"""

from typing import Any, Callable, Optional

from structured_reader.reader import JSONReader
from structured_reader.schema.builder import Declaration
from structured_reader.schema.registry import DEFAULT_READER_SET, ReaderSet, ReaderSetBuilder
from structured_reader.traversal.strategies import DEFAULT_MAX_DEPTH


def json(
    declare: Optional[Declaration] = None,
    *,
    root: str = "object",
    reader_set: Optional[ReaderSet] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
    **kwargs: Any,
) -> JSONReader:
    """
    Declare a reader for JSON documents.

    Args:
        declare: Declaring function for the root (receives a builder)
        root: Type name of the root reader ("object", "array", "collection",
            "one_of" or a registered alias)
        reader_set: Registry to resolve type names with
        max_depth: Deepest path a traversal may reach
        **kwargs: Options for the root type (strict=True, of="string", ...)

    Returns:
        JSONReader: Reader ready for read(), validate() and select()

    Raises:
        DeclarationError: If the declaration is malformed

    Example:
        ```python
        import structured_reader

        def shapes(a):
            a.one_of(shape)

        def shape(s):
            s.object(square)
            s.object(circle)

        def square(sq):
            sq.literal("type", value="square")
            sq.number("length")

        def circle(c):
            c.literal("type", value="circle")
            c.number("diameter")

        reader = structured_reader.json(shapes, root="array")
        result = reader.read('[{"type": "circle", "diameter": 4}]')
        print(result[0].diameter)  # 4
        ```
    """
    reader_set = reader_set if reader_set is not None else DEFAULT_READER_SET

    args = (declare,) if declare is not None else ()
    return JSONReader(reader_set.reader(root, *args, **kwargs), max_depth=max_depth)


def reader_set(
    declare: Optional[Callable[[ReaderSetBuilder], Any]] = None,
    base: Optional[ReaderSet] = None,
) -> ReaderSet:
    """
    Create a ReaderSet with custom types and object aliases.

    Args:
        declare: Function receiving a ReaderSetBuilder
        base: Set to extend (defaults to the built-in types)

    Returns:
        ReaderSet: The new, immutable set

    Example:
        ```python
        def types(r):
            r.object("package_dimensions", lambda o: (o.number("width"), o.number("weight")))

        readers = structured_reader.reader_set(types)
        reader = structured_reader.json(lambda o: o.package_dimensions("dims"), reader_set=readers)
        ```
    """
    base = base if base is not None else DEFAULT_READER_SET
    if declare is None:
        return base
    return base.extend(declare)
