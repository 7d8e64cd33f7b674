"""
Declaration builders.

Schema authors describe a reader tree with plain functions that receive a
builder and declare fields, members or options on it. The builder resolves
every type name through an explicit ReaderSet and produces a frozen reader
once the declaring function returns.

Usage:
    ```python
    from structured_reader.schema.builder import declare_object
    from structured_reader.schema.registry import DEFAULT_READER_SET

    def dimensions(d):
        d.number("width")
        d.number("height")

    def widget(w):
        w.string("kind", key="widgetType")
        w.array("tags", of="string")
        w.object("dimensions", dimensions, nullable=True)

    reader = declare_object(DEFAULT_READER_SET, widget)
    ```

Custom type names registered in the ReaderSet are available as methods too:
``w.score("rank")`` is the same as ``w.add("score", "rank")``.
"""

import functools
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, List, Optional

from structured_reader.exceptions import DeclarationError
from structured_reader.schema.types import ArrayReader, Field, ObjectReader, OneOfReader, Reader

if TYPE_CHECKING:
    from structured_reader.schema.registry import ReaderSet


class Builder(ABC):
    """
    Shared declaration surface of all composite builders.

    Subclasses decide what a declaration means (a field, the array member,
    one more option) by implementing add().
    """

    def __init__(self, reader_set: "ReaderSet"):
        self._reader_set = reader_set

    @property
    def reader_set(self) -> "ReaderSet":
        return self._reader_set

    @abstractmethod
    def add(self, type_name: str, *args: Any, **kwargs: Any) -> "Builder":
        pass

    def _build(self, type_name: str, *args: Any, **kwargs: Any) -> Reader:
        return self._reader_set.reader(type_name, *args, **kwargs)

    def __getattr__(self, type_name: str) -> Callable[..., "Builder"]:
        if type_name.startswith("_") or not self._reader_set.has_reader(type_name):
            raise AttributeError(f"unknown reader type {type_name!r}")
        return functools.partial(self.add, type_name)

    # Built-in types

    def null(self, *args: Any, **kwargs: Any) -> "Builder":
        return self.add("null", *args, **kwargs)

    def literal(self, *args: Any, **kwargs: Any) -> "Builder":
        return self.add("literal", *args, **kwargs)

    def string(self, *args: Any, **kwargs: Any) -> "Builder":
        return self.add("string", *args, **kwargs)

    def time(self, *args: Any, **kwargs: Any) -> "Builder":
        return self.add("time", *args, **kwargs)

    def number(self, *args: Any, **kwargs: Any) -> "Builder":
        return self.add("number", *args, **kwargs)

    def boolean(self, *args: Any, **kwargs: Any) -> "Builder":
        return self.add("boolean", *args, **kwargs)

    def raw(self, *args: Any, **kwargs: Any) -> "Builder":
        return self.add("raw", *args, **kwargs)

    def object(self, *args: Any, **kwargs: Any) -> "Builder":
        return self.add("object", *args, **kwargs)

    def array(self, *args: Any, **kwargs: Any) -> "Builder":
        return self.add("array", *args, **kwargs)

    def collection(self, *args: Any, **kwargs: Any) -> "Builder":
        return self.add("collection", *args, **kwargs)

    def one_of(self, *args: Any, **kwargs: Any) -> "Builder":
        return self.add("one_of", *args, **kwargs)

    def custom(self, *args: Any, **kwargs: Any) -> "Builder":
        return self.add("custom", *args, **kwargs)


class ObjectBuilder(Builder):
    """
    Declares the fields of an object.

    Every declaration names the result attribute first; the input key
    defaults to the same name and can be overridden with key=.

    Example:
        ```python
        o.string("next_url", key="nextUrl", nullable=True)
        o.literal("type", value="square")
        o.object("pagination", pagination, strict=True)
        ```
    """

    def __init__(self, reader_set: "ReaderSet"):
        super().__init__(reader_set)
        self._fields: List[Field] = []

    def add(self, type_name: str, name: str, *args: Any, key: Optional[str] = None, **kwargs: Any) -> "ObjectBuilder":
        reader = self._build(type_name, *args, **kwargs)
        self._fields.append(Field(name, key if key is not None else name, reader))
        return self

    field = add

    def build(self, strict: bool = False, name: str = "Record") -> ObjectReader:
        return ObjectReader(fields=tuple(self._fields), strict=strict, name=name)


class ArrayBuilder(Builder):
    """Declares the single member type of an array."""

    def __init__(self, reader_set: "ReaderSet"):
        super().__init__(reader_set)
        self._member: Optional[Reader] = None

    def add(self, type_name: str, *args: Any, **kwargs: Any) -> "ArrayBuilder":
        if self._member is not None:
            raise DeclarationError("array may only declare one member type")
        self._member = self._build(type_name, *args, **kwargs)
        return self

    member = add

    def build(self) -> ArrayReader:
        return ArrayReader(member=self._member)


class OneOfBuilder(Builder):
    """Declares the options of a one_of, in priority order."""

    def __init__(self, reader_set: "ReaderSet"):
        super().__init__(reader_set)
        self._options: List[Reader] = []

    def add(self, type_name: str, *args: Any, **kwargs: Any) -> "OneOfBuilder":
        self._options.append(self._build(type_name, *args, **kwargs))
        return self

    option = add

    def build(self) -> OneOfReader:
        return OneOfReader(options=tuple(self._options))


Declaration = Callable[[Builder], Any]


def declare_object(
    reader_set: "ReaderSet",
    declare: Declaration,
    strict: bool = False,
    name: str = "Record",
) -> ObjectReader:
    """
    Build an ObjectReader from a declaring function.

    Args:
        reader_set: Registry used to resolve the declared type names
        declare: Function receiving an ObjectBuilder
        strict: Reject undeclared keys
        name: Class name of the produced records

    Returns:
        ObjectReader: The frozen reader

    Raises:
        DeclarationError: If no field was declared or a type name is unknown
    """
    if not callable(declare):
        raise DeclarationError("object needs a declaring function")
    builder = ObjectBuilder(reader_set)
    declare(builder)
    return builder.build(strict=strict, name=name)


def declare_array(
    reader_set: "ReaderSet",
    declare: Optional[Declaration] = None,
    of: Optional[str] = None,
) -> ArrayReader:
    """
    Build an ArrayReader from a declaring function or a member type name.

    Args:
        reader_set: Registry used to resolve the declared type names
        declare: Function receiving an ArrayBuilder
        of: Shorthand member type name, e.g. "string"

    Returns:
        ArrayReader: The frozen reader

    Raises:
        DeclarationError: If both or neither of declare/of are given
    """
    if declare is not None and of is not None:
        raise DeclarationError("array takes either a declaring function or of=, not both")

    builder = ArrayBuilder(reader_set)
    if declare is not None:
        declare(builder)
    elif of is not None:
        builder.add(of)
    return builder.build()


def declare_one_of(reader_set: "ReaderSet", declare: Declaration) -> OneOfReader:
    """Build a OneOfReader from a declaring function."""
    if not callable(declare):
        raise DeclarationError("one_of needs a declaring function")
    builder = OneOfBuilder(reader_set)
    declare(builder)
    return builder.build()
