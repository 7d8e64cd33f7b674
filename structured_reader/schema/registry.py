"""
Reader registry.

A ReaderSet maps type names to reader factories. Every builder resolves the
type names it is given through the ReaderSet it was created with, and passes
that same set down to nested declarations. There is no global mutable
registry: extending a set returns a new one and leaves the original intact.

Factories are called as factory(reader_set, *args, **kwargs) and return a
Reader. The built-in set knows:

    null, literal, string, time, number, boolean, raw,
    object, array, collection, one_of, custom

Usage:
    ```python
    from structured_reader.schema.registry import DEFAULT_READER_SET

    def score(fragment, traversal):
        if isinstance(fragment, int) and 1 <= fragment <= 10:
            return traversal.accept(fragment)
        return traversal.flunk(fragment, "must be a number from 1 to 10")

    def dimensions(d):
        d.number("width")
        d.number("height")

    def types(r):
        r.custom("score", score)
        r.object("dimensions", dimensions)

    readers = DEFAULT_READER_SET.extend(types)
    readers.has_reader("score")  # True
    DEFAULT_READER_SET.has_reader("score")  # False
    ```
"""

import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from structured_reader.exceptions import DeclarationError
from structured_reader.schema.builder import (
    ArrayBuilder,
    Declaration,
    ObjectBuilder,
    OneOfBuilder,
    declare_array,
    declare_object,
    declare_one_of,
)
from structured_reader.schema.types import (
    ArrayReader,
    BooleanReader,
    CustomReader,
    LiteralReader,
    NullReader,
    NumberReader,
    OneOfReader,
    RawReader,
    Reader,
    StringReader,
    TimeReader,
)

logger = logging.getLogger(__name__)

ReaderFactory = Callable[..., Reader]


class ReaderSet:
    """
    Immutable mapping from type name to reader factory.

    Attributes:
        type_names: Registered type names, in registration order
    """

    def __init__(self, factories: Optional[Mapping[str, ReaderFactory]] = None):
        self._factories = MappingProxyType(dict(factories if factories is not None else BUILTIN_FACTORIES))

    @property
    def type_names(self) -> Tuple[str, ...]:
        return tuple(self._factories)

    def has_reader(self, type_name: str) -> bool:
        return type_name in self._factories

    def reader(self, type_name: str, *args: Any, nullable: bool = False, **kwargs: Any) -> Reader:
        """
        Build a reader for a type name.

        Args:
            type_name: Registered type name
            *args: Positional arguments for the factory (e.g. a declaring function)
            nullable: Also accept null, by wrapping the reader in a one_of
            **kwargs: Keyword arguments for the factory (e.g. strict=True, of="string")

        Returns:
            Reader: The frozen reader

        Raises:
            DeclarationError: If the type name is not registered or the
                declaration is malformed
        """
        factory = self._factories.get(type_name)
        if factory is None:
            raise DeclarationError(f"unknown reader type {type_name!r}")

        reader = factory(self, *args, **kwargs)
        if nullable:
            return OneOfReader(options=(NullReader(), reader))
        return reader

    def extend(self, declare: Callable[["ReaderSetBuilder"], Any]) -> "ReaderSet":
        """
        Return a new ReaderSet with additional types.

        Args:
            declare: Function receiving a ReaderSetBuilder

        Returns:
            ReaderSet: A new set; this one is unchanged
        """
        builder = ReaderSetBuilder(self)
        declare(builder)
        return builder.build()

    def __contains__(self, type_name: str) -> bool:
        return self.has_reader(type_name)

    def __repr__(self) -> str:
        return f"ReaderSet({', '.join(self._factories)})"


class ReaderSetBuilder:
    """
    Registers custom types on top of a base ReaderSet.

    Registrations are visible to the ones that follow, so an alias may be
    declared in terms of an earlier alias. Aliased readers are built at
    registration time: a malformed alias fails here, not at first use.
    """

    def __init__(self, base: ReaderSet):
        self._factories: Dict[str, ReaderFactory] = dict(base._factories)
        self._current = base

    @property
    def reader_set(self) -> ReaderSet:
        """The set as registered so far."""
        return self._current

    def register(self, type_name: str, factory: ReaderFactory) -> "ReaderSetBuilder":
        """
        Register a factory under a new type name.

        Raises:
            DeclarationError: If the name is malformed, already registered, or
                would be hidden by a builder method of the same name
        """
        if not isinstance(type_name, str) or not type_name.isidentifier() or type_name.startswith("_"):
            raise DeclarationError(f"reader type name {type_name!r} must be a public identifier")
        if type_name in self._factories:
            raise DeclarationError(f"reader type {type_name!r} is already registered")
        if any(hasattr(builder, type_name) for builder in (ObjectBuilder, ArrayBuilder, OneOfBuilder)):
            raise DeclarationError(f"reader type {type_name!r} clashes with a builder method")
        if not callable(factory):
            raise DeclarationError(f"factory for {type_name!r} must be callable")

        self._factories[type_name] = factory
        self._current = ReaderSet(self._factories)
        logger.debug(f"Registered reader type {type_name!r}")
        return self

    def define(self, type_name: str, base_type: str, *args: Any, **kwargs: Any) -> "ReaderSetBuilder":
        """
        Register a prebuilt reader declared with an existing type.

        Example:
            ```python
            r.define("tags", "array", of="string")
            ```
        """
        return self.register(type_name, _prebuilt(self._current.reader(base_type, *args, **kwargs)))

    def custom(self, type_name: str, callback: Callable[..., Any]) -> "ReaderSetBuilder":
        """Register a callback reader; see CustomReader for the contract."""
        return self.register(type_name, _prebuilt(CustomReader(callback)))

    def object(self, type_name: str, declare: Declaration, strict: bool = False) -> "ReaderSetBuilder":
        """Register a named object schema. Its records are named after the type."""
        reader = declare_object(self._current, declare, strict=strict, name=_record_name(type_name))
        return self.register(type_name, _prebuilt(reader))

    def build(self) -> ReaderSet:
        return ReaderSet(self._factories)


def _prebuilt(reader: Reader) -> ReaderFactory:
    def factory(reader_set: ReaderSet) -> Reader:
        return reader

    return factory


def _record_name(type_name: str) -> str:
    return "".join(part.capitalize() for part in type_name.split("_") if part) or "Record"


# Built-in factories

_MISSING = object()


def _scalar(reader_type: type) -> ReaderFactory:
    def factory(reader_set: ReaderSet) -> Reader:
        return reader_type()

    return factory


def _literal(reader_set: ReaderSet, value: Any = _MISSING) -> Reader:
    if value is _MISSING:
        raise DeclarationError("literal needs a value=")
    return LiteralReader(value)


def _object(reader_set: ReaderSet, declare: Declaration = None, strict: bool = False) -> Reader:
    return declare_object(reader_set, declare, strict=strict)


def _array(reader_set: ReaderSet, declare: Optional[Declaration] = None, of: Optional[str] = None) -> Reader:
    return declare_array(reader_set, declare, of=of)


def _collection(reader_set: ReaderSet, declare: Declaration = None, strict: bool = False) -> Reader:
    return ArrayReader(member=declare_object(reader_set, declare, strict=strict))


def _one_of(reader_set: ReaderSet, declare: Declaration = None) -> Reader:
    return declare_one_of(reader_set, declare)


def _custom(reader_set: ReaderSet, callback: Callable[..., Any] = None) -> Reader:
    return CustomReader(callback)


BUILTIN_FACTORIES: Mapping[str, ReaderFactory] = MappingProxyType({
    "null": _scalar(NullReader),
    "literal": _literal,
    "string": _scalar(StringReader),
    "time": _scalar(TimeReader),
    "number": _scalar(NumberReader),
    "boolean": _scalar(BooleanReader),
    "raw": _scalar(RawReader),
    "object": _object,
    "array": _array,
    "collection": _collection,
    "one_of": _one_of,
    "custom": _custom,
})

DEFAULT_READER_SET = ReaderSet(BUILTIN_FACTORIES)
