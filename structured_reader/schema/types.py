"""
Reader type definitions.

A reader is an immutable schema node describing how to read one fragment of a
decoded document. Readers are assembled into trees by the builders in
structured_reader.schema.builder and are frozen once built, so a tree can be
shared freely between threads and calls.

Type Hierarchy:
    Reader (abstract)
    ├── NullReader: null (or a missing key)
    ├── LiteralReader: one exact scalar value
    ├── StringReader: strings
    │   └── TimeReader: ISO-8601 strings converted to datetime
    ├── NumberReader: integers and floats, never booleans
    ├── BooleanReader: true / false
    ├── RawReader: anything, returned untouched
    ├── ObjectReader: mappings read into frozen records
    ├── ArrayReader: sequences of one member type
    ├── OneOfReader: first matching option of several
    └── CustomReader: user callback

Every reader implements read(fragment, traversal). Success and failure are
reported through traversal.accept() and traversal.flunk(); whether a failure
raises, is recorded, or is ignored depends on the traversal strategy.
"""

import json
import keyword
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, make_dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Tuple

from structured_reader.exceptions import DeclarationError
from structured_reader.schema.fragments import FragmentKind, kind_of
from structured_reader.traversal.path import FieldSegment, IndexSegment

if TYPE_CHECKING:
    from structured_reader.traversal.strategies import Traversal


@dataclass(frozen=True)
class Reader(ABC):
    """
    Abstract base class for all readers.
    """

    @abstractmethod
    def read(self, fragment: Any, traversal: "Traversal") -> Any:
        """
        Read a fragment.

        Args:
            fragment: The decoded fragment at traversal.path
            traversal: Strategy deciding what acceptance and failure mean

        Returns:
            Whatever traversal.accept() or traversal.flunk() returned
        """
        pass


@dataclass(frozen=True)
class NullReader(Reader):
    """Accepts only null. A key missing from a mapping reads as null."""

    def read(self, fragment: Any, traversal: "Traversal") -> Any:
        if kind_of(fragment) is FragmentKind.NULL:
            return traversal.accept(None)
        return traversal.flunk(fragment, "expected null")


@dataclass(frozen=True)
class LiteralReader(Reader):
    """
    Accepts exactly one scalar value.

    The fragment must have the same kind as the literal and compare equal to
    it, so True never matches 1 and "1" never matches 1.

    Attributes:
        value: The expected null, boolean, number or string
    """

    value: Any = None

    def __post_init__(self):
        if not kind_of(self.value).is_scalar:
            raise DeclarationError(f"literal value must be a scalar, got {self.value!r}")

    def read(self, fragment: Any, traversal: "Traversal") -> Any:
        if kind_of(fragment) is kind_of(self.value) and fragment == self.value:
            return traversal.accept(self.value)
        return traversal.flunk(fragment, f"expected the literal {json.dumps(self.value)}")


@dataclass(frozen=True)
class StringReader(Reader):
    """Accepts strings. Subclasses may convert the text via convert()."""

    def read(self, fragment: Any, traversal: "Traversal") -> Any:
        if kind_of(fragment) is FragmentKind.STRING:
            return self.convert(fragment, traversal)
        return traversal.flunk(fragment, "expected a String")

    def convert(self, fragment: str, traversal: "Traversal") -> Any:
        return traversal.accept(fragment)


@dataclass(frozen=True)
class TimeReader(StringReader):
    """Accepts ISO-8601 date/time strings and produces datetime objects."""

    def convert(self, fragment: str, traversal: "Traversal") -> Any:
        try:
            parsed = datetime.fromisoformat(fragment)
        except ValueError:
            return traversal.flunk(fragment, "could not be converted to a datetime")
        return traversal.accept(parsed)


@dataclass(frozen=True)
class NumberReader(Reader):
    """Accepts integers and floats, preserving which one it was."""

    def read(self, fragment: Any, traversal: "Traversal") -> Any:
        if kind_of(fragment) is FragmentKind.NUMBER:
            return traversal.accept(fragment)
        return traversal.flunk(fragment, "expected a Number")


@dataclass(frozen=True)
class BooleanReader(Reader):
    def read(self, fragment: Any, traversal: "Traversal") -> Any:
        if kind_of(fragment) is FragmentKind.BOOLEAN:
            return traversal.accept(fragment)
        return traversal.flunk(fragment, "expected a Boolean")


@dataclass(frozen=True)
class RawReader(Reader):
    """Accepts anything and returns it without looking inside."""

    def read(self, fragment: Any, traversal: "Traversal") -> Any:
        return traversal.accept(fragment)


@dataclass(frozen=True)
class Field:
    """
    One declared field of an ObjectReader.

    Attributes:
        name: Attribute name on the produced record
        key: Key looked up in the input mapping
        reader: Reader for the value under that key
    """

    name: str
    key: str
    reader: Reader


@dataclass(frozen=True)
class ObjectReader(Reader):
    """
    Reads a mapping into a frozen record with one attribute per field.

    Example declaration:
        ```python
        ObjectReader(
            fields=(
                Field("kind", "widgetType", StringReader()),
                Field("price", "price", NumberReader()),
            ),
            strict=True,
        )
        ```

    Fields are read in declaration order. Keys that are not declared are
    ignored unless strict is set, in which case they produce a single error
    listing every excess key. The excess-key check runs after all fields, so
    a collecting traversal reports both kinds of error together.

    Attributes:
        fields: Declared fields, at least one
        strict: Reject keys that no field reads
        name: Class name of the produced records
        record_type: Frozen dataclass built from the field names
    """

    fields: Tuple[Field, ...] = ()
    strict: bool = False
    name: str = "Record"
    record_type: type = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.fields:
            raise DeclarationError("must define at least one field to read")

        seen = set()
        for declared in self.fields:
            if not declared.name.isidentifier() or keyword.iskeyword(declared.name):
                raise DeclarationError(f"field name {declared.name!r} is not a valid identifier")
            if declared.name in seen:
                raise DeclarationError(f"field {declared.name!r} is declared more than once")
            seen.add(declared.name)

        record_type = make_dataclass(
            self.name,
            [(declared.name, Any) for declared in self.fields],
            frozen=True,
        )
        # Frozen dataclass: assign through object.__setattr__
        object.__setattr__(self, "record_type", record_type)

    @property
    def keys(self) -> Tuple[str, ...]:
        return tuple(declared.key for declared in self.fields)

    def read(self, fragment: Any, traversal: "Traversal") -> Any:
        if kind_of(fragment) is not FragmentKind.OBJECT:
            return traversal.flunk(fragment, "expected an Object")

        values = {}
        for declared in self.fields:
            values[declared.name] = traversal.descend(
                FieldSegment(declared.key), declared.reader, fragment.get(declared.key)
            )

        if self.strict:
            declared_keys = set(self.keys)
            excess = [key for key in fragment if key not in declared_keys]
            if excess:
                return traversal.flunk(fragment, f"found strictly forbidden keys {excess}")

        return traversal.accept(self.record_type(**values))


@dataclass(frozen=True)
class ArrayReader(Reader):
    """
    Reads a sequence whose members all match one reader.

    Produces a list with the same length and order as the input.

    Attributes:
        member: Reader applied to every element
    """

    member: Reader = None

    def __post_init__(self):
        if self.member is None:
            raise DeclarationError("array must have a member type")

    def read(self, fragment: Any, traversal: "Traversal") -> Any:
        if kind_of(fragment) is not FragmentKind.ARRAY:
            return traversal.flunk(fragment, "expected an Array")

        return traversal.accept([
            traversal.descend(IndexSegment(index), self.member, element)
            for index, element in enumerate(fragment)
        ])


@dataclass(frozen=True)
class OneOfReader(Reader):
    """
    Reads a fragment with the first option that matches it.

    Each option is first tried against a disposable collecting traversal. The
    first option whose trial has no errors is read again with the real
    traversal, so raising, recording and selecting happen exactly once and
    only for the winning option. Declaration order decides ties; put the most
    specific and cheapest-to-reject options first.

    Attributes:
        options: Candidate readers in priority order, at least one
    """

    options: Tuple[Reader, ...] = ()

    def __post_init__(self):
        if not self.options:
            raise DeclarationError("must define at least one option")

    def read(self, fragment: Any, traversal: "Traversal") -> Any:
        for option in self.options:
            trial = traversal.trial()
            option.read(fragment, trial)
            if not trial.errors:
                return option.read(fragment, traversal)

        return traversal.flunk(fragment, "was not any of the expected options")


ReadCallback = Callable[[Any, "Traversal"], Any]


@dataclass(frozen=True)
class CustomReader(Reader):
    """
    Delegates reading to a callback.

    The callback receives (fragment, traversal) and must return the result of
    exactly one call to traversal.accept() or traversal.flunk().

    Example:
        ```python
        def score(fragment, traversal):
            if isinstance(fragment, int) and 1 <= fragment <= 10:
                return traversal.accept(fragment)
            return traversal.flunk(fragment, "must be a number from 1 to 10")

        reader = CustomReader(score)
        ```
    """

    callback: ReadCallback = None

    def __post_init__(self):
        if not callable(self.callback):
            raise DeclarationError("custom reader needs a callable")

    def read(self, fragment: Any, traversal: "Traversal") -> Any:
        return self.callback(fragment, traversal)
