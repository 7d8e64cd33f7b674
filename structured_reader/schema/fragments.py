"""
Classification of decoded fragments.

A fragment is any node of a decoded document. Readers never test Python types
directly; they compare the FragmentKind returned by kind_of(), which keeps the
JSON view of the data in one place (booleans are not numbers, strings are not
arrays).
"""

from collections.abc import Mapping
from enum import Enum
from numbers import Number
from typing import Any


class FragmentKind(Enum):
    """Kinds of decoded fragments. Values are the names used in messages."""

    NULL = "null"
    BOOLEAN = "Boolean"
    NUMBER = "Number"
    STRING = "String"
    ARRAY = "Array"
    OBJECT = "Object"
    UNKNOWN = "unknown value"

    @property
    def is_scalar(self) -> bool:
        return self in _SCALARS


_SCALARS = frozenset({FragmentKind.NULL, FragmentKind.BOOLEAN, FragmentKind.NUMBER, FragmentKind.STRING})


def kind_of(fragment: Any) -> FragmentKind:
    """
    Classify a decoded fragment.

    Args:
        fragment: Any value produced by a JSON decoder (or an equivalent tree)

    Returns:
        FragmentKind: The kind of the fragment

    Example:
        ```python
        kind_of(True)        # FragmentKind.BOOLEAN
        kind_of(1.5)         # FragmentKind.NUMBER
        kind_of({"a": 1})    # FragmentKind.OBJECT
        ```
    """
    if fragment is None:
        return FragmentKind.NULL
    # bool is a subclass of int, so it must be tested first
    if isinstance(fragment, bool):
        return FragmentKind.BOOLEAN
    if isinstance(fragment, Number):
        return FragmentKind.NUMBER
    if isinstance(fragment, str):
        return FragmentKind.STRING
    if isinstance(fragment, (list, tuple)):
        return FragmentKind.ARRAY
    if isinstance(fragment, Mapping):
        return FragmentKind.OBJECT
    return FragmentKind.UNKNOWN


def describe(fragment: Any) -> str:
    """Describe a fragment for error messages, e.g. "a Number" or "null"."""
    kind = kind_of(fragment)
    if kind in (FragmentKind.NULL, FragmentKind.UNKNOWN):
        return kind.value
    article = "an" if kind.value[0] in "AEIOU" else "a"
    return f"{article} {kind.value}"
