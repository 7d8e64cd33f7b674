"""
Traversal strategies.

A traversal is passed through every Reader.read() call. Readers report what
they found through two primitives and never decide on their own what a
failure means:

    accept(value)            -> the value to propagate upward
    flunk(fragment, reason)  -> raise, record, or ignore the failure

Strategies:
    ThrowingTraversal: raise WrongTypeError at the first failure (read)
    CollectingTraversal: record every failure and keep going (validate, trials)
    SelectingTraversal: find the first value whose path matches a glob (select)

Descent into children goes through descend(), which scopes a child traversal
to the extended path. Children share the accumulated state of their root
(errors or matches) but never the path.

Example:
    ```python
    from structured_reader.traversal import CollectingTraversal

    traversal = CollectingTraversal()
    reader.read({"first": 1}, traversal)
    print(traversal.errors)  # [ValidationError(path='.first', reason='expected a String'), ...]
    ```
"""

import fnmatch
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, List

from structured_reader.exceptions import WrongTypeError
from structured_reader.schema.fragments import describe
from structured_reader.traversal.path import ROOT, Segment, TraversalPath
from structured_reader.validation.validator import ValidationError

if TYPE_CHECKING:
    from structured_reader.schema.types import Reader

DEFAULT_MAX_DEPTH = 256


class _Absent:
    """Marker returned in place of a value that failed to read."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()


class Traversal(ABC):
    """
    Base class for traversal strategies.

    Attributes:
        path: Path of the fragment currently being read
        max_depth: Deepest path a descend() may reach before it is flunked
    """

    def __init__(self, path: TraversalPath = ROOT, max_depth: int = DEFAULT_MAX_DEPTH):
        self.path = path
        self.max_depth = max_depth

    @property
    def where(self) -> str:
        """Rendered path, "" at the root."""
        return str(self.path)

    @abstractmethod
    def accept(self, value: Any) -> Any:
        """Report a successfully read value and return what to propagate."""
        pass

    @abstractmethod
    def flunk(self, fragment: Any, reason: str) -> Any:
        """Report that the fragment does not match the reader."""
        pass

    @abstractmethod
    def push(self, segment: Segment) -> "Traversal":
        """Return a child traversal scoped to path + segment."""
        pass

    def descend(self, segment: Segment, reader: "Reader", fragment: Any) -> Any:
        """
        Read a child fragment with a child traversal.

        Args:
            segment: Field or index segment leading to the child
            reader: Reader for the child fragment
            fragment: The child fragment

        Returns:
            The value produced for the child
        """
        child = self.push(segment)
        if child.path.depth > self.max_depth:
            return child.flunk(fragment, f"exceeds the maximum nesting depth of {self.max_depth}")
        return reader.read(fragment, child)

    def trial(self) -> "CollectingTraversal":
        """
        Create a disposable traversal for trying a reader without side effects.

        Used by OneOfReader: the trial records errors privately, so an option
        can be rejected without raising, recording or selecting anything on
        this traversal.
        """
        return CollectingTraversal(self.path, max_depth=self.max_depth)


class ThrowingTraversal(Traversal):
    """Raise WrongTypeError at the first failure anywhere in the tree."""

    def accept(self, value: Any) -> Any:
        return value

    def flunk(self, fragment: Any, reason: str) -> Any:
        where = self.where
        raise WrongTypeError(
            f"{reason}, got {describe(fragment)} (at {where or 'root'})",
            path=where,
            reason=reason,
            fragment=fragment,
        )

    def push(self, segment: Segment) -> "ThrowingTraversal":
        return ThrowingTraversal(self.path.push(segment), max_depth=self.max_depth)


class CollectingTraversal(Traversal):
    """
    Record every failure and continue with the siblings.

    Attributes:
        errors: Errors in pre-order traversal order, shared with all children
    """

    def __init__(
        self,
        path: TraversalPath = ROOT,
        max_depth: int = DEFAULT_MAX_DEPTH,
        errors: List[ValidationError] = None,
    ):
        super().__init__(path, max_depth)
        self.errors = errors if errors is not None else []

    def accept(self, value: Any) -> Any:
        return value

    def flunk(self, fragment: Any, reason: str) -> Any:
        self.errors.append(ValidationError(self.where, reason))
        return ABSENT

    def push(self, segment: Segment) -> "CollectingTraversal":
        return CollectingTraversal(self.path.push(segment), max_depth=self.max_depth, errors=self.errors)


class SelectingTraversal(Traversal):
    """
    Find the first value whose rendered path matches a glob pattern.

    Pattern syntax follows fnmatch: "*" matches any run of characters and "?"
    a single character. Square brackets are matched literally because they
    belong to index segments, so ".widgets[*].price" selects the price of the
    first widget that has one.

    Failures are never raised; an invalid fragment is simply not selected.
    Once a match is recorded no further readers are invoked.

    Attributes:
        pattern: Glob pattern over rendered paths
        found: Recorded match (at most one), shared with all children
        failed: Paths that were flunked, shared with all children
    """

    def __init__(
        self,
        pattern: str,
        path: TraversalPath = ROOT,
        max_depth: int = DEFAULT_MAX_DEPTH,
        found: List[Any] = None,
        failed: List[TraversalPath] = None,
    ):
        super().__init__(path, max_depth)
        self.pattern = pattern
        self.found = found if found is not None else []
        self.failed = failed if failed is not None else []
        self._glob = _literal_brackets(pattern)

    @property
    def matched(self) -> bool:
        return bool(self.found)

    def accept(self, value: Any) -> Any:
        if self.found:
            return self.found[0]
        if fnmatch.fnmatchcase(self.where, self._glob) and not self._contains_failure():
            self.found.append(value)
        return value

    def flunk(self, fragment: Any, reason: str) -> Any:
        self.failed.append(self.path)
        return ABSENT

    def push(self, segment: Segment) -> "SelectingTraversal":
        return SelectingTraversal(
            self.pattern, self.path.push(segment), max_depth=self.max_depth, found=self.found, failed=self.failed
        )

    def descend(self, segment: Segment, reader: "Reader", fragment: Any) -> Any:
        if self.found:
            return self.found[0]
        return super().descend(segment, reader, fragment)

    def _contains_failure(self) -> bool:
        """Whether a failure was recorded at or below the current path."""
        prefix = self.path.segments
        return any(failed.segments[:len(prefix)] == prefix for failed in self.failed)


def _literal_brackets(pattern: str) -> str:
    """Escape "[" and "]" so fnmatch treats them as plain characters."""
    return "".join({"[": "[[]", "]": "[]]"}.get(char, char) for char in pattern)
