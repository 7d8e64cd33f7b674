"""
Traversal paths.

A path is an immutable sequence of segments from the document root. Pushing a
segment returns a new path, so sibling branches of a traversal never see each
other's suffix.

Rendering:
    FieldSegment("price")  -> ".price"
    IndexSegment(0)        -> "[0]"
    root                   -> ""
"""

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class FieldSegment:
    """Descent into a mapping by key."""

    key: str

    def __str__(self) -> str:
        return f".{self.key}"


@dataclass(frozen=True)
class IndexSegment:
    """Descent into a sequence by position."""

    index: int

    def __str__(self) -> str:
        return f"[{self.index}]"


Segment = Union[FieldSegment, IndexSegment]


@dataclass(frozen=True)
class TraversalPath:
    """
    Immutable path from the document root.

    Attributes:
        segments: Segments in root-to-leaf order
    """

    segments: Tuple[Segment, ...] = ()

    def push(self, segment: Segment) -> "TraversalPath":
        return TraversalPath(self.segments + (segment,))

    @property
    def depth(self) -> int:
        return len(self.segments)

    def __str__(self) -> str:
        return "".join(str(segment) for segment in self.segments)


ROOT = TraversalPath()
