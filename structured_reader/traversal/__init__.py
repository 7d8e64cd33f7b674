"""
Traversal of documents against reader trees.

Components:
    - path: Immutable paths and their segments
    - strategies: Throwing, Collecting and Selecting traversals

The same reader tree is walked by all three strategies; only the meaning of
acceptance and failure changes.
"""

from structured_reader.traversal.path import ROOT, FieldSegment, IndexSegment, TraversalPath
from structured_reader.traversal.strategies import (
    ABSENT,
    DEFAULT_MAX_DEPTH,
    CollectingTraversal,
    SelectingTraversal,
    ThrowingTraversal,
    Traversal,
)

__all__ = [
    "ROOT",
    "FieldSegment",
    "IndexSegment",
    "TraversalPath",
    "ABSENT",
    "DEFAULT_MAX_DEPTH",
    "Traversal",
    "ThrowingTraversal",
    "CollectingTraversal",
    "SelectingTraversal",
]
