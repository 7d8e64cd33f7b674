"""
JSONReader - read, validate and select documents with a reader tree.

A JSONReader wraps the root of a frozen reader tree. Each call decodes the
document if it is serialized, creates a fresh traversal and walks the tree,
so one JSONReader can serve any number of calls, concurrently if needed.

    read():     typed result, or WrongTypeError at the first mismatch
    validate(): ValidationResult with every mismatch, never raises WrongTypeError
    select():   the first value whose path matches a glob pattern
"""

import json
import logging
from typing import Any, Optional

from structured_reader.schema.types import Reader
from structured_reader.traversal.strategies import (
    DEFAULT_MAX_DEPTH,
    CollectingTraversal,
    SelectingTraversal,
    ThrowingTraversal,
    Traversal,
)
from structured_reader.validation.validator import ValidationResult

logger = logging.getLogger(__name__)


class JSONReader:
    """
    Reads decoded or serialized JSON documents with a reader tree.

    Attributes:
        root_reader: Root of the reader tree
        max_depth: Deepest path a traversal may reach

    Example:
        ```python
        import structured_reader

        def person(p):
            p.string("first_name")
            p.string("last_name")

        reader = structured_reader.json(person)
        result = reader.read('{"first_name": "Stanley", "last_name": "Burrell"}')
        print(result.first_name)  # "Stanley"
        ```
    """

    def __init__(self, root_reader: Reader, max_depth: int = DEFAULT_MAX_DEPTH):
        self.root_reader = root_reader
        self.max_depth = max_depth

    def read(self, document: Any, traversal: Optional[Traversal] = None) -> Any:
        """
        Read a document, raising at the first mismatch.

        Args:
            document: Decoded document, or a JSON str/bytes to decode first
            traversal: Traversal to use instead of a fresh ThrowingTraversal

        Returns:
            The typed result (records for objects, lists for arrays)

        Raises:
            WrongTypeError: If the document does not match the reader tree
            json.JSONDecodeError: If a serialized document is not valid JSON
        """
        if traversal is None:
            traversal = ThrowingTraversal(max_depth=self.max_depth)
        return self.root_reader.read(self._decode(document), traversal)

    def validate(self, document: Any) -> ValidationResult:
        """
        Validate a document, collecting every mismatch.

        Args:
            document: Decoded document, or a JSON str/bytes to decode first

        Returns:
            ValidationResult: The produced object and no errors, or no object
            and all errors in traversal order

        Example:
            ```python
            result = reader.validate({})
            result.is_valid  # False
            result.errors    # [(".first_name", "expected a String"), (".last_name", "expected a String")]
            ```
        """
        traversal = CollectingTraversal(max_depth=self.max_depth)
        produced = self.root_reader.read(self._decode(document), traversal)

        if traversal.errors:
            logger.debug(f"Validation failed with {len(traversal.errors)} error(s)")
            return ValidationResult(object=None, errors=list(traversal.errors))

        return ValidationResult(object=produced, errors=[])

    def select(self, document: Any, pattern: str, default: Any = None) -> Any:
        """
        Select the first value whose path matches a glob pattern.

        Invalid fragments are never selected and never raise.

        Args:
            document: Decoded document, or a JSON str/bytes to decode first
            pattern: Glob over rendered paths, e.g. ".widgets[*].price"
            default: Returned when nothing matches

        Returns:
            The matched value (as read, e.g. a record for an object), or default
        """
        traversal = SelectingTraversal(pattern, max_depth=self.max_depth)
        self.root_reader.read(self._decode(document), traversal)

        if not traversal.matched:
            logger.debug(f"No value matched {pattern!r}")
            return default
        return traversal.found[0]

    def _decode(self, document: Any) -> Any:
        if isinstance(document, (str, bytes, bytearray)):
            logger.debug(f"Decoding serialized document ({len(document)} characters)")
            return json.loads(document)
        return document

    def __repr__(self) -> str:
        return f"JSONReader({self.root_reader!r})"
