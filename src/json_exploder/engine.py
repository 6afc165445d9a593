"""Flatten-explode engine turning nested trees into flat row sets."""

import logging
from typing import Any, Optional
from .constants import DEFAULT_MAX_DEPTH, DEFAULT_SEPARATOR, ROOT_VALUE_KEY
from .node_classifier import classify
from .types import NodeKind, RowSet, DepthExceededError, RowLimitExceededError


def join_path(parent: str, key: Any, sep: str) -> str:
    """Join a parent path and a mapping key into a flat column name."""
    return f"{parent}{sep}{key}" if parent else str(key)


def cross_product(accumulated: RowSet, alternatives: RowSet) -> RowSet:
    """
    Merge every accumulated row with every alternative row.

    Order is accumulated-row-major. Later keys win on collision. An empty
    side yields an empty result.
    """
    return [{**left, **right} for left in accumulated for right in alternatives]


class ExplodeEngine:
    """
    Recursive flatten-explode transform.

    Mappings are flattened into joined keys and their keys are combined by
    cross-product; sequences are exploded into one row set per element and
    concatenated in element order; scalars become single-cell rows.

    The engine is stateless between calls, so one instance may be shared by
    concurrent callers.
    """

    def __init__(self, separator: str = DEFAULT_SEPARATOR,
                 root_key: str = ROOT_VALUE_KEY,
                 max_depth: int = DEFAULT_MAX_DEPTH,
                 max_rows: Optional[int] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the engine.

        Args:
            separator: Default separator for joining keys
            root_key: Column used for a scalar at the root of the tree
            max_depth: Maximum mapping/sequence nesting before failing
            max_rows: Optional ceiling on the size of any row set
            logger: Optional logger instance
        """
        self.separator = separator
        self.root_key = root_key
        self.max_depth = max_depth
        self.max_rows = max_rows
        self.logger = logger or logging.getLogger(__name__)

    def flatten(self, node: Any, path: str = "", sep: Optional[str] = None) -> RowSet:
        """
        Flatten a node into an ordered list of rows.

        Args:
            node: Mapping, sequence or scalar to flatten
            path: Key prefix for every produced column
            sep: Separator override for this call

        Returns:
            List of flat rows

        Raises:
            DepthExceededError: If the tree nests deeper than ``max_depth``
            RowLimitExceededError: If a row set grows past ``max_rows``
        """
        if sep is None:
            sep = self.separator

        try:
            rows = self._flatten(node, path, sep, 0)
        except RecursionError:
            # max_depth is above what the interpreter stack can hold
            self.logger.warning(f"Recursion limit reached before max_depth={self.max_depth}")
            raise DepthExceededError(self.max_depth, path) from None

        self.logger.debug(f"Flattened {classify(node).value} node at '{path}' into {len(rows)} rows")
        return rows

    def _flatten(self, node: Any, path: str, sep: str, depth: int) -> RowSet:
        kind = classify(node)

        if kind is NodeKind.SCALAR:
            return [{path if path else self.root_key: node}]

        if depth >= self.max_depth:
            raise DepthExceededError(self.max_depth, path)

        if kind is NodeKind.SEQUENCE:
            return self._flatten_sequence(node, path, sep, depth)
        return self._flatten_mapping(node, path, sep, depth)

    def _flatten_sequence(self, node: Any, path: str, sep: str, depth: int) -> RowSet:
        """Concatenate the rows of each element, all under the same path."""
        rows: RowSet = []
        for element in node:
            rows.extend(self._flatten(element, path, sep, depth + 1))
            self._check_row_count(len(rows), path)
        return rows

    def _flatten_mapping(self, node: Any, path: str, sep: str, depth: int) -> RowSet:
        """Fold the alternative rows of each key into their cross-product."""
        rows: RowSet = [{}]
        for key, value in node.items():
            child_path = join_path(path, key, sep)

            alternatives: RowSet
            if classify(value) is NodeKind.SCALAR:
                alternatives = [{child_path: value}]
            else:
                alternatives = self._flatten(value, child_path, sep, depth + 1)

            self._check_row_count(len(rows) * len(alternatives), child_path)
            rows = cross_product(rows, alternatives)
        return rows

    def _check_row_count(self, row_count: int, path: str) -> None:
        if self.max_rows is not None and row_count > self.max_rows:
            raise RowLimitExceededError(self.max_rows, row_count, path)


_default_engine = ExplodeEngine()


def flatten(node: Any, path: str = "", sep: str = DEFAULT_SEPARATOR) -> RowSet:
    """
    Flatten a nested tree into rows with the default engine.

    >>> flatten({"a": [1, 2], "b": {"c": "x"}})
    [{'a': 1, 'b_c': 'x'}, {'a': 2, 'b_c': 'x'}]
    """
    return _default_engine.flatten(node, path, sep)
