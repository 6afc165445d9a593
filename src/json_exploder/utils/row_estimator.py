"""Output size estimation for exploding document trees."""

import logging
from typing import Any, Dict, List, Optional
from ..constants import DEFAULT_SEPARATOR, ROOT_VALUE_KEY
from ..engine import join_path
from ..node_classifier import classify
from ..types import NodeKind


class RowEstimator:
    """
    Utility class for predicting the shape of an explode before running it.

    Counts follow the same combination rules as the engine (sequences add,
    mapping keys multiply) but never build rows, so a caller can reject a
    tree whose cross-products would blow up.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the row estimator.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def estimate_rows(self, node: Any) -> int:
        """
        Count the rows flattening ``node`` would produce.

        Args:
            node: Parsed tree

        Returns:
            Exact row count
        """
        return self._count_rows(node, {})

    def _count_rows(self, node: Any, counts: Dict[int, int]) -> int:
        """Count rows, recording the count of every container visited in ``counts``."""
        kind = classify(node)

        if kind is NodeKind.SCALAR:
            return 1

        if kind is NodeKind.SEQUENCE:
            count = sum(self._count_rows(element, counts) for element in node)
        else:
            count = 1
            for value in node.values():
                count *= self._count_rows(value, counts)
                # An empty factor annihilates the rest of the product
                if count == 0:
                    break

        counts[id(node)] = count
        return count

    def estimate_columns(self, node: Any, sep: str = DEFAULT_SEPARATOR,
                         path: str = "", root_key: str = ROOT_VALUE_KEY) -> List[str]:
        """
        List the columns flattening ``node`` can produce.

        Columns are listed in tree order, which can differ from the
        first-seen order across exploded rows. Branches that produce no
        rows contribute no columns.

        Args:
            node: Parsed tree
            sep: Key separator
            path: Starting key prefix
            root_key: Column used for a root scalar

        Returns:
            Ordered list of column names
        """
        columns: List[str] = []
        seen = set()

        def add(column: str) -> None:
            if column not in seen:
                seen.add(column)
                columns.append(column)

        counts: Dict[int, int] = {}
        self._count_rows(node, counts)

        def walk(current: Any, current_path: str) -> None:
            kind = classify(current)
            if kind is not NodeKind.SCALAR and counts[id(current)] == 0:
                return
            if kind is NodeKind.SEQUENCE:
                for element in current:
                    walk(element, current_path)
            elif kind is NodeKind.MAPPING:
                for key, value in current.items():
                    child_path = join_path(current_path, key, sep)
                    if classify(value) is NodeKind.SCALAR:
                        add(child_path)
                    else:
                        walk(value, child_path)
            else:
                add(current_path if current_path else root_key)

        walk(node, path)
        self.logger.debug(f"Estimated {len(columns)} columns")
        return columns
