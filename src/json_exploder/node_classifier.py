"""Structural classification of nodes in a parsed document tree."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Dict, Optional
from .types import NodeKind

# Sequences that are values in their own right, not containers
_TEXT_TYPES = (str, bytes, bytearray)


def classify(node: Any) -> NodeKind:
    """
    Classify a node as a mapping, a sequence or a scalar.

    Any ``Mapping`` is a mapping. Any ``Sequence`` other than text or bytes
    is a sequence, so tuples behave exactly like lists. Everything else,
    None included, is an opaque scalar.
    """
    if isinstance(node, Mapping):
        return NodeKind.MAPPING
    if isinstance(node, Sequence) and not isinstance(node, _TEXT_TYPES):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


class NodeClassifier:
    """
    Structure analyzer for parsed document trees.

    Wraps :func:`classify` and gathers statistics that help callers decide
    whether a tree is safe to explode.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the node classifier.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def classify(self, node: Any) -> NodeKind:
        """Classify a single node."""
        return classify(node)

    def calculate_depth(self, node: Any) -> int:
        """
        Calculate the maximum container nesting depth of a node.

        A scalar has depth 0, an empty container depth 1.
        """
        kind = classify(node)
        if kind is NodeKind.SCALAR:
            return 0

        children = node.values() if kind is NodeKind.MAPPING else node
        return 1 + max((self.calculate_depth(child) for child in children), default=0)

    def analyze(self, node: Any) -> Dict[str, Any]:
        """
        Get detailed statistics about a tree.

        Args:
            node: Parsed tree to analyze

        Returns:
            Dictionary with structure statistics
        """
        stats = {
            "root_kind": classify(node).value,
            "max_depth": self.calculate_depth(node),
            "mapping_count": 0,
            "sequence_count": 0,
            "scalar_count": 0,
            "total_keys": 0,
            "total_items": 0,
        }

        self._count_elements(node, stats)

        self.logger.debug(f"Analyzed {stats['root_kind']} root: depth={stats['max_depth']}, "
                          f"mappings={stats['mapping_count']}, sequences={stats['sequence_count']}")
        return stats

    def _count_elements(self, node: Any, stats: Dict[str, Any]) -> None:
        """Recursively count different kinds of nodes."""
        kind = classify(node)

        if kind is NodeKind.MAPPING:
            stats["mapping_count"] += 1
            stats["total_keys"] += len(node)
            for value in node.values():
                self._count_elements(value, stats)

        elif kind is NodeKind.SEQUENCE:
            stats["sequence_count"] += 1
            stats["total_items"] += len(node)
            for item in node:
                self._count_elements(item, stats)

        else:
            stats["scalar_count"] += 1
