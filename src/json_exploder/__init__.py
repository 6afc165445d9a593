"""
JSON Exploder - Flatten nested JSON into tabular rows.

Mapping keys are joined into flat column names and combined by
cross-product; list elements are exploded into separate rows.
"""

__version__ = "1.0.0"

from .engine import ExplodeEngine, flatten
from .json_exploder import JSONExploder
from .models import ExplodeOptions, RowTable
from .types import (
    ExplodeResult,
    WriteResult,
    ExplodeError,
    DepthExceededError,
    RowLimitExceededError,
    NodeKind,
)

__all__ = [
    "flatten",
    "ExplodeEngine",
    "JSONExploder",
    "ExplodeOptions",
    "RowTable",
    "ExplodeResult",
    "WriteResult",
    "ExplodeError",
    "DepthExceededError",
    "RowLimitExceededError",
    "NodeKind",
]
