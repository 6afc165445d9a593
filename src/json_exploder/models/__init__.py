"""Data models for the JSON Exploder."""

from .options import ExplodeOptions
from .row_table import RowTable, collect_columns

__all__ = ["ExplodeOptions", "RowTable", "collect_columns"]
