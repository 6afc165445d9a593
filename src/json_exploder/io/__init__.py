"""File I/O operations for the JSON Exploder."""

from .row_writer import RowWriter

__all__ = ["RowWriter"]
