"""Utility functions for the JSON Exploder."""

from .row_estimator import RowEstimator
from .validation import ValidationUtils

__all__ = ["RowEstimator", "ValidationUtils"]
