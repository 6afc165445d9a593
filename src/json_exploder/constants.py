"""
Constants configuration for row explosion.

This module contains the configurable defaults used throughout the
flatten-explode pipeline: key joining, placeholder names and the limits
that guard against runaway input.
"""

# Separator placed between a parent path and a child key
# Example: {"user": {"name": "Ann"}} becomes {"user_name": "Ann"}
DEFAULT_SEPARATOR = "_"

# Column used for a scalar that sits at the root of the document
# Example: 42 becomes {"value": 42}
ROOT_VALUE_KEY = "value"

# Maximum nesting of mappings/sequences the engine will descend into
DEFAULT_MAX_DEPTH = 200

# Cell written for a column that a row does not carry
MISSING_VALUE = ""

# Nesting depth above which validation emits a warning
DEEP_NESTING_WARNING = 20

# Estimated row count above which the facade emits a warning
LARGE_ROWSET_WARNING = 100_000
