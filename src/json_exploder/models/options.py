"""Explode options model implementation."""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional
from ..constants import DEFAULT_MAX_DEPTH, DEFAULT_SEPARATOR, MISSING_VALUE, ROOT_VALUE_KEY
from ..utils.validation import ValidationUtils


@dataclass
class ExplodeOptions:
    """
    Settings for one explode run.

    Collects the key separator, the root placeholder column, the safety
    limits handed to the engine and the cell value written for columns a
    row does not carry.
    """

    separator: str = DEFAULT_SEPARATOR
    root_key: str = ROOT_VALUE_KEY
    max_depth: int = DEFAULT_MAX_DEPTH
    max_rows: Optional[int] = None
    missing_value: str = MISSING_VALUE

    def __post_init__(self):
        """Validate options after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate option values."""
        separator_validation = ValidationUtils.validate_separator(self.separator)
        if not separator_validation.is_valid:
            raise ValueError(f"Invalid separator: {separator_validation.errors[0].message}")

        if not isinstance(self.root_key, str) or not self.root_key:
            raise ValueError("root_key must be a non-empty string")

        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")

        if self.max_rows is not None and self.max_rows < 1:
            raise ValueError("max_rows must be at least 1")

        if not isinstance(self.missing_value, str):
            raise ValueError("missing_value must be a string")

    def to_dict(self) -> Dict[str, Any]:
        """Convert options to a plain dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExplodeOptions':
        """
        Create ExplodeOptions from a dictionary.

        Unknown keys are ignored; missing keys take their defaults.
        """
        known = {name: data[name] for name in cls.__dataclass_fields__ if name in data}
        return cls(**known)
