"""Core type definitions for the JSON Exploder."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

# A flat record: column name -> scalar value
Row = Dict[str, Any]

# Ordered rows produced by one flatten call
RowSet = List[Row]


class NodeKind(Enum):
    """The three structural shapes a node can take."""
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


class ErrorType(Enum):
    """Enumeration of error types."""
    SYNTAX = "syntax"
    DEPTH = "depth"
    SIZE = "size"
    SEPARATOR = "separator"
    FILESYSTEM = "filesystem"


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str
    partial_results: Optional[Any] = None


@dataclass
class ExplodeResult:
    """Result of an explode operation."""
    success: bool
    rows: RowSet = field(default_factory=list)
    columns: List[str] = field(default_factory=list)
    row_count: int = 0
    errors: Optional[List[str]] = None
    warnings: Optional[List[str]] = None


@dataclass
class WriteResult:
    """Result of exploding a file into a tabular sink."""
    success: bool
    output_path: str
    row_count: int = 0
    column_count: int = 0
    errors: Optional[List[str]] = None


class ExplodeError(Exception):
    """Custom exception for explode failures."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


class DepthExceededError(ExplodeError):
    """Raised when input nests deeper than the engine allows."""

    def __init__(self, max_depth: int, path: str):
        super().__init__(
            f"Maximum nesting depth {max_depth} exceeded at path '{path}'",
            ErrorType.DEPTH,
            context={"max_depth": max_depth, "path": path}
        )
        self.max_depth = max_depth
        self.path = path


class RowLimitExceededError(ExplodeError):
    """Raised when a row set grows past the configured limit."""

    def __init__(self, max_rows: int, row_count: int, path: str):
        super().__init__(
            f"Row limit {max_rows} exceeded ({row_count} rows) at path '{path}'",
            ErrorType.SIZE,
            context={"max_rows": max_rows, "row_count": row_count, "path": path}
        )
        self.max_rows = max_rows
        self.row_count = row_count
        self.path = path


# Abstract base classes for interfaces

class ExploderInterface(ABC):
    """Abstract interface for the JSON Exploder facade."""

    @abstractmethod
    def explode(self, json_string: str, lines: bool = False) -> ExplodeResult:
        """Explode a JSON document into flat rows."""
        pass

    @abstractmethod
    def explode_file(
        self,
        input_path: str,
        output_path: str,
        output_format: str = "csv",
        lines: bool = False
    ) -> WriteResult:
        """Explode a JSON file and write the rows to a tabular file."""
        pass


class RowWriterInterface(ABC):
    """Abstract interface for row set sinks."""

    @abstractmethod
    def write_csv(self, rows: RowSet, output_path: str, missing_value: str = "") -> Dict[str, Any]:
        """Write rows as CSV."""
        pass

    @abstractmethod
    def write_jsonl(self, rows: RowSet, output_path: str) -> Dict[str, Any]:
        """Write rows as JSON Lines."""
        pass


class ErrorHandlerInterface(ABC):
    """Abstract interface for error handling."""

    @abstractmethod
    def validate_input(self, input_data: str) -> ValidationResult:
        """Validate input data."""
        pass

    @abstractmethod
    def handle_processing_error(self, error: ExplodeError) -> ErrorResponse:
        """Handle explode errors."""
        pass
