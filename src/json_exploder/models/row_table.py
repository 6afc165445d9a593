"""Row table model implementation."""

from dataclasses import dataclass, field
from typing import Any, Iterable, List
from ..types import Row, RowSet


def collect_columns(rows: Iterable[Row]) -> List[str]:
    """Return the union of row keys in first-seen order."""
    columns: List[str] = []
    seen = set()
    for row in rows:
        for key in row:
            if key not in seen:
                seen.add(key)
                columns.append(key)
    return columns


@dataclass
class RowTable:
    """
    Represents an exploded row set together with its column layout.

    Rows keep the keys the engine produced for them; the column list is the
    union of those keys, used when a sink needs a rectangular shape.
    """

    rows: RowSet
    columns: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Derive columns when they are not given."""
        if not self.columns:
            self.columns = collect_columns(self.rows)
        self._validate()

    def _validate(self) -> None:
        """Validate that every row key has a column."""
        known = set(self.columns)
        if len(known) != len(self.columns):
            raise ValueError("columns must be unique")

        for index, row in enumerate(self.rows):
            unknown = [key for key in row if key not in known]
            if unknown:
                raise ValueError(f"row {index} has keys outside the column set: {unknown}")

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def is_ragged(self) -> bool:
        """Check whether any row lacks one of the columns."""
        return any(len(row) != len(self.columns) for row in self.rows)

    def to_records(self, missing_value: Any = "") -> RowSet:
        """
        Pad every row to the full column set.

        Args:
            missing_value: Value used for absent columns

        Returns:
            New rows with keys in column order
        """
        return [
            {column: row.get(column, missing_value) for column in self.columns}
            for row in self.rows
        ]

    def column_values(self, column: str, missing_value: Any = None) -> List[Any]:
        """Get one column's values across all rows."""
        if column not in self.columns:
            raise KeyError(f"Unknown column: {column}")
        return [row.get(column, missing_value) for row in self.rows]
