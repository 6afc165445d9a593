"""Row set writers for tabular output."""

import csv
import io
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO
from ..models import RowTable
from ..types import ExplodeError, ErrorType, RowSet, RowWriterInterface


class RowWriter(RowWriterInterface):
    """
    Writer for exploded row sets.

    CSV output uses the union of row keys as its header, in first-seen
    order, and fills absent cells with a missing marker. JSON Lines output
    writes each row as-is.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the row writer.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def write_csv(self, rows: RowSet, output_path: str, missing_value: str = "") -> Dict[str, Any]:
        """
        Write rows to a CSV file.

        Args:
            rows: Rows to write
            output_path: Destination file path
            missing_value: Cell value for absent columns

        Returns:
            Dictionary with write operation results

        Raises:
            ExplodeError: If writing fails
        """
        file_path = Path(output_path)
        try:
            with open(file_path, 'w', encoding='utf-8', newline='') as f:
                columns = self.write_csv_stream(rows, f, missing_value)
        except OSError as e:
            raise ExplodeError(
                f"Failed to write CSV: {str(e)}",
                ErrorType.FILESYSTEM,
                context={"output_path": str(file_path), "row_count": len(rows)}
            )

        result = self._file_info(file_path, len(rows), columns)
        self.logger.info(f"Wrote {result['row_count']} rows x {len(columns)} columns to {file_path}")
        return result

    def write_jsonl(self, rows: RowSet, output_path: str) -> Dict[str, Any]:
        """
        Write rows to a JSON Lines file.

        Args:
            rows: Rows to write
            output_path: Destination file path

        Returns:
            Dictionary with write operation results

        Raises:
            ExplodeError: If writing fails
        """
        file_path = Path(output_path)
        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                columns = self.write_jsonl_stream(rows, f)
        except OSError as e:
            raise ExplodeError(
                f"Failed to write JSON Lines: {str(e)}",
                ErrorType.FILESYSTEM,
                context={"output_path": str(file_path), "row_count": len(rows)}
            )

        result = self._file_info(file_path, len(rows), columns)
        self.logger.info(f"Wrote {result['row_count']} JSON Lines records to {file_path}")
        return result

    def write_csv_stream(self, rows: RowSet, stream: TextIO, missing_value: str = "") -> List[str]:
        """
        Write rows as CSV to an open text stream.

        Returns:
            The header written
        """
        table = RowTable(rows)
        writer = csv.DictWriter(stream, fieldnames=table.columns, restval=missing_value)
        if table.columns:
            writer.writeheader()
        for row in table.rows:
            writer.writerow(row)
        return table.columns

    def write_jsonl_stream(self, rows: RowSet, stream: TextIO) -> List[str]:
        """
        Write rows as JSON Lines to an open text stream.

        Returns:
            The union of row keys
        """
        for row in rows:
            stream.write(json.dumps(row, ensure_ascii=False, default=str))
            stream.write("\n")
        return RowTable(rows).columns

    def to_csv_string(self, rows: RowSet, missing_value: str = "") -> str:
        """Render rows as CSV text."""
        buffer = io.StringIO()
        self.write_csv_stream(rows, buffer, missing_value)
        return buffer.getvalue()

    def _file_info(self, file_path: Path, row_count: int, columns: List[str]) -> Dict[str, Any]:
        return {
            "success": True,
            "path": str(file_path.absolute()),
            "size": file_path.stat().st_size,
            "row_count": row_count,
            "columns": columns
        }
