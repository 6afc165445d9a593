"""JSON and JSON Lines parser producing trees for the engine."""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Union
from .error_handler import ErrorHandler
from .node_classifier import classify


class DocumentParser:
    """
    Document parser with validation.

    Turns raw JSON text into the in-memory tree the engine consumes. A
    JSON Lines document becomes a list with one element per record, so the
    engine explodes each record independently and concatenates the rows.
    """

    def __init__(self, error_handler: Optional[ErrorHandler] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the document parser.

        Args:
            error_handler: Optional ErrorHandler instance
            logger: Optional logger instance
        """
        self.error_handler = error_handler or ErrorHandler()
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, json_string: str) -> Any:
        """
        Parse a single JSON document.

        Args:
            json_string: JSON string to parse

        Returns:
            Parsed tree (mapping, sequence or scalar)

        Raises:
            ValueError: If JSON is invalid
        """
        validation_result = self.error_handler.validate_input(json_string)
        if not validation_result.is_valid:
            error_messages = [error.message for error in validation_result.errors]
            raise ValueError(f"Invalid JSON input: {'; '.join(error_messages)}")

        for warning in validation_result.warnings:
            self.logger.warning(warning)

        data = json.loads(json_string)

        self.logger.info(f"Parsed JSON document with {classify(data).value} root")
        return data

    def parse_lines(self, text: str) -> List[Any]:
        """
        Parse a JSON Lines document.

        Blank lines are skipped. Every invalid line is reported.

        Args:
            text: JSON Lines text

        Returns:
            List of parsed records in line order

        Raises:
            ValueError: If the input is empty or any line is invalid
        """
        validation_result = self.error_handler.validate_lines(text)
        if not validation_result.is_valid:
            error_messages = [f"{error.message} ({error.location})" for error in validation_result.errors]
            raise ValueError(f"Invalid JSON Lines input: {'; '.join(error_messages)}")

        for warning in validation_result.warnings:
            self.logger.warning(warning)

        records = [json.loads(line) for line in text.splitlines() if line.strip()]

        self.logger.info(f"Parsed {len(records)} JSON Lines records")
        return records

    def parse_file(self, path: Union[str, Path], lines: bool = False) -> Any:
        """
        Read and parse a UTF-8 JSON or JSON Lines file.

        Args:
            path: File to read
            lines: Treat the file as JSON Lines

        Returns:
            Parsed tree

        Raises:
            ValueError: If the file cannot be read or parsed
        """
        file_path = Path(path)
        try:
            text = file_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise ValueError(f"Cannot read {file_path}: {e}")

        self.logger.debug(f"Read {len(text)} characters from {file_path}")
        return self.parse_lines(text) if lines else self.parse(text)
