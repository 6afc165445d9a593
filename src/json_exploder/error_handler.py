"""Error handling implementation for the JSON Exploder."""

import logging
import os
import pathlib
from typing import Any, Optional
from .types import (
    ErrorHandlerInterface,
    ValidationResult,
    ValidationError,
    ErrorResponse,
    ExplodeError,
    ErrorType
)
from .utils.validation import ValidationUtils


class ErrorHandler(ErrorHandlerInterface):
    """
    Error handler for JSON Exploder operations.

    Provides input validation and turns explode failures into
    suggestions a caller can act on.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def validate_input(self, input_data: str) -> ValidationResult:
        """
        Validate a single JSON document.

        Args:
            input_data: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        try:
            return ValidationUtils.validate_json_string(input_data)
        except Exception as e:
            self.logger.error(f"Unexpected error during input validation: {e}")
            return self._unexpected_failure(e)

    def validate_lines(self, input_data: str) -> ValidationResult:
        """
        Validate a JSON Lines document.

        Args:
            input_data: JSON Lines text to validate

        Returns:
            ValidationResult with validation details
        """
        try:
            return ValidationUtils.validate_json_lines(input_data)
        except Exception as e:
            self.logger.error(f"Unexpected error during JSON Lines validation: {e}")
            return self._unexpected_failure(e)

    def validate_separator(self, separator: Any) -> ValidationResult:
        """Validate a key separator."""
        result = ValidationUtils.validate_separator(separator)
        for warning in result.warnings:
            self.logger.warning(warning)
        return result

    def validate_output_path(self, path: str) -> ValidationResult:
        """
        Validate an output file path.

        Args:
            path: File path to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not path:
            errors.append(ValidationError(
                type=ErrorType.FILESYSTEM,
                message="Output path cannot be empty",
                location="path"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        try:
            resolved_path = pathlib.Path(path).resolve()

            if resolved_path.is_dir():
                errors.append(ValidationError(
                    type=ErrorType.FILESYSTEM,
                    message="Output path is a directory",
                    location="path"
                ))
            elif not resolved_path.parent.is_dir():
                errors.append(ValidationError(
                    type=ErrorType.FILESYSTEM,
                    message=f"Output directory does not exist: {resolved_path.parent}",
                    location="path"
                ))
            elif not os.access(resolved_path.parent, os.W_OK):
                errors.append(ValidationError(
                    type=ErrorType.FILESYSTEM,
                    message="Output directory is not writable",
                    location="path"
                ))
            elif resolved_path.exists():
                warnings.append(f"Output file {resolved_path} will be overwritten.")

        except (OSError, ValueError) as e:
            errors.append(ValidationError(
                type=ErrorType.FILESYSTEM,
                message=f"Invalid output path: {str(e)}",
                location="path"
            ))

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    def handle_processing_error(self, error: ExplodeError) -> ErrorResponse:
        """
        Handle explode errors and provide recovery suggestions.

        Args:
            error: ExplodeError to handle

        Returns:
            ErrorResponse with recovery information
        """
        self.logger.error(f"Explode error: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.DEPTH:
            return self._handle_depth_error(error)
        elif error.error_type == ErrorType.SIZE:
            return self._handle_size_error(error)
        elif error.error_type == ErrorType.FILESYSTEM:
            return self._handle_filesystem_error(error)
        else:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Unknown error type. Please check logs and retry.",
                partial_results=None
            )

    def _handle_depth_error(self, error: ExplodeError) -> ErrorResponse:
        """Handle nesting depth errors."""
        path = error.context.get("path") if error.context else None
        return ErrorResponse(
            can_recover=True,
            suggested_action=f"Input nests too deeply near '{path}'. Raise max_depth if the "
                             "document is trusted, or check it for self-referencing data.",
            partial_results=None
        )

    def _handle_size_error(self, error: ExplodeError) -> ErrorResponse:
        """Handle row limit errors."""
        return ErrorResponse(
            can_recover=True,
            suggested_action="Too many rows from combining sibling lists. Raise max_rows, "
                             "or explode a smaller part of the document.",
            partial_results=error.context.get("row_count") if error.context else None
        )

    def _handle_filesystem_error(self, error: ExplodeError) -> ErrorResponse:
        """Handle filesystem-related errors."""
        return ErrorResponse(
            can_recover=True,
            suggested_action="Check file permissions, available disk space, and directory access. "
                             "Ensure the output directory exists and is writable.",
            partial_results=error.context.get("output_path") if error.context else None
        )

    def _unexpected_failure(self, error: Exception) -> ValidationResult:
        return ValidationResult(
            is_valid=False,
            errors=[ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Validation failed with unexpected error: {str(error)}",
                location="input"
            )],
            warnings=[]
        )
