"""Validation utilities for documents and explode settings."""

import json
from typing import Any, List, Tuple
from ..constants import DEEP_NESTING_WARNING
from ..node_classifier import NodeClassifier
from ..types import ValidationResult, ValidationError, ErrorType


class ValidationUtils:
    """Utility class for validating documents and explode settings."""

    @staticmethod
    def validate_json_string(json_string: str) -> ValidationResult:
        """
        Validate JSON string syntax and structure.

        Any root is accepted, scalars included.

        Args:
            json_string: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        # Check if string is empty
        if not json_string.strip():
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="JSON string is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        # Try to parse JSON
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Invalid JSON syntax: {e.msg}",
                location=f"line {e.lineno}, column {e.colno}"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)
        except RecursionError:
            errors.append(ValidationError(
                type=ErrorType.DEPTH,
                message="JSON document is too deeply nested to parse",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        structure_errors, structure_warnings = ValidationUtils._validate_structure(data, "root")
        errors.extend(structure_errors)
        warnings.extend(structure_warnings)

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def validate_json_lines(text: str) -> ValidationResult:
        """
        Validate a JSON Lines document.

        Every non-blank line must hold one JSON value. All bad lines are
        reported, not just the first.

        Args:
            text: JSON Lines text to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not text.strip():
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message="JSON Lines input is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        for line_num, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue

            try:
                data = json.loads(line)
            except json.JSONDecodeError as e:
                errors.append(ValidationError(
                    type=ErrorType.SYNTAX,
                    message=f"Invalid JSON syntax: {e.msg}",
                    location=f"line {line_num}, column {e.colno}"
                ))
                continue
            except RecursionError:
                errors.append(ValidationError(
                    type=ErrorType.DEPTH,
                    message="JSON record is too deeply nested to parse",
                    location=f"line {line_num}"
                ))
                continue

            line_errors, line_warnings = ValidationUtils._validate_structure(data, f"line {line_num}")
            errors.extend(line_errors)
            warnings.extend(line_warnings)

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def validate_separator(separator: Any) -> ValidationResult:
        """
        Validate a key separator.

        Args:
            separator: Separator to validate

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not isinstance(separator, str):
            errors.append(ValidationError(
                type=ErrorType.SEPARATOR,
                message=f"Separator must be a string, got {type(separator).__name__}",
                location="separator"
            ))
        elif not separator:
            errors.append(ValidationError(
                type=ErrorType.SEPARATOR,
                message="Separator cannot be empty",
                location="separator"
            ))
        elif separator.strip() != separator:
            warnings.append("Separator has leading or trailing whitespace.")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def _validate_structure(data: Any, location: str) -> Tuple[List[ValidationError], List[str]]:
        """Validate parsed data structure."""
        errors = []
        warnings = []

        try:
            max_depth = NodeClassifier().calculate_depth(data)
        except RecursionError:
            errors.append(ValidationError(
                type=ErrorType.DEPTH,
                message="Document nesting exceeds the interpreter recursion limit",
                location=location
            ))
            return errors, warnings

        if max_depth > DEEP_NESTING_WARNING:
            warnings.append(f"Deep nesting detected at {location} (depth: {max_depth}). "
                            "This may impact performance.")

        return errors, warnings
