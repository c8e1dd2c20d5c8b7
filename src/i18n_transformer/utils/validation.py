"""Validation utilities for JSON documents."""

import json
from typing import Any, List, Tuple

from ..types import ValidationResult, ValidationError, ErrorType


class ValidationUtils:
    """Utility class for validating documents before conversion."""

    @staticmethod
    def validate_json_string(json_string: str) -> ValidationResult:
        """
        Validate JSON string syntax and structure.

        Args:
            json_string: JSON string to validate

        Returns:
            ValidationResult with validation details; ``data`` holds the
            parsed document when it is valid
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

        structure_errors, structure_warnings = ValidationUtils._validate_json_structure(data)
        errors.extend(structure_errors)
        warnings.extend(structure_warnings)

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            data=data if not errors else None
        )

    @staticmethod
    def _validate_json_structure(data: Any) -> Tuple[List[ValidationError], List[str]]:
        """Validate JSON data structure."""
        errors = []
        warnings = []

        if not isinstance(data, (dict, list)):
            errors.append(ValidationError(
                type=ErrorType.STRUCTURE,
                message=f"Root element must be dict or list, got {type(data).__name__}",
                location="root"
            ))
            return errors, warnings

        if not data:
            warnings.append("Document is empty and contributes no keys")

        max_depth = ValidationUtils._calculate_max_depth(data)
        if max_depth > 20:
            warnings.append(f"Deep nesting detected (depth: {max_depth}). Keys will be very long.")

        return errors, warnings

    @staticmethod
    def _calculate_max_depth(data: Any, current_depth: int = 0) -> int:
        """Calculate maximum nesting depth."""
        if not isinstance(data, (dict, list)):
            return current_depth

        children = data.values() if isinstance(data, dict) else data
        max_child_depth = current_depth
        for child in children:
            max_child_depth = max(max_child_depth,
                                  ValidationUtils._calculate_max_depth(child, current_depth + 1))

        return max_child_depth

