"""Error handling implementation for the i18n transformer."""

import logging
import os
import pathlib
from typing import Optional
from .types import (
    ErrorHandlerInterface,
    ValidationResult,
    ValidationError,
    ErrorResponse,
    ProcessingError,
    ErrorType
)
from .utils.validation import ValidationUtils


class ErrorHandler(ErrorHandlerInterface):
    """
    Error handler for i18n transformer operations.

    Provides input validation and per-unit error reporting with
    suggestions for fixing the offending sheet or document.
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
        Validate input JSON string.

        Args:
            input_data: JSON string to validate

        Returns:
            ValidationResult with validation details
        """
        return ValidationUtils.validate_json_string(input_data)

    def handle_processing_error(self, error: ProcessingError) -> ErrorResponse:
        """
        Handle processing errors and provide recovery suggestions.

        Args:
            error: ProcessingError to handle

        Returns:
            ErrorResponse with recovery information
        """
        self.logger.error(f"Processing error: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.PATH:
            return self._handle_path_error(error)
        elif error.error_type == ErrorType.SCHEMA:
            return self._handle_schema_error(error)
        elif error.error_type == ErrorType.VALUE:
            return self._handle_value_error(error)
        elif error.error_type == ErrorType.FILESYSTEM:
            return self._handle_filesystem_error(error)
        elif error.error_type == ErrorType.STRUCTURE:
            return ErrorResponse(
                can_recover=False,
                suggested_action='Check the sheet header: it needs a "key" column and at least '
                                 'one value column.',
                partial_results=None
            )
        else:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Unknown error type. Please check logs and retry.",
                partial_results=None
            )

    def _handle_path_error(self, error: ProcessingError) -> ErrorResponse:
        """Handle malformed path errors."""
        return ErrorResponse(
            can_recover=True,
            suggested_action="Fix keys with empty segments (consecutive, leading or trailing dots) "
                             "or rerun with malformed paths skipped.",
            partial_results=error.context.get("path") if error.context else None
        )

    def _handle_schema_error(self, error: ProcessingError) -> ErrorResponse:
        """Handle conflicting schema errors."""
        return ErrorResponse(
            can_recover=False,
            suggested_action="Rename the conflicting keys so that each prefix is used either "
                             "with numeric indices or with names, and never also as a value.",
            partial_results=error.context.get("paths") if error.context else None
        )

    def _handle_value_error(self, error: ProcessingError) -> ErrorResponse:
        """Handle unsupported value type errors."""
        return ErrorResponse(
            can_recover=True,
            suggested_action="Convert the value to a string or number, or rerun with "
                             "unsupported values stringified.",
            partial_results=error.context.get("path") if error.context else None
        )

    def _handle_filesystem_error(self, error: ProcessingError) -> ErrorResponse:
        """Handle filesystem-related errors."""
        return ErrorResponse(
            can_recover=True,
            suggested_action="Check file permissions, available disk space, and directory access. "
                             "Ensure the output directory is writable.",
            partial_results=error.context.get("partial_files") if error.context else None
        )

    def validate_directory_path(self, path: str, must_exist: bool = False) -> ValidationResult:
        """
        Validate a directory path for accessibility.

        Args:
            path: Directory path to validate
            must_exist: Report a missing directory as an error

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not path:
            errors.append(ValidationError(
                type=ErrorType.FILESYSTEM,
                message="Directory path cannot be empty",
                location="path"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        try:
            resolved_path = pathlib.Path(path).resolve()

            if resolved_path.exists():
                if not resolved_path.is_dir():
                    errors.append(ValidationError(
                        type=ErrorType.FILESYSTEM,
                        message=f"Path exists but is not a directory: {path}",
                        location="path"
                    ))
                elif not os.access(resolved_path, os.R_OK):
                    errors.append(ValidationError(
                        type=ErrorType.FILESYSTEM,
                        message=f"Directory is not readable: {path}",
                        location="path"
                    ))
            elif must_exist:
                errors.append(ValidationError(
                    type=ErrorType.FILESYSTEM,
                    message=f"Input directory not found: {path}",
                    location="path"
                ))

        except (OSError, ValueError) as e:
            errors.append(ValidationError(
                type=ErrorType.FILESYSTEM,
                message=f"Invalid directory path: {str(e)}",
                location="path"
            ))

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )
