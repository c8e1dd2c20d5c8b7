"""File reader utilities for JSON documents."""

import logging
from pathlib import Path
from typing import List, Optional
from ..error_handler import ErrorHandler
from ..types import ConversionResult, ProcessingError, ErrorType


class FileReader:
    """Reads every JSON document of a directory, one result per file."""

    def __init__(self, error_handler: Optional[ErrorHandler] = None,
                 logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.error_handler = error_handler or ErrorHandler(self.logger)

    def list_documents(self, input_dir: str) -> List[Path]:
        """
        List the ``*.json`` files of a directory, sorted by name.

        Raises:
            ProcessingError: If the directory does not exist
        """
        validation = self.error_handler.validate_directory_path(input_dir, must_exist=True)
        if not validation.is_valid:
            raise ProcessingError(
                "; ".join(error.message for error in validation.errors),
                ErrorType.FILESYSTEM,
                context={"input_dir": input_dir}
            )

        return sorted(path for path in Path(input_dir).glob("*.json") if path.is_file())

    def read_document(self, file_path: Path) -> ConversionResult:
        """
        Read and validate one JSON document.

        The document name is the file stem. Unreadable or invalid files
        give an unsuccessful result instead of raising.
        """
        name = file_path.stem
        try:
            json_string = file_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error(f"Failed to read {file_path}: {e}")
            return ConversionResult(name=name, success=False, error=f"Failed to read {file_path}: {e}")

        validation = self.error_handler.validate_input(json_string)
        for warning in validation.warnings:
            self.logger.warning(f"{file_path.name}: {warning}")
        if not validation.is_valid:
            messages = "; ".join(error.message for error in validation.errors)
            self.logger.error(f"Failed to parse {file_path}: {messages}")
            return ConversionResult(name=name, success=False, error=f"Failed to parse {file_path}: {messages}")

        return ConversionResult(name=name, success=True, data=validation.data)

    def read_documents(self, input_dir: str) -> List[ConversionResult]:
        """Read every JSON document of ``input_dir``."""
        return [self.read_document(path) for path in self.list_documents(input_dir)]
