"""File writer utilities for JSON documents."""

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional
from ..types import ProcessingError, ErrorType


_UNSAFE_FILENAME_RE = re.compile(r'[\\/:*?"<>|]')


def sanitize_filename(name: str) -> str:
    """Replace characters that are not allowed in file names with underscores."""
    return _UNSAFE_FILENAME_RE.sub("_", str(name))


class FileWriter:
    """
    File writer for locale JSON documents.

    Handles directory management, JSON serialization with proper
    formatting, and file naming for the conversion output.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, indent: int = 2):
        """
        Initialize the file writer.

        Args:
            logger: Optional logger instance
            indent: JSON indentation
        """
        self.logger = logger or logging.getLogger(__name__)
        self.indent = indent

    def write_document(self, data: Any, output_dir: str, name: str) -> Dict[str, Any]:
        """
        Write one document to ``<output_dir>/<name>.json``.

        Args:
            data: Tree to serialize
            output_dir: Output directory path
            name: Document name, sanitized into the file name

        Returns:
            Dictionary with file information

        Raises:
            ProcessingError: If writing fails
        """
        output_path = Path(output_dir)
        self._ensure_directory_exists(output_path)

        filename = f"{sanitize_filename(name)}.json"
        file_path = output_path / filename

        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=self.indent, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            raise ProcessingError(
                f"Failed to write {file_path}: {str(e)}",
                ErrorType.FILESYSTEM,
                context={"name": name, "output_dir": output_dir}
            )

        file_size = file_path.stat().st_size
        self.logger.debug(f"Wrote document {name} to {file_path}")

        return {
            "name": name,
            "filename": filename,
            "path": str(file_path.absolute()),
            "size": file_size
        }

    def _ensure_directory_exists(self, directory_path: Path) -> None:
        """
        Ensure that a directory exists, creating it if necessary.

        Args:
            directory_path: Path to directory

        Raises:
            ProcessingError: If directory creation fails
        """
        try:
            directory_path.mkdir(parents=True, exist_ok=True)

            if not os.access(directory_path, os.W_OK):
                raise ProcessingError(
                    f"Directory {directory_path} is not writable",
                    ErrorType.FILESYSTEM
                )

        except OSError as e:
            raise ProcessingError(
                f"Failed to create directory {directory_path}: {str(e)}",
                ErrorType.FILESYSTEM
            )
