"""Conversion options shared by the transformer components."""

from dataclasses import dataclass
from typing import Optional


MALFORMED_PATH_POLICIES = ("raise", "skip")
UNSUPPORTED_VALUE_POLICIES = ("reject", "stringify")


@dataclass
class TransformOptions:
    """
    Options controlling how sheets and JSON documents are converted.

    Attributes:
        key_column: Header of the key column, matched case-insensitively
        sheet_name: Worksheet name used when writing workbooks
        key_column_width: Width of the key column in written workbooks
        value_column_width: Width of every value column in written workbooks
        malformed_paths: "raise" or "skip" paths with empty segments
        unsupported_values: "reject" or "stringify" non-JSON leaf values
        strict_root: Reject mixed index/name top-level paths instead of
            falling back to a mapping root
        max_index: Largest sequence index accepted in a flat path
        enable_parallel_processing: Convert units on a thread pool
        max_workers: Maximum number of worker threads (None = auto-detect)
        json_indent: Indentation of written JSON documents
    """

    key_column: str = "key"
    sheet_name: str = "i18n"
    key_column_width: int = 50
    value_column_width: int = 40
    malformed_paths: str = "raise"
    unsupported_values: str = "reject"
    strict_root: bool = False
    max_index: int = 100000
    enable_parallel_processing: bool = True
    max_workers: Optional[int] = None
    json_indent: int = 2

    def __post_init__(self):
        """Validate options after initialization."""
        self._validate()

    def _validate(self) -> None:
        if not self.key_column or not self.key_column.strip():
            raise ValueError("key_column cannot be empty")

        if not self.sheet_name:
            raise ValueError("sheet_name cannot be empty")

        if self.malformed_paths not in MALFORMED_PATH_POLICIES:
            raise ValueError(
                f"malformed_paths must be one of {MALFORMED_PATH_POLICIES}, got {self.malformed_paths!r}"
            )

        if self.unsupported_values not in UNSUPPORTED_VALUE_POLICIES:
            raise ValueError(
                f"unsupported_values must be one of {UNSUPPORTED_VALUE_POLICIES}, got {self.unsupported_values!r}"
            )

        if self.max_index < 0:
            raise ValueError("max_index cannot be negative")

        if self.max_workers is not None and self.max_workers <= 0:
            raise ValueError("max_workers must be positive")

        if self.key_column_width <= 0 or self.value_column_width <= 0:
            raise ValueError("column widths must be positive")

    @property
    def skip_malformed(self) -> bool:
        return self.malformed_paths == "skip"

    @property
    def stringify_unsupported(self) -> bool:
        return self.unsupported_values == "stringify"
