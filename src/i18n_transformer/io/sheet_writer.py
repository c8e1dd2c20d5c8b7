"""Workbook writer built on openpyxl."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from ..config import TransformOptions
from ..types import ErrorType, ProcessingError


class SheetWriter:
    """
    Writes merged key/value rows to a single-sheet workbook.

    The header row is frozen, an auto filter covers the used range and
    the key column is wider than the value columns.
    """

    def __init__(self, options: Optional[TransformOptions] = None,
                 logger: Optional[logging.Logger] = None):
        self.options = options or TransformOptions()
        self.logger = logger or logging.getLogger(__name__)

    def write(self, columns: Sequence[str], rows: List[Dict[str, Any]], output_path: str) -> Dict[str, Any]:
        """
        Write rows to ``output_path``.

        Args:
            columns: Value column headers, written after the key column
            rows: Mappings of header to cell value
            output_path: Destination .xlsx path

        Returns:
            Dictionary with file information

        Raises:
            ProcessingError: If the workbook cannot be saved
        """
        headers = [self.options.key_column] + list(columns)

        workbook = Workbook()
        worksheet = workbook.active
        worksheet.title = self.options.sheet_name

        for col_idx, header in enumerate(headers, start=1):
            worksheet.cell(row=1, column=col_idx, value=header)

        for row_idx, row in enumerate(rows, start=2):
            for col_idx, header in enumerate(headers, start=1):
                cell = worksheet.cell(row=row_idx, column=col_idx, value=row.get(header, ""))
                # Text such as "=total" is a translation, not a formula
                if isinstance(cell.value, str) and cell.data_type == "f":
                    cell.data_type = "s"

        worksheet.freeze_panes = "A2"
        worksheet.auto_filter.ref = worksheet.dimensions

        worksheet.column_dimensions[get_column_letter(1)].width = self.options.key_column_width
        for col_idx in range(2, len(headers) + 1):
            worksheet.column_dimensions[get_column_letter(col_idx)].width = self.options.value_column_width

        path = Path(output_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            workbook.save(str(path))
        except OSError as e:
            raise ProcessingError(
                f"Failed to write workbook {path}: {str(e)}",
                ErrorType.FILESYSTEM,
                context={"output_path": str(path)}
            )

        self.logger.info(f"Wrote {len(rows)} rows x {len(columns)} columns to {path}")
        return {
            "path": str(path.absolute()),
            "rows": len(rows),
            "columns": list(columns),
            "size": path.stat().st_size
        }
