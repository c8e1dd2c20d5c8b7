"""Workbook reader built on openpyxl."""

import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Dict, List, Optional
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ..types import ErrorType, ProcessingError, StructureError


def normalize_cell(value: Any) -> Any:
    """Blank cells become empty strings and date/time cells ISO strings."""
    if value is None:
        return ""
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return value


class SheetReader:
    """
    Reads the first worksheet of a workbook as header-keyed rows.

    The first row is the header. Blank cells are kept as empty strings so
    no key is dropped, while rows without any value are skipped.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def read_rows(self, workbook_path: str) -> List[Dict[str, Any]]:
        """
        Read rows from the first worksheet.

        Args:
            workbook_path: Path to an .xlsx file

        Returns:
            List of mappings from header to normalized cell value

        Raises:
            ProcessingError: If the workbook cannot be opened
            StructureError: If the workbook has no worksheet
        """
        path = Path(workbook_path)
        try:
            workbook = load_workbook(filename=str(path), read_only=True, data_only=True)
        except (InvalidFileException, BadZipFile, KeyError, OSError) as e:
            raise ProcessingError(
                f"Failed to read workbook {path.name}: {e}",
                ErrorType.FILESYSTEM,
                context={"path": str(path)}
            )

        try:
            if not workbook.worksheets:
                raise StructureError("Workbook has no sheets.", context={"path": str(path)})
            worksheet = workbook.worksheets[0]
            rows = self._rows_from_values(worksheet.iter_rows(values_only=True))
        finally:
            workbook.close()

        self.logger.debug(f"Read {len(rows)} rows from {path.name}")
        return rows

    def _rows_from_values(self, values) -> List[Dict[str, Any]]:
        values = iter(values)
        header_values = next(values, None)
        if header_values is None:
            return []

        headers = self._headers(header_values)
        rows = []
        for raw in values:
            cells = [normalize_cell(value) for value in raw]
            if all(cell == "" for cell in cells):
                continue
            row = {}
            for position, header in headers.items():
                row[header] = cells[position] if position < len(cells) else ""
            rows.append(row)

        return rows

    def _headers(self, header_values) -> Dict[int, str]:
        """Map column positions to unique header names, skipping blank headers."""
        headers: Dict[int, str] = {}
        seen: Dict[str, int] = {}
        for position, value in enumerate(header_values):
            header = str(normalize_cell(value)).strip()
            if not header:
                continue
            if header in seen:
                seen[header] += 1
                renamed = f"{header}_{seen[header]}"
                self.logger.warning(f"Duplicate header '{header}' renamed to '{renamed}'")
                header = renamed
            else:
                seen[header] = 0
            headers[position] = header

        return headers
