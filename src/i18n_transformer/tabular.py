"""Conversion between tabular rows and named trees."""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .config import TransformOptions
from .flattener import Flattener
from .types import ConversionResult, FlatMap, ProcessingError, StructureError
from .unflattener import Unflattener


Row = Dict[str, Any]


def _norm(header: Any) -> str:
    return str(header if header is not None else "").strip().lower()


def find_key_column(headers: Sequence[Any], key_name: str = "key") -> str:
    """
    Find the key column among the headers.

    Raises:
        StructureError: If no header matches ``key_name`` case-insensitively
    """
    wanted = _norm(key_name)
    for header in headers:
        if _norm(header) == wanted:
            return header
    raise StructureError(
        f'Cannot find a "{key_name}" column in the sheet header.',
        context={"headers": list(headers)},
    )


def value_columns(headers: Sequence[Any], key_column: str) -> List[str]:
    """Return every header except the key column, in sheet order."""
    columns = [header for header in headers if _norm(header) != _norm(key_column)]
    if not columns:
        raise StructureError(
            f'No value columns found (need at least one column besides "{key_column}").',
            context={"headers": list(headers)},
        )
    return columns


class TabularConverter:
    """
    Converts between sheet rows and named trees.

    In the sheet direction each non-key column becomes one tree (one
    locale document); in the other direction each named tree becomes one
    column of a merged row set keyed by flat path. Failures are recorded
    per column or per document and never abort the siblings.
    """

    def __init__(self, options: Optional[TransformOptions] = None,
                 logger: Optional[logging.Logger] = None):
        self.options = options or TransformOptions()
        self.logger = logger or logging.getLogger(__name__)
        self.flattener = Flattener(self.options, self.logger)
        self.unflattener = Unflattener(self.options, self.logger)

    def rows_to_flat_maps(self, rows: Sequence[Row], key_column: str,
                          columns: Sequence[str]) -> Dict[str, FlatMap]:
        """
        Build one FlatMap per value column.

        Rows with a blank key are skipped, blank cells become empty strings
        and a repeated key keeps the value of its last row.
        """
        flat_maps: Dict[str, FlatMap] = {column: {} for column in columns}
        seen = set()

        for row_number, row in enumerate(rows, start=2):
            key = str(row.get(key_column) if row.get(key_column) is not None else "").strip()
            if not key:
                continue
            if key in seen:
                self.logger.warning(f"Duplicate key '{key}' on row {row_number}; later value wins")
            seen.add(key)

            for column in columns:
                value = row.get(column)
                flat_maps[column][key] = "" if value is None else value

        return flat_maps

    def rows_to_documents(self, rows: Sequence[Row],
                          columns: Optional[Sequence[str]] = None) -> List[ConversionResult]:
        """
        Convert sheet rows into one tree per value column.

        Args:
            rows: Mappings of column header to cell value
            columns: Value columns to convert (defaults to every non-key column)

        Returns:
            One ConversionResult per column, holding the tree in ``data``

        Raises:
            StructureError: If the key column or value columns are missing
        """
        flat_maps = self.column_flat_maps(rows, columns)
        return [self.unflatten_column(column, flat_map) for column, flat_map in flat_maps.items()]

    def column_flat_maps(self, rows: Sequence[Row],
                         columns: Optional[Sequence[str]] = None) -> Dict[str, FlatMap]:
        """
        Detect the key and value columns of ``rows`` and build their FlatMaps.

        Returns:
            Mapping of value column to FlatMap, in column order; empty for
            no rows

        Raises:
            StructureError: If the key column or value columns are missing
        """
        if not rows:
            return {}

        headers = list(rows[0].keys())
        key_column = find_key_column(headers, self.options.key_column)
        if columns is None:
            columns = value_columns(headers, key_column)

        return self.rows_to_flat_maps(rows, key_column, columns)

    def unflatten_column(self, name: str, flat_map: FlatMap) -> ConversionResult:
        """Unflatten a single column, capturing its failure."""
        try:
            tree = self.unflattener.unflatten(flat_map)
        except ProcessingError as e:
            self.logger.error(f"Column '{name}' failed: {e}")
            return ConversionResult(name=name, success=False, key_count=len(flat_map), error=str(e))

        return ConversionResult(name=name, success=True, data=tree, key_count=len(flat_map))

    def flatten_document(self, name: str, tree: Any) -> ConversionResult:
        """Flatten a single named document, capturing its failure."""
        try:
            flat = self.flattener.flatten(tree)
        except ProcessingError as e:
            self.logger.error(f"Document '{name}' failed: {e}")
            return ConversionResult(name=name, success=False, error=str(e))

        return ConversionResult(name=name, success=True, data=flat, key_count=len(flat))

    def documents_to_rows(self, documents: Sequence[Tuple[str, Any]]
                          ) -> Tuple[List[str], List[Row], List[ConversionResult]]:
        """
        Flatten named trees and merge them into one row set.

        Args:
            documents: (name, tree) pairs; the name becomes the column header

        Returns:
            Tuple of (columns, rows, results); columns are sorted, rows are
            sorted by key and start with the key column, cells missing from
            a document are empty strings, and failed documents get no column
        """
        results = [self.flatten_document(name, tree) for name, tree in documents]
        return self.merge_flat_maps(results) + (results,)

    def merge_flat_maps(self, results: Sequence[ConversionResult]) -> Tuple[List[str], List[Row]]:
        """Merge successful flatten results into sorted columns and rows."""
        flat_maps = {result.name: result.data for result in results if result.success}
        columns = sorted(flat_maps)
        keys = sorted({key for flat in flat_maps.values() for key in flat})

        key_header = self.options.key_column
        rows: List[Row] = []
        for key in keys:
            row: Row = {key_header: key}
            for column in columns:
                row[column] = flat_maps[column].get(key, "")
            rows.append(row)

        return columns, rows
