"""Batch conversion between i18n workbooks and JSON documents."""

import asyncio
import functools
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, List, Optional
from .config import TransformOptions
from .error_handler import ErrorHandler
from .io import FileReader, FileWriter, SheetReader, SheetWriter
from .profiler import PerformanceProfiler
from .tabular import TabularConverter
from .types import (
    I18nTransformerInterface,
    BatchResult,
    ConversionResult,
    ProcessingError,
)


class I18nTransformer(I18nTransformerInterface):
    """
    Main implementation of the i18n transformer interface.

    Converts spreadsheets of dotted keys into one nested JSON document per
    locale and merges locale documents back into a single spreadsheet.
    Each column or document is an independent unit: units run on a thread
    pool and a failing unit is reported without stopping the others.
    """

    def __init__(self, options: Optional[TransformOptions] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the transformer.

        Args:
            options: Optional TransformOptions
            logger: Optional logger instance
        """
        self.options = options or TransformOptions()
        self.logger = logger or logging.getLogger(__name__)

        if self.options.enable_parallel_processing:
            self.executor = ThreadPoolExecutor(max_workers=self.options.max_workers)
        else:
            self.executor = None

        self.error_handler = ErrorHandler(self.logger)
        self.tabular = TabularConverter(self.options, self.logger)
        self.sheet_reader = SheetReader(self.logger)
        self.sheet_writer = SheetWriter(self.options, self.logger)
        self.file_reader = FileReader(self.error_handler, self.logger)
        self.file_writer = FileWriter(self.logger, indent=self.options.json_indent)
        self.profiler = PerformanceProfiler(self.logger)

    def close(self) -> None:
        """Shut down the worker pool."""
        if self.executor:
            self.executor.shutdown(wait=True)
            self.executor = None

    async def _run(self, func: Callable[..., Any], *args: Any) -> Any:
        if self.executor is None:
            return func(*args)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, functools.partial(func, *args))

    async def sheet_to_json(self, workbook_path: str, output_dir: str) -> BatchResult:
        """
        Write one JSON document per value column of a workbook.

        Args:
            workbook_path: Path to the .xlsx file; its first sheet is read
            output_dir: Directory receiving ``<column>.json`` files

        Returns:
            BatchResult with one unit per value column
        """
        path = Path(workbook_path)
        if not path.is_file():
            return self._failed(output_dir, f"Input file not found: {workbook_path}")

        with self.profiler.profile_operation("sheet_to_json") as profile:
            try:
                rows = await self._run(self.sheet_reader.read_rows, str(path))
                if not rows:
                    self.logger.warning("Sheet is empty, nothing to convert.")
                    return BatchResult(success=True, output_path=output_dir)

                flat_maps = self.tabular.column_flat_maps(rows)
            except ProcessingError as e:
                self.error_handler.handle_processing_error(e)
                return self._failed(output_dir, str(e))

            units = await asyncio.gather(*(
                self._run(self.tabular.unflatten_column, column, flat_map)
                for column, flat_map in flat_maps.items()
            ))

            units = [self._write_unit(unit, output_dir) for unit in units]
            profile.record(units=len(units),
                           failed_units=sum(1 for unit in units if not unit.success),
                           keys=sum(unit.key_count for unit in units))

        return self._finish(units, output_dir)

    async def sheets_to_json(self, input_dir: str, output_dir: str) -> BatchResult:
        """
        Write one JSON document per single-language workbook in a directory.

        Each workbook holds a key column and one value column; the JSON
        document is named after the workbook. Workbooks with several value
        columns use the first one.

        Args:
            input_dir: Directory scanned for ``*.xlsx`` files
            output_dir: Directory receiving ``<workbook>.json`` files

        Returns:
            BatchResult with one unit per workbook
        """
        validation = self.error_handler.validate_directory_path(input_dir, must_exist=True)
        if not validation.is_valid:
            return self._failed(output_dir, *(error.message for error in validation.errors))

        workbooks = sorted(
            path for path in Path(input_dir).iterdir()
            if path.is_file() and path.suffix.lower() == ".xlsx"
        )
        if not workbooks:
            self.logger.warning(f"No .xlsx files found under {input_dir}")
            return BatchResult(success=True, output_path=output_dir)

        with self.profiler.profile_operation("sheets_to_json") as profile:
            units = await asyncio.gather(*(
                self._run(self._convert_workbook, path) for path in workbooks
            ))

            units = [self._write_unit(unit, output_dir) for unit in units]
            profile.record(units=len(units),
                           failed_units=sum(1 for unit in units if not unit.success),
                           keys=sum(unit.key_count for unit in units))

        return self._finish(units, output_dir)

    def _convert_workbook(self, path: Path) -> ConversionResult:
        """Convert a single-language workbook into one tree."""
        name = path.stem
        try:
            rows = self.sheet_reader.read_rows(str(path))
            if not rows:
                return ConversionResult(name=name, success=True, data={}, key_count=0)

            flat_maps = self.tabular.column_flat_maps(rows)
        except ProcessingError as e:
            self.logger.error(f'Skipped "{path.name}": {e}')
            return ConversionResult(name=name, success=False, error=f'Skipped "{path.name}": {e}')

        columns = list(flat_maps)
        if len(columns) > 1:
            self.logger.warning(
                f"Detected multiple non-key columns ({', '.join(columns)}) in {path.name}; "
                f"using the first: {columns[0]}"
            )

        unit = self.tabular.unflatten_column(name, flat_maps[columns[0]])
        if not unit.success:
            unit.error = f'Skipped "{path.name}": {unit.error}'
        return unit

    async def json_to_sheet(self, input_dir: str, output_path: str) -> BatchResult:
        """
        Merge every JSON document in a directory into one workbook.

        Each document becomes a column named after its file; rows are the
        union of all flattened keys, sorted.

        Args:
            input_dir: Directory scanned for ``*.json`` files
            output_path: Destination .xlsx path

        Returns:
            BatchResult with one unit per document
        """
        try:
            documents = await self._run(self.file_reader.read_documents, input_dir)
        except ProcessingError as e:
            return self._failed(output_path, str(e))

        if not documents:
            return self._failed(output_path, f"No .json files found in: {input_dir}")

        with self.profiler.profile_operation("json_to_sheet") as profile:
            units: List[ConversionResult] = list(await asyncio.gather(*(
                self._run(self.tabular.flatten_document, document.name, document.data)
                if document.success else self._passthrough(document)
                for document in documents
            )))

            columns, rows = self.tabular.merge_flat_maps(units)
            if columns:
                try:
                    info = self.sheet_writer.write(columns, rows, output_path)
                except ProcessingError as e:
                    self.error_handler.handle_processing_error(e)
                    return self._failed(output_path, str(e))
                for unit in units:
                    if unit.success:
                        unit.output_path = info["path"]

            profile.record(units=len(units),
                           failed_units=sum(1 for unit in units if not unit.success),
                           keys=len(rows))

        return self._finish(units, output_path)

    async def _passthrough(self, unit: ConversionResult) -> ConversionResult:
        return unit

    def _write_unit(self, unit: ConversionResult, output_dir: str) -> ConversionResult:
        if not unit.success:
            return unit

        try:
            info = self.file_writer.write_document(unit.data, output_dir, unit.name)
        except ProcessingError as e:
            self.error_handler.handle_processing_error(e)
            unit.success = False
            unit.error = str(e)
            return unit

        unit.output_path = info["path"]
        self.logger.info(f"Wrote {info['filename']} ({unit.key_count} keys)")
        return unit

    def _finish(self, units: List[ConversionResult], output_path: str) -> BatchResult:
        errors = [unit.error for unit in units if not unit.success and unit.error]
        written = sum(1 for unit in units if unit.success)
        self.logger.info(f"Done: {written} of {len(units)} unit(s) converted into {output_path}")

        return BatchResult(
            success=not errors,
            output_path=output_path,
            units=list(units),
            errors=errors or None
        )

    def _failed(self, output_path: str, *errors: str) -> BatchResult:
        for error in errors:
            self.logger.error(error)
        return BatchResult(success=False, output_path=output_path, errors=list(errors))
