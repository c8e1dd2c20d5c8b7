"""File I/O operations for the i18n transformer."""

from .file_reader import FileReader
from .file_writer import FileWriter
from .sheet_reader import SheetReader
from .sheet_writer import SheetWriter

__all__ = ["FileReader", "FileWriter", "SheetReader", "SheetWriter"]
