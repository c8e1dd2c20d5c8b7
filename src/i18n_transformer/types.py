"""Core type definitions for the i18n transformer."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


Scalar = Union[str, int, float, bool]
FlatMap = Dict[str, Any]


class NodeKind(Enum):
    """Kind of a node in a tree being reconstructed from flat paths."""
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"
    UNSET = "unset"


class ErrorType(Enum):
    """Enumeration of error types."""
    SYNTAX = "syntax"
    STRUCTURE = "structure"
    PATH = "path"
    SCHEMA = "schema"
    VALUE = "value"
    FILESYSTEM = "filesystem"


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]
    data: Any = None


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str
    partial_results: Optional[Any] = None


@dataclass
class ConversionResult:
    """Result of converting a single unit (one column or one document)."""
    name: str
    success: bool
    data: Any = None
    key_count: int = 0
    output_path: Optional[str] = None
    error: Optional[str] = None


@dataclass
class BatchResult:
    """Result of a batch of conversions."""
    success: bool
    output_path: str
    units: List[ConversionResult] = field(default_factory=list)
    errors: Optional[List[str]] = None

    @property
    def written(self) -> List[ConversionResult]:
        return [unit for unit in self.units if unit.success]


class ProcessingError(Exception):
    """Custom exception for processing errors."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


class MalformedPathError(ProcessingError):
    """A flat path has an empty segment, or a tree key cannot be encoded as one."""

    def __init__(self, message: str, path: str):
        super().__init__(message, ErrorType.PATH, context={"path": path})
        self.path = path


class ConflictingSchemaError(ProcessingError):
    """A path prefix is used as more than one kind of node."""

    def __init__(self, message: str, prefix: str, paths: List[str]):
        super().__init__(message, ErrorType.SCHEMA, context={"prefix": prefix, "paths": paths})
        self.prefix = prefix
        self.paths = paths


class UnsupportedValueTypeError(ProcessingError):
    """A tree leaf is neither a scalar nor a container."""

    def __init__(self, message: str, path: str, value_type: str):
        super().__init__(message, ErrorType.VALUE, context={"path": path, "type": value_type})
        self.path = path
        self.value_type = value_type


class StructureError(ProcessingError):
    """Tabular or document input does not have the expected shape."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message, ErrorType.STRUCTURE, context=context)


# Abstract base classes for interfaces

class I18nTransformerInterface(ABC):
    """Abstract interface for the spreadsheet/JSON batch transformer."""

    @abstractmethod
    async def sheet_to_json(self, workbook_path: str, output_dir: str) -> BatchResult:
        """Write one JSON document per value column of a workbook."""
        pass

    @abstractmethod
    async def sheets_to_json(self, input_dir: str, output_dir: str) -> BatchResult:
        """Write one JSON document per single-language workbook in a directory."""
        pass

    @abstractmethod
    async def json_to_sheet(self, input_dir: str, output_path: str) -> BatchResult:
        """Merge every JSON document in a directory into one workbook."""
        pass


class ErrorHandlerInterface(ABC):
    """Abstract interface for error handling."""

    @abstractmethod
    def validate_input(self, input_data: str) -> ValidationResult:
        """Validate input data."""
        pass

    @abstractmethod
    def handle_processing_error(self, error: ProcessingError) -> ErrorResponse:
        """Handle processing errors."""
        pass
