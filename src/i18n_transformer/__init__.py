"""
i18n Transformer - Bidirectional i18n spreadsheet/JSON conversion.

Converts spreadsheets of dotted translation keys into nested JSON
documents, one per locale, and merges locale documents back into a
single spreadsheet.
"""

__version__ = "1.0.0"

from .config import TransformOptions
from .flattener import Flattener, flatten
from .tabular import TabularConverter
from .transformer import I18nTransformer
from .types import (
    BatchResult,
    ConflictingSchemaError,
    ConversionResult,
    MalformedPathError,
    ProcessingError,
    StructureError,
    UnsupportedValueTypeError,
)
from .unflattener import Unflattener, unflatten

__all__ = [
    "I18nTransformer",
    "TabularConverter",
    "TransformOptions",
    "Flattener",
    "Unflattener",
    "flatten",
    "unflatten",
    "BatchResult",
    "ConversionResult",
    "ProcessingError",
    "MalformedPathError",
    "ConflictingSchemaError",
    "UnsupportedValueTypeError",
    "StructureError",
]
