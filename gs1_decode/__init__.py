"""
GS1 Element String Decoder

Decodes the data payload of GS1 barcodes (GS1-128, GS1 DataMatrix,
GS1 DataBar, GS1 QR) into a mapping from Application Identifier to raw
field value, with typed accessors for numeric and date fields.

Based on GS1 General Specifications and the GS1 Barcode Syntax Dictionary.
"""

from .core.ai_table import AIDefinition, AITable, build_ai_table, load_ai_table
from .core.record import DecodedRecord
from .core.parser import (
    GS,
    DuplicatePolicy,
    GS1Decoder,
    ParseOptions,
    parse_element_string,
)
from .accessors.accessors import (
    get_value,
    get_numeric_value,
    get_raw_numeric_value,
    get_date,
    get_due_date,
    parse_gs1_date,
)
from .formatters.json_formatter import record_to_dict, record_to_json
from .errors import (
    ErrorCode,
    GS1DecodeError,
    AITableError,
    ParseError,
    UnknownAIError,
    FieldTooShortError,
    DuplicateAIError,
    AICodeNotFoundError,
    NonNumericValueError,
    InvalidDateFormatError,
)

__version__ = "1.0.0"
__all__ = [
    "AIDefinition",
    "AITable",
    "build_ai_table",
    "load_ai_table",
    "DecodedRecord",
    "GS",
    "DuplicatePolicy",
    "GS1Decoder",
    "ParseOptions",
    "parse_element_string",
    "get_value",
    "get_numeric_value",
    "get_raw_numeric_value",
    "get_date",
    "get_due_date",
    "parse_gs1_date",
    "record_to_dict",
    "record_to_json",
    "ErrorCode",
    "GS1DecodeError",
    "AITableError",
    "ParseError",
    "UnknownAIError",
    "FieldTooShortError",
    "DuplicateAIError",
    "AICodeNotFoundError",
    "NonNumericValueError",
    "InvalidDateFormatError",
]
