"""
Core decoding modules: AI table, field parser and decoded record.
"""

from .ai_table import (
    AIDefinition,
    AITable,
    build_ai_table,
    load_ai_table,
    RAW_AI_TABLE,
)
from .record import DecodedRecord
from .parser import (
    GS,
    DuplicatePolicy,
    GS1Decoder,
    ParseOptions,
    parse_element_string,
)

__all__ = [
    "AIDefinition",
    "AITable",
    "build_ai_table",
    "load_ai_table",
    "RAW_AI_TABLE",
    "DecodedRecord",
    "GS",
    "DuplicatePolicy",
    "GS1Decoder",
    "ParseOptions",
    "parse_element_string",
]
