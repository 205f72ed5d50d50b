"""
Value accessors for decoded GS1 records.
"""

from .accessors import (
    get_value,
    get_numeric_value,
    get_raw_numeric_value,
    get_date,
    get_due_date,
    parse_gs1_date,
    decode_decimal_value,
    COUNT_AIS,
    DUE_DATE_AI,
    DEFAULT_CENTURY_PIVOT,
)

__all__ = [
    "get_value",
    "get_numeric_value",
    "get_raw_numeric_value",
    "get_date",
    "get_due_date",
    "parse_gs1_date",
    "decode_decimal_value",
    "COUNT_AIS",
    "DUE_DATE_AI",
    "DEFAULT_CENTURY_PIVOT",
]
