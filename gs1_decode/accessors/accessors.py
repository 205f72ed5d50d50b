"""
GS1 Value Accessors

Typed access to fields of a decoded record:
- Raw string lookup
- Numeric decoding with GS1 implied decimal positions (310n, 320n, etc.)
- Plain numeric decoding without scaling
- YYMMDD date decoding, including the GS1 day "00" end-of-month rule

All parsing is locale-independent: only ASCII digits, an optional sign and
'.' as the decimal point are accepted.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Mapping, Tuple

from dateutil.relativedelta import relativedelta

from ..errors import (
    AICodeNotFoundError,
    InvalidDateFormatError,
    NonNumericValueError,
)


DUE_DATE_AI = "12"

# Count AIs carry a plain number with no implied decimal point
COUNT_AIS = frozenset({"30", "37"})

DEFAULT_CENTURY_PIVOT = 51

_DIGITS_RE = re.compile(r'^[0-9]+$')
_PLAIN_NUMBER_RE = re.compile(r'^[+-]?[0-9]+(?:\.[0-9]+)?$')
_YYMMDD_RE = re.compile(r'^[0-9]{6}$')


def get_value(record: Mapping[str, str], code: str) -> str:
    """
    Get the raw string value of an AI.

    Raises:
        AICodeNotFoundError: If the record has no field for the AI
    """
    try:
        return record[code]
    except KeyError:
        raise AICodeNotFoundError(f"AI {code} not found", ai=code) from None


def decode_decimal_value(
    value: str,
    decimal_positions: int
) -> Tuple[float, str]:
    """
    Decode a numeric value with implied decimal positions.

    Used for weight/measure AIs like 310x, 320x, 392x, etc.
    where the last digit of the AI indicates decimal places.

    Example: AI 3202, value "001234" -> 12.34

    Args:
        value: Numeric string value
        decimal_positions: Number of decimal places (0-9)

    Returns:
        (float_value, formatted_string)
    """
    if not _DIGITS_RE.match(value):
        raise NonNumericValueError(f"Value must be numeric: {value!r}")

    if decimal_positions == 0:
        return float(value), value

    if len(value) <= decimal_positions:
        value = value.zfill(decimal_positions + 1)

    int_part = value[:-decimal_positions]
    dec_part = value[-decimal_positions:]
    formatted = f"{int_part}.{dec_part}"

    return float(formatted), formatted


def _parse_plain_number(code: str, value: str) -> float:
    if not _PLAIN_NUMBER_RE.match(value):
        raise NonNumericValueError(
            f"Non-numeric value for AI {code}: {value!r}",
            ai=code
        )
    return float(value)


def get_numeric_value(record: Mapping[str, str], code: str) -> float:
    """
    Get the numeric value of an AI with GS1 decimal scaling applied.

    For 4-digit AIs the last digit of the code is the implied decimal
    position, so AI 3202 with "001234" is 12.34. The count AIs 30 and 37
    are returned unscaled.

    Raises:
        AICodeNotFoundError: If the record has no field for the AI
        NonNumericValueError: If the AI carries no numeric quantity or
            the value is not numeric
    """
    value = get_value(record, code)

    if len(code) == 4 and code[3].isdigit():
        try:
            number, _ = decode_decimal_value(value, int(code[3]))
        except NonNumericValueError:
            raise NonNumericValueError(
                f"Non-numeric value for AI {code}: {value!r}",
                ai=code
            ) from None
        return number

    if code in COUNT_AIS:
        return _parse_plain_number(code, value)

    raise NonNumericValueError(f"AI {code} does not hold a numeric value", ai=code)


def get_raw_numeric_value(record: Mapping[str, str], code: str) -> float:
    """Get the value of an AI as a plain decimal number, without scaling."""
    return _parse_plain_number(code, get_value(record, code))


def parse_gs1_date(
    value: str,
    *,
    century_pivot: int = DEFAULT_CENTURY_PIVOT
) -> date:
    """
    Decode a GS1 YYMMDD date.

    Day "00" means the last day of the month. Century pivot (default 51):
    YY >= 51 is 19YY, YY < 51 is 20YY.

    Raises:
        InvalidDateFormatError: If the value is not a valid YYMMDD date
    """
    if not _YYMMDD_RE.match(value):
        raise InvalidDateFormatError(f"Date must be YYMMDD, got {value!r}")

    yy = int(value[0:2])
    mm = int(value[2:4])
    dd = int(value[4:6])

    year = 1900 + yy if yy >= century_pivot else 2000 + yy

    if mm < 1 or mm > 12:
        raise InvalidDateFormatError(f"Invalid month in {value!r}: {mm}")

    if dd == 0:
        return date(year, mm, 1) + relativedelta(months=1, days=-1)

    try:
        return date(year, mm, dd)
    except ValueError as e:
        raise InvalidDateFormatError(f"Invalid date {value!r}: {e}") from e


def get_date(
    record: Mapping[str, str],
    code: str,
    *,
    century_pivot: int = DEFAULT_CENTURY_PIVOT
) -> date:
    """Decode the YYMMDD date held by a date AI (11, 13, 15, 17, ...)."""
    value = get_value(record, code)
    try:
        return parse_gs1_date(value, century_pivot=century_pivot)
    except InvalidDateFormatError as e:
        e.ai = code
        raise


def get_due_date(
    record: Mapping[str, str],
    *,
    century_pivot: int = DEFAULT_CENTURY_PIVOT
) -> date:
    """Decode the due date, AI (12)."""
    return get_date(record, DUE_DATE_AI, century_pivot=century_pivot)
