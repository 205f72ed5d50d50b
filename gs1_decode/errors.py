"""
Error types for the GS1 element string decoder.

Every failure carries an ErrorCode so callers can branch on the kind of
problem without matching message text.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Error codes."""
    INVALID_TABLE = "INVALID_TABLE"
    UNKNOWN_AI = "UNKNOWN_AI"
    FIELD_TOO_SHORT = "FIELD_TOO_SHORT"
    DUPLICATE_AI = "DUPLICATE_AI"
    AI_NOT_FOUND = "AI_NOT_FOUND"
    NON_NUMERIC_VALUE = "NON_NUMERIC_VALUE"
    INVALID_DATE_FORMAT = "INVALID_DATE_FORMAT"


class GS1DecodeError(Exception):
    """Base class for all decoder errors."""

    code: ErrorCode

    def __init__(self, message: str, *, ai: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.ai = ai


class AITableError(GS1DecodeError, ValueError):
    """The AI definition table is malformed (bad lengths, prefix collision)."""
    code = ErrorCode.INVALID_TABLE


class ParseError(GS1DecodeError, ValueError):
    """
    Structural failure while scanning an element string.

    Attributes:
        ai: AI code (or unmatched candidate) involved
        at_index: Cursor position in the payload when the error was raised
    """

    def __init__(
        self,
        message: str,
        *,
        ai: Optional[str] = None,
        at_index: Optional[int] = None
    ):
        super().__init__(message, ai=ai)
        self.at_index = at_index


class UnknownAIError(ParseError):
    code = ErrorCode.UNKNOWN_AI


class FieldTooShortError(ParseError):
    code = ErrorCode.FIELD_TOO_SHORT

    def __init__(
        self,
        message: str,
        *,
        ai: Optional[str] = None,
        value: str = "",
        at_index: Optional[int] = None
    ):
        super().__init__(message, ai=ai, at_index=at_index)
        self.value = value


class DuplicateAIError(ParseError):
    code = ErrorCode.DUPLICATE_AI


class AICodeNotFoundError(GS1DecodeError, LookupError):
    """An accessor asked for an AI that the record does not contain."""
    code = ErrorCode.AI_NOT_FOUND


class NonNumericValueError(GS1DecodeError, ValueError):
    code = ErrorCode.NON_NUMERIC_VALUE


class InvalidDateFormatError(GS1DecodeError, ValueError):
    code = ErrorCode.INVALID_DATE_FORMAT
