"""
GS1 Element String Decoder

Splits a GS1 element string from a GS1-128, GS1 DataMatrix, GS1 DataBar or
GS1 QR barcode into its AI fields.

Key GS1 Rules:
- Variable-length AIs SHALL be delimited by FNC1/GS unless they are the last element
- FNC1 is transmitted as <GS> (ASCII 29, 0x1D) by scanners
- Fixed-length AIs do not require separators

The scan is a single left-to-right pass with no backtracking. Characters are
accumulated into a candidate AI until it matches a table entry; this is only
unambiguous because the AI table is prefix-free.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Optional

from .ai_table import AITable, load_ai_table
from .record import DecodedRecord
from ..accessors.accessors import DEFAULT_CENTURY_PIVOT
from ..errors import DuplicateAIError, FieldTooShortError, UnknownAIError

logger = logging.getLogger(__name__)


GS = '\x1d'


class DuplicatePolicy(str, Enum):
    """What to do when an AI occurs more than once in one element string."""
    KEEP_FIRST = "keep-first"
    OVERWRITE = "overwrite"
    ERROR = "error"


@dataclass
class ParseOptions:
    """
    Configuration options for decoding.

    Attributes:
        terminator: Character ending a variable-length field (FNC1/GS)
        duplicate_policy: Handling of an AI repeated in one payload
        century_pivot: Year pivot for date century determination
        skip_extra_separators: Skip a terminator found where an AI should
            start (e.g. a superfluous GS after a fixed-length AI) instead of
            treating it as part of the AI
        custom_table: Optional AI table to use instead of the default one
    """
    terminator: str = GS
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.KEEP_FIRST
    century_pivot: int = DEFAULT_CENTURY_PIVOT
    skip_extra_separators: bool = False
    custom_table: Optional[AITable] = None

    def __post_init__(self):
        if len(self.terminator) != 1:
            raise ValueError(
                f"Terminator must be a single character, got {self.terminator!r}"
            )
        self.duplicate_policy = DuplicatePolicy(self.duplicate_policy)

    @classmethod
    def from_env(cls) -> ParseOptions:
        """
        Build options from environment variables.

        GS1_DECODE_TERMINATOR: a single character, or its decimal code (e.g. 29)
        GS1_DECODE_DUPLICATE_POLICY: keep-first, overwrite or error
        GS1_DECODE_CENTURY_PIVOT: two-digit year pivot (e.g. 51)
        GS1_DECODE_SKIP_EXTRA_SEPARATORS: 1/true/yes to skip stray separators
        """
        terminator = os.getenv("GS1_DECODE_TERMINATOR", GS)
        if len(terminator) > 1 and terminator.isdigit():
            terminator = chr(int(terminator))
        policy = os.getenv(
            "GS1_DECODE_DUPLICATE_POLICY",
            DuplicatePolicy.KEEP_FIRST.value
        )
        century_pivot = int(
            os.getenv("GS1_DECODE_CENTURY_PIVOT", str(DEFAULT_CENTURY_PIVOT))
        )
        skip = os.getenv("GS1_DECODE_SKIP_EXTRA_SEPARATORS", "")
        return cls(
            terminator=terminator,
            duplicate_policy=DuplicatePolicy(policy),
            century_pivot=century_pivot,
            skip_extra_separators=skip.strip().lower() in ("1", "true", "yes")
        )


class GS1Decoder:
    """
    Reusable element string decoder bound to an AI table and options.

    Each call to parse() builds a new record, so one decoder can be
    shared between threads.
    """

    def __init__(self, options: Optional[ParseOptions] = None):
        self.options = options or ParseOptions()
        self.table = self.options.custom_table or load_ai_table()

    def _store(self, fields: Dict[str, str], ai: str, value: str, at_index: int) -> None:
        """Insert a field, applying the duplicate policy."""
        if ai not in fields:
            fields[ai] = value
            return

        policy = self.options.duplicate_policy
        if policy is DuplicatePolicy.ERROR:
            raise DuplicateAIError(
                f"AI {ai} occurs more than once",
                ai=ai,
                at_index=at_index
            )
        if policy is DuplicatePolicy.OVERWRITE:
            logger.warning(
                "Duplicate AI %s: replacing %r with %r", ai, fields[ai], value
            )
            fields[ai] = value
        else:
            logger.warning(
                "Duplicate AI %s: keeping %r, dropping %r", ai, fields[ai], value
            )

    @staticmethod
    def _unknown_ai(text: str, ai_start: int) -> UnknownAIError:
        """Error for the unmatched remainder starting at ai_start."""
        remainder = text[ai_start:]
        shown = remainder if len(remainder) <= 20 else remainder[:20] + '...'
        return UnknownAIError(
            f"Unknown AI {shown!r}",
            ai=remainder,
            at_index=ai_start
        )

    def parse(self, text: str) -> DecodedRecord:
        """
        Decode a GS1 element string.

        Args:
            text: Element string with FNC1 transmitted as the terminator

        Returns:
            DecodedRecord mapping AI code to raw value

        Raises:
            UnknownAIError: If characters remain that never match an AI
            FieldTooShortError: If a field is shorter than its AI allows
            DuplicateAIError: If an AI repeats under DuplicatePolicy.ERROR
        """
        terminator = self.options.terminator
        fields: Dict[str, str] = {}
        candidate = ''
        ai_start = 0
        pos = 0
        end = len(text)

        while pos < end:
            if not candidate:
                if text[pos] == terminator and self.options.skip_extra_separators:
                    logger.debug("Skipping superfluous separator at index %d", pos)
                    pos += 1
                    continue
                ai_start = pos
            candidate += text[pos]
            pos += 1

            definition = self.table.get(candidate)
            if definition is None:
                # No code is longer than this, so the rest can never match
                if len(candidate) >= self.table.max_code_length:
                    raise self._unknown_ai(text, ai_start)
                continue

            value_start = pos
            value_chars = []
            while len(value_chars) < definition.max_length and pos < end:
                char = text[pos]
                pos += 1
                if char == terminator:
                    break
                value_chars.append(char)
            value = ''.join(value_chars)

            if len(value) < definition.min_length:
                raise FieldTooShortError(
                    f"Short field for AI {candidate}: {value!r} "
                    f"(minimum length {definition.min_length})",
                    ai=candidate,
                    value=value,
                    at_index=value_start
                )

            logger.debug("AI(%s) = %r", candidate, value)
            self._store(fields, candidate, value, ai_start)
            candidate = ''

        if candidate:
            raise self._unknown_ai(text, ai_start)

        return DecodedRecord(fields, century_pivot=self.options.century_pivot)


def parse_element_string(
    payload: str,
    terminator: Optional[str] = None,
    *,
    options: Optional[ParseOptions] = None,
    table: Optional[AITable] = None
) -> DecodedRecord:
    """
    Decode a GS1 element string.

    Main entry point for the decoder.

    Args:
        payload: Raw barcode data string
        terminator: FNC1/GS character; overrides options.terminator
        options: Optional decoding configuration
        table: Optional AI table; overrides options.custom_table

    Returns:
        DecodedRecord mapping AI code to raw value

    Examples:
        >>> record = parse_element_string("10ABC\\x1d0106285096000842")
        >>> record["10"]
        'ABC'
        >>> record["01"]
        '06285096000842'
    """
    if options is None:
        options = ParseOptions()
    if terminator is not None:
        options = replace(options, terminator=terminator)
    if table is not None:
        options = replace(options, custom_table=table)
    return GS1Decoder(options).parse(payload)
