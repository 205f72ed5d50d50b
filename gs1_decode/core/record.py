"""
Decoded record: the result of parsing one GS1 element string.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, Iterator, Mapping, Optional

from ..accessors import accessors
from ..accessors.accessors import DEFAULT_CENTURY_PIVOT


class DecodedRecord(Mapping[str, str]):
    """
    Read-only mapping from AI code to raw field value, in payload order.

    Typed accessors are available as methods; they behave exactly like the
    functions in gs1_decode.accessors.
    """

    __slots__ = ('_fields', '_century_pivot')

    def __init__(
        self,
        fields: Optional[Mapping[str, str]] = None,
        *,
        century_pivot: int = DEFAULT_CENTURY_PIVOT
    ):
        self._fields: Dict[str, str] = dict(fields or {})
        self._century_pivot = century_pivot

    def __getitem__(self, code: str) -> str:
        return self._fields[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"DecodedRecord({self._fields!r})"

    def to_dict(self) -> Dict[str, str]:
        """Return a plain, mutable copy of the fields."""
        return dict(self._fields)

    def get_value(self, code: str) -> str:
        return accessors.get_value(self, code)

    def get_numeric_value(self, code: str) -> float:
        return accessors.get_numeric_value(self, code)

    def get_raw_numeric_value(self, code: str) -> float:
        return accessors.get_raw_numeric_value(self, code)

    def get_date(self, code: str, *, century_pivot: Optional[int] = None) -> date:
        if century_pivot is None:
            century_pivot = self._century_pivot
        return accessors.get_date(self, code, century_pivot=century_pivot)

    def get_due_date(self, *, century_pivot: Optional[int] = None) -> date:
        if century_pivot is None:
            century_pivot = self._century_pivot
        return accessors.get_due_date(self, century_pivot=century_pivot)
