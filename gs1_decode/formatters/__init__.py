"""
Output formatters for decoded GS1 records.
"""

from .json_formatter import (
    field_label,
    record_to_dict,
    record_to_json,
)

__all__ = [
    "field_label",
    "record_to_dict",
    "record_to_json",
]
