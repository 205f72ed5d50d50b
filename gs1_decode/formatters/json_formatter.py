"""
JSON Formatter for decoded GS1 records

Renders a DecodedRecord as JSON, keyed either by AI code or by a
human-readable "TITLE (AI)" label taken from the AI table.
"""

from __future__ import annotations

import json
from typing import Dict, Mapping, Optional

from ..core.ai_table import AITable, load_ai_table


def field_label(code: str, table: Optional[AITable] = None) -> str:
    """Human-readable label for an AI, e.g. "GTIN (01)"."""
    definition = (table or load_ai_table()).get(code)
    if definition is None or not definition.title:
        return f"AI({code})"
    return f"{definition.title} ({code})"


def record_to_dict(
    record: Mapping[str, str],
    *,
    table: Optional[AITable] = None,
    use_titles: bool = False
) -> Dict[str, str]:
    """
    Convert a decoded record to a plain dictionary.

    Args:
        record: Decoded record (or any AI -> value mapping)
        table: AI table used for titles (default table if omitted)
        use_titles: Key by "TITLE (AI)" instead of the bare AI code

    Returns:
        Dictionary in payload order
    """
    if not use_titles:
        return dict(record)
    return {field_label(code, table): value for code, value in record.items()}


def record_to_json(
    record: Mapping[str, str],
    *,
    table: Optional[AITable] = None,
    use_titles: bool = False
) -> str:
    """
    Format a decoded record as JSON.

    Example:
        >>> print(record_to_json(record, use_titles=True))
        {
          "GTIN (01)": "06286740000249",
          "USE BY or EXPIRY (17)": "280430"
        }
    """
    output = record_to_dict(record, table=table, use_titles=use_titles)
    return json.dumps(output, ensure_ascii=False, indent=2)
