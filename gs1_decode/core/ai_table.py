"""
AI Definition Table for the GS1 decoder

Holds the length rules of every known GS1 Application Identifier.
Based on the GS1 General Specifications and GS1 Barcode Syntax Dictionary.

Reference: https://ref.gs1.org/ai/

The table is prefix-free: no registered AI is a proper prefix of another.
The field parser relies on this to find AI boundaries with a greedy
character-by-character scan, so it is checked once when a table is built.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from ..errors import AITableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AIDefinition:
    """
    A single GS1 Application Identifier entry.

    Attributes:
        code: The Application Identifier code (2-4 digits)
        min_length: Minimum data length
        max_length: Maximum data length
        title: Human-readable title
    """
    code: str
    min_length: int
    max_length: int
    title: str = ""

    def __post_init__(self):
        if not 1 <= self.min_length <= self.max_length:
            raise AITableError(
                f"AI {self.code}: invalid length range "
                f"{self.min_length}..{self.max_length}",
                ai=self.code
            )

    @property
    def fixed_length(self) -> Optional[int]:
        """Data length if predefined, None if variable."""
        if self.min_length == self.max_length:
            return self.max_length
        return None

    @property
    def decimal_position(self) -> Optional[int]:
        """Implied decimal position carried by the 4th digit of 4-digit AIs."""
        if len(self.code) == 4 and self.code[3].isdigit():
            return int(self.code[3])
        return None


class AITable:
    """
    Immutable registry of AI definitions keyed by code.
    """

    def __init__(self, definitions: Mapping[str, AIDefinition]):
        entries: Dict[str, AIDefinition] = {}
        for code, definition in definitions.items():
            if code != definition.code:
                raise AITableError(
                    f"AI key {code!r} does not match definition code "
                    f"{definition.code!r}",
                    ai=code
                )
            entries[code] = definition

        _check_prefix_free(entries)
        self._entries: Mapping[str, AIDefinition] = MappingProxyType(entries)
        self._max_code_length = max((len(code) for code in entries), default=0)

    @property
    def max_code_length(self) -> int:
        """Length of the longest registered code."""
        return self._max_code_length

    def get(self, code: str) -> Optional[AIDefinition]:
        """Get AI definition by exact code."""
        return self._entries.get(code)

    def definitions(self) -> Mapping[str, AIDefinition]:
        """Read-only view of all definitions."""
        return self._entries

    def __contains__(self, code: object) -> bool:
        return code in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AITable({len(self)} AIs)"


def _check_prefix_free(entries: Mapping[str, AIDefinition]) -> None:
    """Raise AITableError if any code is a proper prefix of another."""
    for code in entries:
        for end in range(1, len(code)):
            prefix = code[:end]
            if prefix in entries:
                raise AITableError(
                    f"AI {prefix} is a prefix of AI {code}; "
                    "AI boundaries would be ambiguous",
                    ai=code
                )


# Comprehensive GS1 AI table.
# Specification components use GS1 Syntax Dictionary notation:
#   N14     fixed length 14
#   X..20   variable length 1-20
#   [X..17] optional component, adds nothing to the minimum length
# A trailing 'n' on the AI expands to ten codes (310n -> 3100..3109);
# a range "91-99" expands to one code per number.
RAW_AI_TABLE = """
# AI    Specification        Title
00      N18                  # SSCC
01      N14                  # GTIN
02      N14                  # CONTENT
10      X..20                # BATCH/LOT
11      N6                   # PROD DATE
12      N6                   # DUE DATE
13      N6                   # PACK DATE
15      N6                   # BEST BEFORE or BEST BY
16      N6                   # SELL BY
17      N6                   # USE BY or EXPIRY
20      N2                   # VARIANT
21      X..20                # SERIAL
22      X..29                # CPV
235     X..28                # TPX
240     X..30                # ADDITIONAL ID
241     X..30                # CUST. PART No.
242     N..6                 # MTO VARIANT
243     X..20                # PCN
250     X..30                # SECONDARY SERIAL
251     X..30                # REF. TO SOURCE
253     N13 [X..17]          # GDTI
254     X..20                # GLN EXTENSION COMPONENT
255     N13 [N..12]          # GCN
30      N..8                 # VAR. COUNT
310n    N6                   # NET WEIGHT (kg)
311n    N6                   # LENGTH (m)
312n    N6                   # WIDTH (m)
313n    N6                   # HEIGHT (m)
314n    N6                   # AREA (m2)
315n    N6                   # NET VOLUME (l)
316n    N6                   # NET VOLUME (m3)
320n    N6                   # NET WEIGHT (lb)
321n    N6                   # LENGTH (in)
322n    N6                   # LENGTH (ft)
323n    N6                   # LENGTH (yd)
324n    N6                   # WIDTH (in)
325n    N6                   # WIDTH (ft)
326n    N6                   # WIDTH (yd)
327n    N6                   # HEIGHT (in)
328n    N6                   # HEIGHT (ft)
329n    N6                   # HEIGHT (yd)
330n    N6                   # GROSS WEIGHT (kg)
331n    N6                   # LENGTH (m), log
332n    N6                   # WIDTH (m), log
333n    N6                   # HEIGHT (m), log
334n    N6                   # AREA (m2), log
335n    N6                   # VOLUME (l), log
336n    N6                   # VOLUME (m3), log
337n    N6                   # KG PER m2
340n    N6                   # GROSS WEIGHT (lb)
341n    N6                   # LENGTH (in), log
342n    N6                   # LENGTH (ft), log
343n    N6                   # LENGTH (yd), log
344n    N6                   # WIDTH (in), log
345n    N6                   # WIDTH (ft), log
346n    N6                   # WIDTH (yd), log
347n    N6                   # HEIGHT (in), log
348n    N6                   # HEIGHT (ft), log
349n    N6                   # HEIGHT (yd), log
350n    N6                   # AREA (in2)
351n    N6                   # AREA (ft2)
352n    N6                   # AREA (yd2)
353n    N6                   # AREA (in2), log
354n    N6                   # AREA (ft2), log
355n    N6                   # AREA (yd2), log
356n    N6                   # NET WEIGHT (t oz)
357n    N6                   # NET VOLUME (oz)
360n    N6                   # NET VOLUME (q)
361n    N6                   # NET VOLUME (gal)
362n    N6                   # VOLUME (q), log
363n    N6                   # VOLUME (gal), log
364n    N6                   # VOLUME (in3)
365n    N6                   # VOLUME (ft3)
366n    N6                   # VOLUME (yd3)
367n    N6                   # VOLUME (in3), log
368n    N6                   # VOLUME (ft3), log
369n    N6                   # VOLUME (yd3), log
37      N..8                 # COUNT
390n    N..15                # AMOUNT
392n    N..15                # PRICE
395n    N6                   # PRICE/UoM
400     X..30                # ORDER NUMBER
401     X..30                # GINC
402     N17                  # GSIN
403     X..30                # ROUTE
410     N13                  # SHIP TO LOC
411     N13                  # BILL TO
412     N13                  # PURCHASE FROM
413     N13                  # SHIP FOR LOC
414     N13                  # LOC No.
415     N13                  # PAY TO
416     N13                  # PROD/SERV LOC
417     N13                  # PARTY
420     X..20                # SHIP TO POST
421     N3 [X..12]           # SHIP TO POST
422     N3                   # ORIGIN
423     N3 [N..12]           # COUNTRY - INITIAL PROCESS
424     N3                   # COUNTRY - PROCESS
425     N3                   # COUNTRY - DISASSEMBLY
426     N3                   # COUNTRY - FULL PROCESS
427     X..3                 # ORIGIN SUBDIVISION
7001    N13                  # NSN
7002    X..30                # MEAT CUT
7003    N10                  # EXPIRY TIME
7004    N..4                 # ACTIVE POTENCY
7005    X..12                # CATCH AREA
7006    N6                   # FIRST FREEZE DATE
7007    N6 [N..6]            # HARVEST DATE
7008    X..3                 # AQUATIC SPECIES
7009    X..10                # FISHING GEAR TYPE
7010    X..2                 # PROD METHOD
7020    X..20                # REFURB LOT
7021    X..20                # FUNC STAT
7022    X..20                # REV STAT
7023    X..30                # GIAI - ASSEMBLY
703n    N3 [X..27]           # PROCESSOR
710     X..20                # NHRN PZN
711     X..20                # NHRN CIP
712     X..20                # NHRN CN
713     X..20                # NHRN DRN
714     X..20                # NHRN AIM
715     X..20                # NHRN NDC
716     X..20                # NHRN AIC
717     X..20                # NHRN SRN
8001    N14                  # DIMENSIONS
8002    X..20                # CMT No.
8003    N1 N13 [X..16]       # GRAI
8004    X..30                # GIAI
8005    N6                   # PRICE PER UNIT
8006    N14 N2 N2            # ITIP
8007    X..30                # IBAN
8008    N8 [N..4]            # PROD TIME
8009    X..50                # OPTSEN
8010    Y..30                # CPID
8011    N..12                # CPID SERIAL
8012    X..20                # VERSION
8013    X..25                # GMN
8017    N18                  # GSRN - PROVIDER
8018    N18                  # GSRN - RECIPIENT
8019    N..10                # SRIN
8020    X..25                # REF No.
8026    N14 N2 N2            # ITIP CONTENT
8030    X..90                # DIGSIG
8100    N6                   # COUPON NSC + OFFER
8101    N10                  # COUPON NSC + OFFER + END
8102    N2                   # COUPON NSC
8110    X..30                # COUPON CODE
8111    N4                   # POINTS
8112    X..70                # COUPON OFFER
8200    X..70                # PRODUCT URL
90      X..30                # INTERNAL
91-99   X..30                # INTERNAL
"""


_COMPONENT_RE = re.compile(r'^(\[)?([NXY])(\.\.)?(\d+)(\])?$')


def _parse_syntax_spec(spec: str) -> Tuple[int, int]:
    """
    Parse a GS1 Syntax Dictionary specification into a length range.

    Examples:
        "N14" -> (14, 14)
        "X..20" -> (1, 20)
        "N13 [X..17]" -> (13, 30)
        "N14 N2 N2" -> (18, 18)

    Returns:
        (min_length, max_length)
    """
    total_min = 0
    total_max = 0

    for part in spec.split():
        match = _COMPONENT_RE.match(part)
        if not match or bool(match.group(1)) != bool(match.group(5)):
            raise AITableError(f"Invalid specification component: {part!r}")

        optional = bool(match.group(1))
        variable = bool(match.group(3))
        length = int(match.group(4))

        total_max += length
        if not optional:
            total_min += 1 if variable else length

    return total_min, total_max


def _expand_ai_codes(ai_spec: str) -> List[str]:
    """Expand '310n' and '91-99' forms into concrete AI codes."""
    if ai_spec.endswith('n'):
        return [f"{ai_spec[:-1]}{n}" for n in range(10)]
    if '-' in ai_spec:
        start, end = ai_spec.split('-')
        return [str(i).zfill(len(start)) for i in range(int(start), int(end) + 1)]
    return [ai_spec]


def parse_raw_table(text: str) -> Dict[str, AIDefinition]:
    """Parse AI table text into AIDefinition objects."""
    entries: Dict[str, AIDefinition] = {}

    for line_no, line in enumerate(text.strip().splitlines(), 1):
        line = line.strip()
        if not line or line.startswith('#'):
            continue

        main_part, _, title = line.partition('#')
        tokens = main_part.split()
        if len(tokens) < 2:
            raise AITableError(f"Line {line_no}: expected AI and specification")

        min_length, max_length = _parse_syntax_spec(' '.join(tokens[1:]))
        title = title.strip()

        for code in _expand_ai_codes(tokens[0]):
            if not code.isdigit() or not 2 <= len(code) <= 4:
                raise AITableError(f"Line {line_no}: invalid AI code {code!r}")
            if code in entries:
                raise AITableError(f"Line {line_no}: AI {code} defined twice", ai=code)
            entries[code] = AIDefinition(
                code=code,
                min_length=min_length,
                max_length=max_length,
                title=title,
            )

    return entries


def build_ai_table(text: str = RAW_AI_TABLE) -> AITable:
    """
    Build a new AI table from table text.

    Args:
        text: Table text in the RAW_AI_TABLE format

    Returns:
        AITable ready for use

    Raises:
        AITableError: If the text is malformed or the codes are not prefix-free
    """
    table = AITable(parse_raw_table(text))
    logger.debug("Built AI table with %d entries", len(table))
    return table


_default_table: Optional[AITable] = None
_default_table_lock = threading.Lock()


def load_ai_table() -> AITable:
    """
    Return the shared default AI table, building it on first use.

    The table is immutable, so the same instance is safe to read from
    any number of threads.
    """
    global _default_table

    if _default_table is None:
        with _default_table_lock:
            if _default_table is None:
                _default_table = build_ai_table()
    return _default_table
