"""
Tests for the AI definition table.

Tests cover:
- Syntax dictionary length notation
- Contents of the default table (fixed, variable and family AIs)
- The prefix-free invariant
- Custom tables and malformed table input
- Shared default table
"""

import threading
from types import MappingProxyType

import pytest

from gs1_decode import (
    AIDefinition,
    AITable,
    AITableError,
    ErrorCode,
    build_ai_table,
    load_ai_table,
)
from gs1_decode.core.ai_table import _parse_syntax_spec, parse_raw_table


class TestSyntaxSpec:
    """Tests for GS1 syntax dictionary length parsing."""

    def test_fixed(self):
        assert _parse_syntax_spec("N14") == (14, 14)

    def test_variable(self):
        assert _parse_syntax_spec("X..20") == (1, 20)

    def test_optional_component(self):
        """Optional components add to the maximum only."""
        assert _parse_syntax_spec("N13 [X..17]") == (13, 30)
        assert _parse_syntax_spec("N1 N13 [X..16]") == (14, 30)

    def test_multiple_fixed_components(self):
        assert _parse_syntax_spec("N14 N2 N2") == (18, 18)

    @pytest.mark.parametrize("spec", ["Z5", "N", "[X..5", "X..5]", "N14,csum"])
    def test_invalid(self, spec):
        with pytest.raises(AITableError):
            _parse_syntax_spec(spec)


class TestDefaultTable:
    """Tests for the built-in GS1 AI table."""

    @pytest.fixture(scope="class")
    def table(self):
        return load_ai_table()

    @pytest.mark.parametrize("code,min_length,max_length", [
        ("00", 18, 18),
        ("01", 14, 14),
        ("10", 1, 20),
        ("12", 6, 6),
        ("21", 1, 20),
        ("22", 1, 29),
        ("242", 1, 6),
        ("253", 13, 30),
        ("255", 13, 25),
        ("30", 1, 8),
        ("37", 1, 8),
        ("402", 17, 17),
        ("421", 3, 15),
        ("7003", 10, 10),
        ("7031", 3, 30),
        ("8003", 14, 30),
        ("8006", 18, 18),
        ("8008", 8, 12),
        ("8200", 1, 70),
        ("99", 1, 30),
    ])
    def test_lengths(self, table, code, min_length, max_length):
        definition = table.get(code)
        assert definition is not None
        assert definition.code == code
        assert definition.min_length == min_length
        assert definition.max_length == max_length

    @pytest.mark.parametrize("family", [
        "310", "311", "312", "313", "314", "315", "316",
        "320", "325", "329", "330", "337", "340", "349", "357", "369",
    ])
    def test_measurement_families(self, table, family):
        """Families expand to ten fixed-length members."""
        for n in range(10):
            definition = table.get(f"{family}{n}")
            assert definition is not None
            assert definition.fixed_length == 6
            assert definition.decimal_position == n

    def test_family_not_overextended(self, table):
        assert table.get("3380") is None
        assert table.get("3170") is None

    def test_fixed_length_property(self, table):
        assert table.get("01").fixed_length == 14
        assert table.get("10").fixed_length is None

    def test_decimal_position_only_for_four_digit_codes(self, table):
        assert table.get("3103").decimal_position == 3
        assert table.get("01").decimal_position is None
        assert table.get("400").decimal_position is None

    def test_titles(self, table):
        assert table.get("00").title == "SSCC"
        assert table.get("01").title == "GTIN"
        assert table.get("12").title == "DUE DATE"

    def test_exact_lookup_only(self, table):
        """No partial or fuzzy matching."""
        assert table.get("0") is None
        assert table.get("011") is None
        assert table.get("") is None
        assert "3" not in table

    def test_max_code_length(self, table):
        assert table.max_code_length == 4

    def test_codes_are_two_to_four_digits(self, table):
        for code in table:
            assert code.isdigit()
            assert 2 <= len(code) <= 4

    def test_prefix_free(self, table):
        for code in table:
            for end in range(1, len(code)):
                assert code[:end] not in table, f"{code[:end]} is a prefix of {code}"

    def test_length_invariant(self, table):
        for definition in table.definitions().values():
            assert 1 <= definition.min_length <= definition.max_length

    def test_read_only(self, table):
        definitions = table.definitions()
        assert isinstance(definitions, MappingProxyType)
        with pytest.raises(TypeError):
            definitions["01"] = AIDefinition("01", 1, 1)

    def test_definition_is_frozen(self, table):
        with pytest.raises(AttributeError):
            table.get("01").max_length = 20


class TestLoadAITable:
    """Tests for the shared default table."""

    def test_same_instance(self):
        assert load_ai_table() is load_ai_table()

    def test_same_instance_across_threads(self):
        seen = []

        def worker():
            seen.append(load_ai_table())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(seen) == 8
        assert all(t is seen[0] for t in seen)

    def test_build_returns_new_table(self):
        table = build_ai_table()
        assert table is not load_ai_table()
        assert len(table) == len(load_ai_table())


class TestCustomTable:
    """Tests for building tables from custom text."""

    def test_build_from_text(self):
        table = build_ai_table("""
        # AI    Specification   Title
        01      N14             # GTIN
        10      X..20           # BATCH/LOT
        """)
        assert len(table) == 2
        assert table.get("10").title == "BATCH/LOT"

    def test_title_optional(self):
        table = build_ai_table("91 X..5")
        assert table.get("91").title == ""

    def test_family_expansion(self):
        entries = parse_raw_table("310n N6 # NET WEIGHT (kg)")
        assert sorted(entries) == [f"310{n}" for n in range(10)]

    def test_range_expansion(self):
        entries = parse_raw_table("91-93 X..30 # INTERNAL")
        assert sorted(entries) == ["91", "92", "93"]

    def test_prefix_collision(self):
        with pytest.raises(AITableError) as exc_info:
            build_ai_table("01 N14\n011 N2")
        assert exc_info.value.code == ErrorCode.INVALID_TABLE
        assert "01" in str(exc_info.value)

    def test_duplicate_code(self):
        with pytest.raises(AITableError):
            build_ai_table("01 N14\n01 N14")

    @pytest.mark.parametrize("line", ["1 N2", "12345 N2", "AB N2", "01"])
    def test_invalid_line(self, line):
        with pytest.raises(AITableError):
            build_ai_table(line)

    def test_invalid_definition_lengths(self):
        with pytest.raises(AITableError):
            AIDefinition("01", 0, 14)
        with pytest.raises(AITableError):
            AIDefinition("01", 15, 14)

    def test_key_must_match_code(self):
        with pytest.raises(AITableError):
            AITable({"01": AIDefinition("02", 14, 14)})

    def test_table_error_is_value_error(self):
        with pytest.raises(ValueError):
            build_ai_table("01 N14\n0 N2")
