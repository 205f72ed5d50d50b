"""
End-to-end tests on realistic GS1 element strings.

Covers pharmaceutical (GS1 DataMatrix), logistics (GS1-128) and retail
variable-measure payloads, decoded and then read through the accessors.
"""

from datetime import date

import pytest

from gs1_decode import (
    GS,
    FieldTooShortError,
    GS1Decoder,
    ParseOptions,
    UnknownAIError,
    parse_element_string,
)


class TestPharmaceutical:
    """GS1 DataMatrix payloads from medicine packs."""

    def test_gtin_expiry_batch(self):
        record = parse_element_string("0106285096000842172901311012345")

        assert record == {
            "01": "06285096000842",
            "17": "290131",
            "10": "12345",
        }
        assert record.get_date("17") == date(2029, 1, 31)

    def test_with_separators(self):
        payload = "010611800002210721NWHFG1H8HN5P95" + GS + "17270301" + "10250987"
        record = parse_element_string(payload)

        assert list(record) == ["01", "21", "17", "10"]
        assert record["01"] == "06118000022107"
        assert record["21"] == "NWHFG1H8HN5P95"
        assert record["17"] == "270301"
        assert record["10"] == "250987"

    def test_serial_last(self):
        record = parse_element_string(
            "0106286740000249" + "17280430" + "10GB2C" + GS + "2171490437969853"
        )
        assert record["10"] == "GB2C"
        assert record["21"] == "71490437969853"

    def test_national_reimbursement_number(self):
        record = parse_element_string("0104150123456782" + "71012345678" + GS + "10LOT7")
        assert record["710"] == "12345678"
        assert record["10"] == "LOT7"


class TestLogistics:
    """GS1-128 logistics labels."""

    def test_sscc_weight_count_order(self):
        payload = (
            "00106141411234567897"
            "3103000189"
            "3724" + GS +
            "400PO-4711"
        )
        record = parse_element_string(payload)

        assert record == {
            "00": "106141411234567897",
            "3103": "000189",
            "37": "24",
            "400": "PO-4711",
        }
        assert record.get_numeric_value("3103") == 0.189
        assert record.get_numeric_value("37") == 24

    def test_ship_to_and_due_date(self):
        payload = "4105412345678908" + "12240200" + "4213761234" + GS + "8020INV-2024-0042"
        record = parse_element_string(payload)

        assert record["410"] == "5412345678908"
        assert record["421"] == "3761234"
        assert record["8020"] == "INV-2024-0042"
        assert record.get_due_date() == date(2024, 2, 29)

    def test_grai_with_serial(self):
        record = parse_element_string("800301234567890128ASSET99")
        assert record == {"8003": "01234567890128ASSET99"}


class TestRetailVariableMeasure:
    """Variable-measure trade items with weights and prices."""

    def test_net_weight_and_price(self):
        payload = "0190614141000015" + "3202000712" + "3922" + "1249" + GS + "15240531"
        record = parse_element_string(payload)

        assert record.get_numeric_value("3202") == 7.12
        assert record.get_numeric_value("3922") == 12.49
        assert record.get_raw_numeric_value("3922") == 1249.0
        assert record.get_date("15") == date(2024, 5, 31)


class TestMalformedPayloads:
    """Structural failures abort the whole parse."""

    def test_unknown_ai_mid_payload(self):
        with pytest.raises(UnknownAIError) as exc_info:
            parse_element_string("0106285096000842" + "19ABC")
        assert exc_info.value.ai == "19ABC"

    def test_short_gtin(self):
        with pytest.raises(FieldTooShortError) as exc_info:
            parse_element_string("01062850960" + GS + "10LOT")
        assert exc_info.value.ai == "01"

    def test_stray_separator_tolerated_when_enabled(self):
        decoder = GS1Decoder(ParseOptions(skip_extra_separators=True))
        record = decoder.parse("0106285096000842" + GS + "10BATCH123")
        assert record == {"01": "06285096000842", "10": "BATCH123"}
