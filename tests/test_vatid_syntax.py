"""Tests for VAT-ID normalization and syntax checks.

Tests cover:
- Normalization (idempotence, punctuation, non-ASCII)
- One valid sample per country pattern, plain and decorated
- Fail-closed behaviour for empty, unknown and malformed input
- Member state helpers and the can_request business rule
"""

from __future__ import annotations

import pytest

from evatr.constants import VATID_PATTERNS
from evatr.vatid import (
    can_request,
    check_vat_id_syntax,
    check_vat_id_syntax_for_country,
    explain_qualified_result_code,
    get_country_code,
    get_country_name,
    get_supported_countries,
    get_supported_country_codes,
    get_test_vat_ids,
    get_vat_id_number,
    is_eu_member_state,
    is_german_vat_id,
    normalize_vat_id,
)

VALID_SAMPLES: dict[str, str] = {
    "AT": "ATU12345678",
    "BE": "BE0123456789",
    "BG": "BG123456789",
    "CY": "CY12345678X",
    "CZ": "CZ12345678",
    "DE": "DE123456789",
    "DK": "DK12345678",
    "EE": "EE123456789",
    "ES": "ESX1234567X",
    "FI": "FI12345678",
    "FR": "FRXX123456789",
    "GR": "GR123456789",
    "HR": "HR12345678901",
    "HU": "HU12345678",
    "IE": "IE1234567X",
    "IT": "IT12345678901",
    "LT": "LT123456789",
    "LU": "LU12345678",
    "LV": "LV12345678901",
    "MT": "MT12345678",
    "NL": "NL123456789B01",
    "PL": "PL1234567890",
    "PT": "PT123456789",
    "RO": "RO1234567890",
    "SE": "SE123456789001",
    "SI": "SI12345678",
    "SK": "SK1234567890",
    "XI": "XI123456789",
}


class TestNormalize:
    """Test VAT-ID normalization."""

    def test_strips_spaces_and_uppercases(self) -> None:
        assert normalize_vat_id("de 123 456 789") == "DE123456789"

    def test_strips_punctuation(self) -> None:
        assert normalize_vat_id("AT-U.123/456_78") == "ATU12345678"

    def test_strips_non_ascii_letters(self) -> None:
        assert normalize_vat_id("DEü123456789") == "DE123456789"

    def test_empty_string(self) -> None:
        assert normalize_vat_id("") == ""

    @pytest.mark.parametrize(
        "raw",
        ["de 123 456 789", "  nl123456789b01 ", "ÄÖÜ-ß", "", "---", "ie1234567x"],
    )
    def test_idempotent(self, raw: str) -> None:
        once = normalize_vat_id(raw)
        assert normalize_vat_id(once) == once

    def test_country_code(self) -> None:
        assert get_country_code(" at u12345678") == "AT"


class TestSyntax:
    """Test the per-country pattern table."""

    def test_every_country_has_a_sample(self) -> None:
        assert set(VALID_SAMPLES) == set(VATID_PATTERNS)
        assert len(VATID_PATTERNS) == 28

    @pytest.mark.parametrize(("country", "vat_id"), sorted(VALID_SAMPLES.items()))
    def test_valid_sample(self, country: str, vat_id: str) -> None:
        assert check_vat_id_syntax(vat_id) is True
        assert get_country_code(vat_id) == country

    @pytest.mark.parametrize("vat_id", sorted(VALID_SAMPLES.values()))
    def test_decorated_sample(self, vat_id: str) -> None:
        decorated = " " + "-".join(vat_id.lower()) + ". "
        assert check_vat_id_syntax(decorated) is True

    def test_too_short(self) -> None:
        assert check_vat_id_syntax("DE12345678") is False

    def test_too_long(self) -> None:
        assert check_vat_id_syntax("DE1234567890") is False

    def test_full_match_only(self) -> None:
        assert check_vat_id_syntax("NL123456789B012") is False

    def test_netherlands_requires_b(self) -> None:
        assert check_vat_id_syntax("NL123456789X01") is False

    def test_sweden_requires_01_suffix(self) -> None:
        assert check_vat_id_syntax("SE123456789002") is False

    def test_unknown_country(self) -> None:
        assert check_vat_id_syntax("US123456789") is False

    def test_prefix_must_be_letters(self) -> None:
        assert check_vat_id_syntax("123456789012") is False

    def test_empty(self) -> None:
        assert check_vat_id_syntax("") is False

    def test_non_string(self) -> None:
        assert check_vat_id_syntax(None) is False  # type: ignore[arg-type]
        assert check_vat_id_syntax(123456789) is False  # type: ignore[arg-type]

    def test_explicit_country(self) -> None:
        assert check_vat_id_syntax_for_country("DE123456789", "DE") is True
        assert check_vat_id_syntax_for_country("DE123456789", "AT") is False
        assert check_vat_id_syntax_for_country("DE123456789", "US") is False


class TestMemberStates:
    """Test member state lookups."""

    def test_is_member_case_insensitive(self) -> None:
        assert is_eu_member_state("at") is True
        assert is_eu_member_state("XI") is True
        assert is_eu_member_state("US") is False

    def test_country_name(self) -> None:
        assert get_country_name("de") == "Germany"
        assert get_country_name("ZZ") == "Unknown"

    def test_supported_codes(self) -> None:
        codes = get_supported_country_codes()
        assert len(codes) == 28
        assert "XI" in codes

    def test_supported_countries_is_a_copy(self) -> None:
        countries = get_supported_countries()
        countries["ZZ"] = "Nowhere"
        assert "ZZ" not in get_supported_countries()


class TestHelpers:
    """Test the small VAT-ID helpers."""

    def test_vat_id_number(self) -> None:
        assert get_vat_id_number("ATU12345678") == "12345678"
        assert get_vat_id_number("nl 123456789 b01") == "12345678901"

    def test_is_german(self) -> None:
        assert is_german_vat_id("de 123456789") is True
        assert is_german_vat_id("DE12345678") is False
        assert is_german_vat_id("ATU12345678") is False

    def test_explain_result_code(self) -> None:
        assert "überein" in explain_qualified_result_code("A")
        assert explain_qualified_result_code("Z") == "Unknown validation result"

    def test_test_vat_ids_are_valid(self) -> None:
        for vat_id in get_test_vat_ids().values():
            assert check_vat_id_syntax(vat_id) is True


class TestCanRequest:
    """Only German VAT-IDs may request confirmation of EU VAT-IDs."""

    def test_german_requests_austrian(self) -> None:
        assert can_request("DE123456789", "ATU12345678") is True

    def test_austrian_cannot_request(self) -> None:
        assert can_request("ATU12345678", "DE123456789") is False

    def test_german_requests_german(self) -> None:
        assert can_request("DE123456789", "DE987654321") is True

    def test_foreign_outside_eu(self) -> None:
        assert can_request("DE123456789", "US123456789") is False

    def test_decorated_input(self) -> None:
        assert can_request("de 123 456 789", "at u123 456 78") is True

    def test_invalid_own(self) -> None:
        assert can_request("DE1234", "ATU12345678") is False
