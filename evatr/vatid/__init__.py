"""Deterministic VAT-ID helpers: syntax checks and the German check digit."""

from evatr.vatid.checksum import calculate_german_check_digit, has_valid_german_check_digit
from evatr.vatid.syntax import (
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

__all__ = [
    "calculate_german_check_digit",
    "can_request",
    "check_vat_id_syntax",
    "check_vat_id_syntax_for_country",
    "explain_qualified_result_code",
    "get_country_code",
    "get_country_name",
    "get_supported_countries",
    "get_supported_country_codes",
    "get_test_vat_ids",
    "get_vat_id_number",
    "has_valid_german_check_digit",
    "is_eu_member_state",
    "is_german_vat_id",
    "normalize_vat_id",
]
