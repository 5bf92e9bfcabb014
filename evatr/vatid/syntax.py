"""VAT-ID normalization and syntax checks.

Pure Python, no I/O. A VAT-ID is normalized by dropping every character
that is not an ASCII letter or digit and uppercasing the rest, then matched
against the country pattern selected by its two-letter prefix.
"""

from __future__ import annotations

import re

from evatr.constants import EU_MEMBER_STATES, QUALIFIED_RESULT_CODES, VATID_PATTERNS

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")
_COUNTRY_PREFIX = re.compile(r"^[A-Z]{2}")
_LETTERS = re.compile(r"[A-Z]")


def normalize_vat_id(vat_id: str) -> str:
    """Strip spaces, punctuation and any non-ASCII characters; uppercase the rest."""
    return _NON_ALNUM.sub("", vat_id).upper()


def get_country_code(vat_id: str) -> str:
    return normalize_vat_id(vat_id)[:2]


def check_vat_id_syntax(vat_id: str) -> bool:
    """Check a VAT-ID against the pattern of the country it claims to be from.

    Fails closed: empty or non-string input, a prefix that is not two letters,
    and countries without a pattern all return False.
    """
    if not vat_id or not isinstance(vat_id, str):
        return False

    clean = normalize_vat_id(vat_id)
    if not _COUNTRY_PREFIX.match(clean):
        return False

    pattern = VATID_PATTERNS.get(clean[:2])
    if pattern is None:
        return False
    return bool(pattern.match(clean))


def check_vat_id_syntax_for_country(vat_id: str, country_code: str | None = None) -> bool:
    """Match a VAT-ID against an explicit country's pattern (defaults to its own prefix)."""
    clean = normalize_vat_id(vat_id)
    country = country_code or clean[:2]
    pattern = VATID_PATTERNS.get(country)
    if pattern is None:
        return False
    return bool(pattern.match(clean))


def is_eu_member_state(country_code: str) -> bool:
    return country_code.upper() in EU_MEMBER_STATES


def get_country_name(country_code: str) -> str:
    return EU_MEMBER_STATES.get(country_code.upper(), "Unknown")


def get_supported_country_codes() -> list[str]:
    return list(EU_MEMBER_STATES)


def get_supported_countries() -> dict[str, str]:
    return dict(EU_MEMBER_STATES)


def explain_qualified_result_code(code: str) -> str:
    """German explanation of a qualified result code (A/B/C/D)."""
    return QUALIFIED_RESULT_CODES.get(getattr(code, "value", code), "Unknown validation result")


def get_vat_id_number(vat_id: str) -> str:
    """Numeric part of a VAT-ID: prefix dropped, remaining letters removed."""
    return _LETTERS.sub("", normalize_vat_id(vat_id)[2:])


def is_german_vat_id(vat_id: str) -> bool:
    clean = normalize_vat_id(vat_id)
    return clean.startswith("DE") and check_vat_id_syntax_for_country(clean, "DE")


def can_request(vat_id_own: str, vat_id_foreign: str) -> bool:
    """Whether ``vat_id_own`` may ask the BZSt to confirm ``vat_id_foreign``.

    Only German-registered requesters are served, and the target must carry
    the prefix of a supported EU member state.
    """
    if not is_german_vat_id(vat_id_own):
        return False
    return is_eu_member_state(get_country_code(vat_id_foreign))


def get_test_vat_ids() -> dict[str, str]:
    """Syntactically valid sample VAT-IDs, for examples and tests."""
    return {
        "DE": "DE123456789",
        "AT": "ATU12345678",
    }
