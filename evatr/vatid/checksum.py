"""German VAT-ID (USt-IdNr.) check digit.

The ninth digit of a German VAT-ID is a check digit computed over the first
eight with ISO 7064 MOD 11,10:

  product = 10
  for each of the first 8 digits d:
      sum = (d + product) mod 10, with 0 counted as 10
      product = (2 * sum) mod 11
  check digit = 11 - product, with 10 counted as 0
"""

from __future__ import annotations

from evatr.exceptions import InvalidLengthError
from evatr.vatid.syntax import check_vat_id_syntax_for_country, normalize_vat_id


def calculate_german_check_digit(vat_id_number: str) -> int:
    """Return the expected ninth digit for a 9-digit German VAT-ID number.

    Args:
        vat_id_number: The nine digits after the ``DE`` prefix. The ninth
            digit is not read; callers compare it with the return value.

    Raises:
        InvalidLengthError: If the input is not exactly nine ASCII digits.
    """
    if len(vat_id_number) != 9 or not vat_id_number.isascii() or not vat_id_number.isdigit():
        msg = "German VAT-ID number must contain exactly 9 digits after letters DE"
        raise InvalidLengthError(msg)

    product = 10
    for char in vat_id_number[:8]:
        total = (int(char) + product) % 10
        if total == 0:
            total = 10
        product = (2 * total) % 11

    check_digit = 11 - product
    if check_digit == 10:
        check_digit = 0
    return check_digit


def has_valid_german_check_digit(vat_id: str) -> bool:
    """Whether a full German VAT-ID (``DE`` + 9 digits) carries a correct check digit."""
    clean = normalize_vat_id(vat_id)
    if not check_vat_id_syntax_for_country(clean, "DE"):
        return False
    number = clean[2:]
    return calculate_german_check_digit(number) == int(number[8])
