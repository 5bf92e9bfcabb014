"""Pydantic schemas for the eVatR API.

Two vocabularies live here:
  - wire models (``Api*``) use the German field names of the REST API,
  - normalized models use snake_case attributes and serialize to camelCase
    (``model_dump(by_alias=True)``).
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class StatusCategory(str, Enum):
    """Category of an eVatR status message."""

    RESULT = "Result"
    ERROR = "Error"
    HINT = "Hint"


class QualifiedResultCode(str, Enum):
    """Per-field outcome of a qualified confirmation request."""

    MATCH = "A"
    NO_MATCH = "B"
    NOT_QUERIED = "C"
    NOT_RETURNED = "D"


class _Normalized(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


class _Wire(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


# ---------------------------------------------------------------------------
# Status messages
# ---------------------------------------------------------------------------


class ApiStatusMessage(_Wire):
    """Status message as served by ``/info/statusmeldungen``."""

    status: str
    kategorie: str | None = None
    httpcode: int | None = None
    feld: str | None = None
    meldung: str = ""


class StatusMessage(_Normalized):
    status: str = Field(pattern=r"^evatr-\d{4}$")
    category: StatusCategory | None = None
    http: int | None = None
    field: str | None = None
    message: str


class StatusStatistics(_Normalized):
    total: int
    by_category: dict[str, int]
    by_http: dict[int, int]
    source: str  # "constants" | "file"


# ---------------------------------------------------------------------------
# Validation requests
# ---------------------------------------------------------------------------


class SimpleRequest(_Normalized):
    """VAT-IDs only: confirms validity of the foreign VAT-ID."""

    vat_id_own: str
    vat_id_foreign: str
    include_raw: bool = False


class QualifiedRequest(_Normalized):
    """VAT-IDs plus company data to compare against the member state's registry."""

    vat_id_own: str
    vat_id_foreign: str
    company: str
    location: str
    street: str | None = None
    zip: str | None = None
    include_raw: bool = False


class ValidationRequest(_Normalized):
    vat_id_own: str
    vat_id_foreign: str
    company: str | None = None
    location: str | None = None
    street: str | None = None
    zip: str | None = None
    include_raw: bool = False


class ApiRequest(_Wire):
    """POST body for ``/abfrage``."""

    anfragendeUstid: str
    angefragteUstid: str
    firmenname: str | None = None
    ort: str | None = None
    strasse: str | None = None
    plz: str | None = None


# ---------------------------------------------------------------------------
# Validation responses
# ---------------------------------------------------------------------------


class ApiResponse(_Wire):
    """Response body of ``/abfrage``."""

    id: str | None = None
    anfrageZeitpunkt: str | None = None
    status: str
    gueltigAb: str | None = None
    gueltigBis: str | None = None
    ergFirmenname: QualifiedResultCode | None = None
    ergStrasse: QualifiedResultCode | None = None
    ergPlz: QualifiedResultCode | None = None
    ergOrt: QualifiedResultCode | None = None


class ValidationResult(_Normalized):
    id: str | None = None
    timestamp: str | None = None
    status: str
    vat_id_own: str
    vat_id_foreign: str
    valid_from: str | None = None
    valid_till: str | None = None
    company: QualifiedResultCode | None = None
    street: QualifiedResultCode | None = None
    zip: QualifiedResultCode | None = None
    location: QualifiedResultCode | None = None
    raw: str | None = None


class ExtendedResult(_Normalized):
    """ValidationResult with parsed dates, validity flag and resolved message."""

    id: str | None = None
    timestamp: datetime | None = None
    valid: bool
    status: str
    message: str | None = None
    vat_id_own: str
    vat_id_foreign: str
    valid_from: date | None = None
    valid_till: date | None = None
    company: QualifiedResultCode | None = None
    street: QualifiedResultCode | None = None
    zip: QualifiedResultCode | None = None
    location: QualifiedResultCode | None = None
    raw: str | None = None


# ---------------------------------------------------------------------------
# EU member states
# ---------------------------------------------------------------------------


class ApiEUMemberState(_Wire):
    """Entry of ``/info/eu_mitgliedstaaten``."""

    alpha2: str
    name: str | None = None
    verfuegbar: bool = False


class EUMemberState(_Normalized):
    code: str
    name: str | None = None
    available: bool


# ---------------------------------------------------------------------------
# Legacy (predecessor library) result shapes
# ---------------------------------------------------------------------------


class LegacySimpleResult(_Normalized):
    """Result shape of the retired XML-RPC client's simple check."""

    date: str  # DD.MM.YYYY
    time: str  # HH:MM:SS
    error_code: int
    error_description: str | None = None
    status: str | None = None
    own_vat_number: str
    validated_vat_number: str
    valid_from: str | None = None
    valid_until: str | None = None
    valid: bool
    raw: str | None = None


class LegacyQualifiedResult(LegacySimpleResult):
    company_name: str | None = None
    city: str | None = None
    zip: str | None = None
    street: str | None = None
    result_name: QualifiedResultCode | None = None
    result_city: QualifiedResultCode | None = None
    result_zip: QualifiedResultCode | None = None
    result_street: QualifiedResultCode | None = None
    result_name_description: str | None = None
    result_city_description: str | None = None
    result_zip_description: str | None = None
    result_street_description: str | None = None
