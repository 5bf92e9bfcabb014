"""Mapping between the eVatR wire vocabulary and the normalized result shapes."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from evatr.schemas import (
    ApiEUMemberState,
    ApiRequest,
    ApiResponse,
    ApiStatusMessage,
    EUMemberState,
    ExtendedResult,
    QualifiedRequest,
    SimpleRequest,
    StatusCategory,
    StatusMessage,
    ValidationRequest,
    ValidationResult,
)

if TYPE_CHECKING:
    from evatr.status import StatusMessageRegistry

logger = logging.getLogger(__name__)

# kategorie (German) → normalized category
_CATEGORY_MAP: dict[str, StatusCategory] = {
    "Ergebnis": StatusCategory.RESULT,
    "Fehler": StatusCategory.ERROR,
    "Hinweis": StatusCategory.HINT,
}


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


def to_api_request(request: ValidationRequest | SimpleRequest | QualifiedRequest) -> dict[str, str]:
    """Build the ``/abfrage`` POST body; absent fields are left out."""
    payload = ApiRequest(
        anfragendeUstid=request.vat_id_own,
        angefragteUstid=request.vat_id_foreign,
        firmenname=getattr(request, "company", None),
        ort=getattr(request, "location", None),
        strasse=getattr(request, "street", None),
        plz=getattr(request, "zip", None),
    )
    return payload.model_dump(exclude_none=True)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


def from_api_response(
    payload: ApiResponse | Mapping[str, Any],
    vat_id_own: str,
    vat_id_foreign: str,
) -> ValidationResult:
    """Rename wire fields to the normalized shape.

    The VAT-IDs are the caller's normalized ones, not whatever the API echoes.
    """
    response = payload if isinstance(payload, ApiResponse) else ApiResponse.model_validate(payload)
    return ValidationResult(
        id=response.id,
        timestamp=response.anfrageZeitpunkt,
        status=response.status,
        vat_id_own=vat_id_own,
        vat_id_foreign=vat_id_foreign,
        valid_from=response.gueltigAb,
        valid_till=response.gueltigBis,
        company=response.ergFirmenname,
        street=response.ergStrasse,
        zip=response.ergPlz,
        location=response.ergOrt,
    )


def _parse_datetime(raw: str | None) -> datetime | None:
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        logger.debug("Could not parse timestamp: %s", raw)
        return None


def _parse_date(raw: str | None) -> date | None:
    if not raw:
        return None
    try:
        # API returns ISO date string "YYYY-MM-DD"
        return date.fromisoformat(raw[:10])
    except ValueError:
        logger.debug("Could not parse date: %s", raw)
        return None


def to_extended(result: ValidationResult, registry: StatusMessageRegistry) -> ExtendedResult:
    """Project a result with parsed dates, the validity flag and the registry message."""
    status_message = registry.get(result.status)
    return ExtendedResult(
        id=result.id,
        timestamp=_parse_datetime(result.timestamp),
        valid=registry.is_success(result.status),
        status=result.status,
        message=status_message.message if status_message else None,
        vat_id_own=result.vat_id_own,
        vat_id_foreign=result.vat_id_foreign,
        valid_from=_parse_date(result.valid_from),
        valid_till=_parse_date(result.valid_till),
        company=result.company,
        street=result.street,
        zip=result.zip,
        location=result.location,
        raw=result.raw,
    )


def to_raw_envelope(headers: Mapping[str, str], data: Any) -> str:
    """Serialize response headers and body for diagnostics. Never parsed back."""
    return json.dumps({"headers": dict(headers), "data": data}, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Metadata endpoints
# ---------------------------------------------------------------------------


def status_message_from_api(item: ApiStatusMessage | Mapping[str, Any]) -> StatusMessage:
    """Map one ``/info/statusmeldungen`` entry; unknown categories stay None."""
    api_msg = item if isinstance(item, ApiStatusMessage) else ApiStatusMessage.model_validate(item)
    return StatusMessage(
        status=api_msg.status,
        category=_CATEGORY_MAP.get(api_msg.kategorie or ""),
        http=api_msg.httpcode,
        field=api_msg.feld,
        message=api_msg.meldung,
    )


def member_state_from_api(item: ApiEUMemberState | Mapping[str, Any]) -> EUMemberState:
    api_state = item if isinstance(item, ApiEUMemberState) else ApiEUMemberState.model_validate(item)
    return EUMemberState(code=api_state.alpha2, name=api_state.name, available=api_state.verfuegbar)
