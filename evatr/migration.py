"""Compatibility layer for code written against the retired XML-RPC eVatR client.

The XML-RPC interface was shut down on 2025-11-30. ``EvatrMigrationHelper``
offers the call and result shapes of the former ``evatr`` library
(``check_simple`` / ``check_qualified`` with ``errorCode`` results) on top of
``EvatrClient``.

Differences from the old library:
  - ``include_raw`` attaches the JSON result, there is no raw XML anymore
  - ``error_code`` is derived from the REST status through an approximate
    table; codes without a reliable old equivalent become 999
  - ``error_description`` is the REST status message text
  - ``status`` (the REST status code) is returned in addition

Like the old library, both checks always return a result: failures are
folded into ``valid=False`` results instead of being raised.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime

from evatr.client import EvatrClient
from evatr.schemas import (
    LegacyQualifiedResult,
    LegacySimpleResult,
    QualifiedRequest,
    QualifiedResultCode,
    SimpleRequest,
    ValidationResult,
)
from evatr.status import StatusMessageRegistry, status_messages

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_CODE = 999
FAILURE_ERROR_CODE = 500

# REST status → XML-RPC error code. Approximate by nature: the old codes 201,
# 205, 208, 210, 211, 219 and 223 have no clear REST counterpart and are never
# produced.
STATUS_TO_ERROR_CODE: dict[str, int] = {
    "evatr-0000": 200,
    "evatr-0001": 221,
    "evatr-0002": 215,
    "evatr-0003": 216,
    "evatr-0004": 214,
    "evatr-0005": 209,
    "evatr-0006": 213,
    "evatr-0007": 221,
    "evatr-0008": 999,  # 208?
    "evatr-0011": 999,
    "evatr-0012": 209,  # 210?
    "evatr-0013": 999,
    "evatr-1001": 999,
    "evatr-1002": 999,
    "evatr-1003": 999,
    "evatr-1004": 999,
    "evatr-2001": 202,
    "evatr-2002": 203,
    "evatr-2003": 212,
    "evatr-2004": 999,
    "evatr-2005": 206,
    "evatr-2006": 204,
    "evatr-2007": 217,
    "evatr-2008": 218,
    "evatr-2011": 999,
    "evatr-3011": 999,
}

RESULT_DESCRIPTIONS: dict[str, str] = {
    QualifiedResultCode.MATCH.value: "stimmt überein",
    QualifiedResultCode.NO_MATCH.value: "stimmt nicht überein",
    QualifiedResultCode.NOT_QUERIED.value: "nicht angefragt",
    QualifiedResultCode.NOT_RETURNED.value: "vom EU-Mitgliedsstaat nicht mitgeteilt",
}


def map_status_to_error_code(status: str) -> int:
    return STATUS_TO_ERROR_CODE.get(status, UNKNOWN_ERROR_CODE)


def get_result_description(result_code: str | None) -> str | None:
    if result_code is None:
        return None
    return RESULT_DESCRIPTIONS.get(result_code)


def _split_timestamp(timestamp: str | None) -> tuple[str, str]:
    """Format a timestamp as the old ``date`` (DD.MM.YYYY) and ``time`` (HH:MM:SS) pair."""
    moment = datetime.now().astimezone()
    if timestamp:
        try:
            moment = datetime.fromisoformat(timestamp).astimezone()
        except ValueError:
            logger.debug("Could not parse timestamp: %s", timestamp)
    return moment.strftime("%d.%m.%Y"), moment.strftime("%H:%M:%S")


def _optional_text(value: object) -> str | None:
    return None if value is None else str(value)


def _failure_fields(exc: Exception, own_vat_number: object, validate_vat_number: object) -> dict:
    """Result fields for a failed check.

    Caller input is echoed back as text, so a malformed argument that made the
    request fail cannot also break the failure result.
    """
    date_part, time_part = _split_timestamp(None)
    return {
        "date": date_part,
        "time": time_part,
        "error_code": getattr(exc, "http", None) or FAILURE_ERROR_CODE,
        "error_description": str(exc),
        "own_vat_number": _optional_text(own_vat_number) or "",
        "validated_vat_number": _optional_text(validate_vat_number) or "",
        "valid": False,
    }


class EvatrMigrationHelper:
    """Adapter exposing the old library's API on top of an EvatrClient."""

    def __init__(
        self,
        client: EvatrClient | None = None,
        registry: StatusMessageRegistry | None = None,
    ) -> None:
        self._client = client
        self._registry = registry or (client.registry if client else status_messages)

    @property
    def client(self) -> EvatrClient:
        if self._client is None:
            self._client = EvatrClient(registry=self._registry)
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()

    async def check_simple(
        self,
        own_vat_number: str,
        validate_vat_number: str,
        include_raw: bool = False,
    ) -> LegacySimpleResult:
        """Simple confirmation request in the old result shape. Never raises."""
        try:
            response = await self.client.validate_simple(
                SimpleRequest(vat_id_own=own_vat_number, vat_id_foreign=validate_vat_number)
            )
        except Exception as exc:
            logger.warning("Legacy simple check failed: %s", exc)
            return LegacySimpleResult(**_failure_fields(exc, own_vat_number, validate_vat_number))

        return LegacySimpleResult(**self._common_fields(response, include_raw))

    async def check_qualified(
        self,
        own_vat_number: str,
        validate_vat_number: str,
        company_name: str,
        city: str,
        zip: str | None = None,
        street: str | None = None,
        include_raw: bool = False,
    ) -> LegacyQualifiedResult:
        """Qualified confirmation request in the old result shape. Never raises."""
        try:
            response = await self.client.validate_qualified(
                QualifiedRequest(
                    vat_id_own=own_vat_number,
                    vat_id_foreign=validate_vat_number,
                    company=company_name,
                    location=city,
                    street=street,
                    zip=zip,
                )
            )
        except Exception as exc:
            logger.warning("Legacy qualified check failed: %s", exc)
            return LegacyQualifiedResult(
                **_failure_fields(exc, own_vat_number, validate_vat_number),
                company_name=_optional_text(company_name),
                city=_optional_text(city),
                zip=_optional_text(zip),
                street=_optional_text(street),
            )

        return LegacyQualifiedResult(
            **self._common_fields(response, include_raw),
            company_name=company_name,
            city=city,
            zip=zip,
            street=street,
            result_name=response.company,
            result_city=response.location,
            result_zip=response.zip,
            result_street=response.street,
            result_name_description=get_result_description(response.company),
            result_city_description=get_result_description(response.location),
            result_zip_description=get_result_description(response.zip),
            result_street_description=get_result_description(response.street),
        )

    def _common_fields(self, response: ValidationResult, include_raw: bool) -> dict:
        status_message = self._registry.get(response.status)
        date_part, time_part = _split_timestamp(response.timestamp)
        fields = {
            "date": date_part,
            "time": time_part,
            "error_code": map_status_to_error_code(response.status),
            "error_description": status_message.message if status_message else None,
            "status": status_message.status if status_message else None,
            "own_vat_number": response.vat_id_own,
            "validated_vat_number": response.vat_id_foreign,
            "valid_from": response.valid_from,
            "valid_until": response.valid_till,
            "valid": self._registry.is_success(response.status),
        }
        if include_raw:
            fields["raw"] = json.dumps(
                response.model_dump(by_alias=True, exclude_none=True), indent=2, ensure_ascii=False
            )
        return fields


# Module-level default helper
evatr_migration = EvatrMigrationHelper()
