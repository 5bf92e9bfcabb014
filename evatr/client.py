"""Async httpx client for the BZSt eVatR REST API (confirmation of foreign VAT-IDs)."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from evatr.config import settings
from evatr.constants import ENDPOINT_EU_MEMBER_STATES, ENDPOINT_STATUS_MESSAGES, ENDPOINT_VALIDATION
from evatr.exceptions import EvatrApiError, InvalidFormatError, MissingFieldError
from evatr.mapper import (
    from_api_response,
    member_state_from_api,
    status_message_from_api,
    to_api_request,
    to_extended,
    to_raw_envelope,
)
from evatr.schemas import (
    EUMemberState,
    ExtendedResult,
    QualifiedRequest,
    SimpleRequest,
    StatusMessage,
    ValidationRequest,
    ValidationResult,
)
from evatr.status import StatusMessageRegistry, status_messages
from evatr.vatid import check_vat_id_syntax, get_country_code, normalize_vat_id

logger = logging.getLogger(__name__)

_DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class EvatrClient:
    """Thin async wrapper around the eVatR endpoints.

    Endpoints (relative to the versioned base URL):
        POST /abfrage                    validation
        GET  /info/statusmeldungen       status messages
        GET  /info/eu_mitgliedstaaten    member state availability

    Every call is a fresh request: no retries, no response cache. Transport
    failures are raised as EvatrApiError.
    """

    def __init__(
        self,
        *,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
        base_url: str | None = None,
        registry: StatusMessageRegistry | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = (base_url or settings.api.base_url).rstrip("/")
        self._registry = registry or status_messages
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout if timeout is not None else settings.api.timeout),
            headers={**_DEFAULT_HEADERS, **(headers or {})},
        )

    async def __aenter__(self) -> EvatrClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client (only if this instance created it)."""
        if self._owns_client:
            await self._client.aclose()

    @property
    def registry(self) -> StatusMessageRegistry:
        return self._registry

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    async def validate_simple(self, request: SimpleRequest) -> ValidationResult:
        """Confirm that the foreign VAT-ID is valid at the time of the request."""
        return await self._perform_validation(ValidationRequest(**request.model_dump()))

    async def validate_simple_extended(self, request: SimpleRequest) -> ExtendedResult:
        result = await self.validate_simple(request)
        return to_extended(result, self._registry)

    async def validate_qualified(self, request: QualifiedRequest) -> ValidationResult:
        """Confirm the VAT-ID and compare company name and address with the registry."""
        return await self._perform_validation(ValidationRequest(**request.model_dump()))

    async def validate_qualified_extended(self, request: QualifiedRequest) -> ExtendedResult:
        result = await self.validate_qualified(request)
        return to_extended(result, self._registry)

    async def validate(self, request: ValidationRequest) -> ValidationResult:
        return await self._perform_validation(request)

    async def validate_extended(self, request: ValidationRequest) -> ExtendedResult:
        result = await self._perform_validation(request)
        return to_extended(result, self._registry)

    async def _perform_validation(self, request: ValidationRequest) -> ValidationResult:
        """Check inputs, normalize, submit and map one validation request.

        Raises:
            MissingFieldError: A VAT-ID is empty, or a qualified request lacks
                company or location (no request is sent).
            InvalidFormatError: A normalized VAT-ID fails its country pattern.
            EvatrApiError: The transport or the API failed.
        """
        if not request.vat_id_own or not request.vat_id_foreign:
            field = "vatIdOwn" if not request.vat_id_own else "vatIdForeign"
            raise MissingFieldError("Both vatIdOwn and vatIdForeign are required", field=field)

        # Qualified as soon as either company field is present; both must be non-empty.
        if request.company is not None or request.location is not None:
            for field, value in (("company", request.company), ("location", request.location)):
                if not value or not value.strip():
                    raise MissingFieldError(f"{field} is required for a qualified request", field=field)

        vat_id_own = normalize_vat_id(request.vat_id_own)
        vat_id_foreign = normalize_vat_id(request.vat_id_foreign)

        if not check_vat_id_syntax(vat_id_own):
            raise InvalidFormatError(f"Invalid format for vatIdOwn: {vat_id_own}", field="vatIdOwn")
        if not check_vat_id_syntax(vat_id_foreign):
            raise InvalidFormatError(
                f"Invalid format for vatIdForeign: {vat_id_foreign}", field="vatIdForeign"
            )

        normalized = request.model_copy(
            update={"vat_id_own": vat_id_own, "vat_id_foreign": vat_id_foreign}
        )
        payload = to_api_request(normalized)

        response = await self._request("POST", ENDPOINT_VALIDATION, json=payload)
        data = self._json(response)

        try:
            result = from_api_response(data, vat_id_own, vat_id_foreign)
        except ValidationError as exc:
            raise EvatrApiError(
                f"Unexpected validation response: {exc.error_count()} invalid field(s)",
                http=response.status_code,
            ) from exc

        if request.include_raw:
            result = result.model_copy(update={"raw": to_raw_envelope(response.headers, data)})

        logger.info(
            "eVatR validation: country=%s status=%s qualified=%s",
            get_country_code(vat_id_foreign),
            result.status,
            normalized.company is not None,
        )
        return result

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    async def get_status_messages(self) -> list[StatusMessage]:
        """Fetch the live status message table."""
        response = await self._request("GET", ENDPOINT_STATUS_MESSAGES)
        data = self._json(response)
        try:
            return [status_message_from_api(item) for item in data]
        except (TypeError, ValidationError) as exc:
            raise EvatrApiError(
                "Unexpected status messages response", http=response.status_code
            ) from exc

    async def get_eu_member_states(self) -> list[EUMemberState]:
        """Fetch the EU member states and whether their registry is reachable."""
        response = await self._request("GET", ENDPOINT_EU_MEMBER_STATES)
        data = self._json(response)
        try:
            return [member_state_from_api(item) for item in data]
        except (TypeError, ValidationError) as exc:
            raise EvatrApiError(
                "Unexpected member states response", http=response.status_code
            ) from exc

    async def get_availability(self, only_available: bool = False) -> dict[str, bool]:
        """Availability keyed by alpha-2 code, e.g. ``{"AT": True, "DE": True}``."""
        states = await self.get_eu_member_states()
        return {
            state.code: state.available
            for state in states
            if state.available or not only_available
        }

    # ------------------------------------------------------------------
    # Status registry pass-throughs
    # ------------------------------------------------------------------

    def get_status_message(self, status_code: str) -> StatusMessage | None:
        return self._registry.get(status_code)

    def is_success_status(self, status_code: str) -> bool:
        return self._registry.is_success(status_code)

    def is_error_status(self, status_code: str) -> bool:
        return self._registry.is_error(status_code)

    def is_warning_status(self, status_code: str) -> bool:
        return self._registry.is_warning(status_code)

    # ------------------------------------------------------------------
    # VAT-ID helpers
    # ------------------------------------------------------------------

    normalize_vat_id = staticmethod(normalize_vat_id)
    check_vat_id_syntax = staticmethod(check_vat_id_syntax)
    get_country_code = staticmethod(get_country_code)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(self, method: str, path: str, json: Any = None) -> httpx.Response:
        url = f"{self._base_url}{path}"
        try:
            response = await self._client.request(method, url, json=json)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("eVatR API timeout: %s %s", method, path)
            raise EvatrApiError(f"Request timed out: {method} {path}") from exc
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            body = self._error_body(exc.response)
            logger.warning(
                "eVatR API HTTP error %s for %s %s (status=%s)",
                status_code,
                method,
                path,
                body.get("status"),
            )
            raise EvatrApiError(
                body.get("message") or str(exc),
                http=status_code,
                status=body.get("status"),
                field=body.get("field"),
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("eVatR API transport error for %s %s: %s", method, path, exc)
            raise EvatrApiError(str(exc) or "Unknown error occurred") from exc
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise EvatrApiError("Response body is not valid JSON", http=response.status_code) from exc

    @staticmethod
    def _error_body(response: httpx.Response) -> dict[str, Any]:
        """Structured ``{message?, status?, field?}`` body of an error response, if any."""
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
