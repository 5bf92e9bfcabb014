"""Tests for the wire ↔ normalized mapping."""

from __future__ import annotations

import json
from datetime import date, datetime, timedelta, timezone

import pytest

from evatr.mapper import (
    from_api_response,
    member_state_from_api,
    status_message_from_api,
    to_api_request,
    to_extended,
    to_raw_envelope,
)
from evatr.schemas import QualifiedResultCode, StatusCategory, ValidationRequest, ValidationResult
from evatr.status import StatusMessageRegistry


@pytest.fixture()
def registry() -> StatusMessageRegistry:
    return StatusMessageRegistry(file_loading=False)


class TestToApiRequest:
    def test_simple_omits_absent_fields(self) -> None:
        request = ValidationRequest(vat_id_own="DE123456789", vat_id_foreign="ATU12345678")
        assert to_api_request(request) == {
            "anfragendeUstid": "DE123456789",
            "angefragteUstid": "ATU12345678",
        }

    def test_qualified_field_names(self) -> None:
        request = ValidationRequest(
            vat_id_own="DE123456789",
            vat_id_foreign="ATU12345678",
            company="Musterhaus GmbH & Co KG",
            location="musterort",
            street="Musterstrasse 22",
            zip="12345",
        )
        assert to_api_request(request) == {
            "anfragendeUstid": "DE123456789",
            "angefragteUstid": "ATU12345678",
            "firmenname": "Musterhaus GmbH & Co KG",
            "ort": "musterort",
            "strasse": "Musterstrasse 22",
            "plz": "12345",
        }

    def test_include_raw_is_not_sent(self) -> None:
        request = ValidationRequest(vat_id_own="DE123456789", vat_id_foreign="ATU12345678", include_raw=True)
        assert "includeRaw" not in to_api_request(request)

    def test_accepts_camel_case_input(self) -> None:
        request = ValidationRequest.model_validate({"vatIdOwn": "DE123456789", "vatIdForeign": "ATU12345678"})
        assert to_api_request(request)["anfragendeUstid"] == "DE123456789"


class TestFromApiResponse:
    def test_renames_fields(self) -> None:
        result = from_api_response(
            {
                "id": "abc-123",
                "anfrageZeitpunkt": "2025-08-01T10:00:00.000Z",
                "status": "evatr-0000",
                "gueltigAb": "2020-01-01",
                "gueltigBis": "2030-12-31",
                "ergFirmenname": "A",
                "ergStrasse": "B",
                "ergPlz": "C",
                "ergOrt": "D",
            },
            "DE123456789",
            "ATU12345678",
        )
        assert result.id == "abc-123"
        assert result.timestamp == "2025-08-01T10:00:00.000Z"
        assert result.valid_from == "2020-01-01"
        assert result.valid_till == "2030-12-31"
        assert result.company == QualifiedResultCode.MATCH
        assert result.street == QualifiedResultCode.NO_MATCH
        assert result.zip == QualifiedResultCode.NOT_QUERIED
        assert result.location == QualifiedResultCode.NOT_RETURNED

    def test_uses_request_vat_ids(self) -> None:
        result = from_api_response(
            {"status": "evatr-0000", "anfragendeUstid": "XX", "angefragteUstid": "YY"},
            "DE123456789",
            "ATU12345678",
        )
        assert result.vat_id_own == "DE123456789"
        assert result.vat_id_foreign == "ATU12345678"

    def test_camel_case_dump(self) -> None:
        result = from_api_response({"status": "evatr-0000"}, "DE123456789", "ATU12345678")
        dumped = result.model_dump(by_alias=True, exclude_none=True)
        assert dumped == {"status": "evatr-0000", "vatIdOwn": "DE123456789", "vatIdForeign": "ATU12345678"}


class TestToExtended:
    def test_parses_dates_and_resolves_message(self, registry: StatusMessageRegistry) -> None:
        result = ValidationResult(
            id="1",
            timestamp="2025-08-01T10:00:00Z",
            status="evatr-2002",
            vat_id_own="DE123456789",
            vat_id_foreign="ATU12345678",
            valid_from="2025-01-01",
        )
        extended = to_extended(result, registry)

        assert extended.valid is True
        assert extended.valid_from == date(2025, 1, 1)
        assert extended.valid_till is None
        assert extended.timestamp == datetime(2025, 8, 1, 10, 0, tzinfo=timezone.utc)
        assert extended.message == registry.get("evatr-2002").message

    def test_offset_timestamp(self, registry: StatusMessageRegistry) -> None:
        result = ValidationResult(
            timestamp="2025-08-01T12:00:00+02:00",
            status="evatr-0000",
            vat_id_own="DE123456789",
            vat_id_foreign="ATU12345678",
        )
        extended = to_extended(result, registry)
        assert extended.timestamp.utcoffset() == timedelta(hours=2)

    def test_absent_dates_stay_absent(self, registry: StatusMessageRegistry) -> None:
        result = ValidationResult(status="evatr-0000", vat_id_own="DE123456789", vat_id_foreign="ATU12345678")
        extended = to_extended(result, registry)
        assert extended.timestamp is None
        assert extended.valid_from is None
        assert extended.valid_till is None

    def test_error_status_is_not_valid(self, registry: StatusMessageRegistry) -> None:
        result = ValidationResult(status="evatr-0004", vat_id_own="DE123456789", vat_id_foreign="ATU12345678")
        assert to_extended(result, registry).valid is False

    def test_unknown_status(self, registry: StatusMessageRegistry) -> None:
        result = ValidationResult(status="evatr-4242", vat_id_own="DE123456789", vat_id_foreign="ATU12345678")
        extended = to_extended(result, registry)
        assert extended.valid is False
        assert extended.message is None

    def test_unparseable_date_is_absent(self, registry: StatusMessageRegistry) -> None:
        result = ValidationResult(
            status="evatr-0000",
            vat_id_own="DE123456789",
            vat_id_foreign="ATU12345678",
            valid_from="01.01.2025",
        )
        assert to_extended(result, registry).valid_from is None

    def test_raw_is_carried(self, registry: StatusMessageRegistry) -> None:
        result = ValidationResult(
            status="evatr-0000", vat_id_own="DE123456789", vat_id_foreign="ATU12345678", raw="{}"
        )
        assert to_extended(result, registry).raw == "{}"


class TestRawEnvelope:
    def test_envelope(self) -> None:
        raw = to_raw_envelope({"content-type": "application/json"}, {"status": "evatr-0000"})
        assert json.loads(raw) == {
            "headers": {"content-type": "application/json"},
            "data": {"status": "evatr-0000"},
        }


class TestMetadata:
    @pytest.mark.parametrize(
        ("kategorie", "expected"),
        [
            ("Ergebnis", StatusCategory.RESULT),
            ("Fehler", StatusCategory.ERROR),
            ("Hinweis", StatusCategory.HINT),
            ("Unbekannt", None),
            (None, None),
        ],
    )
    def test_category_labels(self, kategorie: str | None, expected: StatusCategory | None) -> None:
        message = status_message_from_api(
            {"status": "evatr-0000", "kategorie": kategorie, "httpcode": 200, "meldung": "x"}
        )
        assert message.category == expected

    def test_status_message_fields(self) -> None:
        message = status_message_from_api(
            {
                "status": "evatr-0004",
                "kategorie": "Fehler",
                "httpcode": 400,
                "feld": "anfragendeUstid",
                "meldung": "Falsch.",
            }
        )
        assert message.http == 400
        assert message.field == "anfragendeUstid"
        assert message.message == "Falsch."

    def test_member_state(self) -> None:
        state = member_state_from_api({"alpha2": "AT", "name": "Österreich", "verfuegbar": True})
        assert state.code == "AT"
        assert state.name == "Österreich"
        assert state.available is True
