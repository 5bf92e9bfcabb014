"""Exception hierarchy for the eVatR client."""

from __future__ import annotations


class EvatrError(Exception):
    """Base class for every error raised by this package."""


class EvatrApiError(EvatrError):
    """Uniform error surfaced by the client.

    Carries the HTTP status and the structured ``{message, status, field}``
    body of the eVatR API when the failure came from the transport.
    """

    def __init__(
        self,
        message: str,
        *,
        http: int | None = None,
        status: str | None = None,
        field: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.http = http
        self.status = status
        self.field = field

    @property
    def name(self) -> str:
        return "ApiError"

    def to_dict(self) -> dict[str, object]:
        """Serialize to the ``{name, message, http?, status?, field?}`` shape."""
        data: dict[str, object] = {"name": self.name, "message": self.message}
        for key in ("http", "status", "field"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.message!r}, http={self.http!r}, "
            f"status={self.status!r}, field={self.field!r})"
        )


class MissingFieldError(EvatrApiError):
    """A required VAT-ID was empty or absent. Raised before any network call."""


class InvalidFormatError(EvatrApiError):
    """A normalized VAT-ID failed its country pattern or the country is unsupported."""


class InvalidLengthError(EvatrError, ValueError):
    """Input to the German check-digit calculation is not exactly nine digits."""
