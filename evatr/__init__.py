"""Async client for the eVatR REST API of the German Federal Central Tax Office (BZSt).

Confirms foreign EU VAT-IDs (simple and qualified confirmation requests) and
ships the helpers around it: VAT-ID syntax checks, the German check digit,
the status message registry and a compatibility layer for the retired
XML-RPC client.
"""

from evatr.client import EvatrClient
from evatr.constants import EU_MEMBER_STATES, QUALIFIED_RESULT_CODES, STATUS_MESSAGES, VATID_PATTERNS
from evatr.exceptions import (
    EvatrApiError,
    EvatrError,
    InvalidFormatError,
    InvalidLengthError,
    MissingFieldError,
)
from evatr.migration import EvatrMigrationHelper
from evatr.schemas import (
    EUMemberState,
    ExtendedResult,
    LegacyQualifiedResult,
    LegacySimpleResult,
    QualifiedRequest,
    QualifiedResultCode,
    SimpleRequest,
    StatusCategory,
    StatusMessage,
    ValidationRequest,
    ValidationResult,
)
from evatr.status import StatusMessageRegistry, status_messages

__all__ = [
    "EU_MEMBER_STATES",
    "QUALIFIED_RESULT_CODES",
    "STATUS_MESSAGES",
    "VATID_PATTERNS",
    "EUMemberState",
    "EvatrApiError",
    "EvatrClient",
    "EvatrError",
    "EvatrMigrationHelper",
    "ExtendedResult",
    "InvalidFormatError",
    "InvalidLengthError",
    "LegacyQualifiedResult",
    "LegacySimpleResult",
    "MissingFieldError",
    "QualifiedRequest",
    "QualifiedResultCode",
    "SimpleRequest",
    "StatusCategory",
    "StatusMessage",
    "StatusMessageRegistry",
    "ValidationRequest",
    "ValidationResult",
    "status_messages",
]
