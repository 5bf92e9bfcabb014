"""Status message registry: lookup and classification of eVatR status codes.

The built-in table in ``evatr.constants`` is always a complete fallback.
When file loading is enabled, an on-disk ``statusmeldungen.json`` snapshot
(the JSON array served by ``/info/statusmeldungen``) is preferred and cached
for a bounded time.

A refresh builds the whole mapping before publishing it with a single
attribute assignment, so concurrent readers see either the old or the new
snapshot, never a partial one.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError

from evatr.config import settings
from evatr.constants import STATUS_FILE_NAME, STATUS_MESSAGES
from evatr.mapper import status_message_from_api
from evatr.schemas import ApiStatusMessage, StatusCategory, StatusMessage, StatusStatistics

logger = logging.getLogger(__name__)

_PACKAGE_ROOT = Path(__file__).resolve().parent.parent

FALLBACK_STATUS_MESSAGES: Mapping[str, StatusMessage] = MappingProxyType(
    {code: StatusMessage.model_validate(data) for code, data in STATUS_MESSAGES.items()}
)

SOURCE_CONSTANTS = "constants"
SOURCE_FILE = "file"


@dataclass(frozen=True)
class _Snapshot:
    messages: Mapping[str, StatusMessage]
    loaded_at: float
    source: str
    pinned: bool = False  # explicit load_from_path(); kept until clear_cache()


def parse_status_messages(items: Any) -> dict[str, StatusMessage]:
    """Turn a snapshot array into a mapping keyed by status code.

    Accepts wire-shaped entries (``kategorie``/``meldung``/...) as well as
    already normalized ones (``category``/``message``/...).

    Raises:
        ValueError: If ``items`` is not a list of status message objects.
    """
    if not isinstance(items, list):
        msg = f"Expected a JSON array of status messages, got {type(items).__name__}"
        raise ValueError(msg)

    parsed: dict[str, StatusMessage] = {}
    for item in items:
        if not isinstance(item, dict):
            msg = f"Status message entry must be an object, got {type(item).__name__}"
            raise ValueError(msg)
        if "meldung" in item or "kategorie" in item:
            message = status_message_from_api(ApiStatusMessage.model_validate(item))
        else:
            message = StatusMessage.model_validate(item)
        parsed[message.status] = message
    return parsed


class StatusMessageRegistry:
    """Read-mostly registry of status messages with an optional file override."""

    def __init__(
        self,
        *,
        file_loading: bool | None = None,
        cache_ttl: float | None = None,
        status_file: str | Path | None = None,
    ) -> None:
        self.file_loading = settings.status.status_file_loading if file_loading is None else file_loading
        self.cache_ttl = settings.status.status_cache_ttl if cache_ttl is None else cache_ttl
        extra = settings.status.status_file if status_file is None else status_file
        self._status_file = Path(extra) if extra else None
        self._snapshot: _Snapshot | None = None
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def candidate_paths(self) -> list[Path]:
        """Snapshot locations, tried in order."""
        paths = [
            Path.cwd() / "docs" / STATUS_FILE_NAME,
            _PACKAGE_ROOT / "docs" / STATUS_FILE_NAME,
            Path.cwd() / STATUS_FILE_NAME,
        ]
        if self._status_file is not None:
            paths.insert(0, self._status_file)
        return paths

    def messages(self) -> Mapping[str, StatusMessage]:
        """The active status table."""
        snapshot = self._snapshot
        if snapshot is not None and (snapshot.pinned or self._is_fresh(snapshot)):
            return snapshot.messages

        if not self.file_loading:
            return FALLBACK_STATUS_MESSAGES

        return self._refresh().messages

    def _is_fresh(self, snapshot: _Snapshot) -> bool:
        return (time.monotonic() - snapshot.loaded_at) < self.cache_ttl

    def _refresh(self) -> _Snapshot:
        with self._lock:
            # Another caller may have refreshed while we waited.
            snapshot = self._snapshot
            if snapshot is not None and (snapshot.pinned or self._is_fresh(snapshot)):
                return snapshot

            loaded = self.load_from_file()
            if loaded is not None:
                snapshot = _Snapshot(MappingProxyType(loaded), time.monotonic(), SOURCE_FILE)
            else:
                snapshot = _Snapshot(FALLBACK_STATUS_MESSAGES, time.monotonic(), SOURCE_CONSTANTS)
            self._snapshot = snapshot
            return snapshot

    def load_from_file(self) -> dict[str, StatusMessage] | None:
        """Try every candidate path; the first readable, parseable snapshot wins."""
        for path in self.candidate_paths():
            if not path.exists():
                continue
            try:
                messages = self._read(path)
            except (OSError, ValueError, ValidationError) as exc:
                logger.warning("Could not load status messages from %s: %s", path, exc)
                continue
            logger.info("Loaded %d status messages from %s", len(messages), path)
            return messages
        return None

    def load_from_path(self, path: str | Path) -> Mapping[str, StatusMessage] | None:
        """Load a specific snapshot file and make it the active table.

        Returns the loaded mapping, or None when the file is missing or broken
        (the active table is left untouched in that case).
        """
        path = Path(path)
        if not path.exists():
            logger.error("Status messages file not found: %s", path)
            return None
        try:
            messages = self._read(path)
        except (OSError, ValueError, ValidationError) as exc:
            logger.error("Error loading status messages from %s: %s", path, exc)
            return None

        snapshot = _Snapshot(MappingProxyType(messages), time.monotonic(), SOURCE_FILE, pinned=True)
        with self._lock:
            self._snapshot = snapshot
        logger.info("Loaded %d status messages from %s", len(messages), path)
        return snapshot.messages

    @staticmethod
    def _read(path: Path) -> dict[str, StatusMessage]:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return parse_status_messages(data)

    def clear_cache(self) -> None:
        """Drop the cached snapshot; the next read re-attempts loading."""
        with self._lock:
            self._snapshot = None

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, status_code: str) -> StatusMessage | None:
        return self.messages().get(status_code)

    def available_status_codes(self) -> list[str]:
        return sorted(self.messages())

    def by_category(self, category: StatusCategory | str) -> list[StatusMessage]:
        try:
            category = StatusCategory(category)
        except ValueError:
            return []
        return [msg for msg in self.messages().values() if msg.category == category]

    def by_http(self, http: int) -> list[StatusMessage]:
        return [msg for msg in self.messages().values() if msg.http == http]

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def is_success(self, status_code: str) -> bool:
        """Result category, or any message answered with HTTP 200.

        Hint messages with HTTP 200 (e.g. evatr-2002, "valid only from
        gueltigAb") count as success here and as warnings in is_warning().
        """
        message = self.get(status_code)
        if message is None:
            return False
        return message.category == StatusCategory.RESULT or message.http == 200

    def is_error(self, status_code: str) -> bool:
        message = self.get(status_code)
        return message is not None and message.category == StatusCategory.ERROR

    def is_warning(self, status_code: str) -> bool:
        message = self.get(status_code)
        return message is not None and message.category == StatusCategory.HINT

    def statistics(self) -> StatusStatistics:
        messages = self.messages()
        by_category = Counter(msg.category or "Unknown" for msg in messages.values())
        by_http = Counter(msg.http or 0 for msg in messages.values())
        return StatusStatistics(
            total=len(messages),
            by_category=dict(by_category),
            by_http=dict(by_http),
            source=SOURCE_CONSTANTS if messages is FALLBACK_STATUS_MESSAGES else SOURCE_FILE,
        )


# Module-level default registry
status_messages = StatusMessageRegistry()
