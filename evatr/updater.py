"""Update checks for the eVatR API documentation and status message table.

Downloads land in a docs directory (default ``./docs``). The resulting
``statusmeldungen.json`` is the snapshot format read by the status registry
when file loading is enabled.

Usage:
    python -m evatr.updater check
    python -m evatr.updater api-docs
    python -m evatr.updater status-messages
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any

import httpx
import structlog
from pydantic import BaseModel, Field

from evatr.config import settings
from evatr.constants import API_DOCS_PATH, ENDPOINT_STATUS_MESSAGES, STATUS_FILE_NAME
from evatr.log import configure_logging

logger = logging.getLogger(__name__)
log = structlog.get_logger(__name__)

API_DOCS_FILE_NAME = "api-docs.json"


class UpdateCheckResult(BaseModel):
    has_update: bool
    current_version: str | None = None
    latest_version: str | None = None
    download_url: str | None = None


class ModifiedStatusMessage(BaseModel):
    status: str
    old: dict[str, Any]
    new: dict[str, Any]


class StatusMessageDiff(BaseModel):
    """Differences between two wire-shaped status message arrays, keyed by ``status``."""

    added: list[dict[str, Any]] = Field(default_factory=list)
    removed: list[dict[str, Any]] = Field(default_factory=list)
    modified: list[ModifiedStatusMessage] = Field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed or self.modified)


class StatusMessagesCheckResult(UpdateCheckResult):
    diff: StatusMessageDiff = Field(default_factory=StatusMessageDiff)


def _index_by_status(messages: Any) -> dict[str, dict[str, Any]]:
    """Key a status message array by ``status``.

    Raises:
        ValueError: If the array or one of its entries is malformed.
    """
    if not isinstance(messages, list):
        msg = f"Expected a JSON array of status messages, got {type(messages).__name__}"
        raise ValueError(msg)
    indexed: dict[str, dict[str, Any]] = {}
    for item in messages:
        if not isinstance(item, dict) or not isinstance(item.get("status"), str):
            msg = f"Status message entry without a status code: {item!r}"
            raise ValueError(msg)
        indexed[item["status"]] = item
    return indexed


def _api_docs_version(api_docs: Any) -> str | None:
    if not isinstance(api_docs, dict):
        msg = f"Expected a JSON object as API docs, got {type(api_docs).__name__}"
        raise ValueError(msg)
    info = api_docs.get("info")
    version = info.get("version") if isinstance(info, dict) else None
    return str(version) if version else None


def compare_status_messages(
    current: list[dict[str, Any]],
    latest: list[dict[str, Any]],
) -> StatusMessageDiff:
    current_map = _index_by_status(current)
    latest_map = _index_by_status(latest)

    diff = StatusMessageDiff()
    for status, latest_msg in latest_map.items():
        current_msg = current_map.get(status)
        if current_msg is None:
            diff.added.append(latest_msg)
        elif current_msg != latest_msg:
            diff.modified.append(ModifiedStatusMessage(status=status, old=current_msg, new=latest_msg))

    for status, current_msg in current_map.items():
        if status not in latest_map:
            diff.removed.append(current_msg)
    return diff


def format_status_message_diff(diff: StatusMessageDiff) -> str:
    """Human-readable rendering of a StatusMessageDiff."""
    if not diff.has_changes:
        return "No differences found"

    lines: list[str] = []
    if diff.added:
        lines.append(f"Added ({len(diff.added)}):")
        lines.extend(f"  {msg['status']}: {msg.get('meldung', '')}" for msg in diff.added)
    if diff.removed:
        lines.append(f"Removed ({len(diff.removed)}):")
        lines.extend(f"  {msg['status']}: {msg.get('meldung', '')}" for msg in diff.removed)
    if diff.modified:
        lines.append(f"Modified ({len(diff.modified)}):")
        for change in diff.modified:
            lines.append(f"  {change.status}:")
            lines.append(f"    Old: {change.old.get('meldung', '')}")
            lines.append(f"    New: {change.new.get('meldung', '')}")
    return "\n".join(lines)


class EvatrApiUpdater:
    """Fetches the published API docs and status table and compares them with local copies."""

    def __init__(
        self,
        docs_dir: str | Path | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.docs_dir = Path(docs_dir or settings.docs_dir)
        self._transport = transport
        self._timeout = httpx.Timeout(settings.api.timeout)
        self.api_docs_url = settings.api.host.rstrip("/") + API_DOCS_PATH
        self.status_messages_url = settings.api.base_url + ENDPOINT_STATUS_MESSAGES

    async def _get_json(self, url: str) -> Any:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.get(url, headers={"Accept": "application/json"})
            response.raise_for_status()
            return response.json()

    def _read_local(self, name: str) -> Any:
        path = self.docs_dir / name
        if not path.exists():
            return None
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Could not read %s: %s", path, exc)
            return None

    def _write(self, name: str, data: Any) -> Path:
        self.docs_dir.mkdir(parents=True, exist_ok=True)
        path = self.docs_dir / name
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        return path

    # ------------------------------------------------------------------
    # API docs
    # ------------------------------------------------------------------

    async def check_api_docs_update(self) -> UpdateCheckResult:
        api_docs = await self._get_json(self.api_docs_url)
        latest_version = _api_docs_version(api_docs)
        if not latest_version:
            msg = "Could not extract version from API docs"
            raise ValueError(msg)

        local = self._read_local(API_DOCS_FILE_NAME)
        current_version = _api_docs_version(local) if isinstance(local, dict) else None

        return UpdateCheckResult(
            has_update=current_version != latest_version,
            current_version=current_version,
            latest_version=latest_version,
            download_url=self.api_docs_url,
        )

    async def download_api_docs(self) -> Path:
        """Save the current API docs as ``api-docs-<version>-<YYYY-MM-DD>.json``."""
        api_docs = await self._get_json(self.api_docs_url)
        version = _api_docs_version(api_docs) or "unknown"
        path = self._write(f"api-docs-{version}-{date.today().isoformat()}.json", api_docs)
        logger.info("API documentation saved to %s", path)
        return path

    # ------------------------------------------------------------------
    # Status messages
    # ------------------------------------------------------------------

    async def check_status_messages_update(self) -> StatusMessagesCheckResult:
        latest: list[dict[str, Any]] = await self._get_json(self.status_messages_url)
        current = self._read_local(STATUS_FILE_NAME)
        if not isinstance(current, list):
            current = []

        diff = compare_status_messages(current, latest)
        return StatusMessagesCheckResult(
            has_update=diff.has_changes,
            current_version=f"{len(current)} messages",
            latest_version=f"{len(latest)} messages",
            download_url=self.status_messages_url,
            diff=diff,
        )

    async def download_status_messages(self) -> Path:
        """Save a dated snapshot and refresh ``statusmeldungen.json``."""
        messages = await self._get_json(self.status_messages_url)
        _index_by_status(messages)  # never overwrite the snapshot with a malformed payload
        path = self._write(f"statusmeldungen-{date.today().isoformat()}.json", messages)
        self._write(STATUS_FILE_NAME, messages)
        logger.info("Status messages saved to %s", path)
        return path

    # ------------------------------------------------------------------
    # Combined
    # ------------------------------------------------------------------

    async def update_api_docs(self) -> bool:
        result = await self.check_api_docs_update()
        if not result.has_update:
            log.info("api_docs_up_to_date", version=result.current_version)
            return False
        log.info(
            "api_docs_update_available",
            current=result.current_version,
            latest=result.latest_version,
        )
        await self.download_api_docs()
        return True

    async def update_status_messages(self) -> bool:
        result = await self.check_status_messages_update()
        if not result.has_update:
            log.info("status_messages_up_to_date", count=result.current_version)
            return False
        log.info(
            "status_messages_update_available",
            current=result.current_version,
            latest=result.latest_version,
        )
        logger.info("Status message differences:\n%s", format_status_message_diff(result.diff))
        await self.download_status_messages()
        return True

    async def check_and_update_all(self) -> None:
        await self.update_api_docs()
        await self.update_status_messages()


async def _run(command: str, docs_dir: str | None) -> None:
    updater = EvatrApiUpdater(docs_dir)
    if command == "check":
        await updater.check_and_update_all()
    elif command == "api-docs":
        await updater.update_api_docs()
    elif command == "status-messages":
        await updater.update_status_messages()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m evatr.updater",
        description="Check for and download eVatR API documentation and status message updates.",
    )
    parser.add_argument("command", choices=["check", "api-docs", "status-messages"])
    parser.add_argument("--docs-dir", default=None, help="Target directory (default: ./docs)")
    args = parser.parse_args(argv)

    configure_logging()
    try:
        asyncio.run(_run(args.command, args.docs_dir))
    except (httpx.HTTPError, ValueError) as exc:
        log.error("update_check_failed", error=str(exc))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
