"""Formatters for ``tools-version`` command records.

Both read the fields :class:`CommandLogger` stamps on every record: ``command_id``,
``event_id``, ``event`` and the validated ``data`` payload.

- ``TextFormatter``: one ``<level>: <message>`` line per record, for people at a terminal
- ``NdjsonFormatter``: one JSON object per record, for scripts and CI logs
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from tools_version.models.events import DEFAULT_EVENT, NAMESPACE


def _timestamp(created: float) -> str:
    return datetime.fromtimestamp(created, tz=timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _payload(record: logging.LogRecord) -> dict[str, Any]:
    data = getattr(record, "data", None)
    if not isinstance(data, Mapping):
        return {}
    return {key: value for key, value in data.items() if key != "schema_version"}


class NdjsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        out: dict[str, Any] = {
            "event_id": getattr(record, "event_id", ""),
            "command_id": getattr(record, "command_id", ""),
            "timestamp": _timestamp(record.created),
            "level": record.levelname.lower(),
            "event": getattr(record, "event", DEFAULT_EVENT),
            "message": record.getMessage(),
        }
        data = getattr(record, "data", None)
        if isinstance(data, Mapping) and data:
            out["data"] = dict(data)
        return json.dumps(out, ensure_ascii=False, default=str, separators=(",", ":"))


class TextFormatter(logging.Formatter):
    """Render ``warning: tools version 7.0.0 is newer than ...`` style lines.

    Events logged without a message fall back to the event name (namespace
    stripped) followed by their payload as ``key=value`` pairs.
    """

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        message = record.getMessage()
        event = str(getattr(record, "event", ""))
        if message == event:
            fields = " ".join(f"{key}={value}" for key, value in _payload(record).items())
            short = event.removeprefix(f"{NAMESPACE}.")
            message = f"{short} {fields}" if fields else short
        return f"{record.levelname.lower()}: {message}"


__all__ = [
    "NdjsonFormatter",
    "TextFormatter",
]
