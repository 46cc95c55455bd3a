from __future__ import annotations

import logging
import sys
import uuid
from dataclasses import dataclass
from typing import TextIO

from tools_version.infrastructure.observability.formatters import NdjsonFormatter, TextFormatter
from tools_version.infrastructure.observability.logger import CommandLogger
from tools_version.models.events import NAMESPACE, VALID_LOG_FORMATS


@dataclass
class CommandLogContext:
    logger: CommandLogger
    _base_logger: logging.Logger
    _handlers: list[logging.Handler]

    def close(self) -> None:
        for h in list(self._handlers):
            self._base_logger.removeHandler(h)
            h.close()
        self._handlers.clear()

    def __enter__(self) -> "CommandLogContext":
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:
        self.close()


def create_command_logger_context(
    *,
    namespace: str = NAMESPACE,
    log_format: str = "text",
    log_level: int = logging.WARNING,
    stream: TextIO | None = None,
) -> CommandLogContext:
    """Build a per-invocation logger writing to ``stream`` (stderr by default)."""

    fmt = (log_format or "text").strip().lower()
    if fmt == "json":
        fmt = "ndjson"
    if fmt not in VALID_LOG_FORMATS:
        raise ValueError("log_format must be 'text' or 'ndjson' (or 'json')")

    formatter: logging.Formatter = NdjsonFormatter() if fmt == "ndjson" else TextFormatter()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)
    handlers: list[logging.Handler] = [handler]

    command_id = uuid.uuid4().hex
    base_logger = logging.getLogger(f"tools_version.command.{command_id}")
    base_logger.setLevel(log_level)
    base_logger.handlers.clear()
    base_logger.propagate = False
    for h in handlers:
        base_logger.addHandler(h)

    logger = CommandLogger(base_logger, namespace=namespace, command_id=command_id)
    return CommandLogContext(logger=logger, _base_logger=base_logger, _handlers=handlers)


__all__ = [
    "CommandLogContext",
    "create_command_logger_context",
]
