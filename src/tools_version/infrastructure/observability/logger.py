from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any, TypeAlias

from pydantic import ValidationError

from tools_version.models.events import DEFAULT_EVENT, EVENT_SCHEMAS, NAMESPACE

EventData: TypeAlias = Mapping[str, Any]


def normalize_dotpath(value: str | None) -> str:
    return "" if not value else value.strip().strip(".")


def qualify_event_name(event_name: str, namespace: str) -> str:
    """
    Fully qualify `event_name` under `namespace`.

    - If already under namespace, keep it
    - Else prefix with namespace
    """
    name = normalize_dotpath(event_name)
    ns = normalize_dotpath(namespace)

    if not ns:
        return name or "invalid_event"
    if not name:
        return f"{ns}.invalid_event"
    if name == ns or name.startswith(f"{ns}."):
        return name
    return f"{ns}.{name}"


def _validate_payload(full_event: str, payload: dict[str, Any]) -> dict[str, Any]:
    """
    Validate/normalize payload based on policy.

    - Strict: events under the package namespace must be registered
    - Open:  other namespaces (validate only if registered)
    """
    if full_event == NAMESPACE or full_event.startswith(f"{NAMESPACE}."):
        if full_event not in EVENT_SCHEMAS:
            raise ValueError(f"Unknown event '{full_event}' (add to EVENT_SCHEMAS)")
        schema = EVENT_SCHEMAS[full_event]
    else:
        schema = EVENT_SCHEMAS.get(full_event)

    if schema is None:
        return payload

    try:
        model = schema.model_validate(payload, strict=True)
    except ValidationError as e:
        raise ValueError(f"Invalid payload for event '{full_event}': {e}") from e

    return model.model_dump(mode="python")


class CommandLogger(logging.LoggerAdapter):
    """
    LoggerAdapter that:
    - stamps each record with command_id + event_id
    - adds a default event for plain log lines
    - provides .event() for domain events (Pydantic validation for registered events)
    """

    def __init__(
        self,
        logger: logging.Logger,
        *,
        namespace: str = NAMESPACE,
        command_id: str | None = None,
    ) -> None:
        self._namespace = normalize_dotpath(namespace)
        self._command_id = command_id or uuid.uuid4().hex
        super().__init__(logger, {"namespace": self._namespace, "command_id": self._command_id})

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def command_id(self) -> str:
        return self._command_id

    def process(self, msg: Any, kwargs: dict[str, Any]) -> tuple[Any, dict[str, Any]]:
        caller_extra = kwargs.pop("extra", None)
        extra = dict(self.extra or {})

        if caller_extra is not None:
            if not isinstance(caller_extra, Mapping):
                raise TypeError("logging 'extra' must be a mapping")
            extra.update(caller_extra)

        # Stable command id (caller can't override).
        extra["command_id"] = self._command_id
        extra["event_id"] = str(extra.get("event_id") or uuid.uuid4().hex)

        ns = normalize_dotpath(str(extra.get("namespace") or ""))
        extra.setdefault("event", qualify_event_name(DEFAULT_EVENT, ns) if ns else DEFAULT_EVENT)

        data = extra.get("data")
        if data is not None and not isinstance(data, Mapping):
            extra["data"] = {"value": data}

        kwargs["extra"] = extra
        return msg, kwargs

    def event(
        self,
        name: str,
        *,
        message: str | None = None,
        level: int = logging.INFO,
        data: EventData | None = None,
        **fields: Any,
    ) -> None:
        if not self.isEnabledFor(level):
            return

        full_name = qualify_event_name(name, self._namespace)

        payload: dict[str, Any] = {}
        if data:
            payload.update(dict(data))
        if fields:
            payload.update(fields)

        payload = _validate_payload(full_name, payload)

        extra: dict[str, Any] = {"event": full_name}
        if payload:
            extra["data"] = payload
        self.log(level, message or full_name, extra=extra)


class NullLogger(CommandLogger):
    """A CommandLogger that discards all log/event output."""

    def __init__(self, *, namespace: str = NAMESPACE, command_id: str = "null") -> None:
        base_logger = logging.Logger("tools_version.null")
        base_logger.addHandler(logging.NullHandler())
        base_logger.propagate = False
        base_logger.disabled = True
        super().__init__(base_logger, namespace=namespace, command_id=command_id)

    def __bool__(self) -> bool:
        return False


__all__ = [
    "CommandLogger",
    "NullLogger",
    "normalize_dotpath",
    "qualify_event_name",
]
