"""Event payload schemas and schema registry for tools-version logging.

Payload models are strict:
- ``extra="forbid"`` to prevent accidental schema drift
- runtime validation uses ``model_validate(..., strict=True)``
"""

from __future__ import annotations

from typing import Literal, TypeAlias

from pydantic import BaseModel, ConfigDict

NAMESPACE = "tools_version"

VALID_LOG_FORMATS = {"text", "ndjson", "json"}  # "json" is an alias for ndjson
DEFAULT_EVENT = "log"  # fallback event for plain log lines

PayloadModel: TypeAlias = type[BaseModel] | None

SchemaVersion = Literal[1]


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class StrictPayloadV1(StrictModel):
    schema_version: SchemaVersion = 1


class ManifestResolvedPayloadV1(StrictPayloadV1):
    package_root: str
    manifest_path: str


class DirectiveReadPayloadV1(StrictPayloadV1):
    manifest_path: str
    present: bool
    version: str | None = None


class DirectiveWrittenPayloadV1(StrictPayloadV1):
    manifest_path: str
    version: str
    previous_version: str | None = None
    inserted: bool
    changed: bool


class CompatibilityWarningPayloadV1(StrictPayloadV1):
    version: str
    status: Literal["too_old", "too_new"]
    current: str
    minimum_supported: str


EVENT_SCHEMAS: dict[str, PayloadModel] = {
    f"{NAMESPACE}.{DEFAULT_EVENT}": None,
    f"{NAMESPACE}.manifest.resolved": ManifestResolvedPayloadV1,
    f"{NAMESPACE}.directive.read": DirectiveReadPayloadV1,
    f"{NAMESPACE}.directive.written": DirectiveWrittenPayloadV1,
    f"{NAMESPACE}.compatibility.warning": CompatibilityWarningPayloadV1,
    # Debug events (payloads are open)
    f"{NAMESPACE}.settings.effective": None,
}


__all__ = [
    "CompatibilityWarningPayloadV1",
    "DEFAULT_EVENT",
    "DirectiveReadPayloadV1",
    "DirectiveWrittenPayloadV1",
    "EVENT_SCHEMAS",
    "ManifestResolvedPayloadV1",
    "NAMESPACE",
    "PayloadModel",
    "VALID_LOG_FORMATS",
]
