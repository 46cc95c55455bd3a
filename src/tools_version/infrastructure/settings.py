"""Settings for :mod:`tools_version` (infrastructure).

Settings are defined in one place (this file) and loaded using `pydantic-settings`.

Supported sources (lowest → highest precedence):
1) `settings.toml` (current working directory)
2) `.env` (current working directory)
3) environment variables (prefix: `TOOLS_VERSION_`)
4) explicit overrides (`Settings(...)` / CLI)

`settings.toml` is intentionally flat: keys map 1:1 to `Settings` fields.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, TomlConfigSettingsSource

from tools_version.models.capabilities import ToolchainCapabilities
from tools_version.models.errors import MalformedVersion
from tools_version.models.version import ToolingVersion, format_version, parse_version

ENV_PREFIX = "TOOLS_VERSION_"

# Toolchain this build of the package speaks for; hosts override it via settings.
DEFAULT_CURRENT_TOOLS_VERSION = "6.0.0"
DEFAULT_MINIMUM_TOOLS_VERSION = "4.0.0"
DEFAULT_MANIFEST_NAME = "Package.manifest"


def _coerce_log_level(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("log_level must be an int or a log level name")

    if isinstance(value, int):
        return value

    text = str(value).strip()
    if not text:
        return logging.INFO

    if text.isdigit():
        return int(text)

    mapped = logging.getLevelNamesMapping().get(text.upper())
    if isinstance(mapped, int):
        return mapped

    raise ValueError(f"Invalid log_level: {value!r}")


def _coerce_version(value: Any) -> str:
    if isinstance(value, ToolingVersion):
        return format_version(value)
    try:
        return format_version(parse_version(str(value).strip()))
    except MalformedVersion as exc:
        # pydantic only reports ValueError/AssertionError as validation errors.
        raise ValueError(str(exc)) from exc


class Settings(BaseSettings):
    """Runtime settings for the tools-version commands."""

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix=ENV_PREFIX,
        env_file=".env",
    )

    # Toolchain
    current_tools_version: str = Field(default=DEFAULT_CURRENT_TOOLS_VERSION)
    minimum_tools_version: str = Field(default=DEFAULT_MINIMUM_TOOLS_VERSION)

    # Manifest discovery
    manifest_name: str = Field(default=DEFAULT_MANIFEST_NAME, min_length=1)

    # Logging
    log_format: Literal["text", "ndjson"] = Field(default="text")
    log_level: int = Field(default=logging.WARNING)

    @field_validator("current_tools_version", "minimum_tools_version", mode="before")
    @classmethod
    def _validate_version(cls, value: Any) -> str:
        return _coerce_version(value)

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: Any) -> int:
        return _coerce_log_level(value)

    @field_validator("log_format", mode="before")
    @classmethod
    def _validate_log_format(cls, value: Any) -> str:
        text = str(value or "text").strip().lower()
        return "ndjson" if text == "json" else text

    @field_validator("manifest_name")
    @classmethod
    def _validate_manifest_name(cls, value: str) -> str:
        if Path(value).name != value:
            raise ValueError("manifest_name must be a bare file name")
        return value

    @model_validator(mode="after")
    def _validate_version_range(self) -> "Settings":
        if self.minimum_version > self.current_version:
            raise ValueError("minimum_tools_version must not be newer than current_tools_version")
        return self

    @property
    def current_version(self) -> ToolingVersion:
        return parse_version(self.current_tools_version)

    @property
    def minimum_version(self) -> ToolingVersion:
        return parse_version(self.minimum_tools_version)

    @property
    def capabilities(self) -> ToolchainCapabilities:
        return ToolchainCapabilities(
            current=self.current_version,
            minimum_supported=self.minimum_version,
        )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_files = None
        if hasattr(init_settings, "init_kwargs"):
            toml_files = init_settings.init_kwargs.get("_toml_files")  # type: ignore[attr-defined]

        if toml_files is None:
            toml_files = [Path.cwd() / "settings.toml"]

        toml_settings = TomlConfigSettingsSource(settings_cls, toml_file=toml_files)

        return (
            init_settings,
            env_settings,
            dotenv_settings,
            toml_settings,
            file_secret_settings,
        )

    @classmethod
    def load(cls, *, cwd: Path | None = None, **overrides: Any) -> "Settings":
        cwd_path = (cwd or Path.cwd()).expanduser().resolve()
        return cls(
            _toml_files=[cwd_path / "settings.toml"],
            _env_file=cwd_path / ".env",
            **overrides,
        )


__all__ = [
    "DEFAULT_CURRENT_TOOLS_VERSION",
    "DEFAULT_MANIFEST_NAME",
    "DEFAULT_MINIMUM_TOOLS_VERSION",
    "ENV_PREFIX",
    "Settings",
]
