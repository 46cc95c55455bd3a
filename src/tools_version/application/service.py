"""Command service behind ``tools-version``.

The service glues the pure directive core to the host: it resolves the manifest
under a package root, reads it, locates or rewrites the directive and persists
the result atomically. The current toolchain version is injected so callers and
tests decide what "current" means.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Sequence

from tools_version.directive.locator import locate
from tools_version.directive.patterns import DEFAULT_PATTERNS, DirectivePattern
from tools_version.directive.writer import rewrite
from tools_version.infrastructure.io.manifest_files import (
    read_manifest_bytes,
    resolve_manifest_path,
    write_manifest_bytes,
)
from tools_version.infrastructure.observability.logger import CommandLogger, NullLogger
from tools_version.infrastructure.settings import DEFAULT_MANIFEST_NAME
from tools_version.models.capabilities import Compatibility, ToolchainCapabilities
from tools_version.models.errors import ConflictingModes
from tools_version.models.version import ToolingVersion, format_version, parse_version


class Mode(str, Enum):
    """What a single ``tools-version`` invocation does."""

    DISPLAY = "display"
    SET = "set"
    SET_CURRENT = "set_current"


@dataclass(frozen=True)
class Command:
    mode: Mode
    value: str | None = None


def resolve_mode(set_value: str | None, set_current: bool) -> Command:
    """Select the command mode; asking for both ``set`` and ``set-current`` is an error."""

    if set_value is not None and set_current:
        raise ConflictingModes("--set and --set-current are mutually exclusive")
    if set_value is not None:
        return Command(Mode.SET, set_value)
    if set_current:
        return Command(Mode.SET_CURRENT)
    return Command(Mode.DISPLAY)


@dataclass(frozen=True)
class DisplayResult:
    manifest_path: Path
    version: ToolingVersion | None
    warning: str | None = None

    @property
    def present(self) -> bool:
        return self.version is not None


@dataclass(frozen=True)
class WriteResult:
    manifest_path: Path
    version: ToolingVersion
    previous_version: ToolingVersion | None
    inserted: bool
    changed: bool
    warning: str | None = None


class ToolsVersionService:
    def __init__(
        self,
        *,
        current_version: ToolingVersion,
        minimum_version: ToolingVersion | None = None,
        manifest_name: str = DEFAULT_MANIFEST_NAME,
        patterns: Sequence[DirectivePattern] = DEFAULT_PATTERNS,
        logger: CommandLogger | None = None,
    ) -> None:
        self.current_version = current_version
        self.capabilities = ToolchainCapabilities(
            current=current_version,
            minimum_supported=minimum_version if minimum_version is not None else ToolingVersion(0),
        )
        self.manifest_name = manifest_name
        self.patterns = tuple(patterns)
        self.logger = logger if logger is not None else NullLogger()

    def manifest_path(self, package_root: Path) -> Path:
        path = resolve_manifest_path(
            package_root,
            manifest_name=self.manifest_name,
            current_version=self.current_version,
        )
        self.logger.event(
            "manifest.resolved",
            message=f"using manifest {path}",
            level=logging.DEBUG,
            package_root=str(package_root),
            manifest_path=str(path),
        )
        return path

    def display(self, package_root: Path) -> DisplayResult:
        path = self.manifest_path(package_root)
        location = locate(read_manifest_bytes(path), self.patterns)
        version = location.version if location is not None else None
        self.logger.event(
            "directive.read",
            message=f"tools version {version}" if version is not None else "no tools-version directive",
            level=logging.DEBUG,
            manifest_path=str(path),
            present=version is not None,
            version=format_version(version) if version is not None else None,
        )
        warning = self._check(version) if version is not None else None
        return DisplayResult(manifest_path=path, version=version, warning=warning)

    def set(self, package_root: Path, version_text: str) -> WriteResult:
        return self.apply(package_root, parse_version(version_text))

    def set_current(self, package_root: Path) -> WriteResult:
        return self.apply(package_root, self.current_version.zeroed_patch)

    def apply(self, package_root: Path, version: ToolingVersion) -> WriteResult:
        path = self.manifest_path(package_root)
        original = read_manifest_bytes(path)
        location = locate(original, self.patterns)
        updated = rewrite(original, version, self.patterns)

        changed = updated != original
        if changed:
            write_manifest_bytes(path, updated)

        previous = location.version if location is not None else None
        self.logger.event(
            "directive.written",
            message=f"tools version set to {format_version(version)}",
            manifest_path=str(path),
            version=format_version(version),
            previous_version=format_version(previous) if previous is not None else None,
            inserted=location is None,
            changed=changed,
        )
        return WriteResult(
            manifest_path=path,
            version=version,
            previous_version=previous,
            inserted=location is None,
            changed=changed,
            warning=self._check(version),
        )

    def run(self, command: Command, package_root: Path) -> DisplayResult | WriteResult:
        if command.mode is Mode.SET:
            return self.set(package_root, command.value or "")
        if command.mode is Mode.SET_CURRENT:
            return self.set_current(package_root)
        return self.display(package_root)

    def _check(self, version: ToolingVersion) -> str | None:
        status = self.capabilities.check(version)
        if status is Compatibility.SUPPORTED:
            return None
        warning = self.capabilities.describe(version)
        self.logger.event(
            "compatibility.warning",
            message=warning,
            level=logging.WARNING,
            version=format_version(version),
            status=status.value,
            current=format_version(self.capabilities.current),
            minimum_supported=format_version(self.capabilities.minimum_supported),
        )
        return warning


__all__ = [
    "Command",
    "DisplayResult",
    "Mode",
    "ToolsVersionService",
    "WriteResult",
    "resolve_mode",
]
