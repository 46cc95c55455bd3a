"""Error hierarchy for :mod:`tools_version`."""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class MalformedVersionReason(str, Enum):
    """Why a version string was rejected."""

    EMPTY = "empty"
    NON_NUMERIC_COMPONENT = "non-numeric-component"
    LEADING_ZERO = "leading-zero"
    INVALID_IDENTIFIER_CHARACTER = "invalid-identifier-character"


class DirectiveIssue(str, Enum):
    """Structural problems with a directive line that are not version errors."""

    MISSING_SEPARATOR = "missing-separator"


class ToolsVersionError(Exception):
    """Base class for tools-version exceptions."""


class MalformedVersion(ToolsVersionError, ValueError):
    """Raised when text does not match the version grammar."""

    def __init__(self, text: str, reason: MalformedVersionReason, offending: str | None = None) -> None:
        self.text = text
        self.reason = reason
        self.offending = text if offending is None else offending
        if reason is MalformedVersionReason.EMPTY:
            message = "version string is empty"
        elif self.offending == text:
            message = f"malformed version {text!r} ({reason.value})"
        else:
            message = f"malformed version {text!r} ({reason.value}: {self.offending!r})"
        super().__init__(message)


class MalformedDirective(ToolsVersionError):
    """Raised when a directive line is present but its payload is unusable."""

    def __init__(self, raw_text: str, reason: MalformedVersion | DirectiveIssue) -> None:
        self.raw_text = raw_text
        self.reason = reason
        if isinstance(reason, MalformedVersion):
            detail = str(reason)
        else:
            detail = reason.value
        super().__init__(f"malformed tools-version directive {raw_text!r}: {detail}")


class NoManifestFound(ToolsVersionError):
    """Raised when no manifest exists under a package root."""

    def __init__(self, package_root: Path, manifest_name: str | None = None) -> None:
        self.package_root = package_root
        self.manifest_name = manifest_name
        target = f"{manifest_name} " if manifest_name else "manifest "
        super().__init__(f"no {target}found in {package_root}")


class ManifestIOError(ToolsVersionError):
    """Raised when a manifest cannot be read or written."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


class ConflictingModes(ToolsVersionError):
    """Raised when more than one command mode is requested at once."""


__all__ = [
    "ConflictingModes",
    "DirectiveIssue",
    "MalformedDirective",
    "MalformedVersion",
    "MalformedVersionReason",
    "ManifestIOError",
    "NoManifestFound",
    "ToolsVersionError",
]
