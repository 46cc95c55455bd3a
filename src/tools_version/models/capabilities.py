"""Toolchain capability checks for declared tools versions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tools_version.models.version import ToolingVersion


class Compatibility(str, Enum):
    """How a declared version relates to what the running toolchain can read."""

    SUPPORTED = "supported"
    TOO_OLD = "too_old"
    TOO_NEW = "too_new"


@dataclass(frozen=True)
class ToolchainCapabilities:
    """Range of tools versions the running toolchain understands."""

    current: ToolingVersion
    minimum_supported: ToolingVersion

    def __post_init__(self) -> None:
        if self.minimum_supported > self.current:
            raise ValueError(
                f"minimum supported version {self.minimum_supported} is newer than current {self.current}"
            )

    def check(self, version: ToolingVersion) -> Compatibility:
        """Classify `version`.

        A prerelease toolchain reads manifests declaring its own release core, so
        `6.0.0` is supported by a `6.0.0-dev` toolchain.
        """

        if version < self.minimum_supported:
            return Compatibility.TOO_OLD
        if version > self.current and version.core != self.current.core:
            return Compatibility.TOO_NEW
        return Compatibility.SUPPORTED

    def describe(self, version: ToolingVersion) -> str | None:
        """Human-readable warning for an unsupported version, ``None`` when supported."""

        status = self.check(version)
        if status is Compatibility.TOO_OLD:
            return f"tools version {version} is older than the minimum supported {self.minimum_supported}"
        if status is Compatibility.TOO_NEW:
            return f"tools version {version} is newer than the current toolchain {self.current}"
        return None


__all__ = ["Compatibility", "ToolchainCapabilities"]
