"""Value types and errors for :mod:`tools_version`."""

from tools_version.models.capabilities import Compatibility, ToolchainCapabilities
from tools_version.models.errors import (
    ConflictingModes,
    DirectiveIssue,
    MalformedDirective,
    MalformedVersion,
    MalformedVersionReason,
    ManifestIOError,
    NoManifestFound,
    ToolsVersionError,
)
from tools_version.models.version import (
    Ordering,
    ToolingVersion,
    compare_versions,
    format_version,
    parse_version,
)

__all__ = [
    "Compatibility",
    "ConflictingModes",
    "DirectiveIssue",
    "MalformedDirective",
    "MalformedVersion",
    "MalformedVersionReason",
    "ManifestIOError",
    "NoManifestFound",
    "Ordering",
    "ToolchainCapabilities",
    "ToolingVersion",
    "ToolsVersionError",
    "compare_versions",
    "format_version",
    "parse_version",
]
