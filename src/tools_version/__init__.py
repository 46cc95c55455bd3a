"""Public API for :mod:`tools_version`."""

from importlib import metadata
from pathlib import Path
from typing import TYPE_CHECKING
import tomllib

if TYPE_CHECKING:
    from tools_version.application.service import ToolsVersionService
    from tools_version.directive.locator import DirectiveLocation
    from tools_version.infrastructure.settings import Settings
    from tools_version.models.version import ToolingVersion


def _pyproject_version() -> str | None:
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    try:
        parsed = tomllib.loads(pyproject.read_text(encoding="utf-8"))
        version = parsed.get("project", {}).get("version")
        if isinstance(version, str) and version:
            return version
    except (FileNotFoundError, OSError, tomllib.TOMLDecodeError):
        return None
    return None


def _resolve_version() -> str:
    # Prefer the local pyproject when running from a source checkout/editable install.
    version = _pyproject_version()
    if version is not None:
        return version

    try:
        return metadata.version("tools-version")
    except metadata.PackageNotFoundError:  # pragma: no cover
        return "unknown"


__version__ = _resolve_version()

_EXPORTS = {
    "DirectiveLocation": ("tools_version.directive.locator", "DirectiveLocation"),
    "Settings": ("tools_version.infrastructure.settings", "Settings"),
    "ToolingVersion": ("tools_version.models.version", "ToolingVersion"),
    "ToolsVersionService": ("tools_version.application.service", "ToolsVersionService"),
    "locate": ("tools_version.directive.locator", "locate"),
    "parse_version": ("tools_version.models.version", "parse_version"),
    "rewrite": ("tools_version.directive.writer", "rewrite"),
}


def __getattr__(name: str):
    target = _EXPORTS.get(name)
    if target is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module_name, attr_name = target
    module = __import__(module_name, fromlist=[attr_name])
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_EXPORTS.keys()))


__all__ = [
    "DirectiveLocation",
    "Settings",
    "ToolingVersion",
    "ToolsVersionService",
    "locate",
    "parse_version",
    "rewrite",
    "__version__",
]
