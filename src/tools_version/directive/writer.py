"""Re-encode the tools-version directive into manifest bytes."""

from __future__ import annotations

import re
from typing import Sequence

from tools_version.directive.locator import UTF8_BOM, locate
from tools_version.directive.patterns import DEFAULT_PATTERNS, DirectivePattern
from tools_version.models.version import ToolingVersion, format_version

DEFAULT_LINE_ENDING = b"\n"

_LINE_END = re.compile(rb"\r\n|\n|\r")


def detect_line_ending(manifest: bytes) -> bytes:
    """First line ending used in ``manifest``; ``\\n`` when there is none."""
    match = _LINE_END.search(manifest)
    return match.group(0) if match else DEFAULT_LINE_ENDING


def rewrite(
    manifest: bytes,
    version: ToolingVersion,
    patterns: Sequence[DirectivePattern] = DEFAULT_PATTERNS,
) -> bytes:
    """Return ``manifest`` with its directive set to ``version``.

    An existing directive keeps its comment marker, keyword spelling and
    separator spacing; only the version token changes. Without a directive, the
    canonical one is inserted as the first line. A malformed directive raises
    :class:`~tools_version.models.errors.MalformedDirective`.
    """

    if not patterns:
        raise ValueError("at least one directive pattern is required")

    location = locate(manifest, patterns)
    if location is not None:
        start, end = location.byte_range
        replacement = location.prefix + format_version(version).encode("ascii")
        return manifest[:start] + replacement + manifest[end:]

    offset = len(UTF8_BOM) if manifest.startswith(UTF8_BOM) else 0
    line = patterns[0].render(version) + detect_line_ending(manifest)
    return manifest[:offset] + line + manifest[offset:]


__all__ = ["DEFAULT_LINE_ENDING", "detect_line_ending", "rewrite"]
