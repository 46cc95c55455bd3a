"""Find and decode the tools-version directive in raw manifest bytes.

Only the first line of a manifest is eligible, or the second line when the first
is a shebang or an editor encoding marker. A UTF-8 byte order mark at offset 0
is skipped. Directive-looking lines anywhere else are ordinary manifest content.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Sequence

from tools_version.directive.patterns import DEFAULT_PATTERNS, DirectivePattern
from tools_version.models.errors import DirectiveIssue, MalformedDirective, MalformedVersion
from tools_version.models.version import ToolingVersion, parse_version

UTF8_BOM = b"\xef\xbb\xbf"

_LINE_END = re.compile(rb"\r\n|\n|\r")
_LEADING_MARKER = re.compile(rb"#!|(?:#|//)[ \t]*-\*-.*-\*-")


@dataclass(frozen=True)
class DirectiveLocation:
    """Where a directive sits in the manifest and what it declares."""

    byte_range: tuple[int, int]
    raw_text: str
    version: ToolingVersion
    pattern: DirectivePattern
    prefix: bytes

    @property
    def start(self) -> int:
        return self.byte_range[0]

    @property
    def end(self) -> int:
        return self.byte_range[1]


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _eligible_lines(data: bytes) -> Iterator[tuple[int, bytes]]:
    start = len(UTF8_BOM) if data.startswith(UTF8_BOM) else 0
    for index in range(2):
        match = _LINE_END.search(data, start)
        end = match.start() if match else len(data)
        line = data[start:end]
        yield start, line
        if index or match is None or not _LEADING_MARKER.match(line):
            return
        start = match.end()


def _decode_line(offset: int, line: bytes, pattern: DirectivePattern) -> DirectiveLocation | None:
    match = pattern.claim(line)
    if match is None:
        return None

    if match.group("sep") is None:
        raise MalformedDirective(_decode(line), DirectiveIssue.MISSING_SEPARATOR)

    payload = _decode(match.group("version"))
    try:
        version = parse_version(payload)
    except MalformedVersion as exc:
        raise MalformedDirective(_decode(line), exc) from exc

    return DirectiveLocation(
        byte_range=(offset + match.start(), offset + match.end()),
        raw_text=_decode(match.group(0)),
        version=version,
        pattern=pattern,
        prefix=match.group("head") + match.group("sep"),
    )


def locate(
    manifest: bytes,
    patterns: Sequence[DirectivePattern] = DEFAULT_PATTERNS,
) -> DirectiveLocation | None:
    """Return the directive location, or ``None`` when the manifest has none.

    Raises :class:`MalformedDirective` when an eligible line carries the directive
    keyword but no usable version.
    """

    for offset, line in _eligible_lines(manifest):
        for pattern in patterns:
            location = _decode_line(offset, line, pattern)
            if location is not None:
                return location
    return None


__all__ = ["DirectiveLocation", "UTF8_BOM", "locate"]
