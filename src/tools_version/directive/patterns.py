"""Recognized directive spellings.

Each :class:`DirectivePattern` describes one historical way of writing the
directive line. The locator tries them in table order; the first entry doubles
as the canonical template for newly inserted directives.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from tools_version.models.version import ToolingVersion, format_version


@dataclass(frozen=True)
class DirectivePattern:
    """One ``<comment-marker><keyword>:<version>`` spelling."""

    name: str
    comment_marker: str
    keyword: str
    spacing: str = " "
    _claim: re.Pattern[bytes] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.comment_marker or not self.keyword:
            raise ValueError("comment_marker and keyword must be non-empty")
        if not self.comment_marker.isascii() or not self.keyword.isascii():
            raise ValueError("directive markers must be ASCII")
        marker = re.escape(self.comment_marker.encode("ascii"))
        keyword = re.escape(self.keyword.encode("ascii"))
        # Keyword spelling is matched case-insensitively and preserved on rewrite.
        claim = re.compile(
            rb"(?P<head>" + marker + rb"[ \t]*(?i:" + keyword + rb"))"
            rb"(?P<sep>[ \t]*:[ \t]*)?"
            rb"(?P<version>[^ \t\r\n]*)"
        )
        object.__setattr__(self, "_claim", claim)

    def claim(self, line: bytes) -> re.Match[bytes] | None:
        """Match ``line`` when it starts with this pattern's marker and keyword."""
        return self._claim.match(line)

    def render(self, version: ToolingVersion) -> bytes:
        """Canonical directive line (no line ending) for ``version``."""
        text = f"{self.comment_marker}{self.spacing}{self.keyword}:{format_version(version)}"
        return text.encode("ascii")


DEFAULT_PATTERNS: tuple[DirectivePattern, ...] = (
    DirectivePattern(name="canonical", comment_marker="//", keyword="tools-version"),
    DirectivePattern(name="hash-comment", comment_marker="#", keyword="tools-version"),
    DirectivePattern(name="legacy-underscore", comment_marker="//", keyword="tools_version"),
)


__all__ = ["DEFAULT_PATTERNS", "DirectivePattern"]
