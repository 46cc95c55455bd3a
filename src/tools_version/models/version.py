"""Tooling version values.

``ToolingVersion`` is the semantic version carried by a manifest directive:
``major.minor.patch[-prerelease][+build]``. Textual input may omit ``minor`` and
``patch`` (``"5.7"`` parses as ``5.7.0``); formatting always emits all three.

Ordering follows semantic versioning precedence. Build metadata is kept for
formatting but ignored by ordering and equality, so ``==`` always agrees with
``<`` and ``>``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Iterable

from tools_version.models.errors import MalformedVersion, MalformedVersionReason

_NUMERIC = re.compile(r"[0-9]+")
_IDENTIFIER = re.compile(r"[0-9A-Za-z-]+")


class Ordering(int, Enum):
    """Result of comparing two versions."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


def _parse_numeric(text: str, part: str, *, context: str) -> int:
    if not _NUMERIC.fullmatch(part):
        raise MalformedVersion(text, MalformedVersionReason.NON_NUMERIC_COMPONENT, part or context)
    if len(part) > 1 and part.startswith("0"):
        raise MalformedVersion(text, MalformedVersionReason.LEADING_ZERO, part)
    return int(part)


def _has_leading_zero(ident: str) -> bool:
    return _NUMERIC.fullmatch(ident) is not None and len(ident) > 1 and ident.startswith("0")


def _parse_identifiers(text: str, section: str, *, numeric_leading_zeros: bool) -> tuple[str, ...]:
    identifiers = tuple(section.split("."))
    for ident in identifiers:
        if not _IDENTIFIER.fullmatch(ident):
            raise MalformedVersion(text, MalformedVersionReason.INVALID_IDENTIFIER_CHARACTER, ident or section)
        if not numeric_leading_zeros and _has_leading_zero(ident):
            raise MalformedVersion(text, MalformedVersionReason.LEADING_ZERO, ident)
    return identifiers


def _validate_identifiers(values: Iterable[str], *, field: str, numeric_leading_zeros: bool) -> tuple[str, ...]:
    if isinstance(values, (str, bytes)):
        raise TypeError(f"{field} must be a sequence of identifiers, got {type(values).__name__}")
    identifiers = tuple(values)
    for ident in identifiers:
        if not isinstance(ident, str):
            raise TypeError(f"{field} identifiers must be str, got {type(ident).__name__}")
        if not _IDENTIFIER.fullmatch(ident):
            raise ValueError(f"invalid {field} identifier: {ident!r}")
        if not numeric_leading_zeros and _has_leading_zero(ident):
            raise ValueError(f"numeric {field} identifier has a leading zero: {ident!r}")
    return identifiers


def _compare_identifier(a: str, b: str) -> int:
    a_numeric = _NUMERIC.fullmatch(a) is not None
    b_numeric = _NUMERIC.fullmatch(b) is not None
    if a_numeric and b_numeric:
        left, right = int(a), int(b)
    elif a_numeric:
        return -1
    elif b_numeric:
        return 1
    else:
        left, right = a, b  # type: ignore[assignment]
    if left == right:
        return 0
    return -1 if left < right else 1


@total_ordering
@dataclass(frozen=True, eq=False)
class ToolingVersion:
    """Immutable ``major.minor.patch[-prerelease][+build]`` value."""

    major: int
    minor: int = 0
    patch: int = 0
    prerelease: tuple[str, ...] = ()
    build_metadata: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an int, got {type(value).__name__}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        prerelease = _validate_identifiers(self.prerelease, field="prerelease", numeric_leading_zeros=False)
        build = _validate_identifiers(self.build_metadata, field="build metadata", numeric_leading_zeros=True)
        object.__setattr__(self, "prerelease", prerelease)
        object.__setattr__(self, "build_metadata", build)

    @classmethod
    def parse(cls, text: str) -> "ToolingVersion":
        return parse_version(text)

    @property
    def core(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    @property
    def zeroed_patch(self) -> "ToolingVersion":
        """This version with ``patch`` forced to 0 and no prerelease/build."""
        return ToolingVersion(self.major, self.minor, 0)

    def compare(self, other: "ToolingVersion") -> Ordering:
        return compare_versions(self, other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ToolingVersion):
            return NotImplemented
        return compare_versions(self, other) is Ordering.EQUAL

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ToolingVersion):
            return NotImplemented
        return compare_versions(self, other) is Ordering.LESS

    def __hash__(self) -> int:
        return hash((self.major, self.minor, self.patch, self.prerelease))

    def __str__(self) -> str:
        return format_version(self)


def parse_version(text: str) -> ToolingVersion:
    """Parse ``text`` into a :class:`ToolingVersion`.

    Raises :class:`MalformedVersion` naming the offending substring.
    """

    if not text:
        raise MalformedVersion(text, MalformedVersionReason.EMPTY, "")

    rest, has_build, build_text = text.partition("+")
    core, has_prerelease, prerelease_text = rest.partition("-")

    parts = core.split(".")
    if len(parts) > 3:
        raise MalformedVersion(text, MalformedVersionReason.NON_NUMERIC_COMPONENT, core)
    numbers = [_parse_numeric(text, part, context=core) for part in parts]
    numbers.extend([0] * (3 - len(numbers)))

    prerelease: tuple[str, ...] = ()
    if has_prerelease:
        prerelease = _parse_identifiers(text, prerelease_text, numeric_leading_zeros=False)

    build: tuple[str, ...] = ()
    if has_build:
        build = _parse_identifiers(text, build_text, numeric_leading_zeros=True)

    return ToolingVersion(numbers[0], numbers[1], numbers[2], prerelease, build)


def compare_versions(a: ToolingVersion, b: ToolingVersion) -> Ordering:
    """Total order by semantic version precedence (build metadata ignored)."""

    if a.core != b.core:
        return Ordering.LESS if a.core < b.core else Ordering.GREATER

    # A release outranks any prerelease of the same core.
    if not a.prerelease or not b.prerelease:
        if a.prerelease == b.prerelease:
            return Ordering.EQUAL
        return Ordering.GREATER if not a.prerelease else Ordering.LESS

    for left, right in zip(a.prerelease, b.prerelease):
        result = _compare_identifier(left, right)
        if result:
            return Ordering(result)

    if len(a.prerelease) == len(b.prerelease):
        return Ordering.EQUAL
    return Ordering.LESS if len(a.prerelease) < len(b.prerelease) else Ordering.GREATER


def format_version(version: ToolingVersion) -> str:
    """Canonical ``major.minor.patch[-prerelease][+build]`` rendering."""

    text = f"{version.major}.{version.minor}.{version.patch}"
    if version.prerelease:
        text += "-" + ".".join(version.prerelease)
    if version.build_metadata:
        text += "+" + ".".join(version.build_metadata)
    return text


__all__ = [
    "Ordering",
    "ToolingVersion",
    "compare_versions",
    "format_version",
    "parse_version",
]
