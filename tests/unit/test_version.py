from __future__ import annotations

import itertools

import pytest

from tools_version.models.errors import MalformedVersion, MalformedVersionReason
from tools_version.models.version import (
    Ordering,
    ToolingVersion,
    compare_versions,
    format_version,
    parse_version,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("5", ToolingVersion(5, 0, 0)),
        ("5.7", ToolingVersion(5, 7, 0)),
        ("5.7.1", ToolingVersion(5, 7, 1)),
        ("0.0.0", ToolingVersion(0, 0, 0)),
        ("1.0.0-alpha.1", ToolingVersion(1, 0, 0, ("alpha", "1"))),
        ("1.0.0-rc-1", ToolingVersion(1, 0, 0, ("rc-1",))),
        ("1.0-beta", ToolingVersion(1, 0, 0, ("beta",))),
    ],
)
def test_parse_accepts_grammar(text: str, expected: ToolingVersion) -> None:
    assert parse_version(text) == expected


def test_parse_keeps_identifiers_verbatim() -> None:
    version = parse_version("5.9.0-Beta.2+Build.007")

    assert version.prerelease == ("Beta", "2")
    assert version.build_metadata == ("Build", "007")


@pytest.mark.parametrize(
    ("text", "reason", "offending"),
    [
        ("", MalformedVersionReason.EMPTY, ""),
        ("5..1", MalformedVersionReason.NON_NUMERIC_COMPONENT, "5..1"),
        ("v5.0", MalformedVersionReason.NON_NUMERIC_COMPONENT, "v5"),
        ("5.x", MalformedVersionReason.NON_NUMERIC_COMPONENT, "x"),
        ("1.2.3.4", MalformedVersionReason.NON_NUMERIC_COMPONENT, "1.2.3.4"),
        (" 5.7", MalformedVersionReason.NON_NUMERIC_COMPONENT, " 5"),
        ("05.7", MalformedVersionReason.LEADING_ZERO, "05"),
        ("5.07.1", MalformedVersionReason.LEADING_ZERO, "07"),
        ("1.0.0-01", MalformedVersionReason.LEADING_ZERO, "01"),
        ("1.0.0-alpha_1", MalformedVersionReason.INVALID_IDENTIFIER_CHARACTER, "alpha_1"),
        ("1.0.0-", MalformedVersionReason.INVALID_IDENTIFIER_CHARACTER, ""),
        ("1.0.0+", MalformedVersionReason.INVALID_IDENTIFIER_CHARACTER, ""),
        ("1.0.0-a..b", MalformedVersionReason.INVALID_IDENTIFIER_CHARACTER, "a..b"),
    ],
)
def test_parse_rejects_malformed(text: str, reason: MalformedVersionReason, offending: str) -> None:
    with pytest.raises(MalformedVersion) as excinfo:
        parse_version(text)

    assert excinfo.value.reason is reason
    assert excinfo.value.text == text
    assert excinfo.value.offending == offending


def test_leading_zeros_allowed_in_build_metadata() -> None:
    assert parse_version("1.0.0+001").build_metadata == ("001",)


def test_format_is_canonical() -> None:
    assert format_version(parse_version("5.7")) == "5.7.0"
    assert str(parse_version("1.2.3-rc.1+sha.abc")) == "1.2.3-rc.1+sha.abc"


@pytest.mark.parametrize(
    "version",
    [
        ToolingVersion(0),
        ToolingVersion(5, 7, 1),
        ToolingVersion(1, 0, 0, ("alpha", "10")),
        ToolingVersion(2, 1, 0, (), ("exp", "sha", "5114f85")),
        ToolingVersion(3, 0, 1, ("rc-1",), ("build",)),
    ],
)
def test_round_trip_from_canonical_side(version: ToolingVersion) -> None:
    parsed = parse_version(format_version(version))

    assert parsed == version
    assert parsed.build_metadata == version.build_metadata


def test_prerelease_sorts_before_release() -> None:
    assert parse_version("1.0.0-alpha") < parse_version("1.0.0")
    assert compare_versions(parse_version("1.0.0"), parse_version("1.0.0-alpha")) is Ordering.GREATER


def test_semver_precedence_chain() -> None:
    chain = [
        "1.0.0-alpha",
        "1.0.0-alpha.1",
        "1.0.0-alpha.beta",
        "1.0.0-beta",
        "1.0.0-beta.2",
        "1.0.0-beta.11",
        "1.0.0-rc.1",
        "1.0.0",
        "1.0.1",
        "1.1.0",
        "2.0.0",
    ]
    versions = [parse_version(text) for text in chain]

    assert sorted(reversed(versions)) == versions
    for lower, higher in zip(versions, versions[1:]):
        assert lower < higher
        assert compare_versions(lower, higher) is Ordering.LESS


def test_ordering_is_total_and_transitive() -> None:
    samples = [parse_version(text) for text in ["1.0.0-1", "1.0.0-a", "1.0.0", "1.0.0+x", "0.9.9", "1.0.0-a.1"]]

    for a, b in itertools.product(samples, repeat=2):
        outcomes = [a < b, a == b, a > b]
        assert outcomes.count(True) == 1

    for a, b, c in itertools.product(samples, repeat=3):
        if a < b and b < c:
            assert a < c


def test_build_metadata_ignored_by_equality_and_hash() -> None:
    plain = parse_version("1.2.3")
    tagged = parse_version("1.2.3+build.5")

    assert plain == tagged
    assert compare_versions(plain, tagged) is Ordering.EQUAL
    assert hash(plain) == hash(tagged)
    assert len({plain, tagged}) == 1


def test_zeroed_patch() -> None:
    assert parse_version("5.7.3").zeroed_patch == parse_version("5.7.0")

    zeroed = parse_version("5.9.2-beta+abc").zeroed_patch
    assert zeroed.prerelease == ()
    assert zeroed.build_metadata == ()
    assert format_version(zeroed) == "5.9.0"


def test_version_is_immutable() -> None:
    version = ToolingVersion(5, 7, 0)

    with pytest.raises(AttributeError):
        version.major = 6  # type: ignore[misc]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"major": -1},
        {"major": 1, "minor": -2},
        {"major": 1, "prerelease": ("ok", "bad id")},
        {"major": 1, "build_metadata": ("",)},
        {"major": 1, "prerelease": ("01",)},
        {"major": 1, "prerelease": ("alpha", "007")},
    ],
)
def test_direct_construction_validates(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        ToolingVersion(**kwargs)


def test_direct_construction_rejects_non_int() -> None:
    with pytest.raises(TypeError):
        ToolingVersion("5")  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"major": 1, "prerelease": "alpha"},
        {"major": 1, "build_metadata": "exp"},
        {"major": 1, "prerelease": (1,)},
    ],
)
def test_direct_construction_rejects_bare_strings_and_non_str_identifiers(kwargs: dict) -> None:
    with pytest.raises(TypeError):
        ToolingVersion(**kwargs)


def test_direct_construction_allows_leading_zeros_in_build_metadata() -> None:
    version = ToolingVersion(1, 0, 0, ("1",), ("001",))

    assert parse_version(format_version(version)) == version
    assert version.build_metadata == ("001",)


def test_equal_constructed_versions_hash_alike() -> None:
    left = ToolingVersion(1, 0, 0, ("alpha", "1"), ("a",))
    right = ToolingVersion(1, 0, 0, ("alpha", "1"), ("b",))

    assert left == right
    assert hash(left) == hash(right)
