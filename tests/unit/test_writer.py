from __future__ import annotations

import pytest

from tools_version.directive.locator import UTF8_BOM, locate
from tools_version.directive.patterns import DirectivePattern
from tools_version.directive.writer import detect_line_ending, rewrite
from tools_version.models.errors import MalformedDirective
from tools_version.models.version import parse_version

CONTENTS = b"let package = Package(\n    name: \"demo\"\n)\n"


def test_replacement_preserves_surroundings() -> None:
    manifest = b"// tools-version:5.6\n" + CONTENTS

    updated = rewrite(manifest, parse_version("5.9.2"))

    assert updated == b"// tools-version:5.9.2\n" + CONTENTS


def test_replacement_keeps_found_syntax_and_trailing_text() -> None:
    manifest = b"//  Tools-Version : 5.6 // pinned\r\nbody\r\n"

    updated = rewrite(manifest, parse_version("6.0.0-beta.1+nightly"))

    assert updated == b"//  Tools-Version : 6.0.0-beta.1+nightly // pinned\r\nbody\r\n"


def test_replacement_after_leading_marker_and_bom() -> None:
    manifest = UTF8_BOM + b"#!/usr/bin/env toolchain\n# tools-version:4.2\nbody"

    updated = rewrite(manifest, parse_version("5.0"))

    assert updated == UTF8_BOM + b"#!/usr/bin/env toolchain\n# tools-version:5.0.0\nbody"


def test_insertion_on_absence() -> None:
    updated = rewrite(CONTENTS, parse_version("5.9"))

    first_line, _, rest = updated.partition(b"\n")
    assert first_line == b"// tools-version:5.9.0"
    assert rest == CONTENTS


def test_insertion_uses_existing_line_ending() -> None:
    manifest = b"let a = 1\r\nlet b = 2\r\n"

    updated = rewrite(manifest, parse_version("5.9"))

    assert updated == b"// tools-version:5.9.0\r\n" + manifest


def test_insertion_into_empty_file() -> None:
    assert rewrite(b"", parse_version("5.9")) == b"// tools-version:5.9.0\n"


def test_insertion_into_single_line_without_newline() -> None:
    assert rewrite(b"let a = 1", parse_version("5")) == b"// tools-version:5.0.0\nlet a = 1"


def test_insertion_goes_after_byte_order_mark() -> None:
    manifest = UTF8_BOM + b"let a = 1\n"

    updated = rewrite(manifest, parse_version("5.9"))

    assert updated == UTF8_BOM + b"// tools-version:5.9.0\nlet a = 1\n"


def test_insertion_precedes_shebang_and_keeps_original_bytes() -> None:
    manifest = b"#!/usr/bin/env toolchain\r\nlet a = 1\r\n"

    updated = rewrite(manifest, parse_version("5.9"))

    assert updated == b"// tools-version:5.9.0\r\n" + manifest
    assert rewrite(updated, parse_version("5.9")) == updated


def test_insertion_ignores_directives_deeper_in_the_file() -> None:
    manifest = b"let a = 1\n// tools-version:4.0\n"

    updated = rewrite(manifest, parse_version("5.9"))

    assert updated == b"// tools-version:5.9.0\n" + manifest


def test_insertion_uses_first_pattern_as_template() -> None:
    patterns = (DirectivePattern(name="hash", comment_marker="#", keyword="tools-version", spacing=""),)

    assert rewrite(b"body\n", parse_version("1.2.3"), patterns) == b"#tools-version:1.2.3\nbody\n"


def test_malformed_directive_propagates() -> None:
    manifest = b"// tools-version:abc\nbody"

    with pytest.raises(MalformedDirective):
        rewrite(manifest, parse_version("5.9"))


@pytest.mark.parametrize(
    "manifest",
    [
        b"",
        CONTENTS,
        b"// tools-version:5.6\n" + CONTENTS,
        b"#!/usr/bin/env toolchain\r\nbody",
        UTF8_BOM + b"x",
        b"\r",
        b"// tools-version:5.6 trailing",
    ],
)
@pytest.mark.parametrize("version_text", ["5.9.2", "1.0.0-alpha+exp.sha.5114f85"])
def test_rewrite_is_idempotent(manifest: bytes, version_text: str) -> None:
    version = parse_version(version_text)

    once = rewrite(manifest, version)

    assert rewrite(once, version) == once
    location = locate(once)
    assert location is not None
    assert str(location.version) == version_text


@pytest.mark.parametrize(
    ("manifest", "expected"),
    [
        (b"", b"\n"),
        (b"no newline", b"\n"),
        (b"a\r\nb\n", b"\r\n"),
        (b"a\nb\r\n", b"\n"),
        (b"a\rb", b"\r"),
    ],
)
def test_detect_line_ending(manifest: bytes, expected: bytes) -> None:
    assert detect_line_ending(manifest) == expected


def test_rewrite_requires_patterns() -> None:
    with pytest.raises(ValueError):
        rewrite(b"", parse_version("1"), ())
