from __future__ import annotations

from pathlib import Path

MANIFEST_NAME = "Package.manifest"

SAMPLE_BODY = (
    b"let package = Package(\n"
    b"    name: \"demo\",\n"
    b"    targets: [.target(name: \"demo\")]\n"
    b")\n"
)


def write_package(root: Path, content: bytes, *, name: str = MANIFEST_NAME) -> Path:
    """Create a package root under ``root`` holding one manifest."""

    root.mkdir(parents=True, exist_ok=True)
    manifest = root / name
    manifest.write_bytes(content)
    return manifest
