"""Manifest discovery and byte-level file access.

A package root holds a plain manifest (``Package.manifest`` by default) and may
also hold version-specific variants named ``<stem>@tools-<version><suffix>``,
e.g. ``Package@tools-5.9.manifest``. The newest variant the running toolchain
can read wins over the plain manifest.
"""

from __future__ import annotations

import os
import re
import stat
import tempfile
from pathlib import Path

from tools_version.models.errors import MalformedVersion, ManifestIOError, NoManifestFound
from tools_version.models.version import ToolingVersion, parse_version

VERSION_SPECIFIC_MARKER = "@tools-"


def _version_specific_pattern(manifest_name: str) -> re.Pattern[str]:
    name = Path(manifest_name)
    stem = name.name[: -len(name.suffix)] if name.suffix else name.name
    return re.compile(
        re.escape(stem) + re.escape(VERSION_SPECIFIC_MARKER) + r"(?P<version>.+)" + re.escape(name.suffix)
    )


def version_specific_manifests(package_root: Path, manifest_name: str) -> list[tuple[ToolingVersion, Path]]:
    """Version-specific manifests under ``package_root``, oldest first.

    Candidates whose version suffix does not parse are not manifests and are skipped.
    """

    pattern = _version_specific_pattern(manifest_name)
    found: list[tuple[ToolingVersion, Path]] = []
    for path in package_root.iterdir():
        match = pattern.fullmatch(path.name)
        if match is None or not path.is_file():
            continue
        try:
            version = parse_version(match.group("version"))
        except MalformedVersion:
            continue
        found.append((version, path))
    found.sort(key=lambda item: (item[0], item[1].name))
    return found


def resolve_manifest_path(
    package_root: Path,
    *,
    manifest_name: str,
    current_version: ToolingVersion,
) -> Path:
    """Pick the manifest the running toolchain should edit."""

    root = Path(package_root).expanduser().resolve()
    if not root.is_dir():
        raise NoManifestFound(root, manifest_name)

    compatible = [path for version, path in version_specific_manifests(root, manifest_name) if version <= current_version]
    if compatible:
        return compatible[-1]

    plain = root / manifest_name
    if plain.is_file():
        return plain
    raise NoManifestFound(root, manifest_name)


def read_manifest_bytes(path: Path) -> bytes:
    path = Path(path)
    try:
        return path.read_bytes()
    except FileNotFoundError as exc:
        raise NoManifestFound(path.parent, path.name) from exc
    except OSError as exc:
        raise ManifestIOError(path, f"unable to read manifest: {exc.strerror or exc}") from exc


def write_manifest_bytes(path: Path, data: bytes) -> None:
    """Replace ``path`` with ``data`` atomically, keeping its permission bits."""

    destination = Path(path)
    try:
        mode = stat.S_IMODE(destination.stat().st_mode)
    except FileNotFoundError:
        mode = None
    except OSError as exc:
        raise ManifestIOError(destination, f"unable to stat manifest: {exc.strerror or exc}") from exc

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            dir=destination.parent,
            prefix=f".{destination.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            temp_path = Path(tmp.name)
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        if mode is not None:
            os.chmod(temp_path, mode)
        os.replace(temp_path, destination)
    except OSError as exc:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise ManifestIOError(destination, f"unable to write manifest: {exc.strerror or exc}") from exc

    _fsync_dir(destination.parent)


def _fsync_dir(path: Path) -> None:
    try:
        fd = os.open(path, os.O_RDONLY)
    except FileNotFoundError:  # pragma: no cover
        return
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


__all__ = [
    "VERSION_SPECIFIC_MARKER",
    "read_manifest_bytes",
    "resolve_manifest_path",
    "version_specific_manifests",
    "write_manifest_bytes",
]
