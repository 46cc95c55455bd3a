from tools_version.infrastructure.io.manifest_files import (
    read_manifest_bytes,
    resolve_manifest_path,
    version_specific_manifests,
    write_manifest_bytes,
)

__all__ = [
    "read_manifest_bytes",
    "resolve_manifest_path",
    "version_specific_manifests",
    "write_manifest_bytes",
]
