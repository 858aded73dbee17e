"""wasm_locate.layout

Filesystem layout of cargo's wasm output.

Cargo places cross-compiled artifacts under::

    <target_directory>[/<package>]/wasm32-unknown-unknown/<profile>/<lib>.wasm

The ``<package>`` level only appears when the manifest belongs to a member
of a multi-package workspace (its directory is not the workspace root).
Derived artifacts written by later stages sit next to the compiled module:

    <lib>.opt.wasm   size-optimized module
    <lib>.meta.wasm  module with custom metadata sections attached
"""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import InvalidManifestPath, MetadataQueryFailed, OutputNotFound
from .models import OutputInfo, profile_dir_name

logger = logging.getLogger(__name__)

__all__ = [
    "WASM_TARGET_TRIPLE",
    "WASM_SUFFIX",
    "OPTIMIZED_SUFFIX",
    "METADATA_SUFFIX",
    "compose_output_info",
    "compose_target_dir",
    "is_workspace_member",
]


WASM_TARGET_TRIPLE = "wasm32-unknown-unknown"
WASM_SUFFIX = ".wasm"
OPTIMIZED_SUFFIX = ".opt.wasm"
METADATA_SUFFIX = ".meta.wasm"


def _canonical_manifest_dir(manifest_path: Path) -> Path:
    try:
        manifest = Path(manifest_path).resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise InvalidManifestPath(Path(manifest_path)) from exc
    parent = manifest.parent
    if parent == manifest:
        # Filesystem root; there is no containing directory.
        raise InvalidManifestPath(manifest)
    return parent


def _canonical_workspace_root(workspace_root: Path) -> Path:
    try:
        return Path(workspace_root).resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise MetadataQueryFailed(f"workspace root does not exist: {workspace_root}") from exc


def is_workspace_member(manifest_path: Path, workspace_root: Path) -> bool:
    """True when the manifest's directory is not the workspace root itself."""
    return _canonical_manifest_dir(manifest_path) != _canonical_workspace_root(workspace_root)


def compose_target_dir(
    target_directory: Path,
    *,
    package_name: str,
    nested: bool,
    release: bool,
) -> Path:
    target_dir = Path(target_directory)
    if nested:
        target_dir = target_dir / package_name
    return target_dir / WASM_TARGET_TRIPLE / profile_dir_name(release)


def compose_output_info(
    *,
    package_name: str,
    lib_name: str,
    target_directory: Path,
    workspace_root: Path,
    manifest_path: Path,
    release: bool,
) -> OutputInfo:
    """Compute artifact paths and require the compiled module to exist.

    ``package_name`` and ``lib_name`` must already be normalized.
    """
    nested = is_workspace_member(manifest_path, workspace_root)
    logger.debug(
        "manifest %s %s workspace root %s",
        manifest_path,
        "is a member below" if nested else "is at",
        workspace_root,
    )

    out_dir = compose_target_dir(
        target_directory, package_name=package_name, nested=nested, release=release
    )
    info = OutputInfo(
        output_wasm=out_dir / f"{lib_name}{WASM_SUFFIX}",
        optimized_wasm=out_dir / f"{lib_name}{OPTIMIZED_SUFFIX}",
        metadata_wasm=out_dir / f"{lib_name}{METADATA_SUFFIX}",
    )

    if not info.output_wasm.exists():
        raise OutputNotFound(info.output_wasm)

    return info
