"""wasm_locate.output_info

Entry point for artifact-location resolution.

Control flow::

    BuildRequest -> WorkspaceResolver (cargo metadata)
                 -> resolve_target   (root package + cdylib target)
                 -> compose_output_info (layout + existence check)
                 -> OutputInfo

Each call is independent: metadata is queried fresh and nothing is cached,
so concurrent calls for different manifests do not interact.
"""

from __future__ import annotations

import logging
from typing import Optional

from .errors import InvalidManifestPath
from .layout import compose_output_info
from .metadata import CargoMetadataResolver, WorkspaceResolver
from .models import BuildRequest, OutputInfo
from .resolver import resolve_target

logger = logging.getLogger(__name__)

__all__ = ["resolve_output_info"]


def resolve_output_info(
    request: BuildRequest,
    *,
    resolver: Optional[WorkspaceResolver] = None,
) -> OutputInfo:
    """Locate the compiled wasm module for ``request`` and its derived siblings.

    Raises
    ------
    InvalidManifestPath
        Checked before cargo is invoked.
    MetadataQueryFailed, RootPackageNotFound, LibNameNotFound, OutputNotFound
        See :mod:`wasm_locate.errors`.
    """
    manifest_path = request.manifest_path
    if not manifest_path.is_file():
        raise InvalidManifestPath(manifest_path)

    if resolver is None:
        resolver = CargoMetadataResolver()

    metadata = resolver.resolve_workspace(manifest_path)
    resolved = resolve_target(metadata, manifest_path=manifest_path)
    logger.info(
        "resolved package '%s' (lib '%s', %s)",
        resolved.package.name,
        resolved.lib_target.name,
        request.profile,
    )

    return compose_output_info(
        package_name=resolved.package_name,
        lib_name=resolved.lib_name,
        target_directory=metadata.target_directory,
        workspace_root=metadata.workspace_root,
        manifest_path=manifest_path,
        release=request.release,
    )
