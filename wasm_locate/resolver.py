"""wasm_locate.resolver

Pick the package being built and its loadable-module target out of the
build graph. Pure lookups; no IO.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import LibNameNotFound, RootPackageNotFound
from .identifiers import normalize_crate_name
from .models import CompilationTarget, Package, WorkspaceMetadata

__all__ = [
    "CDYLIB_KIND",
    "ResolvedTarget",
    "find_cdylib_target",
    "find_root_package",
    "resolve_target",
]


# Target kind cargo reports for `crate-type = ["cdylib"]`.
CDYLIB_KIND = "cdylib"


@dataclass(frozen=True)
class ResolvedTarget:
    package: Package
    lib_target: CompilationTarget

    @property
    def package_name(self) -> str:
        return normalize_crate_name(self.package.name)

    @property
    def lib_name(self) -> str:
        return normalize_crate_name(self.lib_target.name)


def find_root_package(metadata: WorkspaceMetadata) -> Optional[Package]:
    if metadata.resolved_root_id is None:
        return None
    return metadata.package_by_id(metadata.resolved_root_id)


def find_cdylib_target(package: Package) -> Optional[CompilationTarget]:
    """First target declaring the cdylib kind, in declaration order."""
    for target in package.targets:
        if target.has_kind(CDYLIB_KIND):
            return target
    return None


def resolve_target(
    metadata: WorkspaceMetadata, *, manifest_path: Optional[Path] = None
) -> ResolvedTarget:
    package = find_root_package(metadata)
    if package is None:
        raise RootPackageNotFound(manifest_path)

    lib_target = find_cdylib_target(package)
    if lib_target is None:
        raise LibNameNotFound(package.name)

    return ResolvedTarget(package=package, lib_target=lib_target)
