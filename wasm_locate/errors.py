"""wasm_locate.errors

Closed error taxonomy for artifact-location resolution.

Each failure mode is its own exception type carrying exactly the data a caller
needs to render a precise diagnostic. Callers can catch :class:`CrateError` to
handle all of them, or a specific subclass to react to one condition (e.g.
trigger a build on :class:`OutputNotFound`).
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

__all__ = [
    "CrateError",
    "InvalidManifestPath",
    "MetadataQueryFailed",
    "RootPackageNotFound",
    "LibNameNotFound",
    "OutputNotFound",
]


class CrateError(Exception):
    """Base class for every resolution failure."""


class InvalidManifestPath(CrateError):
    """The manifest does not exist or its directory cannot be determined."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"invalid manifest path: {self.path}")


class MetadataQueryFailed(CrateError):
    """``cargo metadata`` could not run, failed, or returned an unexpected shape."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"unable to query package metadata: {detail}")


class RootPackageNotFound(CrateError):
    """The build graph records no resolution root, or the root id matches no package."""

    def __init__(self, manifest_path: Optional[Path] = None) -> None:
        self.manifest_path = Path(manifest_path) if manifest_path is not None else None
        msg = "root package not found in cargo metadata"
        if self.manifest_path is not None:
            msg += f" (manifest: {self.manifest_path})"
        super().__init__(msg)


class LibNameNotFound(CrateError):
    """The root package declares no ``cdylib`` target."""

    def __init__(self, package_name: str) -> None:
        self.package_name = package_name
        super().__init__(f"package '{package_name}' has no cdylib target")


class OutputNotFound(CrateError):
    """The compiled wasm artifact is missing at the computed path."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"wasm output not found: {self.path}")
