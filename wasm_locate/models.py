"""wasm_locate.models

Lightweight data structures used across artifact-location resolution.

These dataclasses provide a small, explicit vocabulary for:
- what is being built (BuildRequest)
- what cargo reported about the workspace (WorkspaceMetadata, Package,
  CompilationTarget)
- where the wasm artifacts live (OutputInfo)

WorkspaceMetadata is built fresh for every resolution and never mutated;
OutputInfo is handed to the caller and owned by it afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Tuple


def profile_dir_name(release: bool) -> str:
    """Cargo profile directory for a release or debug build."""
    return "release" if release else "debug"


@dataclass(frozen=True)
class BuildRequest:
    """Identify what the orchestrator is building."""

    manifest_path: Path
    release: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "manifest_path", Path(self.manifest_path))

    @property
    def profile(self) -> str:
        return profile_dir_name(self.release)


@dataclass(frozen=True)
class CompilationTarget:
    """One build output declared by a package (lib, bin, cdylib, ...)."""

    name: str
    kind: FrozenSet[str] = field(default_factory=frozenset)

    def has_kind(self, kind: str) -> bool:
        return kind in self.kind


@dataclass(frozen=True)
class Package:
    id: str
    name: str
    targets: Tuple[CompilationTarget, ...] = ()


@dataclass(frozen=True)
class WorkspaceMetadata:
    """The subset of ``cargo metadata`` output that resolution needs.

    Notes
    -----
    - ``resolved_root_id`` is None when cargo ran without dependency
      resolution or the manifest is a virtual workspace manifest.
    - ``packages`` keeps cargo's order.
    """

    packages: Tuple[Package, ...]
    resolved_root_id: Optional[str]
    target_directory: Path
    workspace_root: Path

    def package_by_id(self, package_id: str) -> Optional[Package]:
        for package in self.packages:
            if package.id == package_id:
                return package
        return None


@dataclass(frozen=True)
class OutputInfo:
    """Locations of the compiled module and its derived siblings.

    All three paths share a parent directory and the library base name.
    Only ``output_wasm`` is known to exist; the other two are produced by
    later pipeline stages.
    """

    output_wasm: Path
    optimized_wasm: Path
    metadata_wasm: Path

    def to_dict(self) -> Dict[str, str]:
        return {
            "output_wasm": str(self.output_wasm),
            "optimized_wasm": str(self.optimized_wasm),
            "metadata_wasm": str(self.metadata_wasm),
        }

    def pending_artifacts(self) -> List[Path]:
        """Derived artifacts that have not been produced yet, in pipeline order."""
        return [p for p in (self.optimized_wasm, self.metadata_wasm) if not p.exists()]
