"""wasm_locate.metadata

Build-graph reader: turn ``cargo metadata`` output into :class:`WorkspaceMetadata`.

Two layers live here:

* :func:`parse_workspace_metadata` - a pure function from the decoded JSON
  document to our models. Any deviation from the expected shape is a hard
  failure (:class:`MetadataQueryFailed`).
* :class:`CargoMetadataResolver` - the real implementation of the
  :class:`WorkspaceResolver` protocol. It spawns one ``cargo metadata``
  process per call and blocks until it finishes.

Tests swap in their own ``WorkspaceResolver`` so no subprocess is spawned.
"""

from __future__ import annotations

import json
import logging
import os
import subprocess
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, runtime_checkable

from toolchain.core_cmd import run_cmd, which_or_raise

from .errors import MetadataQueryFailed
from .models import CompilationTarget, Package, WorkspaceMetadata

logger = logging.getLogger(__name__)

__all__ = [
    "CARGO_ENV_VAR",
    "METADATA_FORMAT_VERSION",
    "CargoMetadataResolver",
    "WorkspaceResolver",
    "parse_workspace_metadata",
]


CARGO_ENV_VAR = "CARGO"
METADATA_FORMAT_VERSION = "1"

# Flags accepted on top of the base query. ``--no-deps`` is deliberately
# absent: it drops the ``resolve`` section we need to find the root package.
ALLOWED_EXTRA_ARGS = frozenset({"--offline", "--locked", "--frozen"})


@runtime_checkable
class WorkspaceResolver(Protocol):
    """Anything that can describe the workspace a manifest belongs to."""

    def resolve_workspace(self, manifest_path: Path) -> WorkspaceMetadata:
        """Return fresh metadata for ``manifest_path`` or raise :class:`MetadataQueryFailed`."""
        ...


def _require(mapping: Mapping[str, Any], key: str, where: str) -> Any:
    if not isinstance(mapping, Mapping) or key not in mapping:
        raise MetadataQueryFailed(f"missing '{key}' in {where}")
    return mapping[key]


def _parse_target(raw: Mapping[str, Any], where: str) -> CompilationTarget:
    name = _require(raw, "name", where)
    kind = _require(raw, "kind", where)
    if not isinstance(name, str) or not isinstance(kind, list):
        raise MetadataQueryFailed(f"malformed target in {where}")
    return CompilationTarget(name=name, kind=frozenset(str(k) for k in kind))


def _parse_package(raw: Mapping[str, Any], index: int) -> Package:
    where = f"packages[{index}]"
    pkg_id = _require(raw, "id", where)
    name = _require(raw, "name", where)
    targets = _require(raw, "targets", where)
    if not isinstance(pkg_id, str) or not isinstance(name, str) or not isinstance(targets, list):
        raise MetadataQueryFailed(f"malformed package in {where}")
    return Package(
        id=pkg_id,
        name=name,
        targets=tuple(_parse_target(t, f"{where}.targets[{i}]") for i, t in enumerate(targets)),
    )


def _parse_root_id(doc: Mapping[str, Any]) -> Optional[str]:
    resolve = doc.get("resolve")
    if resolve is None:
        return None
    if not isinstance(resolve, Mapping):
        raise MetadataQueryFailed("malformed 'resolve' section")
    root = resolve.get("root")
    if root is None:
        return None
    if not isinstance(root, str):
        raise MetadataQueryFailed("malformed 'resolve.root'")
    return root


def parse_workspace_metadata(doc: Mapping[str, Any]) -> WorkspaceMetadata:
    """Build :class:`WorkspaceMetadata` from a decoded ``cargo metadata`` document."""
    if not isinstance(doc, Mapping):
        raise MetadataQueryFailed("expected a JSON object at top level")

    packages = _require(doc, "packages", "metadata")
    if not isinstance(packages, list):
        raise MetadataQueryFailed("'packages' is not a list")
    target_directory = _require(doc, "target_directory", "metadata")
    workspace_root = _require(doc, "workspace_root", "metadata")
    if not isinstance(target_directory, str) or not isinstance(workspace_root, str):
        raise MetadataQueryFailed("'target_directory' and 'workspace_root' must be strings")

    return WorkspaceMetadata(
        packages=tuple(_parse_package(p, i) for i, p in enumerate(packages)),
        resolved_root_id=_parse_root_id(doc),
        target_directory=Path(target_directory),
        workspace_root=Path(workspace_root),
    )


class CargoMetadataResolver:
    """Query ``cargo metadata`` in a subprocess.

    Parameters
    ----------
    cargo:
        Executable name or path. Defaults to ``$CARGO`` and then ``cargo``.
    extra_args:
        Additional flags such as ``--offline`` or ``--locked``.
    timeout_seconds:
        0 means wait for cargo indefinitely. Callers that need a bound pass
        one here; expiry is reported as :class:`MetadataQueryFailed`.
    """

    def __init__(
        self,
        *,
        cargo: Optional[str] = None,
        extra_args: Sequence[str] = (),
        timeout_seconds: float = 0,
        env: Optional[Dict[str, str]] = None,
    ) -> None:
        unknown = [a for a in extra_args if a not in ALLOWED_EXTRA_ARGS]
        if unknown:
            raise ValueError(f"unsupported cargo metadata flags: {unknown}")
        self.cargo = cargo or os.environ.get(CARGO_ENV_VAR) or "cargo"
        self.extra_args = list(extra_args)
        self.timeout_seconds = timeout_seconds
        self.env = env

    def build_command(self, cargo_bin: str, manifest_path: Path) -> List[str]:
        return [
            cargo_bin,
            "metadata",
            "--format-version",
            METADATA_FORMAT_VERSION,
            "--manifest-path",
            str(manifest_path),
            *self.extra_args,
        ]

    def resolve_workspace(self, manifest_path: Path) -> WorkspaceMetadata:
        try:
            cargo_bin = which_or_raise(self.cargo)
        except FileNotFoundError as exc:
            raise MetadataQueryFailed(f"cargo executable '{self.cargo}' not found") from exc

        cmd = self.build_command(cargo_bin, Path(manifest_path))
        try:
            res = run_cmd(cmd, timeout_seconds=self.timeout_seconds, env=self.env)
        except subprocess.TimeoutExpired as exc:
            raise MetadataQueryFailed(
                f"`cargo metadata` timed out after {self.timeout_seconds}s"
            ) from exc
        except OSError as exc:
            raise MetadataQueryFailed(f"failed to spawn `{cmd[0]}`: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise MetadataQueryFailed(f"`cargo metadata` produced non-UTF-8 output: {exc}") from exc

        if not res.ok:
            detail = f"`cargo metadata` exited with code {res.exit_code}"
            tail = res.stderr_tail()
            if tail:
                detail += f":\n{tail}"
            raise MetadataQueryFailed(detail)

        try:
            doc = json.loads(res.stdout)
        except json.JSONDecodeError as exc:
            raise MetadataQueryFailed(f"`cargo metadata` produced invalid JSON: {exc}") from exc

        meta = parse_workspace_metadata(doc)
        logger.debug(
            "cargo metadata: %d package(s), workspace_root=%s, target_directory=%s",
            len(meta.packages),
            meta.workspace_root,
            meta.target_directory,
        )
        return meta
