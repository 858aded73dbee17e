"""cli.common

Small shared helpers for CLI command modules.

Resolution errors carry structured payloads; the CLI turns them into
one-line diagnostics plus a hint about what to do next.
"""

from __future__ import annotations

from typing import Dict, List, Type

from wasm_locate.errors import (
    CrateError,
    InvalidManifestPath,
    LibNameNotFound,
    MetadataQueryFailed,
    OutputNotFound,
    RootPackageNotFound,
)
from wasm_locate.layout import WASM_TARGET_TRIPLE

_HINTS: Dict[Type[CrateError], str] = {
    InvalidManifestPath: "Check --manifest-path; it must point at an existing Cargo.toml.",
    MetadataQueryFailed: "Run `cargo metadata` by hand to see the full error.",
    RootPackageNotFound: (
        "Point --manifest-path at a package manifest, not a virtual workspace manifest."
    ),
    LibNameNotFound: 'Add `crate-type = ["cdylib"]` to the [lib] section of Cargo.toml.',
    OutputNotFound: (
        f"Did you forget to build first? Build the crate for {WASM_TARGET_TRIPLE} so that"
        " {err.path} exists. Workspace members are expected under a per-package"
        " target directory (`cargo build --target-dir <target>/<package>`)."
    ),
}


def describe_error(err: CrateError) -> List[str]:
    """Return diagnostic lines for ``err``: the error itself, then a hint when one exists."""
    lines = [f"error: {err}"]
    for cls in type(err).__mro__:
        hint = _HINTS.get(cls)
        if hint:
            lines.append(f"hint: {hint.format(err=err)}")
            break
    return lines
