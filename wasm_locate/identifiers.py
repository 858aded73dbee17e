"""wasm_locate.identifiers

Pure naming helpers.

Cargo accepts ``-`` in package and target names but replaces it with ``_``
in every file it generates (``my-crate`` -> ``libmy_crate.rlib``,
``my_crate.wasm``). Paths we compose have to follow the same rule.
"""

from __future__ import annotations

__all__ = [
    "CRATE_NAME_SEPARATOR",
    "CRATE_NAME_SUBSTITUTE",
    "normalize_crate_name",
]


CRATE_NAME_SEPARATOR = "-"
CRATE_NAME_SUBSTITUTE = "_"


def normalize_crate_name(name: str) -> str:
    """Return ``name`` as it appears in cargo-generated file names.

    Examples
    --------
    "my-crate" -> "my_crate"
    "already_ok" -> "already_ok"
    """
    return name.replace(CRATE_NAME_SEPARATOR, CRATE_NAME_SUBSTITUTE)
