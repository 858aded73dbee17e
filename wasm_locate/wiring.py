"""wasm_locate.wiring

This module is the **composition root** for the Python runtime.

It is the single place where entrypoints (CLI, scripts, CI) assemble the
running resolver:

- load configuration / environment variables from ``.env``
- configure logging
- build the real cargo-backed :class:`WorkspaceResolver`

Tests skip this module and hand a fixture resolver straight to
:func:`wasm_locate.output_info.resolve_output_info`.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv

from toolchain.core_root import ROOT_DIR

from .metadata import CARGO_ENV_VAR, CargoMetadataResolver

ENV_PATH: Path = ROOT_DIR / ".env"
LOG_LEVEL_ENV_VAR = "WASM_LOCATE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def load_environment(dotenv_path: Optional[Path] = None) -> bool:
    """Load ``.env`` without overriding variables already set in the process."""
    path = Path(dotenv_path) if dotenv_path is not None else ENV_PATH
    if not path.exists():
        return False
    return bool(load_dotenv(path, override=False))


def resolve_log_level(explicit: Optional[str] = None) -> int:
    raw = explicit or os.environ.get(LOG_LEVEL_ENV_VAR) or DEFAULT_LOG_LEVEL
    level = logging.getLevelName(str(raw).strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level: {raw}")
    return level


def configure_logging(level: Union[int, str, None] = None) -> None:
    if isinstance(level, int):
        lvl = level
    else:
        lvl = resolve_log_level(level)
    logging.basicConfig(level=lvl, format=LOG_FORMAT)


def build_resolver(
    *,
    offline: bool = False,
    locked: bool = False,
    timeout_seconds: float = 0,
    cargo: Optional[str] = None,
) -> CargoMetadataResolver:
    extra_args: List[str] = []
    if offline:
        extra_args.append("--offline")
    if locked:
        extra_args.append("--locked")
    return CargoMetadataResolver(
        cargo=cargo or os.environ.get(CARGO_ENV_VAR),
        extra_args=extra_args,
        timeout_seconds=timeout_seconds,
    )
