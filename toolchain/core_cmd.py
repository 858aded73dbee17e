"""toolchain/core_cmd.py

Command-execution helpers for toolchain queries.

This module deliberately avoids cargo-specific knowledge. It provides:

* :func:`which_or_raise` - resolve executables reliably across environments.
* :func:`run_cmd` - run subprocesses (no shell=True) and capture output.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    exit_code: int
    elapsed_seconds: float
    command_str: str
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def stderr_tail(self, max_lines: int = 20) -> str:
        """Last ``max_lines`` non-empty stderr lines, for diagnostics."""
        lines = [ln for ln in self.stderr.splitlines() if ln.strip()]
        return "\n".join(lines[-max_lines:])


def which_or_raise(bin_name: str) -> str:
    """Locate an executable and return its absolute path.

    ``bin_name`` may itself be a path (e.g. taken from ``$CARGO``); it is
    accepted as-is when it points at an executable file.
    """
    p = Path(bin_name)
    if p.is_absolute() and p.is_file() and os.access(str(p), os.X_OK):
        return str(p)

    found = shutil.which(bin_name)
    if found:
        return found

    raise FileNotFoundError(
        f"Executable '{bin_name}' not found on PATH.\n"
        "Install it or point $CARGO at it."
    )


def run_cmd(
    cmd: List[str],
    *,
    timeout_seconds: float = 0,
    env: Optional[Dict[str, str]] = None,
    encoding: str = "utf-8",
) -> CmdResult:
    """Run a subprocess and capture stdout/stderr (no ``shell=True``).

    Output is decoded with ``encoding`` regardless of the process locale.
    stdout is decoded strictly since callers parse it; stderr is only
    diagnostic and undecodable bytes are replaced.

    Never raises on non-zero exit codes. Raises ``OSError`` when the process
    cannot be spawned, ``subprocess.TimeoutExpired`` when a positive
    ``timeout_seconds`` elapses and ``UnicodeDecodeError`` when stdout is not
    valid ``encoding``.
    """
    command_str = " ".join(cmd)
    logger.debug("running: %s", command_str)

    # If env is provided, merge it onto the current process environment.
    env2 = None
    if env is not None:
        env2 = os.environ.copy()
        env2.update(env)

    t0 = time.time()
    proc = subprocess.run(
        cmd,
        capture_output=True,
        timeout=timeout_seconds if timeout_seconds and timeout_seconds > 0 else None,
        env=env2,
    )
    elapsed = time.time() - t0

    stderr = (proc.stderr or b"").decode(encoding, errors="replace")
    # cargo writes progress ("Updating index", "Downloaded ...") to stderr even on success.
    if stderr:
        logger.debug("%s stderr:\n%s", cmd[0], stderr.rstrip())
    logger.debug("exit=%s after %.2fs: %s", proc.returncode, elapsed, command_str)

    return CmdResult(
        exit_code=proc.returncode,
        elapsed_seconds=elapsed,
        command_str=command_str,
        stdout=(proc.stdout or b"").decode(encoding),
        stderr=stderr,
    )
