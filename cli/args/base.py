from __future__ import annotations

import argparse
from pathlib import Path


def add_base_args(parser: argparse.ArgumentParser, *, cwd: Path) -> None:
    """Register the flags of the ``locate`` command.

    This includes:
    - build selection (manifest, profile)
    - cargo metadata knobs
    - output format
    - configuration / logging
    """

    parser.add_argument(
        "--manifest-path",
        default=str(cwd / "Cargo.toml"),
        help="Path to the crate's Cargo.toml (default: ./Cargo.toml).",
    )
    parser.add_argument(
        "--release",
        action="store_true",
        help="Locate the release build (default: debug).",
    )

    # cargo metadata
    parser.add_argument(
        "--offline",
        action="store_true",
        help="Pass --offline to `cargo metadata` (no network access for dependency resolution).",
    )
    parser.add_argument(
        "--locked",
        action="store_true",
        help="Pass --locked to `cargo metadata` (require an up-to-date Cargo.lock).",
    )
    parser.add_argument(
        "--metadata-timeout",
        type=float,
        default=0,
        help="Abort `cargo metadata` after this many seconds (default: 0 = wait indefinitely).",
    )

    # Output
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the artifact paths as a JSON object.",
    )
    parser.add_argument(
        "--out",
        default=None,
        help="Also write the artifact paths as JSON to this file.",
    )
    parser.add_argument(
        "--show-pending",
        action="store_true",
        help="List derived artifacts (optimized, metadata) that do not exist yet.",
    )

    # Configuration
    parser.add_argument(
        "--env-file",
        default=None,
        help="Load environment variables from this file instead of <repo>/.env.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $WASM_LOCATE_LOG_LEVEL or WARNING).",
    )
