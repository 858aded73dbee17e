#!/usr/bin/env python3
"""
Locate the wasm artifacts cargo produced for a crate.

Prints where the compiled module lives and where the optimized and
metadata-augmented variants will be written by later build stages.

Usage:
  python wasm_locate_cli.py
  python wasm_locate_cli.py --manifest-path contracts/flipper/Cargo.toml --release
  python wasm_locate_cli.py --json --out target/wasm_paths.json
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from cli.args.base import add_base_args
from cli.commands.locate import run_locate
from wasm_locate.wiring import build_resolver, configure_logging, load_environment


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Resolve the on-disk locations of a crate's wasm32-unknown-unknown artifacts."
    )
    add_base_args(parser, cwd=Path.cwd())
    args = parser.parse_args(argv)
    if args.metadata_timeout < 0:
        parser.error("--metadata-timeout must be >= 0")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    # Load .env before logging so WASM_LOCATE_LOG_LEVEL can come from it.
    load_environment(Path(args.env_file) if args.env_file else None)
    try:
        configure_logging(args.log_level)
    except ValueError as e:
        raise SystemExit(f"error: {e}")

    resolver = build_resolver(
        offline=bool(args.offline),
        locked=bool(args.locked),
        timeout_seconds=float(args.metadata_timeout),
    )
    return run_locate(args, resolver)


if __name__ == "__main__":
    raise SystemExit(main())
