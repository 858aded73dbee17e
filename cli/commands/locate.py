from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, TextIO

from cli.common import describe_error
from toolchain.io import write_json
from wasm_locate.errors import CrateError
from wasm_locate.metadata import WorkspaceResolver
from wasm_locate.models import BuildRequest, OutputInfo
from wasm_locate.output_info import resolve_output_info


def render_text(info: OutputInfo, *, show_pending: bool) -> str:
    lines = [f"{key}: {value}" for key, value in info.to_dict().items()]
    if show_pending:
        pending = info.pending_artifacts()
        if pending:
            lines.append("pending:")
            lines.extend(f"  {p}" for p in pending)
        else:
            lines.append("pending: (none)")
    return "\n".join(lines)


def run_locate(
    args: argparse.Namespace,
    resolver: WorkspaceResolver,
    *,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    out = stdout or sys.stdout
    err = stderr or sys.stderr

    req = BuildRequest(manifest_path=Path(args.manifest_path), release=bool(args.release))
    try:
        info = resolve_output_info(req, resolver=resolver)
    except CrateError as e:
        for line in describe_error(e):
            print(line, file=err)
        return 1

    payload = info.to_dict()
    if args.show_pending:
        payload["pending"] = [str(p) for p in info.pending_artifacts()]

    if args.out:
        try:
            write_json(Path(args.out), payload)
        except OSError as e:
            print(f"error: unable to write {args.out}: {e}", file=err)
            return 1

    if args.json:
        print(json.dumps(payload, indent=2), file=out)
    else:
        print(render_text(info, show_pending=bool(args.show_pending)), file=out)
    return 0
