from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional


class CmdError(Exception):
    pass


def run(cmd: List[str], cwd: Optional[str]) -> str:
    """Execute a command, echo its output, and return ONLY stdout text.

    stderr is echoed but never mixed into the return value.
    """
    print(f"Running: {' '.join(cmd)}")
    proc = subprocess.run(
        cmd,
        cwd=cwd,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )
    out_text = (proc.stdout or "").strip()
    err_text = (proc.stderr or "").strip()
    if out_text:
        print(out_text, flush=True)
    if err_text:
        print(err_text, flush=True)
    if proc.returncode != 0:
        raise CmdError(
            f"Command failed ({proc.returncode}): {' '.join(cmd)}\nSTDERR:\n{err_text}"
        )
    return out_text


def cdktf(project_dir: Path, args: List[str]) -> str:
    return run(["cdktf", *args], cwd=str(project_dir))
