"""Subprocess utilities for running commands."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Union


def stream(
    command: Union[str, List[str]], cwd: Optional[Path] = None, shell: bool = False
) -> int:
    """Run a command, stream its combined output to stdout and return the exit code.

    Output that is not valid UTF-8 is forwarded with replacement characters.
    Raises ``OSError`` when the process cannot be spawned (missing program,
    missing working directory).
    """
    process = subprocess.Popen(
        command,
        cwd=str(cwd) if cwd else None,
        shell=shell,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        encoding="utf-8",
        errors="replace",
    )
    assert process.stdout is not None
    try:
        for line in process.stdout:
            sys.stdout.write(line)
        sys.stdout.flush()
    finally:
        process.stdout.close()
        code = process.wait()
    return code
