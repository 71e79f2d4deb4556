"""Running post-generation commands.

Commands are conveniences (dependency installs, init scripts): a failing
command is reported as a warning and the next one still runs.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from ..config import PostCommand
from ..errors import TemplateError
from ..templates import render_string
from ..utils import console, stream


@dataclass
class CommandResult:
    command: str
    work_dir: Path
    returncode: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.returncode == 0


def _render(text: str, variables: Mapping[str, object]) -> str:
    try:
        return render_string(text, variables)
    except TemplateError as e:
        console.print(
            f"⚠️  Warning: could not substitute variables in '{text}' ({e}); "
            "running it unchanged",
            style="yellow",
            markup=False,
        )
        return text


def run_post_commands(
    commands: Sequence[PostCommand],
    project_root: Path,
    variables: Mapping[str, object],
) -> List[CommandResult]:
    """Run ``commands`` in order inside ``project_root``; never raises for failures."""
    results: List[CommandResult] = []
    if not commands:
        return results

    console.print("📦 Running post-generation commands...")
    for command in commands:
        work_dir = project_root / command.work_dir if command.work_dir else project_root
        if command.command is not None:
            rendered = _render(command.command, variables)
            argv = None
        else:
            argv = [_render(arg, variables) for arg in command.args or ()]
            rendered = " ".join(argv)

        result = CommandResult(command=rendered, work_dir=work_dir)
        console.print(f"  Running: {rendered}", markup=False)
        try:
            if argv is None:
                result.returncode = stream(rendered, cwd=work_dir, shell=True)
            else:
                result.returncode = stream(argv, cwd=work_dir)
        except (OSError, ValueError, subprocess.SubprocessError) as e:
            result.error = str(e) or type(e).__name__
        else:
            if result.returncode != 0:
                result.error = f"exit code {result.returncode}"

        if result.error is not None:
            console.print(
                f"⚠️  Warning: Command failed: {rendered} ({result.error})",
                style="yellow",
                markup=False,
            )
        results.append(result)
    return results
