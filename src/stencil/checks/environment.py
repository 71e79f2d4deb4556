"""Checks that tools a template relies on are installed."""

from __future__ import annotations

import shutil
from typing import Sequence

from ..errors import EnvironmentCheckError
from ..utils import console


def check_tools(tools: Sequence[str]) -> None:
    """Fail if any of ``tools`` is missing from PATH.

    Every tool is reported before failing so the user sees the full list.
    """
    if not tools:
        return
    console.print("Checking environment prerequisites...")
    missing = []
    for tool in tools:
        found = shutil.which(tool) is not None
        console.print(f" - {tool}: {'found' if found else 'missing'}", markup=False)
        if not found:
            missing.append(tool)
    if missing:
        raise EnvironmentCheckError(
            f"executables not found in PATH: {', '.join(missing)}"
        )
    console.print("Environment looks good.", style="green")
