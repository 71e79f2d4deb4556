"""File system utilities."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Set

IGNORED_NAMES = {".git", "__pycache__", ".DS_Store"}


def list_tree_files(directory: Path) -> Set[Path]:
    """Return every file below ``directory`` relative to it, skipping VCS noise."""
    files: Set[Path] = set()
    for file_path in directory.rglob("*"):
        relative_path = file_path.relative_to(directory)
        if any(part in IGNORED_NAMES for part in relative_path.parts):
            continue
        if file_path.is_file():
            files.add(relative_path)
    return files


def replace_tree(source: Path, destination: Path) -> None:
    """Copy ``source`` to ``destination``, replacing whatever is there."""
    if destination.exists():
        shutil.rmtree(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copytree(
        source, destination, ignore=shutil.ignore_patterns(*IGNORED_NAMES)
    )
