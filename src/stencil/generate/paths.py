"""Mapping template-relative paths to output paths under file rules."""

from __future__ import annotations

import posixpath
from typing import Optional, Sequence, Tuple

from ..config import FileRule


def normalize(path: str) -> str:
    """Strip a leading ``./`` and any leading ``/``."""
    if path.startswith("./"):
        path = path[2:]
    return path.lstrip("/")


def _join(target: str, remainder: str) -> str:
    if target in ("", "."):
        return remainder
    if not remainder:
        return target
    return f"{target.rstrip('/')}/{remainder}"


def _match_directory(rule: FileRule, path: str) -> Optional[str]:
    source = rule.source.rstrip("/")
    if source == "":
        remainder = path
    elif path == source:
        remainder = ""
    elif path.startswith(source + "/"):
        remainder = path[len(source) + 1 :]
    else:
        return None
    return _join(rule.target, remainder)


def _match_file(rule: FileRule, path: str) -> Optional[str]:
    source = rule.source.rstrip("/")
    if path != source:
        return None
    target = rule.target
    if target.startswith("./"):
        target = target[2:]
    return target or posixpath.basename(source)


def map_path(rules: Sequence[FileRule], path: str) -> Tuple[str, bool]:
    """Return ``(mapped_path, matched)`` for a bundle-relative ``path``.

    With no rules every path maps to itself. Otherwise the first rule that
    matches decides; a path no rule matches comes back with ``matched=False``
    and must be left out of the output.
    """
    path = normalize(path)
    if not rules:
        return path, True
    for rule in rules:
        if rule.kind == "file":
            mapped = _match_file(rule, path)
        else:
            mapped = _match_directory(rule, path)
        if mapped is not None:
            return mapped, True
    return "", False
