"""Writing a template bundle's files into the output directory."""

from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Set

from ..config import CONFIG_FILENAME
from ..errors import MaterializationError, TemplateError
from ..templates import TEMPLATE_SUFFIX, TemplateBundle, render_bytes
from ..utils import console
from .paths import map_path, normalize

FILE_MODE = 0o644
DIR_MODE = 0o755


@dataclass
class MaterializeReport:
    """What a materialization created, in walk order."""

    directories: List[str] = field(default_factory=list)
    files: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


class _Writer:
    def __init__(self, root: Path, report: MaterializeReport) -> None:
        self.root = root
        self.report = report
        self._created: Set[str] = set()

    def resolve(self, relative: str) -> Path:
        clean = posixpath.normpath(relative) if relative else "."
        if clean.startswith("../") or clean == ".." or posixpath.isabs(clean):
            raise MaterializationError(f"output path escapes project root: {relative}")
        return self.root if clean == "." else self.root / clean

    def ensure_dir(self, relative: str) -> None:
        clean = posixpath.normpath(relative) if relative else "."
        if clean == "." or clean in self._created:
            return
        target = self.resolve(clean)
        try:
            target.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise MaterializationError(f"failed to create {target}: {e}") from e
        self._created.add(clean)
        self.report.directories.append(clean)

    def write(self, relative: str, content: bytes) -> None:
        target = self.resolve(relative)
        self.ensure_dir(posixpath.dirname(posixpath.normpath(relative)))
        try:
            target.write_bytes(content)
            os.chmod(target, FILE_MODE)
        except OSError as e:
            raise MaterializationError(f"failed to write {target}: {e}") from e
        self.report.files.append(posixpath.normpath(relative))


def materialize(
    bundle: TemplateBundle, variables: Mapping[str, object], output_root: Path
) -> MaterializeReport:
    """Copy or render every mapped bundle entry under ``output_root``.

    Entries no file rule matches are skipped silently; an unmatched directory
    is still descended into so file rules can reach its children. Files whose
    source name ends in ``.tmpl`` are rendered and lose the suffix. Any read,
    render or write failure aborts and leaves what was already written.
    """
    rules = bundle.config.file_rules
    report = MaterializeReport()
    writer = _Writer(output_root, report)

    for entry in bundle.walk():
        path = normalize(entry.path)
        if path == CONFIG_FILENAME:
            continue

        mapped, matched = map_path(rules, path)
        if not matched:
            report.skipped.append(path)
            continue

        if entry.is_dir:
            writer.ensure_dir(mapped)
            continue

        try:
            content = entry.read_bytes()
        except OSError as e:
            raise MaterializationError(f"failed to read {path}: {e}") from e

        if path.endswith(TEMPLATE_SUFFIX):
            if mapped.endswith(TEMPLATE_SUFFIX):
                mapped = mapped[: -len(TEMPLATE_SUFFIX)]
            try:
                content = render_bytes(content, variables)
            except TemplateError as e:
                raise type(e)(f"{path}: {e}") from e

        if not mapped or mapped.endswith("/"):
            raise MaterializationError(f"{path} maps to a directory path '{mapped}'")
        writer.write(mapped, content)

    console.print(
        f"  Wrote {len(report.files)} files"
        + (f", skipped {len(report.skipped)} unmapped entries" if report.skipped else "")
    )
    return report
