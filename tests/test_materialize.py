from __future__ import annotations

import stat
from pathlib import Path
from typing import Dict

import pytest

from stencil.errors import MaterializationError, TemplateExecutionError
from stencil.generate.materialize import materialize
from stencil.templates import TemplateBundle


def make_bundle(root: Path, config: str, files: Dict[str, str]) -> TemplateBundle:
    root.mkdir(parents=True, exist_ok=True)
    (root / "template.yaml").write_text(config.lstrip())
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return TemplateBundle.from_directory(root)


def test_rule_free_mode_copies_everything(tmp_path: Path) -> None:
    bundle = make_bundle(
        tmp_path / "tpl",
        "name: t\n",
        {"a.txt": "A", "sub/b.txt": "B", "sub/deeper/c.bin": "C"},
    )
    out = tmp_path / "out"
    out.mkdir()
    report = materialize(bundle, {}, out)

    assert (out / "a.txt").read_text() == "A"
    assert (out / "sub" / "b.txt").read_text() == "B"
    assert (out / "sub" / "deeper" / "c.bin").read_text() == "C"
    assert not (out / "template.yaml").exists()
    assert report.files == ["a.txt", "sub/b.txt", "sub/deeper/c.bin"]


def test_template_suffix_is_rendered_and_stripped(tmp_path: Path) -> None:
    bundle = make_bundle(
        tmp_path / "tpl",
        "name: t\n",
        {"main.go.tmpl": "package main // {{.ProjectName}}\n", "static.txt": "{{.ProjectName}}"},
    )
    out = tmp_path / "out"
    out.mkdir()
    materialize(bundle, {"ProjectName": "demo"}, out)

    assert not (out / "main.go.tmpl").exists()
    assert (out / "main.go").read_text() == "package main // demo\n"
    # non-template files are copied byte for byte
    assert (out / "static.txt").read_text() == "{{.ProjectName}}"


def test_unmatched_entries_are_skipped_without_error(tmp_path: Path) -> None:
    config = """
name: t
files:
  - source: backend
    target: server
    type: directory
  - source: README.md
    target: docs/readme.md
    type: file
"""
    bundle = make_bundle(
        tmp_path / "tpl",
        config,
        {
            "backend/main.go": "x",
            "README.md": "readme",
            "README.md.bak": "old",
            "frontend/index.html": "<html>",
        },
    )
    out = tmp_path / "out"
    out.mkdir()
    report = materialize(bundle, {}, out)

    assert (out / "server" / "main.go").read_text() == "x"
    assert (out / "docs" / "readme.md").read_text() == "readme"
    assert not (out / "README.md.bak").exists()
    assert not (out / "frontend").exists()
    assert sorted(p.relative_to(out).as_posix() for p in out.rglob("*") if p.is_file()) == [
        "docs/readme.md",
        "server/main.go",
    ]
    assert "frontend" in report.skipped
    assert "frontend/index.html" in report.skipped


def test_file_rule_reaches_into_unmatched_directory(tmp_path: Path) -> None:
    config = """
name: t
files:
  - source: extras/Makefile
    target: Makefile
    type: file
"""
    bundle = make_bundle(tmp_path / "tpl", config, {"extras/Makefile": "all:", "extras/other": "no"})
    out = tmp_path / "out"
    out.mkdir()
    materialize(bundle, {}, out)
    assert (out / "Makefile").read_text() == "all:"
    assert not (out / "extras").exists()


def test_shared_directory_created_once(tmp_path: Path) -> None:
    bundle = make_bundle(
        tmp_path / "tpl", "name: t\n", {"pkg/sub/a.txt": "a", "pkg/sub/b.txt": "b"}
    )
    out = tmp_path / "out"
    out.mkdir()
    report = materialize(bundle, {}, out)

    assert report.directories.count("pkg/sub") == 1
    assert report.directories == ["pkg", "pkg/sub"]
    assert (out / "pkg" / "sub" / "a.txt").exists()
    assert (out / "pkg" / "sub" / "b.txt").exists()


def test_existing_directories_are_not_an_error(tmp_path: Path) -> None:
    bundle = make_bundle(tmp_path / "tpl", "name: t\n", {"pkg/a.txt": "a"})
    out = tmp_path / "out"
    (out / "pkg").mkdir(parents=True)
    materialize(bundle, {}, out)
    assert (out / "pkg" / "a.txt").read_text() == "a"


def test_written_files_are_not_executable(tmp_path: Path) -> None:
    bundle = make_bundle(tmp_path / "tpl", "name: t\n", {"run.sh": "#!/bin/sh\n"})
    (tmp_path / "tpl" / "run.sh").chmod(0o755)
    out = tmp_path / "out"
    out.mkdir()
    materialize(bundle, {}, out)
    mode = stat.S_IMODE((out / "run.sh").stat().st_mode)
    assert mode == 0o644


def test_render_error_aborts_and_leaves_partial_output(tmp_path: Path) -> None:
    bundle = make_bundle(
        tmp_path / "tpl",
        "name: t\n",
        {"a.txt": "first", "b.txt.tmpl": "{{ .Missing }}", "c.txt": "never"},
    )
    out = tmp_path / "out"
    out.mkdir()
    with pytest.raises(TemplateExecutionError) as exc:
        materialize(bundle, {"ProjectName": "demo"}, out)
    assert "b.txt.tmpl" in str(exc.value)
    assert (out / "a.txt").exists()
    assert not (out / "b.txt").exists()
    assert not (out / "c.txt").exists()


def test_escaping_target_is_rejected(tmp_path: Path) -> None:
    config = """
name: t
files:
  - source: a.txt
    target: ../evil.txt
    type: file
"""
    bundle = make_bundle(tmp_path / "tpl", config, {"a.txt": "a"})
    out = tmp_path / "out"
    out.mkdir()
    with pytest.raises(MaterializationError):
        materialize(bundle, {}, out)
    assert not (tmp_path / "evil.txt").exists()
