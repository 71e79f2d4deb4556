from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from stencil.config import FileRule, load_config, load_config_text, save_config
from stencil.errors import TemplateConfigError

FULL = """
name: fullstack
displayName: Full Stack
description: Go API with a React UI
version: 1.2.0
author: someone
tags: [go, react]
requires: [go, node]
variables:
  - name: Port
    type: int
    default: 8080
  - name: AuthProvider
    type: select
    default: none
    options: [none, keycloak]
    description: Authentication provider
  - name: Owner
    required: true
files:
  - source: backend/
    target: server
    type: directory
  - source: auth
    target: server/auth
    condition: AuthProvider != "none"
  - source: README.md
    target: ./docs/README.md
    type: file
postGenerate:
  - command: go mod tidy
    workDir: server
  - args: [npm, install]
    workDir: web
"""


def test_load_full_config() -> None:
    cfg = load_config_text(FULL)
    assert cfg.name == "fullstack"
    assert cfg.title == "Full Stack"
    assert cfg.tags == ("go", "react")
    assert cfg.requires == ("go", "node")
    port, auth, owner = cfg.variables
    assert (port.kind, port.default) == ("int", "8080")
    assert auth.options == ("none", "keycloak")
    assert owner.kind == "string" and owner.required
    assert cfg.files == (
        FileRule(source="backend/", target="server", kind="directory"),
        FileRule(source="auth", target="server/auth", kind="directory", condition='AuthProvider != "none"'),
        FileRule(source="README.md", target="./docs/README.md", kind="file"),
    )
    assert cfg.post_generate[0].command == "go mod tidy"
    assert cfg.post_generate[0].work_dir == "server"
    assert cfg.post_generate[1].args == ("npm", "install")
    assert cfg.post_generate[1].display == "npm install"


def test_missing_files_section_means_rule_free() -> None:
    cfg = load_config_text("name: plain\n")
    assert cfg.files is None
    assert cfg.file_rules == ()
    assert cfg.title == "plain"


def test_round_trip_preserves_rules_and_condition(tmp_path: Path) -> None:
    cfg = load_config_text(FULL)
    path = tmp_path / "template.yaml"
    save_config(path, cfg)
    again = load_config(path)
    assert again == cfg
    raw = yaml.safe_load(path.read_text())
    assert [r["source"] for r in raw["files"]] == ["backend/", "auth", "README.md"]
    assert raw["files"][1]["condition"] == 'AuthProvider != "none"'


@pytest.mark.parametrize(
    "text",
    [
        "description: no name\n",
        "name: x\nvariables:\n  - name: a\n  - name: a\n",
        "name: x\nvariables:\n  - name: a\n    type: float\n",
        "name: x\nfiles:\n  - source: a\n    type: symlink\n",
        "name: x\npostGenerate:\n  - workDir: a\n",
        "name: x\npostGenerate:\n  - command: a\n    args: [b]\n",
        "name: x\npostGenerate:\n  - args: []\n",
        "name: [unclosed\n",
        "- just a list\n",
    ],
)
def test_invalid_configs(text: str) -> None:
    with pytest.raises(TemplateConfigError):
        load_config_text(text)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(TemplateConfigError):
        load_config(tmp_path / "template.yaml")
