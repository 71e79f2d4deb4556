"""Template configuration value types.

These mirror the keys of ``template.yaml``. All of them are frozen: a config is
loaded once per process and only read afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

VARIABLE_KINDS = ("string", "int", "bool", "select")
RULE_KINDS = ("file", "directory")


@dataclass(frozen=True)
class VariableSpec:
    name: str
    kind: str = "string"
    required: bool = False
    default: str = ""
    options: Tuple[str, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class FileRule:
    """Maps a bundle-relative ``source`` to an output-relative ``target``.

    ``condition`` is carried through loading and saving but takes no part in
    matching.
    """

    source: str
    target: str = ""
    kind: str = "directory"
    condition: Optional[str] = None


@dataclass(frozen=True)
class PostCommand:
    """A command run after the files are written.

    ``command`` is a shell string; ``args`` is an argv list run without a
    shell. Exactly one of them is set.
    """

    command: Optional[str] = None
    args: Optional[Tuple[str, ...]] = None
    work_dir: str = ""

    @property
    def display(self) -> str:
        if self.command is not None:
            return self.command
        return " ".join(self.args or ())


@dataclass(frozen=True)
class TemplateConfig:
    name: str
    display_name: str = ""
    description: str = ""
    version: str = ""
    author: str = ""
    tags: Tuple[str, ...] = ()
    variables: Tuple[VariableSpec, ...] = ()
    # None when template.yaml has no `files` section: copy everything
    files: Optional[Tuple[FileRule, ...]] = None
    post_generate: Tuple[PostCommand, ...] = ()
    requires: Tuple[str, ...] = field(default=())

    @property
    def title(self) -> str:
        return self.display_name or self.name

    @property
    def file_rules(self) -> Tuple[FileRule, ...]:
        return self.files or ()
