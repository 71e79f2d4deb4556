"""Generation orchestrator.

One call to :meth:`Generator.generate` runs the whole pipeline:

    INIT -> PRECHECK_PASSED -> VARIABLES_COLLECTED -> FILES_MATERIALIZED
         -> COMMANDS_RUN -> DONE

Anything before the first write fails without touching disk. Template and I/O
errors during materialization are fatal too but leave partial output behind.
Post-generation command failures are warnings and never fail the call.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Mapping, Optional, Union

from ..checks import check_tools
from ..config import get_settings
from ..errors import (
    AlreadyExistsError,
    MaterializationError,
    PrecheckIOError,
    StencilError,
    ValidationError,
)
from ..templates import TemplateBundle, TemplateRegistry
from ..utils import console
from .commands import CommandResult, run_post_commands
from .materialize import DIR_MODE, MaterializeReport, materialize
from .variables import Prompt, VariableBag, click_prompt, collect_variables


class GenerationState(str, Enum):
    INIT = "init"
    PRECHECK_PASSED = "precheck_passed"
    VARIABLES_COLLECTED = "variables_collected"
    FILES_MATERIALIZED = "files_materialized"
    COMMANDS_RUN = "commands_run"
    DONE = "done"
    FAILED = "failed"


@dataclass
class GenerationResult:
    project_root: Path
    template: str
    variables: VariableBag
    report: MaterializeReport
    commands: List[CommandResult] = field(default_factory=list)
    state: GenerationState = GenerationState.DONE
    history: List[GenerationState] = field(default_factory=list)

    @property
    def failed_commands(self) -> List[CommandResult]:
        return [c for c in self.commands if not c.ok]


def validate_project_name(name: str) -> None:
    if not name or not name.strip():
        raise ValidationError("project name is required")
    if name in (".", "..") or "/" in name or (os.sep != "/" and os.sep in name):
        raise ValidationError(f"invalid project name '{name}'")


def ensure_absent(path: Path) -> None:
    try:
        path.stat()
    except FileNotFoundError:
        return
    except OSError as e:
        raise PrecheckIOError(f"cannot check whether '{path}' exists: {e}") from e
    raise AlreadyExistsError(path)


class Generator:
    def __init__(
        self,
        registry: Optional[TemplateRegistry] = None,
        base_dir: Optional[Path] = None,
        prompt: Prompt = click_prompt,
        module_prefix: Optional[str] = None,
        check_environment: bool = False,
    ) -> None:
        self._registry = registry
        self.base_dir = base_dir if base_dir is not None else Path.cwd()
        self.prompt = prompt
        self.module_prefix = module_prefix or get_settings().module_prefix
        self.check_environment = check_environment
        self.state = GenerationState.INIT
        self.history: List[GenerationState] = [self.state]

    def _advance(self, state: GenerationState) -> None:
        self.state = state
        self.history.append(state)

    @property
    def registry(self) -> TemplateRegistry:
        if self._registry is None:
            self._registry = TemplateRegistry()
        return self._registry

    def resolve(self, template: Union[str, TemplateBundle]) -> TemplateBundle:
        if isinstance(template, TemplateBundle):
            return template
        return self.registry.get(template)

    def generate(
        self,
        project_name: str,
        template: Union[str, TemplateBundle],
        overrides: Optional[Mapping[str, str]] = None,
    ) -> GenerationResult:
        self.state = GenerationState.INIT
        self.history = [GenerationState.INIT]
        try:
            return self._generate(project_name, template, overrides)
        except StencilError:
            self._advance(GenerationState.FAILED)
            raise

    def _generate(
        self,
        project_name: str,
        template: Union[str, TemplateBundle],
        overrides: Optional[Mapping[str, str]],
    ) -> GenerationResult:
        validate_project_name(project_name)
        project_root = self.base_dir / project_name
        ensure_absent(project_root)
        bundle = self.resolve(template)
        if self.check_environment:
            check_tools(bundle.config.requires)
        self._advance(GenerationState.PRECHECK_PASSED)

        console.print(
            f"🚀 Creating project '{project_name}' using template "
            f"'{bundle.config.title}'...",
            markup=False,
        )
        variables = collect_variables(
            bundle.config,
            project_name,
            prompt=self.prompt,
            overrides=overrides,
            module_prefix=self.module_prefix,
        )
        self._advance(GenerationState.VARIABLES_COLLECTED)

        try:
            project_root.mkdir(mode=DIR_MODE, parents=True)
        except OSError as e:
            raise MaterializationError(
                f"failed to create project directory: {e}"
            ) from e
        report = materialize(bundle, variables, project_root)
        self._advance(GenerationState.FILES_MATERIALIZED)

        commands = run_post_commands(
            bundle.config.post_generate, project_root, variables
        )
        self._advance(GenerationState.COMMANDS_RUN)

        self._advance(GenerationState.DONE)
        return GenerationResult(
            project_root=project_root,
            template=bundle.name,
            variables=variables,
            report=report,
            commands=commands,
            state=self.state,
            history=list(self.history),
        )
