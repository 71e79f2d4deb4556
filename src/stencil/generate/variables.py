"""Resolving template variables into a variable bag."""

from __future__ import annotations

from typing import Callable, Dict, Mapping, Optional, Union

import click

from ..config import TemplateConfig, VariableSpec
from ..config.settings import DEFAULT_MODULE_PREFIX
from ..errors import InvalidSelectValue, InvalidVariableValue, RequiredVariableMissing

Value = Union[str, int, bool]
VariableBag = Dict[str, Value]
Prompt = Callable[[VariableSpec], str]

_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0"}


def click_prompt(spec: VariableSpec) -> str:
    """Ask for a variable on the console; an empty answer is returned as ''."""
    text = f"Enter {spec.name}"
    if spec.description:
        text += f" ({spec.description})"
    kwargs = {}
    if spec.kind == "select" and spec.options:
        kwargs["type"] = click.Choice(list(spec.options))
    return click.prompt(text, default="", show_default=False, **kwargs)


def builtin_variables(project_name: str, module_prefix: str = DEFAULT_MODULE_PREFIX) -> VariableBag:
    return {
        "ProjectName": project_name,
        "ModuleName": f"{module_prefix}/{project_name}",
    }


def coerce(spec: VariableSpec, value: str) -> Value:
    if spec.kind == "int":
        if value == "":
            return 0
        try:
            return int(value)
        except ValueError:
            raise InvalidVariableValue(spec.name, value, "int") from None
    if spec.kind == "bool":
        lowered = value.strip().lower()
        if lowered == "" or lowered in _FALSE:
            return False
        if lowered in _TRUE:
            return True
        raise InvalidVariableValue(spec.name, value, "bool")
    return value


def _ask(spec: VariableSpec, prompt: Prompt) -> str:
    while True:
        try:
            answer = prompt(spec)
        except (EOFError, click.Abort):
            raise RequiredVariableMissing(spec.name) from None
        answer = (answer or "").strip()
        if answer:
            return answer


def collect_variables(
    config: TemplateConfig,
    project_name: str,
    prompt: Prompt = click_prompt,
    overrides: Optional[Mapping[str, str]] = None,
    module_prefix: str = DEFAULT_MODULE_PREFIX,
) -> VariableBag:
    """Build the variable bag for one generation.

    Built-in variables are written first and never replaced. Each declared
    variable resolves to its override, else its default; a required variable
    that is still empty is prompted for until a value is given. Select values
    are checked against their options and kinds are coerced here, so a bad
    value fails before anything is written.
    """
    overrides = overrides or {}
    bag = builtin_variables(project_name, module_prefix)
    for spec in config.variables:
        if spec.name in bag:
            continue
        value = overrides.get(spec.name, spec.default)
        if spec.required and value == "":
            value = _ask(spec, prompt)
        if spec.kind == "select" and spec.options and value not in spec.options:
            raise InvalidSelectValue(spec.name, value, spec.options)
        bag[spec.name] = coerce(spec, value)
    return bag
