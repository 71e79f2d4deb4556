"""Loading and saving ``template.yaml``."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from ..errors import TemplateConfigError
from .models import (
    RULE_KINDS,
    VARIABLE_KINDS,
    FileRule,
    PostCommand,
    TemplateConfig,
    VariableSpec,
)

CONFIG_FILENAME = "template.yaml"


def _str(value: Any, where: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise TemplateConfigError(f"{where} must be a string")


def _str_list(value: Any, where: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise TemplateConfigError(f"{where} must be a list")
    return tuple(_str(v, where) for v in value)


def _section(data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    value = data.get(key) or []
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        raise TemplateConfigError(f"'{key}' must be a list of mappings")
    return value


def _parse_variables(data: Dict[str, Any]) -> Tuple[VariableSpec, ...]:
    seen: set[str] = set()
    out: List[VariableSpec] = []
    for raw in _section(data, "variables"):
        name = _str(raw.get("name"), "variables[].name")
        if not name:
            raise TemplateConfigError("variable without a name")
        if name in seen:
            raise TemplateConfigError(f"duplicate variable '{name}'")
        seen.add(name)
        kind = _str(raw.get("type"), f"{name}.type") or "string"
        if kind not in VARIABLE_KINDS:
            raise TemplateConfigError(f"variable '{name}' has unknown type '{kind}'")
        out.append(
            VariableSpec(
                name=name,
                kind=kind,
                required=bool(raw.get("required", False)),
                default=_str(raw.get("default"), f"{name}.default"),
                options=_str_list(raw.get("options"), f"{name}.options"),
                description=_str(raw.get("description"), f"{name}.description"),
            )
        )
    return tuple(out)


def _parse_files(data: Dict[str, Any]) -> Optional[Tuple[FileRule, ...]]:
    if data.get("files") is None:
        return None
    rules: List[FileRule] = []
    for raw in _section(data, "files"):
        kind = _str(raw.get("type"), "files[].type") or "directory"
        if kind not in RULE_KINDS:
            raise TemplateConfigError(f"file rule has unknown type '{kind}'")
        condition = raw.get("condition")
        rules.append(
            FileRule(
                source=_str(raw.get("source"), "files[].source"),
                target=_str(raw.get("target"), "files[].target"),
                kind=kind,
                condition=None if condition is None else _str(condition, "condition"),
            )
        )
    return tuple(rules)


def _parse_post_generate(data: Dict[str, Any]) -> Tuple[PostCommand, ...]:
    commands: List[PostCommand] = []
    for raw in _section(data, "postGenerate"):
        command = raw.get("command")
        args = raw.get("args")
        if (command is None) == (args is None):
            raise TemplateConfigError(
                "postGenerate entries need exactly one of 'command' or 'args'"
            )
        if args is not None and not args:
            raise TemplateConfigError("postGenerate 'args' must not be empty")
        commands.append(
            PostCommand(
                command=None if command is None else _str(command, "command"),
                args=None if args is None else _str_list(args, "args"),
                work_dir=_str(raw.get("workDir"), "workDir"),
            )
        )
    return tuple(commands)


def parse_config(data: Dict[str, Any]) -> TemplateConfig:
    """Build a TemplateConfig from a parsed ``template.yaml`` mapping."""
    if not isinstance(data, dict):
        raise TemplateConfigError("template config must be a mapping")
    name = _str(data.get("name"), "name")
    if not name:
        raise TemplateConfigError("template config has no 'name'")
    return TemplateConfig(
        name=name,
        display_name=_str(data.get("displayName"), "displayName"),
        description=_str(data.get("description"), "description"),
        version=_str(data.get("version"), "version"),
        author=_str(data.get("author"), "author"),
        tags=_str_list(data.get("tags"), "tags"),
        variables=_parse_variables(data),
        files=_parse_files(data),
        post_generate=_parse_post_generate(data),
        requires=_str_list(data.get("requires"), "requires"),
    )


def load_config_text(text: str) -> TemplateConfig:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise TemplateConfigError(f"invalid YAML: {e}") from e
    return parse_config(data)


def load_config(path: Path) -> TemplateConfig:
    """Load a TemplateConfig from a YAML file path."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateConfigError(f"failed to read {path}: {e}") from e
    return load_config_text(text)


def dump_config(config: TemplateConfig) -> Dict[str, Any]:
    """Inverse of :func:`parse_config`; empty optional keys are omitted."""
    data: Dict[str, Any] = {"name": config.name}
    for key, value in (
        ("displayName", config.display_name),
        ("description", config.description),
        ("version", config.version),
        ("author", config.author),
    ):
        if value:
            data[key] = value
    if config.tags:
        data["tags"] = list(config.tags)
    if config.requires:
        data["requires"] = list(config.requires)
    if config.variables:
        variables = []
        for var in config.variables:
            entry: Dict[str, Any] = {"name": var.name, "type": var.kind}
            if var.required:
                entry["required"] = True
            if var.default:
                entry["default"] = var.default
            if var.options:
                entry["options"] = list(var.options)
            if var.description:
                entry["description"] = var.description
            variables.append(entry)
        data["variables"] = variables
    if config.files is not None:
        files = []
        for rule in config.files:
            entry = {"source": rule.source, "target": rule.target, "type": rule.kind}
            if rule.condition is not None:
                entry["condition"] = rule.condition
            files.append(entry)
        data["files"] = files
    if config.post_generate:
        commands = []
        for cmd in config.post_generate:
            entry = {"command": cmd.command} if cmd.command is not None else {
                "args": list(cmd.args or ())
            }
            if cmd.work_dir:
                entry["workDir"] = cmd.work_dir
            commands.append(entry)
        data["postGenerate"] = commands
    return data


def save_config(path: Path, config: TemplateConfig) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(dump_config(config), f, sort_keys=False)
