"""Configuration management for stencil."""

from .loader import (
    CONFIG_FILENAME,
    dump_config,
    load_config,
    load_config_text,
    parse_config,
    save_config,
)
from .models import FileRule, PostCommand, TemplateConfig, VariableSpec
from .settings import Settings, get_settings

__all__ = [
    "CONFIG_FILENAME",
    "FileRule",
    "PostCommand",
    "Settings",
    "TemplateConfig",
    "VariableSpec",
    "dump_config",
    "get_settings",
    "load_config",
    "load_config_text",
    "parse_config",
    "save_config",
]
