"""Exceptions raised by stencil."""

from __future__ import annotations

from typing import Sequence


class StencilError(Exception):
    """Base class for every fatal stencil error."""


class PreconditionError(StencilError):
    """Raised before generation touches the file system."""


class AlreadyExistsError(PreconditionError):
    """Raise when the project output directory already exists"""

    def __init__(self, path: object) -> None:
        super().__init__(f"directory '{path}' already exists")
        self.path = path


class PrecheckIOError(PreconditionError):
    """Raise when the existence of the output directory cannot be determined"""


class ValidationError(StencilError):
    """Raised while resolving variables, before any file is written."""


class RequiredVariableMissing(ValidationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"required variable '{name}' cannot be empty")
        self.name = name


class InvalidSelectValue(ValidationError):
    def __init__(self, name: str, value: str, options: Sequence[str]) -> None:
        super().__init__(
            f"invalid value '{value}' for variable '{name}'. "
            f"Valid options: {', '.join(options)}"
        )
        self.name = name
        self.value = value
        self.options = tuple(options)


class InvalidVariableValue(ValidationError):
    def __init__(self, name: str, value: str, kind: str) -> None:
        super().__init__(f"value '{value}' for variable '{name}' is not a valid {kind}")
        self.name = name
        self.value = value
        self.kind = kind


class TemplateError(StencilError):
    """Base class for rendering failures."""


class TemplateSyntaxError(TemplateError):
    """Raise when template text cannot be parsed"""


class TemplateExecutionError(TemplateError):
    """Raise when a parsed template fails to render, e.g. an undefined variable"""


class MaterializationError(StencilError):
    """Raise when reading the bundle or writing the output fails"""


class TemplateNotFoundError(StencilError):
    def __init__(self, name: str) -> None:
        super().__init__(f"template '{name}' not found")
        self.name = name


class TemplateConfigError(StencilError):
    """Raise when template.yaml is missing or malformed"""


class InstallError(StencilError):
    """Raise when a template cannot be installed into the user store"""


class EnvironmentCheckError(StencilError):
    """Raise when a tool required by a template is not on PATH"""
