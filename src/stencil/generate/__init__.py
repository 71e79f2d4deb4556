"""The generation pipeline."""

from .commands import CommandResult, run_post_commands
from .generator import GenerationResult, GenerationState, Generator
from .materialize import MaterializeReport, materialize
from .paths import map_path, normalize
from .variables import VariableBag, builtin_variables, coerce, collect_variables

__all__ = [
    "CommandResult",
    "GenerationResult",
    "GenerationState",
    "Generator",
    "MaterializeReport",
    "VariableBag",
    "builtin_variables",
    "coerce",
    "collect_variables",
    "map_path",
    "materialize",
    "normalize",
    "run_post_commands",
]
