"""Environment checks for stencil."""

from .environment import check_tools

__all__ = ["check_tools"]
