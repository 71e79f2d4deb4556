"""Utility modules for stencil."""

from .console import console
from .filesystem import list_tree_files, replace_tree
from .subprocess_utils import stream

__all__ = ["console", "list_tree_files", "replace_tree", "stream"]
