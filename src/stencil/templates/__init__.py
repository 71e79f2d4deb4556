"""Template bundles, discovery and rendering."""

from .bundle import BundleEntry, TemplateBundle
from .registry import TemplateInfo, TemplateRegistry
from .renderer import TEMPLATE_SUFFIX, render_bytes, render_string

__all__ = [
    "BundleEntry",
    "TEMPLATE_SUFFIX",
    "TemplateBundle",
    "TemplateInfo",
    "TemplateRegistry",
    "render_bytes",
    "render_string",
]
