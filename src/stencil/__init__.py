"""Scaffold new projects from reusable template bundles."""

__version__ = "1.0.0"
