"""Shared rich console used for all user-facing output."""

from rich.console import Console

console = Console(highlight=False, soft_wrap=True)
