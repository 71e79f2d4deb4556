"""Process-wide settings read from the environment.

- ``STENCIL_HOME``: root of the user template store (default ``~/.stencil``).
- ``STENCIL_MODULE_PREFIX``: prefix of the built-in ``ModuleName`` variable
  (default ``github.com/yourname``).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_MODULE_PREFIX = "github.com/yourname"


@dataclass(frozen=True)
class Settings:
    home: Path
    module_prefix: str = DEFAULT_MODULE_PREFIX

    @property
    def user_templates_dir(self) -> Path:
        return self.home / "templates"

    @classmethod
    def from_env(cls) -> "Settings":
        home = os.getenv("STENCIL_HOME")
        return cls(
            home=Path(home).expanduser() if home else Path.home() / ".stencil",
            module_prefix=(
                os.getenv("STENCIL_MODULE_PREFIX") or DEFAULT_MODULE_PREFIX
            ).rstrip("/"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return settings from the environment (memoized)."""
    return Settings.from_env()
