"""Template discovery: built-in bundles and the user template store.

Built-in templates ship inside the package under ``stencil/builtin/<name>``.
User templates live in ``<STENCIL_HOME>/templates/<name>`` and override a
built-in of the same name. A template directory with a missing or broken
``template.yaml`` is skipped with a warning.
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib.resources import files
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from packaging.version import InvalidVersion, Version

from ..config import CONFIG_FILENAME, get_settings, load_config
from ..errors import InstallError, StencilError, TemplateNotFoundError
from ..utils import console, list_tree_files, replace_tree
from .bundle import TemplateBundle

REMOTE_PREFIXES = ("http://", "https://", "git@", "ssh://")


@dataclass(frozen=True)
class TemplateInfo:
    name: str
    display_name: str
    description: str
    version: str
    source: str
    tags: Tuple[str, ...]

    @property
    def parsed_version(self) -> Optional[Version]:
        try:
            return Version(self.version) if self.version else None
        except InvalidVersion:
            return None

    @property
    def version_label(self) -> str:
        parsed = self.parsed_version
        if parsed is None:
            return self.version or "unversioned"
        return f"v{parsed}"


def builtin_root() -> Traversable:
    return files("stencil").joinpath("builtin")


class TemplateRegistry:
    def __init__(
        self,
        user_dir: Optional[Path] = None,
        builtin: Optional[Traversable] = None,
    ) -> None:
        self.user_dir = user_dir if user_dir is not None else get_settings().user_templates_dir
        self._builtin_root = builtin if builtin is not None else builtin_root()
        self._builtin: Dict[str, TemplateBundle] = {}
        self._user: Dict[str, TemplateBundle] = {}
        self.reload()

    def reload(self) -> None:
        self._builtin = self._load_builtin()
        self._user = self._load_user()

    def _load_builtin(self) -> Dict[str, TemplateBundle]:
        out: Dict[str, TemplateBundle] = {}
        if not self._builtin_root.is_dir():
            return out
        for entry in sorted(self._builtin_root.iterdir(), key=lambda e: e.name):
            if not entry.is_dir() or entry.name.startswith(("_", ".")):
                continue
            try:
                bundle = TemplateBundle.from_resource(entry, source="built-in")
            except StencilError as e:
                console.print(
                    f"Warning: skipping built-in template {entry.name}: {e}",
                    style="yellow",
                )
                continue
            out[bundle.name] = bundle
        return out

    def _load_user(self) -> Dict[str, TemplateBundle]:
        out: Dict[str, TemplateBundle] = {}
        if not self.user_dir.is_dir():
            return out
        for entry in sorted(self.user_dir.iterdir()):
            if not entry.is_dir():
                continue
            try:
                bundle = TemplateBundle.from_directory(entry, source="user")
            except StencilError as e:
                console.print(
                    f"Warning: skipping user template {entry.name}: {e}",
                    style="yellow",
                )
                continue
            out[bundle.name] = bundle
        return out

    def names(self) -> List[str]:
        return sorted({*self._builtin, *self._user})

    def get(self, name: str) -> TemplateBundle:
        """Return the named bundle; user templates win over built-ins."""
        bundle = self._user.get(name) or self._builtin.get(name)
        if bundle is None:
            raise TemplateNotFoundError(name)
        return bundle

    def list_templates(self) -> List[TemplateInfo]:
        infos: List[TemplateInfo] = []
        for name in self.names():
            bundle = self.get(name)
            cfg = bundle.config
            infos.append(
                TemplateInfo(
                    name=cfg.name,
                    display_name=cfg.title,
                    description=cfg.description,
                    version=cfg.version,
                    source=bundle.source,
                    tags=cfg.tags,
                )
            )
        return infos

    def install(self, source: str) -> TemplateBundle:
        """Install a template directory into the user store.

        Only local paths are supported. An existing user template with the same
        name is replaced.
        """
        if source.startswith(REMOTE_PREFIXES):
            raise InstallError(
                f"remote template installation is not supported: {source}"
            )
        source_path = Path(source).expanduser()
        if not source_path.is_dir():
            raise InstallError(f"source path does not exist: {source}")
        config = load_config(source_path / CONFIG_FILENAME)

        name = config.name
        if name in (".", "..") or "/" in name or "\\" in name or name != name.strip():
            raise InstallError(f"invalid template name '{name}'")
        target = self.user_dir / name
        if target.resolve().parent != self.user_dir.resolve():
            raise InstallError(f"template '{name}' would be installed outside {self.user_dir}")
        if source_path.resolve() == target.resolve():
            raise InstallError(f"template '{config.name}' is already installed there")
        try:
            replace_tree(source_path, target)
        except OSError as e:
            raise InstallError(f"failed to copy template: {e}") from e

        console.print(
            f"✅ Template '{config.name}' installed "
            f"({len(list_tree_files(target))} files)",
            style="green",
        )
        self.reload()
        return self.get(config.name)
