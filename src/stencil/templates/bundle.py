"""Template bundles: a read-only file tree plus its parsed config."""

from __future__ import annotations

from dataclasses import dataclass
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Iterator, Optional

from ..config import CONFIG_FILENAME, TemplateConfig, load_config, load_config_text
from ..errors import TemplateConfigError


@dataclass(frozen=True)
class BundleEntry:
    """One node of a bundle tree; ``path`` is POSIX-style and relative to the root."""

    path: str
    node: Traversable

    @property
    def is_dir(self) -> bool:
        return self.node.is_dir()

    def read_bytes(self) -> bytes:
        return self.node.read_bytes()


@dataclass(frozen=True)
class TemplateBundle:
    config: TemplateConfig
    root: Traversable
    source: str = "built-in"
    # Set for bundles that live in a plain directory on disk
    location: Optional[Path] = None

    @property
    def name(self) -> str:
        return self.config.name

    def walk(self) -> Iterator[BundleEntry]:
        """Yield every entry depth-first, siblings sorted by name."""
        yield from _walk(self.root, "")

    @classmethod
    def from_directory(cls, path: Path, source: str = "user") -> "TemplateBundle":
        config = load_config(path / CONFIG_FILENAME)
        return cls(config=config, root=path, source=source, location=path)

    @classmethod
    def from_resource(cls, root: Traversable, source: str = "built-in") -> "TemplateBundle":
        config_file = root.joinpath(CONFIG_FILENAME)
        if not config_file.is_file():
            raise TemplateConfigError(f"{root.name} has no {CONFIG_FILENAME}")
        config = load_config_text(config_file.read_text(encoding="utf-8"))
        return cls(config=config, root=root, source=source)


def _walk(node: Traversable, prefix: str) -> Iterator[BundleEntry]:
    for child in sorted(node.iterdir(), key=lambda c: c.name):
        path = f"{prefix}{child.name}"
        yield BundleEntry(path=path, node=child)
        if child.is_dir():
            yield from _walk(child, path + "/")
