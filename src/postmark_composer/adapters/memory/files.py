"""In-memory file store and view renderer for testing.

Contents:
    * :class:`InMemoryFileStore` - FileStore over a dict of path to bytes.
    * :class:`StaticViewRenderer` - ViewRenderer over a dict of path to template.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


def _empty_files() -> dict[Path, bytes]:
    return {}


def _empty_paths() -> list[Path]:
    return []


def _empty_templates() -> dict[Path, str]:
    return {}


@dataclass
class InMemoryFileStore:
    """Dictionary-backed FileStore recording deletions.

    Example:
        >>> store = InMemoryFileStore({Path("/tmp/a.pdf"): b"%PDF"})
        >>> store.read_bytes(Path("/tmp/a.pdf"))
        b'%PDF'
        >>> store.delete(Path("/tmp/a.pdf"))
        >>> store.deleted == [Path("/tmp/a.pdf")]
        True
    """

    files: dict[Path, bytes] = field(default_factory=_empty_files)
    deleted: list[Path] = field(default_factory=_empty_paths)

    def read_bytes(self, path: Path) -> bytes:
        try:
            return self.files[Path(path)]
        except KeyError:
            raise FileNotFoundError(str(path)) from None

    def delete(self, path: Path) -> None:
        self.files.pop(Path(path), None)
        self.deleted.append(Path(path))


@dataclass
class StaticViewRenderer:
    """ViewRenderer formatting stored templates with ``str.format``.

    Unknown paths raise FileNotFoundError, like a missing template file.
    """

    templates: dict[Path, str] = field(default_factory=_empty_templates)
    rendered: list[Path] = field(default_factory=_empty_paths)

    def render(self, path: Path, params: Mapping[str, Any]) -> str:
        self.rendered.append(Path(path))
        try:
            template = self.templates[Path(path)]
        except KeyError:
            raise FileNotFoundError(f"View template '{path}' not found") from None
        return template.format(**params)


__all__ = [
    "InMemoryFileStore",
    "StaticViewRenderer",
]
