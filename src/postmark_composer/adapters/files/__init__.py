"""File adapter - attachment sources on the local filesystem.

Contents:
    * :class:`.local.LocalFileStore` - FileStore backed by pathlib
"""

from __future__ import annotations

from .local import LocalFileStore

__all__ = ["LocalFileStore"]
