"""Local filesystem store for attachment sources."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalFileStore:
    """Read attachment files from disk and delete them once consumed."""

    def read_bytes(self, path: Path) -> bytes:
        return Path(path).read_bytes()

    def delete(self, path: Path) -> None:
        """Remove ``path``; a file that is already gone is not an error."""
        Path(path).unlink(missing_ok=True)
        logger.debug("Removed attachment source", extra={"path": str(path)})


__all__ = ["LocalFileStore"]
