"""Application ports: Protocol definitions for the composer's collaborators.

The composer talks to views, the provider, the filesystem and the direct
sender only through these protocols. Production adapters and the in-memory
adapters satisfy them structurally (PEP 544).

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``) are
    imported under ``TYPE_CHECKING`` only, so the application layer has no
    runtime dependency on adapter libraries.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from ..domain.models import Attachment, DeliveryReceipt

if TYPE_CHECKING:
    from lib_layered_config import Config


class ViewRenderer(Protocol):
    """Render a view template into a string."""

    def render(self, path: Path, params: Mapping[str, Any]) -> str: ...


class EmailProviderClient(Protocol):
    """Submit a fully composed message to the transactional-email provider."""

    def send_email(
        self,
        *,
        sender: str | None,
        to: str,
        subject: str,
        html_body: str | None = ...,
        text_body: str | None = ...,
        attachments: Sequence[Attachment] = ...,
        track_opens: bool = ...,
    ) -> DeliveryReceipt: ...


class DirectSender(Protocol):
    """Deliver a message without the provider (used for error reports)."""

    def send_direct(
        self,
        *,
        sender: str,
        recipients: Sequence[str],
        subject: str,
        html_body: str = ...,
        text_body: str = ...,
    ) -> bool: ...


class FileStore(Protocol):
    """Read attachment sources and remove them afterwards."""

    def read_bytes(self, path: Path) -> bytes: ...

    def delete(self, path: Path) -> None: ...


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "DirectSender",
    "EmailProviderClient",
    "FileStore",
    "GetConfig",
    "InitLogging",
    "ViewRenderer",
]
