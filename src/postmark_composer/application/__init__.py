"""Application layer - the composer use case and port definitions.

Contents:
    * :mod:`.composer` - MessageComposer builder and send pipeline
    * :mod:`.ports` - Protocol definitions for adapter implementations
"""

from __future__ import annotations

from .composer import MessageComposer
from .ports import (
    DirectSender,
    EmailProviderClient,
    FileStore,
    GetConfig,
    InitLogging,
    ViewRenderer,
)

__all__ = [
    "DirectSender",
    "EmailProviderClient",
    "FileStore",
    "GetConfig",
    "InitLogging",
    "MessageComposer",
    "ViewRenderer",
]
