"""In-memory adapter implementations for testing.

Provides lightweight implementations of all application ports that operate
entirely in memory -- no filesystem, no HTTP, no SMTP, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration adapter
    * :mod:`.email` - Provider and direct-send spies
    * :mod:`.files` - In-memory file store and view renderer
    * :mod:`.logging` - Logging initializer spy
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import get_config_in_memory
from .email import DirectSendSpy, ProviderSpy
from .files import InMemoryFileStore, StaticViewRenderer
from .logging import LoggingInitSpy

# Static conformance assertions
if TYPE_CHECKING:
    from postmark_composer.application.ports import (
        DirectSender,
        EmailProviderClient,
        FileStore,
        GetConfig,
        InitLogging,
        ViewRenderer,
    )

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_init_logging: InitLogging = LoggingInitSpy()
    _assert_provider: EmailProviderClient = ProviderSpy()
    _assert_direct_sender: DirectSender = DirectSendSpy()
    _assert_file_store: FileStore = InMemoryFileStore()
    _assert_view_renderer: ViewRenderer = StaticViewRenderer()

__all__ = [
    "DirectSendSpy",
    "InMemoryFileStore",
    "LoggingInitSpy",
    "ProviderSpy",
    "StaticViewRenderer",
    "get_config_in_memory",
]
