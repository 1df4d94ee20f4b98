"""Composition root wiring adapters to the composer's ports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

# Configuration services
from ..adapters.config.loader import get_config

# Email services
from ..adapters.email.config import MailerConfig, load_mailer_config_from_dict
from ..adapters.email.direct import SmtpDirectSender
from ..adapters.email.postmark import PostmarkClient

# Attachment and view services
from ..adapters.files.local import LocalFileStore

# Logging services
from ..adapters.logging.setup import init_logging
from ..adapters.views.jinja import JinjaViewRenderer
from ..application.composer import MessageComposer
from ..domain.enums import ErrorReportRoute

if TYPE_CHECKING:
    from ..application.ports import (
        DirectSender,
        EmailProviderClient,
        FileStore,
        GetConfig,
        InitLogging,
        ViewRenderer,
    )

    # Static conformance assertions: pyright verifies that each production
    # adapter structurally satisfies its corresponding Protocol.
    _assert_get_config: GetConfig = get_config
    _assert_init_logging: InitLogging = init_logging
    _assert_provider: EmailProviderClient = PostmarkClient("token")
    _assert_direct_sender: DirectSender = SmtpDirectSender(["localhost"])
    _assert_file_store: FileStore = LocalFileStore()
    _assert_view_renderer: ViewRenderer = JinjaViewRenderer()


@dataclass(frozen=True, slots=True)
class MailerServices:
    """Frozen container holding the mailer settings and port implementations."""

    config: MailerConfig
    provider: EmailProviderClient
    file_store: FileStore
    renderer: ViewRenderer | None = None
    direct_sender: DirectSender | None = None

    def composer(self) -> MessageComposer:
        """Return a fresh composer for one logical send."""
        return MessageComposer(
            self.config,
            provider=self.provider,
            file_store=self.file_store,
            renderer=self.renderer,
            direct_sender=self.direct_sender,
        )


def build_production(config: MailerConfig) -> MailerServices:
    """Wire production adapters into a MailerServices container.

    Only the collaborators the enabled capabilities need are created.

    Raises:
        ConfigurationError: When a required setting is missing.
    """
    config.require_complete()
    return MailerServices(
        config=config,
        provider=PostmarkClient.from_config(config),
        file_store=LocalFileStore(),
        renderer=JinjaViewRenderer() if config.view_rendering else None,
        direct_sender=SmtpDirectSender.from_config(config)
        if config.error_report_route is ErrorReportRoute.DIRECT
        else None,
    )


def build_testing(
    config: MailerConfig,
    *,
    provider: EmailProviderClient | None = None,
    file_store: FileStore | None = None,
    renderer: ViewRenderer | None = None,
    direct_sender: DirectSender | None = None,
) -> MailerServices:
    """Wire in-memory adapters into a MailerServices container.

    Any collaborator not supplied is replaced by a fresh in-memory adapter.
    Pass your own spies to assert on captured messages.
    """
    from ..adapters.memory import DirectSendSpy, InMemoryFileStore, ProviderSpy, StaticViewRenderer

    return MailerServices(
        config=config,
        provider=provider if provider is not None else ProviderSpy(),
        file_store=file_store if file_store is not None else InMemoryFileStore(),
        renderer=renderer if renderer is not None else StaticViewRenderer(),
        direct_sender=direct_sender if direct_sender is not None else DirectSendSpy(),
    )


def bootstrap(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
    config_loader: GetConfig = get_config,
    logging_initializer: InitLogging = init_logging,
) -> MailerServices:
    """Load layered configuration, initialise logging and wire production services.

    Intended to run once at application startup; configuration errors
    surface here rather than on the first send.

    Args:
        profile: Optional configuration profile (e.g. ``staging``).
        start_dir: Directory that seeds .env discovery.
        config_loader: Replaces the layered config loader (tests).
        logging_initializer: Replaces lib_log_rich initialisation (tests).

    Raises:
        ConfigurationError: When the ``[mailer]`` section is invalid or incomplete.

    Example:
        >>> services = bootstrap(profile="staging")  # doctest: +SKIP
        >>> services.composer().set_to("jane@example.com").set_subject("Hi")  # doctest: +SKIP
    """
    config = config_loader(profile=profile, start_dir=start_dir)
    logging_initializer(config)
    return build_production(load_mailer_config_from_dict(config.as_dict()))


__all__ = [
    "MailerServices",
    "bootstrap",
    "build_production",
    "build_testing",
]
