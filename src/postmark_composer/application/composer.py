"""Fluent message composer submitting mail through the provider port.

The composer accumulates recipients, sender, subject, bodies and
attachments through chained builder calls, then validates and submits the
result. Before submission it classifies error reports (which bypass
redirection and may take the direct-send route) and, outside production,
redirects everything else to the configured safe address.

Contents:
    * :class:`MessageComposer` - builder and send pipeline.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from email.message import EmailMessage, Message
from email.utils import getaddresses, parseaddr
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..domain.addresses import format_address, is_error_report, split_address_list, strip_tags
from ..domain.enums import ErrorReportRoute
from ..domain.errors import ConfigurationError, UnsupportedFormatError
from ..domain.models import Attachment, EnvironmentPolicy, OutgoingMessage
from .ports import DirectSender, EmailProviderClient, FileStore, ViewRenderer

if TYPE_CHECKING:
    from ..adapters.email.config import MailerConfig

logger = logging.getLogger(__name__)

ViewSelector = str | Mapping[str, str]


class MessageComposer:
    """Compose a transactional email and submit it.

    Builder methods return the composer so calls chain. :meth:`send` never
    raises: every failure is logged and reported as ``False``.

    Args:
        config: Validated mailer settings.
        provider: Client submitting messages to the provider API.
        file_store: Source of attachment bytes; removes consumed files.
        renderer: View renderer, required when view rendering is enabled.
        direct_sender: Required when error reports use the direct route.

    Raises:
        ConfigurationError: When a required setting or collaborator is missing.

    Example:
        >>> from postmark_composer.adapters.email.config import MailerConfig
        >>> from postmark_composer.adapters.memory import InMemoryFileStore, ProviderSpy
        >>> config = MailerConfig(
        ...     server_token="token",
        ...     error_email_address="errors@example.com",
        ...     safe_email_address="safe@example.com",
        ...     current_environment="production",
        ...     production_environments=["production"],
        ...     view_rendering=False,
        ... )
        >>> spy = ProviderSpy()
        >>> composer = MessageComposer(config, provider=spy, file_store=InMemoryFileStore())
        >>> composer.set_to("jane@example.com").set_subject("Hi").set_plain_text_body("Hello").send()
        True
        >>> spy.sent[0]["to"]
        'jane@example.com'
    """

    def __init__(
        self,
        config: MailerConfig,
        *,
        provider: EmailProviderClient,
        file_store: FileStore,
        renderer: ViewRenderer | None = None,
        direct_sender: DirectSender | None = None,
    ) -> None:
        config.require_complete()
        if config.view_rendering and renderer is None:
            raise ConfigurationError("view rendering is enabled but no view renderer was provided")
        if config.error_report_route is ErrorReportRoute.DIRECT and direct_sender is None:
            raise ConfigurationError("error_report_route is 'direct' but no direct sender was provided")

        self._config = config
        self._provider = provider
        self._files = file_store
        self._renderer = renderer
        self._direct_sender = direct_sender
        self._policy: EnvironmentPolicy | None = config.environment_policy() if config.environment_redirection else None

        self._recipients: list[str] = []
        self._sender: str | None = None
        self._subject: str | None = None
        self._html_body: str | None = None
        self._plain_text_body: str | None = None
        self._attachments: list[Attachment] = []

    @property
    def message(self) -> OutgoingMessage:
        """Immutable snapshot of the current composition."""
        return OutgoingMessage(
            recipients=tuple(self._recipients),
            sender=self._sender,
            subject=self._subject,
            html_body=self._html_body,
            plain_text_body=self._plain_text_body,
            attachments=tuple(self._attachments),
        )

    def reset(self) -> MessageComposer:
        """Discard everything composed so far."""
        return self._restore(OutgoingMessage())

    # ------------------------------------------------------------------ builder

    def set_subject(self, subject: str) -> MessageComposer:
        self._subject = subject
        return self

    def set_html_body(self, body: str) -> MessageComposer:
        self._html_body = body
        return self

    def set_plain_text_body(self, body: str) -> MessageComposer:
        self._plain_text_body = body
        return self

    def set_to(self, email: str, name: str | None = None) -> MessageComposer:
        """Replace all recipients with a single address."""
        self._recipients = [format_address(email, name)]
        return self

    def add_to(self, email: str, name: str | None = None) -> MessageComposer:
        """Append a recipient, keeping the ones already added."""
        self._recipients.append(format_address(email, name))
        return self

    def set_from(self, email: str, name: str | None = None) -> MessageComposer:
        self._sender = format_address(email, name)
        return self

    def add_attachment(self, name: str, file_path: str | Path, content_type: str) -> MessageComposer:
        """Capture a file as an attachment and delete the source file.

        The source is removed as soon as its bytes are read, whether or not
        the message is sent afterwards. Read errors propagate and leave the
        file untouched.
        """
        path = Path(file_path)
        content = self._files.read_bytes(path)
        self._attachments.append(Attachment(name=name, content=content, content_type=content_type))
        self._files.delete(path)
        return self

    def compose_from_views(self, views: ViewSelector, params: Mapping[str, Any]) -> MessageComposer:
        """Render the HTML and plaintext bodies from view templates.

        Args:
            views: An HTML view name, or a mapping with an ``html`` key and an
                optional ``text`` key. Names resolve against ``view_path``.
            params: Template parameters passed to both views.

        A missing or failing plaintext view falls back to the HTML body with
        tags stripped. A failing HTML view leaves the HTML body empty.

        Raises:
            ConfigurationError: When view rendering is disabled.
        """
        if not self._config.view_rendering or self._renderer is None:
            raise ConfigurationError("view rendering is disabled")

        if isinstance(views, str):
            html_view, text_view = views, None
        else:
            html_view, text_view = views["html"], views.get("text")

        html_body = self._render(html_view, params)
        if html_body is None:
            html_body = ""

        text_body = self._render(text_view, params) if text_view else None
        if text_body is None:
            text_body = strip_tags(html_body)

        return self.set_html_body(html_body).set_plain_text_body(text_body)

    # ------------------------------------------------------------------ sending

    def send(self, description: Message | None = None) -> bool:
        """Validate and submit the composed message.

        Args:
            description: Optional stdlib message copied in first. Its
                ``To``, ``From`` and ``Subject`` headers replace the
                composed ones outright, so a missing or empty header clears
                the field. Bodies are taken from an
                :class:`~email.message.EmailMessage` when it has them and are
                otherwise kept as composed.

        Returns:
            True when the provider (or direct sender) accepted the message.
            Any error is logged and reported as False.
        """
        try:
            if description is not None:
                self._populate(description)
            return self._deliver(self.message)
        except Exception as exc:
            logger.warning(
                "Email not sent",
                extra={"error_type": type(exc).__name__, "reason": str(exc)},
            )
            logger.debug("Email send failed", exc_info=True)
            return False

    def send_multiple(self, descriptions: Iterable[Message]) -> int:
        """Send one message per description and count the successes.

        The state composed before the call is restored ahead of each item.
        Since description headers always win, only the composed bodies and
        attachments act as a shared template. A failing item does not stop
        the batch.
        """
        template = self.message
        attempted = 0
        delivered = 0
        for description in descriptions:
            attempted += 1
            self._restore(template)
            if self.send(description):
                delivered += 1
        logger.info("Batch send finished", extra={"attempted": attempted, "delivered": delivered})
        return delivered

    # ------------------------------------------------------------------ internals

    def _restore(self, message: OutgoingMessage) -> MessageComposer:
        self._recipients = list(message.recipients)
        self._sender = message.sender
        self._subject = message.subject
        self._html_body = message.html_body
        self._plain_text_body = message.plain_text_body
        self._attachments = list(message.attachments)
        return self

    def _render(self, view: str, params: Mapping[str, Any]) -> str | None:
        if self._renderer is None:
            raise ConfigurationError("view rendering is disabled")
        path = Path(self._config.view_path or "") / view
        try:
            return self._renderer.render(path, params)
        except Exception as exc:
            logger.warning(
                "View rendering failed",
                extra={"view": str(path), "error_type": type(exc).__name__, "reason": str(exc)},
            )
            return None

    def _populate(self, description: Message) -> None:
        senders = getaddresses(description.get_all("From", []))
        if len(senders) > 1:
            raise UnsupportedFormatError("multiple senders are not supported")

        # Headers replace composed state even when absent or empty; only bodies carry over.
        recipients = getaddresses(description.get_all("To", []))
        self._recipients = [format_address(email, name or None) for name, email in recipients if email]
        self._sender = None
        if senders and senders[0][1]:
            name, email = senders[0]
            self.set_from(email, name or None)

        subject = description.get("Subject")
        self._subject = None if subject is None else str(subject)

        if isinstance(description, EmailMessage):
            html_part = description.get_body(preferencelist=("html",))
            if html_part is not None:
                self.set_html_body(html_part.get_content())
            plain_part = description.get_body(preferencelist=("plain",))
            if plain_part is not None:
                self.set_plain_text_body(plain_part.get_content())

    def _deliver(self, message: OutgoingMessage) -> bool:
        message.validate()

        if is_error_report(message.to, self._config.error_email_address or ""):
            logger.info(
                "Sending error report",
                extra={"route": self._config.error_report_route.value, "recipients": message.to},
            )
            if self._config.error_report_route is ErrorReportRoute.DIRECT:
                return self._send_direct(message)
            return self._submit(message)

        if self._policy is not None and not self._policy.delivers_live_mail():
            logger.info(
                "Redirecting email to safe address",
                extra={
                    "environment": self._policy.current_environment,
                    "original_recipients": message.to,
                },
            )
            message = replace(
                message,
                recipients=(self._policy.safe_address.formatted(),),
                subject=f"{self._policy.subject_prefix}{message.subject}",
            )

        return self._submit(message)

    def _submit(self, message: OutgoingMessage) -> bool:
        sender = message.sender or self._config.from_address
        logger.info(
            "Sending email",
            extra={
                "sender": sender,
                "recipients": message.to,
                "subject": message.subject,
                "has_html": bool(message.html_body),
                "attachment_count": len(message.attachments),
            },
        )

        receipt = self._provider.send_email(
            sender=sender,
            to=message.to,
            subject=message.subject or "",
            html_body=message.html_body,
            text_body=message.plain_text_body,
            attachments=message.attachments,
            track_opens=True,
        )

        if receipt.succeeded:
            logger.info(
                "Email sent successfully",
                extra={"recipients": message.to, "message_id": receipt.message_id},
            )
        else:
            logger.warning(
                "Provider rejected email",
                extra={"recipients": message.to, "error_code": receipt.error_code, "reason": receipt.message},
            )
        return receipt.succeeded

    def _send_direct(self, message: OutgoingMessage) -> bool:
        if self._direct_sender is None:
            raise ConfigurationError("error_report_route is 'direct' but no direct sender was provided")
        raw_sender = message.sender or self._config.from_address
        if not raw_sender:
            raise ConfigurationError("No sender set and no from_address configured")

        _, sender = parseaddr(raw_sender.rstrip(","))
        recipients = [email for _, email in map(parseaddr, split_address_list(message.to)) if email]
        return self._direct_sender.send_direct(
            sender=sender,
            recipients=recipients,
            subject=message.subject or "",
            html_body=message.html_body or "",
            text_body=message.plain_text_body or "",
        )


__all__ = [
    "MessageComposer",
    "ViewSelector",
]
