"""Direct SMTP delivery for error reports.

Implements the DirectSender port with btx_lib_mail. Error reports can take
this route so they still arrive when the provider API is what is failing;
by default the message is handed to the local mail transfer agent.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from btx_lib_mail.lib_mail import send as btx_send

from postmark_composer.domain.errors import ConfigurationError, TransportError

if TYPE_CHECKING:
    from .config import MailerConfig

logger = logging.getLogger(__name__)


class SmtpDirectSender:
    """Send plain SMTP mail through the configured hosts.

    Args:
        smtp_hosts: ``host[:port]`` entries tried in order.
        credentials: Optional ``(username, password)`` pair.
        use_starttls: Upgrade the connection with STARTTLS.
        timeout: Socket timeout in seconds.
    """

    def __init__(
        self,
        smtp_hosts: Sequence[str],
        *,
        credentials: tuple[str, str] | None = None,
        use_starttls: bool = False,
        timeout: float = 30.0,
    ) -> None:
        self._smtp_hosts = list(smtp_hosts)
        self._credentials = credentials
        self._use_starttls = use_starttls
        self._timeout = timeout

    @classmethod
    def from_config(cls, config: MailerConfig) -> SmtpDirectSender:
        credentials = None
        if config.direct_smtp_username is not None and config.direct_smtp_password is not None:
            credentials = (config.direct_smtp_username, config.direct_smtp_password)
        return cls(
            config.direct_smtp_hosts,
            credentials=credentials,
            use_starttls=config.direct_use_starttls,
            timeout=config.direct_timeout,
        )

    def send_direct(
        self,
        *,
        sender: str,
        recipients: Sequence[str],
        subject: str,
        html_body: str = "",
        text_body: str = "",
    ) -> bool:
        """Deliver one message over SMTP.

        Returns:
            True when every recipient was accepted.

        Raises:
            ConfigurationError: When no SMTP hosts are configured.
            TransportError: When all SMTP hosts failed.
        """
        if not self._smtp_hosts:
            raise ConfigurationError("No SMTP hosts configured (mailer.direct.smtp_hosts is empty)")

        logger.info(
            "Sending email directly",
            extra={"sender": sender, "recipients": list(recipients), "smtp_hosts": self._smtp_hosts},
        )

        try:
            result = btx_send(
                mail_from=sender,
                mail_recipients=list(recipients),
                mail_subject=subject,
                mail_body=text_body,
                mail_body_html=html_body,
                smtphosts=self._smtp_hosts,
                credentials=self._credentials,
                use_starttls=self._use_starttls,
                timeout=self._timeout,
            )
        except RuntimeError as exc:
            logger.debug("Direct SMTP delivery failed", exc_info=True)
            raise TransportError(str(exc)) from exc

        if not result:
            logger.warning("Direct send returned failure", extra={"recipients": list(recipients)})
        return result


__all__ = [
    "SmtpDirectSender",
]
