"""SmtpDirectSender: hand-off to btx_lib_mail and SMTP failure handling."""

from __future__ import annotations

import logging
from collections.abc import Callable
from unittest.mock import patch

import pytest

from postmark_composer.adapters.email.config import MailerConfig
from postmark_composer.adapters.email.direct import SmtpDirectSender
from postmark_composer.domain.errors import ConfigurationError, TransportError

_BTX_SEND = "postmark_composer.adapters.email.direct.btx_send"


def _send(sender: SmtpDirectSender) -> bool:
    return sender.send_direct(
        sender="app@x.com",
        recipients=["errors@x.com"],
        subject="Crash",
        html_body="<pre>Traceback</pre>",
        text_body="Traceback",
    )


@pytest.mark.os_agnostic
def test_send_direct_passes_message_to_btx_send() -> None:
    """Every message field and SMTP option reaches btx_lib_mail."""
    sender = SmtpDirectSender(["mail.internal:25"], credentials=("relay", "pw"), use_starttls=True, timeout=5.0)

    with patch(_BTX_SEND, return_value=True) as mock_send:
        assert _send(sender) is True

    mock_send.assert_called_once_with(
        mail_from="app@x.com",
        mail_recipients=["errors@x.com"],
        mail_subject="Crash",
        mail_body="Traceback",
        mail_body_html="<pre>Traceback</pre>",
        smtphosts=["mail.internal:25"],
        credentials=("relay", "pw"),
        use_starttls=True,
        timeout=5.0,
    )


@pytest.mark.os_agnostic
def test_send_direct_delivers_through_smtp() -> None:
    """With smtplib patched the real btx_lib_mail path succeeds."""
    with patch("smtplib.SMTP"):
        assert _send(SmtpDirectSender(["localhost"])) is True


@pytest.mark.os_agnostic
def test_send_direct_logs_warning_on_false_result(caplog: pytest.LogCaptureFixture) -> None:
    """A False result from btx_send is returned and logged."""
    with patch(_BTX_SEND, return_value=False), caplog.at_level(logging.WARNING):
        assert _send(SmtpDirectSender(["localhost"])) is False

    assert "Direct send returned failure" in caplog.text


@pytest.mark.os_agnostic
def test_send_direct_wraps_smtp_failure_in_transport_error() -> None:
    """btx_lib_mail's RuntimeError becomes TransportError."""
    with (
        patch(_BTX_SEND, side_effect=RuntimeError("all smtp hosts failed")),
        pytest.raises(TransportError, match="all smtp hosts failed"),
    ):
        _send(SmtpDirectSender(["localhost"]))


@pytest.mark.os_agnostic
def test_send_direct_without_hosts_is_configuration_error() -> None:
    """An empty host list cannot deliver anything."""
    with pytest.raises(ConfigurationError, match="No SMTP hosts configured"):
        _send(SmtpDirectSender([]))


@pytest.mark.os_agnostic
def test_from_config_reads_direct_settings(mailer_config_factory: Callable[..., MailerConfig]) -> None:
    """Credentials are passed only when both username and password are set."""
    config = mailer_config_factory(
        direct_smtp_hosts=["mail.internal:587"],
        direct_smtp_username="relay",
        direct_smtp_password="pw",
        direct_use_starttls=True,
        direct_timeout=7.0,
    )

    with patch(_BTX_SEND, return_value=True) as mock_send:
        _send(SmtpDirectSender.from_config(config))

    kwargs = mock_send.call_args.kwargs
    assert kwargs["smtphosts"] == ["mail.internal:587"]
    assert kwargs["credentials"] == ("relay", "pw")
    assert kwargs["use_starttls"] is True
    assert kwargs["timeout"] == 7.0


@pytest.mark.os_agnostic
def test_from_config_without_password_sends_anonymously(mailer_config_factory: Callable[..., MailerConfig]) -> None:
    """A username alone does not produce credentials."""
    config = mailer_config_factory(direct_smtp_username="relay")

    with patch(_BTX_SEND, return_value=True) as mock_send:
        _send(SmtpDirectSender.from_config(config))

    assert mock_send.call_args.kwargs["credentials"] is None
