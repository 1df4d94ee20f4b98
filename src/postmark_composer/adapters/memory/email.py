"""In-memory email adapters for testing.

Provide provider and direct-send implementations that satisfy the same
Protocols as the production adapters but perform no network operations.

Contents:
    * :class:`ProviderSpy` - Captures provider submissions for assertions.
    * :class:`DirectSendSpy` - Captures direct sends for assertions.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from ...domain.models import Attachment, DeliveryReceipt


def _empty_email_list() -> list[dict[str, Any]]:
    """Create an empty typed list for email records."""
    return []


@dataclass
class ProviderSpy:
    """Captures provider submissions for test assertions.

    Each test should create its own spy to avoid cross-test pollution.

    Attributes:
        sent: Captured ``send_email`` calls, one dict per call.
        error_code: ErrorCode placed in the returned receipts.
        raise_exception: When set, ``send_email`` raises it after recording.

    Example:
        >>> spy = ProviderSpy()
        >>> spy.send_email(sender=None, to="a@example.com", subject="Hi", text_body="Hello").succeeded
        True
        >>> len(spy.sent)
        1
    """

    sent: list[dict[str, Any]] = field(default_factory=_empty_email_list)
    error_code: int = 0
    raise_exception: Exception | None = None

    def clear(self) -> None:
        """Reset captured data for next test."""
        self.sent.clear()
        self.error_code = 0
        self.raise_exception = None

    def send_email(
        self,
        *,
        sender: str | None,
        to: str,
        subject: str,
        html_body: str | None = None,
        text_body: str | None = None,
        attachments: Sequence[Attachment] = (),
        track_opens: bool = True,
    ) -> DeliveryReceipt:
        """Record the call and return a receipt carrying ``error_code``.

        Raises:
            Exception: If raise_exception is set, raises that exception.
        """
        self.sent.append(
            {
                "sender": sender,
                "to": to,
                "subject": subject,
                "html_body": html_body,
                "text_body": text_body,
                "attachments": list(attachments),
                "track_opens": track_opens,
            }
        )
        if self.raise_exception is not None:
            raise self.raise_exception
        return DeliveryReceipt(
            error_code=self.error_code,
            message="OK" if self.error_code == 0 else "Rejected",
            message_id=f"spy-{len(self.sent)}" if self.error_code == 0 else None,
            to=to,
        )


@dataclass
class DirectSendSpy:
    """Captures direct sends for test assertions.

    Attributes:
        sent: Captured ``send_direct`` calls.
        should_fail: When True, ``send_direct`` returns False.
    """

    sent: list[dict[str, Any]] = field(default_factory=_empty_email_list)
    should_fail: bool = False

    def send_direct(
        self,
        *,
        sender: str,
        recipients: Sequence[str],
        subject: str,
        html_body: str = "",
        text_body: str = "",
    ) -> bool:
        """Record the call and return success unless ``should_fail`` is set."""
        self.sent.append(
            {
                "sender": sender,
                "recipients": list(recipients),
                "subject": subject,
                "html_body": html_body,
                "text_body": text_body,
            }
        )
        return not self.should_fail


__all__ = [
    "DirectSendSpy",
    "ProviderSpy",
]
