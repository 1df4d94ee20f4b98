"""Postmark HTTP API client.

Implements the EmailProviderClient port by POSTing JSON to Postmark's
``/email`` endpoint with httpx. API-level rejections (HTTP 422) come back
as a DeliveryReceipt carrying Postmark's non-zero ``ErrorCode``; any other
unexpected answer raises ProviderError, network failures TransportError.
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, cast

import httpx
import orjson

from postmark_composer.domain.errors import ProviderError, TransportError
from postmark_composer.domain.models import Attachment, DeliveryReceipt

from .config import DEFAULT_API_URL

if TYPE_CHECKING:
    from .config import MailerConfig

logger = logging.getLogger(__name__)

_HTTP_OK = 200
_HTTP_UNPROCESSABLE = 422

# Keywords that may indicate sensitive data in exception messages
_SENSITIVE_KEYWORDS = frozenset(
    {
        "password",
        "credential",
        "auth",
        "secret",
        "token",
        "key",
        "login",
    }
)


def _sanitize_message(text: str) -> str:
    """Replace text that may mention credentials with a generic message.

    Example:
        >>> _sanitize_message("Connection refused")
        'Connection refused'
        >>> _sanitize_message("Request does not contain a valid Server token.")
        'Email delivery failed. Check the Postmark server token configuration.'
    """
    lowered = text.lower()
    if any(keyword in lowered for keyword in _SENSITIVE_KEYWORDS):
        return "Email delivery failed. Check the Postmark server token configuration."
    return text


def _encode_attachment(attachment: Attachment) -> dict[str, str]:
    return {
        "Name": attachment.name,
        "Content": base64.b64encode(attachment.content).decode("ascii"),
        "ContentType": attachment.content_type,
    }


def build_payload(
    *,
    sender: str | None,
    to: str,
    subject: str,
    html_body: str | None = None,
    text_body: str | None = None,
    attachments: Sequence[Attachment] = (),
    track_opens: bool = True,
) -> dict[str, Any]:
    """Build the JSON body for Postmark's single-message endpoint.

    Unset fields are omitted, so no tag, reply-to, cc, bcc, headers,
    metadata or link tracking are ever sent.

    Example:
        >>> payload = build_payload(sender="app@example.com", to="a@example.com", subject="Hi", text_body="Hello")
        >>> sorted(payload)
        ['From', 'Subject', 'TextBody', 'To', 'TrackOpens']
    """
    payload: dict[str, Any] = {
        "From": sender,
        "To": to,
        "Subject": subject,
        "HtmlBody": html_body,
        "TextBody": text_body,
        "TrackOpens": track_opens,
    }
    if attachments:
        payload["Attachments"] = [_encode_attachment(attachment) for attachment in attachments]
    return {key: value for key, value in payload.items() if value is not None}


def _receipt_from_response(data: object) -> DeliveryReceipt:
    if not isinstance(data, dict):
        raise ProviderError("Postmark returned an unexpected response body")
    body = cast(dict[str, Any], data)
    error_code = body.get("ErrorCode")
    if not isinstance(error_code, int):
        raise ProviderError("Postmark response has no ErrorCode")
    message_id = body.get("MessageID")
    return DeliveryReceipt(
        error_code=error_code,
        message=str(body.get("Message", "")),
        message_id=str(message_id) if message_id else None,
        to=body.get("To"),
        submitted_at=body.get("SubmittedAt"),
    )


class PostmarkClient:
    """Send single messages through the Postmark API.

    Args:
        server_token: Postmark server API token.
        api_url: Base URL of the API.
        timeout: Request timeout in seconds.
        client: Optional pre-configured httpx client; module-level
            ``httpx.post`` is used when omitted.

    Example:
        >>> PostmarkClient("token").endpoint
        'https://api.postmarkapp.com/email'
    """

    def __init__(
        self,
        server_token: str,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._server_token = server_token
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._client = client

    @classmethod
    def from_config(cls, config: MailerConfig, *, client: httpx.Client | None = None) -> PostmarkClient:
        return cls(config.server_token or "", api_url=config.api_url, timeout=config.timeout, client=client)

    @property
    def endpoint(self) -> str:
        return f"{self._api_url}/email"

    def __repr__(self) -> str:
        return f"PostmarkClient(api_url={self._api_url!r}, server_token='[REDACTED]')"

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
        """Submit one message and return Postmark's receipt.

        Raises:
            TransportError: When the API cannot be reached.
            ProviderError: On any status other than 200/422, or an unreadable body.
        """
        payload = build_payload(
            sender=sender,
            to=to,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
            attachments=attachments,
            track_opens=track_opens,
        )
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "X-Postmark-Server-Token": self._server_token,
        }
        post = self._client.post if self._client is not None else httpx.post

        try:
            response = post(self.endpoint, content=orjson.dumps(payload), headers=headers, timeout=self._timeout)
        except httpx.HTTPError as exc:
            logger.debug("Postmark request failed", exc_info=True)
            raise TransportError(_sanitize_message(str(exc))) from exc

        if response.status_code not in (_HTTP_OK, _HTTP_UNPROCESSABLE):
            raise ProviderError(
                _sanitize_message(f"Postmark returned HTTP {response.status_code}: {response.text}"),
                status_code=response.status_code,
            )

        try:
            data = orjson.loads(response.content)
        except orjson.JSONDecodeError as exc:
            raise ProviderError("Postmark returned malformed JSON", status_code=response.status_code) from exc

        return _receipt_from_response(data)


__all__ = [
    "PostmarkClient",
    "build_payload",
]
