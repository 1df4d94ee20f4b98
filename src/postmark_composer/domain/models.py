"""Value objects describing a composed message and the environment policy."""

from __future__ import annotations

from dataclasses import dataclass, field

from .addresses import format_address, join_address_list
from .errors import ValidationError


@dataclass(frozen=True, slots=True)
class Address:
    """A mailbox with an optional display name.

    Example:
        >>> Address("safe@example.com").formatted()
        'safe@example.com'
        >>> Address("safe@example.com", "Safe Inbox").formatted()
        'Safe Inbox <safe@example.com>,'
    """

    email: str
    display_name: str | None = None

    def formatted(self) -> str:
        """Return the address-list entry for this mailbox."""
        return format_address(self.email, self.display_name)


@dataclass(frozen=True, slots=True)
class Attachment:
    """An in-memory attachment ready to be encoded for the provider."""

    name: str
    content: bytes = field(repr=False)
    content_type: str


@dataclass(frozen=True, slots=True)
class DeliveryReceipt:
    """The provider's answer to a send request.

    Example:
        >>> DeliveryReceipt(error_code=0, message="OK").succeeded
        True
        >>> DeliveryReceipt(error_code=300, message="Invalid email request").succeeded
        False
    """

    error_code: int
    message: str = ""
    message_id: str | None = None
    to: str | None = None
    submitted_at: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error_code == 0


@dataclass(frozen=True, slots=True)
class EnvironmentPolicy:
    """Decides whether live recipients receive mail in this environment.

    Example:
        >>> policy = EnvironmentPolicy(
        ...     current_environment="staging",
        ...     production_environments=frozenset({"production"}),
        ...     safe_address=Address("safe@example.com"),
        ...     error_address="errors@example.com",
        ... )
        >>> policy.delivers_live_mail()
        False
        >>> policy.subject_prefix
        '[staging] '
    """

    current_environment: str
    production_environments: frozenset[str]
    safe_address: Address
    error_address: str

    def delivers_live_mail(self) -> bool:
        """Return True when the current environment is a production environment."""
        return self.current_environment in self.production_environments

    @property
    def subject_prefix(self) -> str:
        return f"[{self.current_environment}] "


@dataclass(frozen=True, slots=True)
class OutgoingMessage:
    """Immutable snapshot of everything the composer has accumulated."""

    recipients: tuple[str, ...] = ()
    sender: str | None = None
    subject: str | None = None
    html_body: str | None = None
    plain_text_body: str | None = None
    attachments: tuple[Attachment, ...] = ()

    @property
    def to(self) -> str:
        """Recipients rendered as the provider's address-list string."""
        return join_address_list(self.recipients)

    def validate(self) -> None:
        """Ensure the message is sendable.

        Checks run in a fixed order: recipients, subject, body.

        Raises:
            ValidationError: Naming the first missing field.

        Example:
            >>> OutgoingMessage(recipients=("a@example.com",), subject="Hi").validate()  # doctest: +IGNORE_EXCEPTION_DETAIL
            Traceback (most recent call last):
            ...
            ValidationError: body cannot be blank
        """
        if not self.to:
            raise ValidationError("to")
        if not self.subject:
            raise ValidationError("subject")
        if not self.html_body and not self.plain_text_body:
            raise ValidationError("body")


__all__ = [
    "Address",
    "Attachment",
    "DeliveryReceipt",
    "EnvironmentPolicy",
    "OutgoingMessage",
]
