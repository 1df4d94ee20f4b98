"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete configuration.

    Raised when a required mailer setting is absent or malformed. Surfaces
    at construction or config-load time so misconfiguration fails at startup
    rather than on the first send.

    Example:
        >>> from postmark_composer.domain.errors import ConfigurationError
        >>> err = ConfigurationError("server_token must be set")
        >>> str(err)
        'server_token must be set'
    """


class ValidationError(Exception):
    """A composed message is missing a field required for sending.

    Carries the name of the offending field (``to``, ``subject`` or
    ``body``) so callers and logs can tell which check failed.

    Example:
        >>> err = ValidationError("subject")
        >>> err.field
        'subject'
        >>> str(err)
        'subject cannot be blank'
    """

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field} cannot be blank")


class UnsupportedFormatError(Exception):
    """An external message description cannot be represented.

    Raised in auto mode when a description carries more than one sender,
    since a Postmark message has exactly one ``From``.

    Example:
        >>> str(UnsupportedFormatError("multiple senders are not supported"))
        'multiple senders are not supported'
    """


class DeliveryError(Exception):
    """Email delivery failed after the message left the composer.

    Base class for provider and transport failures.
    """


class ProviderError(DeliveryError):
    """The provider rejected the request or answered unexpectedly.

    Example:
        >>> err = ProviderError("Unexpected response", status_code=500)
        >>> err.status_code
        500
        >>> isinstance(err, DeliveryError)
        True
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class TransportError(DeliveryError):
    """The provider could not be reached (connection, timeout, protocol)."""


__all__ = [
    "ConfigurationError",
    "DeliveryError",
    "ProviderError",
    "TransportError",
    "UnsupportedFormatError",
    "ValidationError",
]
