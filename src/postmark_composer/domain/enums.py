"""Type-safe domain enums for mailer capabilities."""

from __future__ import annotations

from enum import Enum


class ErrorReportRoute(str, Enum):
    """Delivery path used for error-report messages.

    Error reports bypass environment redirection. They either travel the
    regular provider path or are handed to a direct sender (local SMTP) so
    they still arrive when the provider itself is the failing component.
    Inherits from str so TOML string values validate directly.

    Attributes:
        PROVIDER: Send error reports through the provider API, unmodified.
        DIRECT: Send error reports through the direct sender.

    Example:
        >>> ErrorReportRoute.PROVIDER.value
        'provider'
        >>> ErrorReportRoute.DIRECT == "direct"
        True
    """

    PROVIDER = "provider"
    DIRECT = "direct"


__all__ = [
    "ErrorReportRoute",
]
