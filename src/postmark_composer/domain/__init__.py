"""Domain layer - pure business logic with no I/O or framework dependencies.

Contains the value objects, address-list rules and error taxonomy that the
composer is built on.

Contents:
    * :mod:`.addresses` - Address formatting and list inspection
    * :mod:`.enums` - Domain enumerations (ErrorReportRoute)
    * :mod:`.errors` - Domain exception types
    * :mod:`.models` - Message, attachment, receipt and policy value objects
"""

from __future__ import annotations

from .addresses import (
    format_address,
    is_error_report,
    join_address_list,
    split_address_list,
    strip_tags,
)
from .enums import ErrorReportRoute
from .errors import (
    ConfigurationError,
    DeliveryError,
    ProviderError,
    TransportError,
    UnsupportedFormatError,
    ValidationError,
)
from .models import Address, Attachment, DeliveryReceipt, EnvironmentPolicy, OutgoingMessage

__all__ = [
    # Addresses
    "format_address",
    "is_error_report",
    "join_address_list",
    "split_address_list",
    "strip_tags",
    # Enums
    "ErrorReportRoute",
    # Errors
    "ConfigurationError",
    "DeliveryError",
    "ProviderError",
    "TransportError",
    "UnsupportedFormatError",
    "ValidationError",
    # Models
    "Address",
    "Attachment",
    "DeliveryReceipt",
    "EnvironmentPolicy",
    "OutgoingMessage",
]
