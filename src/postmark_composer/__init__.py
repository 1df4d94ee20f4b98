"""Public package surface for composing and sending transactional email.

This module provides the stable public API for the package, routing imports
through the proper architectural layers:
- Domain exports: value objects and error types
- Application exports: the MessageComposer
- Composition exports: wired services and bootstrap
- Metadata: Package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Adapter exports (configuration model)
from .adapters.email.config import MailerConfig, load_mailer_config_from_dict

# Application exports
from .application.composer import MessageComposer

# Composition exports (wired adapters)
from .composition import MailerServices, bootstrap, build_production, build_testing

# Domain exports
from .domain.enums import ErrorReportRoute
from .domain.errors import (
    ConfigurationError,
    DeliveryError,
    ProviderError,
    TransportError,
    UnsupportedFormatError,
    ValidationError,
)
from .domain.models import Address, Attachment, DeliveryReceipt, OutgoingMessage

__all__ = [
    "Address",
    "Attachment",
    "ConfigurationError",
    "DeliveryError",
    "DeliveryReceipt",
    "ErrorReportRoute",
    "MailerConfig",
    "MailerServices",
    "MessageComposer",
    "OutgoingMessage",
    "ProviderError",
    "TransportError",
    "UnsupportedFormatError",
    "ValidationError",
    "bootstrap",
    "build_production",
    "build_testing",
    "load_mailer_config_from_dict",
    "print_info",
]
