"""Email adapter - Postmark API client and direct SMTP delivery.

Structure:
    * :mod:`.config` - Mailer configuration model and loader
    * :mod:`.postmark` - Postmark HTTP client (httpx)
    * :mod:`.direct` - Direct SMTP sender for error reports (btx_lib_mail)

Contents:
    * :class:`.config.MailerConfig` - Mailer configuration container
    * :func:`.config.load_mailer_config_from_dict` - Config dict loader
    * :class:`.postmark.PostmarkClient` - Provider client
    * :class:`.direct.SmtpDirectSender` - Direct sender
"""

from __future__ import annotations

from .config import MailerConfig, load_mailer_config_from_dict
from .direct import SmtpDirectSender
from .postmark import PostmarkClient

__all__ = [
    "MailerConfig",
    "PostmarkClient",
    "SmtpDirectSender",
    "load_mailer_config_from_dict",
]
