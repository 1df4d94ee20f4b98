"""Adapters layer - infrastructure and framework integrations.

Contains adapter implementations that connect the composer to external
systems (Postmark, SMTP, templates, filesystem, configuration, logging).

Contents:
    * :mod:`.config` - Layered configuration loading
    * :mod:`.email` - Mailer configuration, Postmark client, direct SMTP sender
    * :mod:`.files` - Attachment sources on the local filesystem
    * :mod:`.logging` - Logging setup with lib_log_rich
    * :mod:`.memory` - In-memory adapters for tests
    * :mod:`.views` - jinja2 view rendering
"""

from __future__ import annotations

__all__: list[str] = []
