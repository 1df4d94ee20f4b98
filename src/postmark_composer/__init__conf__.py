"""Static package metadata surfaced to logging, configuration and info output.

The version string is kept in sync with ``pyproject.toml`` at release time.
"""

from __future__ import annotations

name = "postmark_composer"
title = "Fluent transactional email composer for the Postmark API"
version = "1.0.0"

#: Identifiers used by lib_layered_config to derive platform config paths.
LAYEREDCONF_VENDOR = "postmark-composer"
LAYEREDCONF_APP = "Postmark Composer"
LAYEREDCONF_SLUG = "postmark-composer"


def print_info() -> None:
    """Print the summarised metadata block.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for postmark_composer:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))
