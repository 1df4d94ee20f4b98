"""Pure address-list and body helpers with no I/O.

Recipients travel to the provider as a single comma-separated string. A
named entry is rendered as ``Name <email>,`` (the trailing comma is part of
the wire format), an unnamed entry as the bare address. These helpers build,
join, and inspect such strings.
"""

from __future__ import annotations

import html
import re
from collections.abc import Iterable

ADDRESS_SEPARATOR = ","

_BLOCK_ELEMENT_PATTERN = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_TAG_PATTERN = re.compile(r"<[^>]*>")


def format_address(email: str, name: str | None = None) -> str:
    """Render one address entry for the provider's address list.

    Commas are removed from the display name because they separate entries.

    Args:
        email: Mailbox address.
        name: Optional display name.

    Returns:
        ``email`` when no name is given, otherwise ``"Name <email>,"``.

    Example:
        >>> format_address("jane@example.com")
        'jane@example.com'
        >>> format_address("jane@example.com", "Doe, Jane")
        'Doe Jane <jane@example.com>,'
    """
    if not name:
        return email
    return f"{name.replace(ADDRESS_SEPARATOR, '')} <{email}>{ADDRESS_SEPARATOR}"


def join_address_list(entries: Iterable[str]) -> str:
    """Concatenate formatted entries into one address-list string.

    Named entries already end in a separator; a separator is inserted only
    after entries that lack one, so bare addresses never run together.

    Example:
        >>> join_address_list(["Jane <jane@example.com>,", "bob@example.com"])
        'Jane <jane@example.com>,bob@example.com'
        >>> join_address_list(["a@example.com", "b@example.com"])
        'a@example.com,b@example.com'
        >>> join_address_list([])
        ''
    """
    joined = ""
    for entry in entries:
        if joined and not joined.endswith(ADDRESS_SEPARATOR):
            joined += ADDRESS_SEPARATOR
        joined += entry
    return joined


def split_address_list(address_list: str) -> list[str]:
    """Split an address-list string into its entries.

    Surrounding separators are trimmed first, matching how the list is
    inspected for error-report classification.

    Example:
        >>> split_address_list("Jane <jane@example.com>,bob@example.com,")
        ['Jane <jane@example.com>', 'bob@example.com']
        >>> split_address_list("")
        []
    """
    trimmed = address_list.strip(ADDRESS_SEPARATOR)
    return [entry.strip() for entry in trimmed.split(ADDRESS_SEPARATOR) if entry.strip()]


def is_error_report(address_list: str, error_address: str) -> bool:
    """Return True when the list has exactly one entry containing ``error_address``.

    Example:
        >>> is_error_report("errors@example.com", "errors@example.com")
        True
        >>> is_error_report("Ops <errors@example.com>,", "errors@example.com")
        True
        >>> is_error_report("errors@example.com,ops@example.com", "errors@example.com")
        False
    """
    entries = split_address_list(address_list)
    return len(entries) == 1 and error_address in entries[0]


def strip_tags(markup: str) -> str:
    """Derive a plaintext body from HTML by removing markup.

    Script and style blocks are dropped together with their content; all
    other tags are removed and their text kept. Character references such
    as ``&amp;`` are decoded once the markup is gone.

    Example:
        >>> strip_tags("<p>Hello <b>World</b></p>")
        'Hello World'
        >>> strip_tags("<style>p {color: red}</style><p>Hi</p>")
        'Hi'
        >>> strip_tags("<p>Tom &amp; Jerry</p>")
        'Tom & Jerry'
    """
    without_blocks = _BLOCK_ELEMENT_PATTERN.sub("", markup)
    return html.unescape(_TAG_PATTERN.sub("", without_blocks)).strip()


__all__ = [
    "ADDRESS_SEPARATOR",
    "format_address",
    "is_error_report",
    "join_address_list",
    "split_address_list",
    "strip_tags",
]
