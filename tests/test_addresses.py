"""Address-list helpers and message value objects."""

from __future__ import annotations

import pytest

from postmark_composer.domain.addresses import (
    format_address,
    is_error_report,
    join_address_list,
    split_address_list,
    strip_tags,
)
from postmark_composer.domain.errors import ValidationError
from postmark_composer.domain.models import (
    Address,
    Attachment,
    DeliveryReceipt,
    EnvironmentPolicy,
    OutgoingMessage,
)

# ======================== format_address ========================


@pytest.mark.os_agnostic
def test_format_address_without_name_is_bare_email() -> None:
    """An unnamed entry is the address itself."""
    assert format_address("a@x.com") == "a@x.com"


@pytest.mark.os_agnostic
def test_format_address_with_empty_name_is_bare_email() -> None:
    """An empty display name counts as no name."""
    assert format_address("a@x.com", "") == "a@x.com"


@pytest.mark.os_agnostic
def test_format_address_removes_commas_from_name() -> None:
    """Commas in the display name would split the entry, so they are dropped."""
    assert format_address("jane@real.com", "Jane, Doe") == "Jane Doe <jane@real.com>,"


# ======================== join / split ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("entries", "expected"),
    [
        ([], ""),
        (["a@x.com"], "a@x.com"),
        (["a@x.com", "b@x.com"], "a@x.com,b@x.com"),
        (["A <a@x.com>,", "b@x.com"], "A <a@x.com>,b@x.com"),
        (["a@x.com", "B <b@x.com>,"], "a@x.com,B <b@x.com>,"),
        (["A <a@x.com>,", "B <b@x.com>,"], "A <a@x.com>,B <b@x.com>,"),
    ],
)
def test_join_address_list_separates_every_entry(entries: list[str], expected: str) -> None:
    """Entries never run together and named entries keep their trailing comma."""
    assert join_address_list(entries) == expected


@pytest.mark.os_agnostic
def test_split_address_list_ignores_surrounding_separators() -> None:
    """Leading and trailing commas produce no empty entries."""
    assert split_address_list(",A <a@x.com>,b@x.com,") == ["A <a@x.com>", "b@x.com"]


# ======================== is_error_report ========================


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("address_list", "expected"),
    [
        ("errors@x.com", True),
        ("Ops <errors@x.com>,", True),
        ("errors@x.com,", True),
        ("errors@x.com,dev@x.com", False),
        ("dev@x.com", False),
        ("", False),
    ],
)
def test_is_error_report_requires_single_matching_entry(address_list: str, expected: bool) -> None:
    """Only a sole entry containing the error address is an error report."""
    assert is_error_report(address_list, "errors@x.com") is expected


# ======================== strip_tags ========================


@pytest.mark.os_agnostic
def test_strip_tags_keeps_text_content() -> None:
    """Markup is removed and surrounding whitespace trimmed."""
    assert strip_tags("  <p>Hello <b>World</b></p>\n") == "Hello World"


@pytest.mark.os_agnostic
def test_strip_tags_drops_script_and_style_content() -> None:
    """Script and style bodies are not text the reader should see."""
    html = "<style>p {color: red}</style><p>Hi</p><script>alert('x')</script>"

    assert strip_tags(html) == "Hi"


@pytest.mark.os_agnostic
def test_strip_tags_decodes_character_references() -> None:
    """Escaped characters in the markup become plain characters."""
    assert strip_tags("<p>Tom &amp; Jerry &lt;3 &#169; 2024</p>") == "Tom & Jerry <3 © 2024"


@pytest.mark.os_agnostic
def test_strip_tags_does_not_treat_decoded_brackets_as_tags() -> None:
    """Markup written as entities survives as visible text."""
    assert strip_tags("<p>Use &lt;b&gt; for bold</p>") == "Use <b> for bold"


# ======================== Value objects ========================


@pytest.mark.os_agnostic
def test_address_formats_like_format_address() -> None:
    """Address.formatted uses the address-list entry rule."""
    assert Address("safe@x.com", "Safe").formatted() == "Safe <safe@x.com>,"
    assert Address("safe@x.com").formatted() == "safe@x.com"


@pytest.mark.os_agnostic
def test_attachment_repr_hides_content() -> None:
    """Attachment bytes are kept out of repr so logs stay small."""
    attachment = Attachment(name="a.pdf", content=b"%PDF-secret", content_type="application/pdf")

    assert "secret" not in repr(attachment)


@pytest.mark.os_agnostic
@pytest.mark.parametrize(("error_code", "succeeded"), [(0, True), (300, False), (406, False)])
def test_delivery_receipt_success_is_error_code_zero(error_code: int, succeeded: bool) -> None:
    """Only ErrorCode 0 counts as accepted."""
    assert DeliveryReceipt(error_code=error_code).succeeded is succeeded


@pytest.mark.os_agnostic
@pytest.mark.parametrize(("environment", "live"), [("production", True), ("live", True), ("staging", False)])
def test_environment_policy_delivers_live_mail_only_in_production(environment: str, live: bool) -> None:
    """Membership in the production set decides live delivery."""
    policy = EnvironmentPolicy(
        current_environment=environment,
        production_environments=frozenset({"production", "live"}),
        safe_address=Address("safe@x.com"),
        error_address="errors@x.com",
    )

    assert policy.delivers_live_mail() is live
    assert policy.subject_prefix == f"[{environment}] "


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    ("message", "field"),
    [
        (OutgoingMessage(subject="Hi", plain_text_body="Hello"), "to"),
        (OutgoingMessage(recipients=("a@x.com",), subject="", plain_text_body="Hello"), "subject"),
        (OutgoingMessage(recipients=("a@x.com",), subject="Hi", html_body="", plain_text_body=""), "body"),
        (OutgoingMessage(recipients=("",), subject="", plain_text_body=""), "to"),
    ],
)
def test_outgoing_message_validation_reports_first_missing_field(message: OutgoingMessage, field: str) -> None:
    """Checks run recipients first, then subject, then body."""
    with pytest.raises(ValidationError) as exc_info:
        message.validate()

    assert exc_info.value.field == field


@pytest.mark.os_agnostic
def test_outgoing_message_with_html_only_is_valid() -> None:
    """One non-empty body is enough."""
    OutgoingMessage(recipients=("a@x.com",), subject="Hi", html_body="<p>Hi</p>").validate()
