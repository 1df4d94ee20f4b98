"""Shared pytest fixtures for composer, adapter and composition tests.

Centralizes test infrastructure:
- All shared fixtures live here
- Tests import fixtures implicitly via pytest's conftest discovery
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from lib_layered_config import Config

from postmark_composer.adapters.email.config import MailerConfig
from postmark_composer.adapters.memory import (
    DirectSendSpy,
    InMemoryFileStore,
    ProviderSpy,
    StaticViewRenderer,
)
from postmark_composer.application.composer import MessageComposer

_COVERAGE_BASENAME = ".coverage.postmark_composer"

VIEW_ROOT = Path("/srv/views/mail")


def _purge_stale_coverage_files(cov_path: Path) -> None:
    """Delete leftover SQLite database and journal files from crashed runs."""
    for suffix in ("", "-journal", "-wal", "-shm"):
        with contextlib.suppress(FileNotFoundError):
            Path(str(cov_path) + suffix).unlink()


def pytest_configure(config: pytest.Config) -> None:
    """Redirect the coverage database to a **local** temp directory.

    Runs before ``pytest-cov`` creates its ``Coverage()`` object, so the
    ``COVERAGE_FILE`` value is picked up regardless of how pytest is invoked.
    """
    if "COVERAGE_FILE" not in os.environ:
        cov_path = Path(tempfile.gettempdir()) / _COVERAGE_BASENAME
        _purge_stale_coverage_files(cov_path)
        os.environ["COVERAGE_FILE"] = str(cov_path)


def _base_settings() -> dict[str, Any]:
    return {
        "server_token": "server-token",
        "error_email_address": "errors@x.com",
        "safe_email_address": "safe@x.com",
        "from_address": "app@x.com",
        "view_path": str(VIEW_ROOT),
        "current_environment": "production",
        "production_environments": ["production"],
    }


@pytest.fixture
def mailer_config_factory() -> Callable[..., MailerConfig]:
    """Build MailerConfig instances from complete defaults plus overrides.

    Example:
        def test_staging(mailer_config_factory: Callable[..., MailerConfig]) -> None:
            config = mailer_config_factory(current_environment="staging")
    """

    def _factory(**overrides: Any) -> MailerConfig:
        return MailerConfig.model_validate({**_base_settings(), **overrides})

    return _factory


@pytest.fixture
def provider_spy() -> ProviderSpy:
    """Provide a fresh provider spy per test."""
    return ProviderSpy()


@pytest.fixture
def direct_spy() -> DirectSendSpy:
    """Provide a fresh direct-send spy per test."""
    return DirectSendSpy()


@pytest.fixture
def file_store() -> InMemoryFileStore:
    """Provide an empty in-memory file store per test."""
    return InMemoryFileStore()


@pytest.fixture
def view_renderer() -> StaticViewRenderer:
    """Provide a view renderer holding a welcome HTML and text template."""
    return StaticViewRenderer(
        templates={
            VIEW_ROOT / "welcome.html": "<h1>Welcome {name}</h1><p>Thanks for joining.</p>",
            VIEW_ROOT / "welcome.txt": "Welcome {name}. Thanks for joining.",
        }
    )


@pytest.fixture
def composer_factory(
    mailer_config_factory: Callable[..., MailerConfig],
    provider_spy: ProviderSpy,
    direct_spy: DirectSendSpy,
    file_store: InMemoryFileStore,
    view_renderer: StaticViewRenderer,
) -> Callable[..., MessageComposer]:
    """Build composers wired to the per-test spies, with config overrides.

    Example:
        def test_send(composer_factory, provider_spy) -> None:
            composer = composer_factory(current_environment="staging")
    """

    def _factory(**overrides: Any) -> MessageComposer:
        return MessageComposer(
            mailer_config_factory(**overrides),
            provider=provider_spy,
            file_store=file_store,
            renderer=view_renderer,
            direct_sender=direct_spy,
        )

    return _factory


@pytest.fixture
def composer(composer_factory: Callable[..., MessageComposer]) -> MessageComposer:
    """Provide a production-environment composer wired to the spies."""
    return composer_factory()


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts.

    Builds actual ``lib_layered_config.Config`` objects without filesystem I/O.
    """

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before and after each test."""
    from postmark_composer.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield
    config_mod.get_config.cache_clear()
