"""JinjaViewRenderer over real template files."""

from __future__ import annotations

from pathlib import Path

import jinja2
import pytest

from postmark_composer.adapters.views import JinjaViewRenderer


@pytest.fixture
def view_dir(tmp_path: Path) -> Path:
    (tmp_path / "welcome.html").write_text("<h1>Welcome {{ name }}</h1>", encoding="utf-8")
    (tmp_path / "welcome.txt").write_text("Welcome {{ name }}", encoding="utf-8")
    return tmp_path


@pytest.mark.os_agnostic
def test_render_substitutes_params(view_dir: Path) -> None:
    """Template variables are filled from the params mapping."""
    rendered = JinjaViewRenderer().render(view_dir / "welcome.html", {"name": "Jane"})

    assert rendered == "<h1>Welcome Jane</h1>"


@pytest.mark.os_agnostic
def test_html_views_are_autoescaped(view_dir: Path) -> None:
    """Markup in params is escaped inside HTML views."""
    rendered = JinjaViewRenderer().render(view_dir / "welcome.html", {"name": "<b>Jane</b>"})

    assert rendered == "<h1>Welcome &lt;b&gt;Jane&lt;/b&gt;</h1>"


@pytest.mark.os_agnostic
def test_text_views_are_not_escaped(view_dir: Path) -> None:
    """Plaintext views keep params verbatim."""
    rendered = JinjaViewRenderer().render(view_dir / "welcome.txt", {"name": "<Jane>"})

    assert rendered == "Welcome <Jane>"


@pytest.mark.os_agnostic
def test_missing_template_raises_file_not_found(view_dir: Path) -> None:
    """An absent view is reported like a missing file."""
    with pytest.raises(FileNotFoundError, match="missing.html"):
        JinjaViewRenderer().render(view_dir / "missing.html", {})


@pytest.mark.os_agnostic
def test_undefined_params_render_empty_by_default(view_dir: Path) -> None:
    """Lenient mode renders unknown variables as empty strings."""
    assert JinjaViewRenderer().render(view_dir / "welcome.txt", {}) == "Welcome "


@pytest.mark.os_agnostic
def test_strict_mode_rejects_undefined_params(view_dir: Path) -> None:
    """Strict mode raises on unknown variables."""
    with pytest.raises(jinja2.UndefinedError):
        JinjaViewRenderer(strict=True).render(view_dir / "welcome.txt", {})


@pytest.mark.os_agnostic
def test_views_in_subdirectories_resolve(view_dir: Path) -> None:
    """A view name may include a subdirectory of the view root."""
    (view_dir / "billing").mkdir()
    (view_dir / "billing" / "invoice.html").write_text("Invoice {{ number }}", encoding="utf-8")

    rendered = JinjaViewRenderer().render(view_dir / "billing" / "invoice.html", {"number": 42})

    assert rendered == "Invoice 42"
