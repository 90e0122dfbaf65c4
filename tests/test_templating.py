"""Tests for the TemplateRegistry."""

from __future__ import annotations

from pathlib import Path

import pytest

from dockdash.config import DEFAULT_TEMPLATES_DIR
from dockdash.exceptions import TemplateError
from dockdash.templating import TemplateRegistry


def test_shipped_templates_are_loaded() -> None:
    registry = TemplateRegistry.load(DEFAULT_TEMPLATES_DIR)

    assert {"base.html", "index.html", "infos.html", "containers.html"} <= set(
        registry.names
    )


def test_render_unknown_template_raises() -> None:
    registry = TemplateRegistry.load(DEFAULT_TEMPLATES_DIR)

    with pytest.raises(TemplateError):
        registry.render("missing.html", {})


def test_render_with_missing_variable_raises() -> None:
    """infos.html references version fields that an empty context lacks."""
    registry = TemplateRegistry.load(DEFAULT_TEMPLATES_DIR)

    with pytest.raises(TemplateError):
        registry.render("infos.html", {})


def test_missing_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(TemplateError):
        TemplateRegistry.load(tmp_path / "nope")


def test_empty_directory_raises(tmp_path: Path) -> None:
    with pytest.raises(TemplateError):
        TemplateRegistry.load(tmp_path)


def test_syntax_error_aborts_loading(tmp_path: Path) -> None:
    (tmp_path / "good.html").write_text("<p>{{ name }}</p>")
    (tmp_path / "bad.html").write_text("<p>{% if %}</p>")

    with pytest.raises(TemplateError) as exc_info:
        TemplateRegistry.load(tmp_path)
    assert "bad.html" in str(exc_info.value)


def test_values_are_html_escaped(tmp_path: Path) -> None:
    (tmp_path / "page.html").write_text("<p>{{ name }}</p>")
    registry = TemplateRegistry.load(tmp_path)

    assert registry.render("page.html", {"name": "<b>x</b>"}) == "<p>&lt;b&gt;x&lt;/b&gt;</p>"


def test_templates_are_not_reloaded(tmp_path: Path) -> None:
    page = tmp_path / "page.html"
    page.write_text("first")
    registry = TemplateRegistry.load(tmp_path)

    page.write_text("second")

    assert registry.render("page.html", {}) == "first"
