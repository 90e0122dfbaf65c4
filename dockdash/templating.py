"""Jinja2 template registry.

All ``*.html`` templates of a directory are compiled once at startup and
kept for the process lifetime.  There is no reload: a template edited on
disk is only picked up after a restart.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import jinja2

from dockdash.exceptions import TemplateError


class TemplateRegistry:
    """Read-only collection of compiled page templates.

    Use :meth:`load` to build one; the instance is shared by every request.
    """

    def __init__(self, env: jinja2.Environment, templates: dict[str, jinja2.Template]) -> None:
        self._env = env
        self._templates = templates

    @classmethod
    def load(cls, directory: str | Path) -> TemplateRegistry:
        """Compile every ``*.html`` file found in *directory*.

        Raises:
            TemplateError: If the directory is missing, holds no templates,
                or a template has a syntax error.
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise TemplateError(f"Template directory not found: {directory}")

        env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(directory),
            autoescape=jinja2.select_autoescape(["html"]),
            undefined=jinja2.StrictUndefined,
        )
        names = sorted(p.name for p in directory.glob("*.html") if p.is_file())
        if not names:
            raise TemplateError(f"No *.html templates in {directory}")

        templates: dict[str, jinja2.Template] = {}
        for name in names:
            try:
                templates[name] = env.get_template(name)
            except jinja2.TemplateSyntaxError as exc:
                raise TemplateError(
                    f"Parsing error in {name} line {exc.lineno}: {exc.message}"
                ) from exc
        return cls(env, templates)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._templates)

    def render(self, name: str, context: Mapping[str, Any]) -> str:
        """Render the template *name* with *context*.

        Raises:
            TemplateError: If *name* is not loaded or rendering fails.
        """
        template = self._templates.get(name)
        if template is None:
            raise TemplateError(f"Template {name!r} does not exist")
        try:
            return template.render(**context)
        except jinja2.TemplateError as exc:
            raise TemplateError(f"Failed to render {name}: {exc}") from exc
