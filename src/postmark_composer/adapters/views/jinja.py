"""Jinja2 view renderer.

Implements the ViewRenderer port. Each template directory gets one cached
jinja2 Environment; HTML and XML templates are autoescaped.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound, select_autoescape


class JinjaViewRenderer:
    """Render view files with jinja2.

    Args:
        strict: Raise on undefined template variables instead of rendering
            them as empty strings.
    """

    def __init__(self, *, strict: bool = False) -> None:
        self._strict = strict
        self._environments: dict[Path, Environment] = {}

    def _environment_for(self, directory: Path) -> Environment:
        environment = self._environments.get(directory)
        if environment is None:
            options: dict[str, Any] = {}
            if self._strict:
                options["undefined"] = StrictUndefined
            environment = Environment(
                loader=FileSystemLoader(directory),
                autoescape=select_autoescape(["html", "xml"]),
                trim_blocks=True,
                lstrip_blocks=True,
                **options,
            )
            self._environments[directory] = environment
        return environment

    def render(self, path: Path, params: Mapping[str, Any]) -> str:
        """Render the template at ``path`` with ``params``.

        Raises:
            FileNotFoundError: When the template does not exist.
            jinja2.TemplateError: When the template fails to compile or render.
        """
        path = Path(path)
        environment = self._environment_for(path.parent.resolve())
        try:
            template = environment.get_template(path.name)
        except TemplateNotFound as exc:
            raise FileNotFoundError(f"View template '{path}' not found") from exc
        return template.render(**params)


__all__ = ["JinjaViewRenderer"]
