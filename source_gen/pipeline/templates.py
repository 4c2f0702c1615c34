"""
Template rendering.

Thin wrapper around a Jinja2 environment loading the packaged
templates/<language>/ directory. Rendering is a pure function of the
template id and the arguments passed in.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

from .errors import TemplateError

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

FILE_EXTENSIONS = {
    "cs": "cs",
    "python": "py",
}


class TemplateRenderer:
    """Renders `<template_id>.<ext>.jinja2` templates for one language."""

    def __init__(self, language: str, template_dir: Path | None = None):
        if language not in FILE_EXTENSIONS:
            raise TemplateError(f"No templates for language '{language}'")
        self.language = language
        self.extension = FILE_EXTENSIONS[language]
        self.template_dir = template_dir or TEMPLATES_DIR / language
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.template_dir)),
            undefined=jinja2.StrictUndefined,
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )

    def template_name(self, template_id: str) -> str:
        return f"{template_id}.{self.extension}.jinja2"

    def render(self, template_id: str, **context: Any) -> str:
        """Render a template with the given arguments."""
        name = self.template_name(template_id)
        try:
            template = self.jinja_env.get_template(name)
        except jinja2.TemplateNotFound as e:
            raise TemplateError(f"Template {name} not found in {self.template_dir}") from e

        try:
            return template.render(**context)
        except jinja2.TemplateError as e:
            raise TemplateError(f"Failed to render template {name}: {e}") from e
