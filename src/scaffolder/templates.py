"""Jinja2 rendering for generated code snippets.

Stub files themselves only use flat ``{token}`` placeholders.  The handful of
multi-line fragments whose shape depends on the selected features (service
provider imports, dashboard menu registration, ...) are kept as Jinja2
templates under ``src/scaffolder/snippets/`` and rendered here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from . import naming


_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "snippets"


class TemplateRenderer:
    """Renders the ``.j2`` snippet templates.

    Undefined variables raise instead of rendering as empty strings, so a
    missing context key shows up as an error rather than as broken PHP.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["studly"] = naming.studly
        self.env.filters["snake"] = naming.snake
        self.env.filters["plural"] = naming.plural

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template relative to the template directory."""
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context)

    def list_templates(self) -> list[str]:
        """Return a sorted list of all ``.j2`` template names."""
        if not self.template_dir.is_dir():
            return []
        return sorted(
            str(p.relative_to(self.template_dir))
            for p in self.template_dir.rglob("*.j2")
        )
