"""
vidscribe.email.render - Jinja2 rendering of email templates.

Each template is a pair of files in the templates directory:
``<name>.html.j2`` (autoescaped) and ``<name>.txt.j2``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from vidscribe.email.models import EmailContent
from vidscribe.exceptions import EmailError

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"


class EmailRenderer:
    """Renders HTML and plain-text bodies from a template pair."""

    def __init__(self, template_dir: Path | None = None):
        if template_dir is None:
            template_dir = TEMPLATE_DIR

        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html", "html.j2"]),
            keep_trailing_newline=True,
        )

    def render(self, template_name: str, context: dict[str, Any]) -> EmailContent:
        """Render both bodies of a template.

        Args:
            template_name: Template base name, e.g. "transcript_ready"
            context: Variables passed to the templates

        Returns:
            EmailContent with html and text

        Raises:
            EmailError: If either template file is missing
        """
        try:
            html = self.env.get_template(f"{template_name}.html.j2").render(**context)
            text = self.env.get_template(f"{template_name}.txt.j2").render(**context)
        except TemplateNotFound as e:
            raise EmailError(f"Email template not found: {e.name}") from e
        return EmailContent(html=html, text=text)


def render_email(
    template_name: str,
    context: dict[str, Any],
    template_dir: Path | None = None,
) -> EmailContent:
    """Render an email template pair with the default renderer."""
    return EmailRenderer(template_dir).render(template_name, context)
