"""
Email template loader and renderer.
Handles Jinja2 templates for notification emails.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound

from skilllink.config import settings

logger = logging.getLogger(__name__)


class EmailTemplateLoader:
    """Loads and renders email templates using Jinja2."""

    def __init__(self, templates_dir: Path = None):
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True
        )

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render email template with context.

        Args:
            template_name: Name of template file (e.g., 'notification.html')
            context: Template context variables

        Raises:
            TemplateNotFound: when the file does not exist
        """
        enhanced_context = {
            **context,
            "current_year": datetime.utcnow().year,
            "app_name": settings.email_from_name,
            "frontend_url": settings.frontend_url,
        }
        template = self.env.get_template(template_name)
        rendered = template.render(**enhanced_context)
        logger.debug(f"Successfully rendered template: {template_name}")
        return rendered

    def template_exists(self, template_name: str) -> bool:
        return (self.templates_dir / template_name).exists()


__all__ = ["EmailTemplateLoader", "TemplateNotFound"]
