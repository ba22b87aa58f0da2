"""
Rendering Context

Responsibilities:
- Renders a CV markdown body to HTML
- Sanitizes user markup against a fixed allow-list
- Derives style variables from a template configuration
- Injects inline styles from per-tag style templates

Owns: HTML generation, sanitization, style variables, template config defaults
Never: Segments the document or interprets CV structure
"""

from cvcraft.contexts.rendering.config_resolver import (
    create_template_config,
    load_template_config,
    validate_template_config,
)
from cvcraft.contexts.rendering.defaults import DEFAULT_TEMPLATE_CONFIG
from cvcraft.contexts.rendering.html_renderer import StyledRenderer, render_styled_markup
from cvcraft.contexts.rendering.sanitizer import HtmlSanitizer, sanitize_html, sanitize_url
from cvcraft.contexts.rendering.style_variables import generate_style_variables

__all__ = [
    # Rendering
    "StyledRenderer",
    "render_styled_markup",
    # Sanitization
    "HtmlSanitizer",
    "sanitize_html",
    "sanitize_url",
    # Template configuration
    "DEFAULT_TEMPLATE_CONFIG",
    "create_template_config",
    "load_template_config",
    "validate_template_config",
    "generate_style_variables",
]
