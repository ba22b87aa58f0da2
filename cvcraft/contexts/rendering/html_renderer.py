"""
Styled HTML rendering of a CV body.

Pipeline: markdown (CommonMark + tables + strikethrough) -> HTML ->
BeautifulSoup tree -> sanitize -> inline styles from the template config ->
HTML string.

The renderer is independent of section segmentation; it reads the same
markdown body and produces presentational markup only.
"""

import time
from typing import Any, Dict, Mapping, Optional, Tuple

from bs4 import BeautifulSoup
from markdown_it import MarkdownIt

from cvcraft.contexts.rendering.logger import _log_debug, log_render_result
from cvcraft.contexts.rendering.sanitizer import HtmlSanitizer
from cvcraft.contexts.rendering.style_templates import (
    MAX_LIST_DEPTH,
    NESTED_LIST_TEMPLATES,
    STYLE_TEMPLATES,
    merge_styles,
    resolve_style_template,
)
from cvcraft.contexts.rendering.style_variables import generate_style_variables

LIST_TAGS = ("ul", "ol")


def list_depth(tag) -> int:
    """
    Nesting depth of a list element: 1 plus its ul/ol ancestors, capped at 3.
    """
    depth = 1 + sum(1 for parent in tag.parents if parent.name in LIST_TAGS)
    return min(depth, MAX_LIST_DEPTH)


class StyledRenderer:
    """
    Renders a markdown body to sanitized HTML with inline template styles.

    Instances hold only the markdown parser rules and the sanitizer
    allow-lists; render() keeps all per-document state local.
    """

    def __init__(self, sanitizer: Optional[HtmlSanitizer] = None):
        self._md = MarkdownIt("commonmark", {"html": True}).enable(["table", "strikethrough"])
        self._sanitizer = sanitizer or HtmlSanitizer()

    def render(self, body: str, config: Mapping[str, Any]) -> Tuple[str, Dict[str, str]]:
        """
        Render a markdown body.

        Args:
            body: Markdown text (frontmatter already removed)
            config: Template config supplying the design tokens

        Returns:
            (markup, style_variables)
        """
        start_time = time.time()

        style_variables = generate_style_variables(config)
        soup = BeautifulSoup(self._md.render(body), "html.parser")

        self._sanitizer.sanitize(soup)
        styled = self.apply_styles(soup, style_variables)
        _log_debug(f"Styled {styled} elements")

        markup = str(soup)
        log_render_result(markup, style_variables, time.time() - start_time)
        return markup, style_variables

    def apply_styles(self, soup: BeautifulSoup, style_variables: Mapping[str, str]) -> int:
        """
        Inject inline styles for every element with a registered template.

        Existing inline styles are kept and the template declarations are
        appended. Nested lists get an extra indent/colour override for their
        depth bucket.

        Args:
            soup: Sanitized tree (modified)
            style_variables: Resolved design tokens

        Returns:
            Number of elements that received styles
        """
        resolved = {
            tag: resolve_style_template(template, style_variables)
            for tag, template in STYLE_TEMPLATES.items()
        }
        nested = {
            depth: resolve_style_template(template, style_variables)
            for depth, template in NESTED_LIST_TEMPLATES.items()
        }

        styled = 0
        for tag in soup.find_all(list(STYLE_TEMPLATES)):
            style = resolved[tag.name]
            if tag.name in LIST_TAGS:
                depth = list_depth(tag)
                if depth > 1:
                    style = merge_styles(style, nested[depth])

            if not style:
                continue

            tag["style"] = merge_styles(tag.get("style", ""), style)
            styled += 1

        return styled


def render_styled_markup(body: str, config: Mapping[str, Any]) -> Tuple[str, Dict[str, str]]:
    """
    Render a markdown body with a fresh StyledRenderer.

    Args:
        body: Markdown text
        config: Template config

    Returns:
        (markup, style_variables)
    """
    return StyledRenderer().render(body, config)
