"""
CV Parser

Orchestrates a full parse of a markdown CV document:

    frontmatter -> document tree -> sections -> (metadata fallback) -> (styled markup)

CVParser holds only configuration and stateless helpers (markdown rules,
sanitizer allow-lists). Each parse() builds its own state, so one parser can
be shared across threads.
"""

import time
from typing import Any, Mapping, Optional

from cvcraft.contexts.parsing.cv_data_structure import CVParserOptions, ParsedDocument
from cvcraft.contexts.parsing.document_tree import DocumentTreeBuilder
from cvcraft.contexts.parsing.exceptions import DocumentParseError
from cvcraft.contexts.parsing.logger import _log_debug, log_parse_result
from cvcraft.contexts.parsing.metadata_extractor import (
    extract_contact_from_tree,
    extract_frontmatter,
)
from cvcraft.contexts.parsing.segmenter import segment_document
from cvcraft.contexts.rendering.html_renderer import StyledRenderer


class CVParser:
    """
    Parses markdown CV documents into ParsedDocument records.

    Example:
        parser = CVParser(CVParserOptions(validate_required=True))
        document = parser.parse(markdown_text, config=template_config)
        document.metadata["email"]
    """

    def __init__(self, options: Optional[CVParserOptions] = None):
        self.options = options or CVParserOptions()
        self._tree_builder = DocumentTreeBuilder()
        self._renderer = StyledRenderer()

    def parse(self, text: str, config: Optional[Mapping[str, Any]] = None) -> ParsedDocument:
        """
        Parse a CV document.

        Args:
            text: Full document (optional YAML frontmatter + markdown body)
            config: Template config; when given, styled markup and style
                variables are rendered as well

        Returns:
            ParsedDocument (fresh, owned by the caller)

        Raises:
            DocumentParseError: Input is not text, frontmatter is not a YAML
                mapping, or the markdown cannot be parsed
            FrontmatterMissingField: Required field absent (validate_required)
            FrontmatterInvalidField: Field fails its format check (strict_frontmatter)
        """
        start_time = time.time()

        if not isinstance(text, str):
            raise DocumentParseError(f"Expected CV text, got {type(text).__name__}")

        metadata, body = extract_frontmatter(text, self.options)
        tree = self._tree_builder.build(body)
        sections = segment_document(tree)

        if not metadata and self.options.extract_metadata:
            metadata = extract_contact_from_tree(tree)

        document = ParsedDocument(metadata=metadata, sections=sections)

        if config is not None:
            document.rendered_markup, document.style_variables = self._renderer.render(body, config)
        else:
            _log_debug("No template config, skipping styled markup")

        log_parse_result(document, time.time() - start_time)
        return document


def parse_cv(
    text: str,
    options: Optional[CVParserOptions] = None,
    config: Optional[Mapping[str, Any]] = None,
) -> ParsedDocument:
    """
    Parse a CV document with a one-off parser.

    Args:
        text: Full CV document
        options: Parser options (defaults: strict, required fields not enforced)
        config: Optional template config for styled markup

    Returns:
        ParsedDocument
    """
    return CVParser(options).parse(text, config)
