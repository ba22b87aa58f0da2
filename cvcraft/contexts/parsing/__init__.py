"""
Parsing Context

Responsibilities:
- Splits and validates YAML frontmatter, or recovers contact details from the body
- Builds a document tree from the markdown body
- Segments the tree into sections and entries (jobs, degrees, projects)
- Classifies entry paragraphs and skill lists with ordered heuristics
- Offers a cheap validation pre-check

Owns: CV document structure, section/entry heuristics, parse errors
Never: Persists documents or decides how they are laid out
"""

from cvcraft.contexts.parsing.cv_data_structure import (
    CVParserOptions,
    Entry,
    ListItem,
    ParsedDocument,
    Section,
    SkillGroup,
    ValidationResult,
)
from cvcraft.contexts.parsing.cv_parser import CVParser, parse_cv
from cvcraft.contexts.parsing.exceptions import (
    CVParserError,
    DocumentParseError,
    FrontmatterInvalidField,
    FrontmatterMissingField,
    FrontmatterSyntaxError,
)
from cvcraft.contexts.parsing.section_patterns import SectionType, infer_section_type
from cvcraft.contexts.parsing.validator import validate_cv_content

__all__ = [
    # Entry points
    "CVParser",
    "parse_cv",
    "validate_cv_content",
    # Data structures
    "CVParserOptions",
    "ParsedDocument",
    "Section",
    "SectionType",
    "Entry",
    "SkillGroup",
    "ListItem",
    "ValidationResult",
    "infer_section_type",
    # Errors
    "CVParserError",
    "DocumentParseError",
    "FrontmatterSyntaxError",
    "FrontmatterMissingField",
    "FrontmatterInvalidField",
]
