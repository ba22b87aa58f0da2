"""
CV Document Structure

Defines the structured record a parse produces. This structure is the
interface between the Parsing context and anything that renders or stores
a CV (preview, print layout, document service).

Every instance is created fresh by a single parse call and is owned by the
caller afterwards. Nothing here holds a reference back to the parser.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from cvcraft.contexts.parsing.section_patterns import SectionType


@dataclass
class ListItem:
    """
    A markdown list item with its nested items.

    Attributes:
        text: The item's own inline text, markdown formatting preserved
        items: Nested list items, in document order
    """

    text: str
    items: List["ListItem"] = field(default_factory=list)

    def flatten(self) -> List[str]:
        """Item text followed by all nested item texts, depth-first."""
        texts = [self.text] if self.text else []
        for child in self.items:
            texts.extend(child.flatten())
        return texts


@dataclass
class Entry:
    """
    One job, degree or project inside a section.

    Attributes:
        title: Role/degree/project name from the level-3 heading
        company: Organisation (from the heading or a company line)
        date: Free-form date range as written ("Jan 2020 – Present")
        location: Location, when known
        description: Narrative paragraphs joined by a blank line
        bullets: Bullet points in document order
    """

    title: str
    company: str = ""
    date: str = ""
    location: str = ""
    description: str = ""
    bullets: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "company": self.company,
            "date": self.date,
            "location": self.location,
            "description": self.description,
            "bullets": list(self.bullets),
        }


@dataclass
class SkillGroup:
    """
    A named group of skills ("Frontend": ["React", "Vue"]).
    """

    category: str
    skills: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"category": self.category, "skills": list(self.skills)}


SectionBlock = Union[str, Entry, SkillGroup]


@dataclass
class Section:
    """
    A top-level grouping of CV content keyed by a level-2 heading.

    Content holds plain text blocks, entries, or skill groups in document
    order. A section with break_before=True and no content is a synthetic
    page-break marker.

    Attributes:
        type: Semantic section kind inferred from the title
        title: Heading text, inline markdown preserved
        level: Heading depth (0 for break markers)
        content: Ordered blocks belonging to the section
        break_before: True only for page-break markers
    """

    type: SectionType
    title: str = ""
    level: int = 2
    content: List[SectionBlock] = field(default_factory=list)
    break_before: bool = False

    @classmethod
    def page_break(cls) -> "Section":
        """Synthetic marker for an explicit page break."""
        return cls(type=SectionType.PARAGRAPH, title="", level=0, content=[], break_before=True)

    @property
    def entries(self) -> List[Entry]:
        return [block for block in self.content if isinstance(block, Entry)]

    @property
    def skill_groups(self) -> List[SkillGroup]:
        return [block for block in self.content if isinstance(block, SkillGroup)]

    @property
    def text_blocks(self) -> List[str]:
        return [block for block in self.content if isinstance(block, str)]

    @property
    def is_empty(self) -> bool:
        """True when the section carries no text, entries or skill groups."""
        return not any(
            block.strip() if isinstance(block, str) else True for block in self.content
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "title": self.title,
            "level": self.level,
            "content": [
                block if isinstance(block, str) else block.to_dict() for block in self.content
            ],
            "breakBefore": self.break_before,
        }


@dataclass
class ParsedDocument:
    """
    Result of parsing one CV document.

    Attributes:
        metadata: Frontmatter fields (or fields recovered from the body)
        sections: Sections in document order, break markers included
        rendered_markup: Sanitized, styled HTML (only when a style config was given)
        style_variables: Design tokens used for the markup (only with a style config)
    """

    metadata: Dict[str, Any] = field(default_factory=dict)
    sections: List[Section] = field(default_factory=list)
    rendered_markup: Optional[str] = None
    style_variables: Optional[Dict[str, str]] = None

    def sections_of_type(self, section_type: SectionType) -> List[Section]:
        return [section for section in self.sections if section.type == section_type]

    def to_dict(self) -> Dict[str, Any]:
        """
        Plain-dict form for JSON serialization.

        Optional keys are omitted when absent rather than emitted as null.
        """
        result: Dict[str, Any] = {
            "metadata": dict(self.metadata),
            "sections": [section.to_dict() for section in self.sections],
        }
        if self.rendered_markup is not None:
            result["renderedMarkup"] = self.rendered_markup
        if self.style_variables is not None:
            result["styleVariables"] = dict(self.style_variables)
        return result


@dataclass
class CVParserOptions:
    """
    Options for a single parse.

    Attributes:
        strict_frontmatter: Check the format of present frontmatter fields
            (email, phone, URLs) and reject values that fail
        validate_required: Require non-empty `name` and `email` when a
            frontmatter block is present
        extract_metadata: Recover contact fields from the body when there is
            no frontmatter block
    """

    strict_frontmatter: bool = True
    validate_required: bool = False
    extract_metadata: bool = True


@dataclass
class ValidationResult:
    """
    Outcome of a validation pre-check. Never raised, always returned.

    Attributes:
        valid: True when no errors were collected
        errors: Human-readable error messages in the order they were found
    """

    valid: bool
    errors: List[str] = field(default_factory=list)
