"""
Section segmentation for CV documents.

Splits the document tree into ordered sections keyed by level-2 headings,
and sections into entries keyed by level-3 headings. The walk is a single
left-to-right pass; all mutable state lives in a SegmenterState that the
walk owns, so the transitions can be driven directly in tests without
building a tree.

States: no section -> in section -> in entry (a sub-state of in section).
"""

from dataclasses import dataclass, field
from typing import List, Optional

from cvcraft.contexts.parsing.classifier import (
    EntryDraft,
    classify_entry_paragraph,
    parse_skill_groups,
    split_entry_title,
)
from cvcraft.contexts.parsing.cv_data_structure import ListItem, Section
from cvcraft.contexts.parsing.document_tree import (
    DocumentNode,
    NodeType,
    extract_list_items,
    flatten_list_items,
    inline_text,
    iter_blocks,
)
from cvcraft.contexts.parsing.logger import _log_debug
from cvcraft.contexts.parsing.patterns import MarkerPatterns
from cvcraft.contexts.parsing.section_patterns import (
    ENTRY_SECTION_TYPES,
    SectionType,
    infer_section_type,
)


@dataclass
class SegmenterState:
    """
    Mutable state of one segmentation pass.

    Attributes:
        sections: Finalized sections (and break markers) in document order
        section: Currently open section, None before the first level-2
            heading and right after a page break
        entry: Currently open entry within the section
    """

    sections: List[Section] = field(default_factory=list)
    section: Optional[Section] = None
    entry: Optional[EntryDraft] = None

    # ------------------------------------------------------------------
    # Finalization
    # ------------------------------------------------------------------

    def close_entry(self) -> None:
        """Append the open entry (description joined) to the open section."""
        if self.entry is None:
            return
        if self.section is not None:
            if self.section.type not in ENTRY_SECTION_TYPES:
                _log_debug(
                    f"Entry '{self.entry.title}' kept in {self.section.type.value} section "
                    f"'{self.section.title}'"
                )
            self.section.content.append(self.entry.finalize())
        self.entry = None

    def close_section(self) -> None:
        """Close the open entry, then move the open section to the output."""
        self.close_entry()
        if self.section is not None:
            self.sections.append(self.section)
            self.section = None

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def on_heading(self, depth: int, title: str) -> None:
        if depth == 2:
            self.close_section()
            self.section = Section(type=infer_section_type(title), title=title, level=2)
        elif depth == 3 and self.section is not None:
            self.close_entry()
            self.entry = split_entry_title(title)
        # Level 1 is the name (metadata fallback); levels 4-6 carry no structure

    def on_paragraph(self, text: str) -> None:
        if self.section is None or not text.strip():
            return
        if self.entry is not None:
            kind = classify_entry_paragraph(self.entry, text)
            _log_debug(f"Paragraph in '{self.entry.title}' classified as {kind.value}")
        else:
            self.section.content.append(text)

    def on_list(self, items: List[ListItem]) -> None:
        if self.section is None:
            return
        if self.section.type == SectionType.SKILLS:
            self.section.content = list(parse_skill_groups(items))
        elif self.entry is not None:
            self.entry.bullets.extend(flatten_list_items(items))
        else:
            self.section.content.extend(flatten_list_items(items))

    def on_page_break(self) -> None:
        self.close_section()
        self.sections.append(Section.page_break())

    def finish(self) -> List[Section]:
        """
        Close everything still open and return the filtered sections.

        Empty sections are dropped; page-break markers are always kept.
        """
        self.close_section()
        return [
            section for section in self.sections if section.break_before or not section.is_empty
        ]


def is_page_break(node: DocumentNode) -> bool:
    """True for a raw HTML block consisting only of `<!-- break -->`."""
    return node.type == NodeType.HTML and bool(
        MarkerPatterns.PAGE_BREAK.match(node.value.strip())
    )


def segment_document(root: DocumentNode) -> List[Section]:
    """
    Split a document tree into sections.

    Never raises: unrecognised content falls through to the most general
    bucket (description text, plain section content, fallback skill group).

    Args:
        root: Tree from DocumentTreeBuilder.build()

    Returns:
        Sections in document order, page-break markers included
    """
    state = SegmenterState()

    for node in iter_blocks(root):
        if node.type == NodeType.HEADING:
            state.on_heading(node.depth, inline_text(node))
        elif node.type == NodeType.PARAGRAPH:
            state.on_paragraph(inline_text(node))
        elif node.type == NodeType.LIST:
            state.on_list(extract_list_items(node))
        elif is_page_break(node):
            state.on_page_break()

    sections = state.finish()
    _log_debug(f"Segmented into {len(sections)} sections")
    return sections
