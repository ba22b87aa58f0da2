"""
Unit tests for section segmentation.

The state transitions are driven directly through SegmenterState; a few
tests go through segment_document() with a real document tree.
"""

import pytest

from cvcraft.contexts.parsing.cv_data_structure import Entry, ListItem, Section, SkillGroup
from cvcraft.contexts.parsing.document_tree import DocumentNode, DocumentTreeBuilder, NodeType
from cvcraft.contexts.parsing.section_patterns import SectionType
from cvcraft.contexts.parsing.segmenter import SegmenterState, is_page_break, segment_document


class TestSegmenterState:
    """Tests for the segmentation state machine."""

    def test_content_before_first_section_is_ignored(self):
        state = SegmenterState()
        state.on_paragraph("Intro line")
        state.on_list([ListItem("stray")])
        state.on_heading(3, "Orphan entry")

        assert state.finish() == []

    def test_entry_collects_heading_date_and_bullets(self):
        state = SegmenterState()
        state.on_heading(2, "Experience")
        state.on_heading(3, "Engineer | Acme")
        state.on_paragraph("2020 – 2022")
        state.on_list([ListItem("Shipped X", items=[ListItem("Detail")])])

        sections = state.finish()
        assert len(sections) == 1
        assert sections[0].type == SectionType.EXPERIENCE
        assert sections[0].content == [
            Entry(
                title="Engineer",
                company="Acme",
                date="2020 – 2022",
                bullets=["Shipped X", "Detail"],
            )
        ]

    def test_new_entry_closes_previous(self):
        state = SegmenterState()
        state.on_heading(2, "Projects")
        state.on_heading(3, "First")
        state.on_heading(3, "Second")

        titles = [entry.title for entry in state.finish()[0].entries]
        assert titles == ["First", "Second"]

    def test_plain_section_content(self):
        state = SegmenterState()
        state.on_heading(2, "Summary")
        state.on_paragraph("Backend engineer.")
        state.on_list([ListItem("One"), ListItem("Two")])

        assert state.finish()[0].content == ["Backend engineer.", "One", "Two"]

    def test_empty_sections_are_dropped(self):
        state = SegmenterState()
        state.on_heading(2, "Interests")
        state.on_heading(2, "Summary")
        state.on_paragraph("Hi")

        assert [section.title for section in state.finish()] == ["Summary"]

    def test_entry_kept_in_non_entry_section(self):
        state = SegmenterState()
        state.on_heading(2, "Interests")
        state.on_heading(3, "Chess")

        sections = state.finish()
        assert sections[0].type == SectionType.INTERESTS
        assert sections[0].content == [Entry(title="Chess")]

    def test_deeper_headings_do_not_open_entries(self):
        state = SegmenterState()
        state.on_heading(2, "Experience")
        state.on_heading(3, "Engineer")
        state.on_heading(4, "Highlights")
        state.on_paragraph("Scaled the team.")

        entry = state.finish()[0].entries[0]
        assert entry.title == "Engineer"
        assert entry.description == "Scaled the team."

    def test_skills_list_replaces_content(self):
        state = SegmenterState()
        state.on_heading(2, "Skills")
        state.on_list([ListItem("**Frontend:** React")])

        assert state.finish()[0].content == [SkillGroup(category="Frontend", skills=["React"])]

    def test_page_break_closes_section(self):
        state = SegmenterState()
        state.on_heading(2, "Summary")
        state.on_paragraph("Hi")
        state.on_page_break()
        state.on_paragraph("Dropped until the next section")
        state.on_heading(2, "Skills")
        state.on_list([ListItem("Python")])

        sections = state.finish()
        assert [section.break_before for section in sections] == [False, True, False]
        assert sections[0].content == ["Hi"]
        assert sections[1] == Section.page_break()
        assert sections[2].content == [SkillGroup(category="General", skills=["Python"])]

    def test_consecutive_page_breaks_are_kept(self):
        state = SegmenterState()
        state.on_page_break()
        state.on_page_break()

        sections = state.finish()
        assert len(sections) == 2
        assert all(section.break_before and not section.content for section in sections)


class TestPageBreakDetection:
    """Tests for the break marker."""

    @pytest.mark.parametrize("marker", ["<!-- break -->", "<!--BREAK-->", "<!--   Break   -->\n"])
    def test_marker_variants(self, marker):
        assert is_page_break(DocumentNode(type=NodeType.HTML, value=marker))

    def test_other_comments_are_not_breaks(self):
        assert not is_page_break(DocumentNode(type=NodeType.HTML, value="<!-- todo -->"))

    def test_only_html_nodes_count(self):
        assert not is_page_break(DocumentNode(type=NodeType.TEXT, value="<!-- break -->"))


@pytest.mark.unit
def test_segment_document_keeps_break_position():
    body = "## Summary\n\nHi\n\n<!-- break -->\n\n## Education\n\n### BSc\n"
    sections = segment_document(DocumentTreeBuilder().build(body))

    assert [section.type for section in sections] == [
        SectionType.SUMMARY,
        SectionType.PARAGRAPH,
        SectionType.EDUCATION,
    ]
    assert sections[1].break_before
    assert sections[1].level == 0


@pytest.mark.unit
def test_segment_document_reads_blockquote_paragraphs():
    body = "## Summary\n\n> Quoted line\n"
    sections = segment_document(DocumentTreeBuilder().build(body))
    assert sections[0].content == ["Quoted line"]
