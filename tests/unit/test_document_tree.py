"""Unit tests for the markdown document tree builder and inline text reconstruction."""

import pytest

from cvcraft.contexts.parsing.cv_data_structure import ListItem
from cvcraft.contexts.parsing.document_tree import (
    DocumentTreeBuilder,
    NodeType,
    extract_list_items,
    flatten_list_items,
    inline_text,
    iter_blocks,
)
from cvcraft.contexts.parsing.exceptions import DocumentParseError


@pytest.fixture
def builder():
    return DocumentTreeBuilder()


class TestBuild:
    """Tests for DocumentTreeBuilder.build()."""

    def test_block_types(self, builder):
        root = builder.build("# Name\n\nText\n\n- item\n\n---\n\n<!-- break -->\n")

        assert root.type == NodeType.ROOT
        assert [child.type for child in root.children] == [
            NodeType.HEADING,
            NodeType.PARAGRAPH,
            NodeType.LIST,
            NodeType.THEMATIC_BREAK,
            NodeType.HTML,
        ]

    def test_heading_depth(self, builder):
        root = builder.build("### Senior Engineer\n")
        assert root.children[0].depth == 3

    def test_ordered_list(self, builder):
        root = builder.build("1. first\n2. second\n")
        assert root.children[0].ordered

    def test_code_block_keeps_content(self, builder):
        root = builder.build("```\nprint(1)\n```\n")
        assert root.children[0].type == NodeType.CODE
        assert root.children[0].value == "print(1)\n"

    def test_empty_body(self, builder):
        assert builder.build("").children == []

    def test_rejects_non_text(self, builder):
        with pytest.raises(DocumentParseError):
            builder.build(None)


class TestInlineText:
    """Tests for markdown reconstruction of inline content."""

    @pytest.mark.parametrize(
        "source",
        [
            "Backend engineer with **ten years** of *distributed* work",
            "Uses `kubectl` daily",
            "See [my site](https://jane.dev) for more",
            "![avatar](photo.png)",
            "**Bold with [link](https://x.io) inside**",
            "See [my café](https://x.test/café?a=1&b=2) for more",
            "![portrait](https://x.test/été.png)",
        ],
    )
    def test_round_trip(self, builder, source):
        paragraph = builder.build(source).children[0]
        assert inline_text(paragraph) == source

    def test_underscore_emphasis_becomes_asterisk(self, builder):
        paragraph = builder.build("_Jan 2020_").children[0]
        assert inline_text(paragraph) == "*Jan 2020*"

    def test_line_breaks(self, builder):
        paragraph = builder.build("line one  \nline two\nline three").children[0]
        assert inline_text(paragraph) == "line one\nline two\nline three"

    def test_inline_html_is_dropped(self, builder):
        paragraph = builder.build("Call <b>me</b> now").children[0]
        assert inline_text(paragraph) == "Call me now"

    def test_inline_break_comment_stays_in_paragraph(self, builder):
        root = builder.build("text <!-- break --> more")
        assert [child.type for child in root.children] == [NodeType.PARAGRAPH]


class TestListItems:
    """Tests for list extraction."""

    def test_nested_items(self, builder):
        root = builder.build("- Led team\n  - Hired 4\n  - Ran **standups**\n- Shipped\n")
        items = extract_list_items(root.children[0])

        assert items == [
            ListItem("Led team", items=[ListItem("Hired 4"), ListItem("Ran **standups**")]),
            ListItem("Shipped"),
        ]
        assert flatten_list_items(items) == ["Led team", "Hired 4", "Ran **standups**", "Shipped"]

    def test_loose_list(self, builder):
        root = builder.build("- one\n\n- two\n")
        assert flatten_list_items(extract_list_items(root.children[0])) == ["one", "two"]


class TestIterBlocks:
    """Tests for document-order traversal."""

    def test_enters_blockquotes(self, builder):
        root = builder.build("> quoted\n")
        types = [node.type for node in iter_blocks(root)]
        assert types == [NodeType.BLOCKQUOTE, NodeType.PARAGRAPH]

    def test_lists_entered_only_on_request(self, builder):
        root = builder.build("- jane@x.io\n")

        shallow = [node.type for node in iter_blocks(root)]
        deep = [node.type for node in iter_blocks(root, descend_lists=True)]

        assert shallow == [NodeType.LIST]
        assert deep == [NodeType.LIST, NodeType.LIST_ITEM, NodeType.PARAGRAPH]
