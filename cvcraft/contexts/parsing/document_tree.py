"""
Document tree builder for the CV markdown body.

Parses the body with markdown-it-py (CommonMark, raw HTML allowed so that
comment markers survive) and converts the token tree into a small, closed
set of DocumentNode types. The rest of the parsing context works only on
DocumentNode, never on markdown-it tokens.

Inline text reconstruction (inline_text) re-serializes emphasis, strong,
code and link spans back into their markdown form so formatting survives
into Section/Entry fields.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from cvcraft.contexts.parsing.cv_data_structure import ListItem
from cvcraft.contexts.parsing.exceptions import DocumentParseError
from cvcraft.contexts.parsing.logger import _log_debug


class NodeType(Enum):
    """Node kinds the segmenter and extractors understand."""

    ROOT = "root"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST = "list"
    LIST_ITEM = "list_item"
    BLOCKQUOTE = "blockquote"
    CODE = "code"
    HTML = "html"
    THEMATIC_BREAK = "thematic_break"
    TEXT = "text"
    BREAK = "break"
    INLINE_CODE = "inline_code"
    STRONG = "strong"
    EMPHASIS = "emphasis"
    LINK = "link"
    IMAGE = "image"
    INLINE_HTML = "inline_html"


@dataclass
class DocumentNode:
    """
    One node of the document tree.

    Attributes:
        type: Node kind
        children: Child nodes (block children, or inline children for
            headings and paragraphs)
        depth: Heading level (1-6), 0 for other nodes
        value: Literal content for text, code, html and inline code nodes;
            alt text for images
        url: Link href or image src
        ordered: True for ordered lists
    """

    type: NodeType
    children: List["DocumentNode"] = field(default_factory=list)
    depth: int = 0
    value: str = ""
    url: str = ""
    ordered: bool = False


# markdown-it SyntaxTreeNode.type -> NodeType
_BLOCK_TYPES = {
    "heading": NodeType.HEADING,
    "paragraph": NodeType.PARAGRAPH,
    "bullet_list": NodeType.LIST,
    "ordered_list": NodeType.LIST,
    "list_item": NodeType.LIST_ITEM,
    "blockquote": NodeType.BLOCKQUOTE,
    "fence": NodeType.CODE,
    "code_block": NodeType.CODE,
    "html_block": NodeType.HTML,
    "hr": NodeType.THEMATIC_BREAK,
}

_INLINE_TYPES = {
    "text": NodeType.TEXT,
    "softbreak": NodeType.BREAK,
    "hardbreak": NodeType.BREAK,
    "code_inline": NodeType.INLINE_CODE,
    "strong": NodeType.STRONG,
    "em": NodeType.EMPHASIS,
    "link": NodeType.LINK,
    "image": NodeType.IMAGE,
    "html_inline": NodeType.INLINE_HTML,
}


class DocumentTreeBuilder:
    """
    Builds DocumentNode trees from markdown text.

    The markdown-it instance only holds parsing rules; each call to build()
    works on fresh state, so one builder can be shared across threads.
    """

    def __init__(self):
        self._md = MarkdownIt("commonmark", {"html": True})
        # Link and image destinations keep their source text (no percent-encoding)
        self._md.normalizeLink = _source_link

    def build(self, body: str) -> DocumentNode:
        """
        Parse markdown body into a DocumentNode tree.

        Args:
            body: Markdown text with any frontmatter already removed

        Returns:
            Root node

        Raises:
            DocumentParseError: Input is not text or markdown-it fails on it
        """
        if not isinstance(body, str):
            raise DocumentParseError(f"Expected markdown text, got {type(body).__name__}")

        try:
            tokens = self._md.parse(body)
            syntax_tree = SyntaxTreeNode(tokens)
        except Exception as e:
            raise DocumentParseError(f"Failed to parse markdown: {e}", snippet=body, cause=e) from e

        root = DocumentNode(type=NodeType.ROOT, children=_convert_blocks(syntax_tree.children))
        _log_debug(f"Document tree: {len(root.children)} top-level blocks")
        return root


def _source_link(url: str) -> str:
    return url


def _convert_blocks(nodes) -> List[DocumentNode]:
    converted = []
    for node in nodes:
        node_type = _BLOCK_TYPES.get(node.type)
        if node_type is None:
            # Unknown block kinds (tables, footnotes from plugins) are not part of the CV structure
            continue

        if node_type in (NodeType.HEADING, NodeType.PARAGRAPH):
            converted.append(
                DocumentNode(
                    type=node_type,
                    depth=int(node.tag[1]) if node_type == NodeType.HEADING else 0,
                    children=_convert_inline_container(node),
                )
            )
        elif node_type in (NodeType.CODE, NodeType.HTML):
            converted.append(DocumentNode(type=node_type, value=node.content))
        elif node_type == NodeType.THEMATIC_BREAK:
            converted.append(DocumentNode(type=node_type))
        else:
            converted.append(
                DocumentNode(
                    type=node_type,
                    ordered=node.type == "ordered_list",
                    children=_convert_blocks(node.children),
                )
            )
    return converted


def _convert_inline_container(node) -> List[DocumentNode]:
    """Inline children of a heading or paragraph (held by its single `inline` child)."""
    children = []
    for child in node.children:
        if child.type == "inline":
            children.extend(_convert_inline(child.children))
    return children


def _convert_inline(nodes) -> List[DocumentNode]:
    converted = []
    for node in nodes:
        node_type = _INLINE_TYPES.get(node.type)
        if node_type is None:
            # Strikethrough and other extension spans: keep their text
            converted.extend(_convert_inline(node.children))
            continue

        if node_type in (NodeType.TEXT, NodeType.INLINE_CODE, NodeType.INLINE_HTML):
            converted.append(DocumentNode(type=node_type, value=node.content))
        elif node_type == NodeType.BREAK:
            converted.append(DocumentNode(type=node_type))
        elif node_type == NodeType.LINK:
            converted.append(
                DocumentNode(
                    type=node_type,
                    url=str(node.attrs.get("href", "")),
                    children=_convert_inline(node.children),
                )
            )
        elif node_type == NodeType.IMAGE:
            converted.append(
                DocumentNode(type=node_type, url=str(node.attrs.get("src", "")), value=node.content)
            )
        else:
            converted.append(DocumentNode(type=node_type, children=_convert_inline(node.children)))
    return converted


# ============================================================================
# Inline text reconstruction
# ============================================================================


def inline_text(node: DocumentNode) -> str:
    """
    Reconstruct the markdown source of a node's inline content.

    `**bold**`, `*em*`, `` `code` ``, `[text](url)` and `![alt](src)` are
    written back in their literal form. Line breaks become newlines and
    inline HTML is dropped.

    For list items only the item's own content is used; nested lists are
    left to extract_list_items.
    """
    if node.type == NodeType.TEXT:
        return node.value
    if node.type == NodeType.BREAK:
        return "\n"
    if node.type == NodeType.INLINE_CODE:
        return f"`{node.value}`"
    if node.type == NodeType.INLINE_HTML:
        return ""
    if node.type == NodeType.IMAGE:
        return f"![{node.value}]({node.url})"

    if node.type == NodeType.LIST_ITEM:
        parts = [inline_text(child) for child in node.children if child.type != NodeType.LIST]
        return "\n".join(part for part in parts if part)

    child_text = "".join(inline_text(child) for child in node.children)

    if node.type == NodeType.STRONG:
        return f"**{child_text}**"
    if node.type == NodeType.EMPHASIS:
        return f"*{child_text}*"
    if node.type == NodeType.LINK:
        return f"[{child_text}]({node.url})"

    return child_text


def extract_list_items(list_node: DocumentNode) -> List[ListItem]:
    """
    Convert a list node into ListItem values, nested lists included.

    Args:
        list_node: Node of type LIST

    Returns:
        One ListItem per item, in document order
    """
    items = []
    for item_node in list_node.children:
        nested = []
        for child in item_node.children:
            if child.type == NodeType.LIST:
                nested.extend(extract_list_items(child))
        items.append(ListItem(text=inline_text(item_node).strip(), items=nested))
    return items


def flatten_list_items(items: List[ListItem]) -> List[str]:
    """Depth-first texts of items and their nested items, empty texts skipped."""
    texts = []
    for item in items:
        texts.extend(item.flatten())
    return texts


# ============================================================================
# Traversal
# ============================================================================

# Nodes whose content is read as a whole; the walk does not enter them
_LEAF_BLOCKS = frozenset({NodeType.HEADING, NodeType.PARAGRAPH, NodeType.LIST})


def iter_blocks(node: DocumentNode, descend_lists: bool = False) -> Iterator[DocumentNode]:
    """
    Yield block nodes depth-first in document order.

    Headings and paragraphs are yielded but not entered. Lists are yielded
    and, unless descend_lists is set, not entered either: the segmenter
    reads a list in one go via extract_list_items. Blockquotes are entered
    so their paragraphs count as ordinary section text.

    Args:
        node: Node to start from (usually the root, which is not yielded)
        descend_lists: Also yield the paragraphs inside list items

    Yields:
        Block nodes
    """
    for child in node.children:
        yield child
        if child.type == NodeType.LIST and descend_lists:
            yield from iter_blocks(child, descend_lists=True)
        elif child.type == NodeType.LIST_ITEM:
            yield from iter_blocks(child, descend_lists=descend_lists)
        elif child.type not in _LEAF_BLOCKS:
            yield from iter_blocks(child, descend_lists=descend_lists)
