"""
Metadata extraction for CV documents.

Two paths:
- frontmatter present: load, validate and normalize it (see frontmatter.py)
- no frontmatter: recover contact fields from the body with pattern
  heuristics. The first level-1 heading is the name; every other field
  takes the first match found and ignores later ones. Nothing is required.
"""

from typing import Any, Dict, Optional, Tuple

from cvcraft.contexts.parsing.cv_data_structure import CVParserOptions
from cvcraft.contexts.parsing.document_tree import (
    DocumentNode,
    NodeType,
    inline_text,
    iter_blocks,
)
from cvcraft.contexts.parsing.frontmatter import split_frontmatter, validate_frontmatter
from cvcraft.contexts.parsing.logger import _log_debug
from cvcraft.contexts.parsing.patterns import ContactPatterns

CONTACT_FIELDS = ("name", "email", "phone", "location", "website", "linkedin", "github")


def extract_frontmatter(text: str, options: CVParserOptions) -> Tuple[Dict[str, Any], str]:
    """
    Split and validate the frontmatter block.

    Args:
        text: Full CV document
        options: Parser options

    Returns:
        (metadata, body). metadata is empty when there is no block or the
        block is empty; the caller decides whether to fall back to the body.
    """
    frontmatter, body = split_frontmatter(text)
    if not frontmatter:
        _log_debug("No frontmatter block")
        return {}, body
    return validate_frontmatter(frontmatter, options), body


def extract_contact_from_tree(root: DocumentNode) -> Dict[str, str]:
    """
    Recover contact fields from the body of a document without frontmatter.

    Paragraphs are scanned in document order, including those inside list
    items and blockquotes.

    Args:
        root: Document tree

    Returns:
        Dict with only the fields that were found
    """
    found: Dict[str, str] = {}

    for node in iter_blocks(root, descend_lists=True):
        if node.type == NodeType.HEADING:
            if node.depth == 1 and "name" not in found:
                name = inline_text(node).strip()
                if name:
                    found["name"] = name
        elif node.type == NodeType.PARAGRAPH:
            text = inline_text(node)
            for field, value in _extract_from_text(text).items():
                found.setdefault(field, value)

    metadata = {field: found[field] for field in CONTACT_FIELDS if field in found}
    if metadata:
        _log_debug(f"Recovered from body: {', '.join(metadata)}")
    return metadata


def _extract_from_text(text: str) -> Dict[str, str]:
    """Contact fields present in one paragraph."""
    metadata = {}

    email = ContactPatterns.EMAIL.search(text)
    if email:
        metadata["email"] = email.group(0)

    phone = _extract_prefixed(ContactPatterns.PHONE, text)
    if phone:
        metadata["phone"] = phone

    location = _extract_prefixed(ContactPatterns.LOCATION, text)
    if location:
        metadata["location"] = location

    linkedin = _extract_profile_url(ContactPatterns.LINKEDIN, ContactPatterns.LINKEDIN_URL, text)
    if linkedin:
        metadata["linkedin"] = linkedin

    github = _extract_profile_url(ContactPatterns.GITHUB, ContactPatterns.GITHUB_URL, text)
    if github:
        metadata["github"] = github

    website = ContactPatterns.WEBSITE.search(text)
    if website:
        url = website.group(1)
        # Profile links are not a personal website
        if "linkedin" not in url and "github" not in url:
            metadata["website"] = url

    return metadata


def _extract_prefixed(pattern, text: str) -> Optional[str]:
    """Value captured after a keyword/pictograph prefix, trimmed. None when blank."""
    match = pattern.search(text)
    if not match:
        return None
    value = match.group(1).strip()
    return value or None


def _extract_profile_url(marker_pattern, url_pattern, text: str) -> Optional[str]:
    """
    Profile URL from a linkedin/github mention.

    Bare `linkedin.com/in/...` paths get an https:// scheme.
    """
    marker = marker_pattern.search(text)
    if not marker:
        return None
    url = url_pattern.search(marker.group(0))
    if not url:
        return None
    value = url.group(1)
    return value if value.startswith("http") else f"https://{value}"
