"""
HTML sanitization for rendered CV markup.

CV bodies are user-authored markdown and may carry raw HTML. Before the
markup is styled and returned it is cleaned against a fixed allow-list:

- script-execution and embedding tags are removed together with their content
- other tags not on the allow-list are unwrapped (their text is kept)
- attributes not on the allow-list, and every on* event handler, are dropped
- href/src values go through sanitize_url
- inline styles that can load or run code (url(), expression(), javascript:)
  are dropped
- comments, doctypes and processing instructions are removed
"""

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import FrozenSet, Mapping

from bs4 import BeautifulSoup, CData, Comment, Declaration, Doctype, ProcessingInstruction

from cvcraft.contexts.rendering.logger import log_sanitize_report

# ============================================================================
# Allow-lists
# ============================================================================

ALLOWED_TAGS: FrozenSet[str] = frozenset(
    {
        # Structure
        "section", "article", "header", "footer", "nav", "div", "span",
        # Headings and text blocks
        "h1", "h2", "h3", "h4", "h5", "h6", "p", "br", "hr", "blockquote", "pre",
        # Lists
        "ul", "ol", "li", "dl", "dt", "dd",
        # Inline text
        "a", "strong", "em", "b", "i", "u", "s", "del", "ins", "strike", "code", "kbd",
        "samp", "var", "q", "sup", "sub", "small", "mark", "abbr",
        # Tables
        "table", "thead", "tbody", "tfoot", "tr", "th", "td",
        # Media
        "img",
    }
)

# Removed with everything inside them
DROPPED_TAGS: FrozenSet[str] = frozenset(
    {
        "script", "style", "iframe", "frame", "frameset", "object", "embed", "applet",
        "noscript", "template", "link", "meta", "base", "form", "input", "button",
        "textarea", "select", "option", "svg", "math", "audio", "video", "source", "track",
    }
)

ALLOWED_ATTRIBUTES: Mapping[str, FrozenSet[str]] = {
    "*": frozenset({"style", "class"}),
    "a": frozenset({"href", "title", "target", "rel"}),
    "img": frozenset({"src", "alt", "title", "width", "height"}),
    "ol": frozenset({"start"}),
    "th": frozenset({"align"}),
    "td": frozenset({"align"}),
}

URL_ATTRIBUTES = frozenset({"href", "src"})

# ============================================================================
# URL sanitization
# ============================================================================

BLOCKED_URL_SCHEMES = re.compile(r"^\s*(?:javascript|vbscript|data)\s*:", re.IGNORECASE)
ALLOWED_URL_SCHEMES = re.compile(r"^(?:https?:|mailto:|tel:)", re.IGNORECASE)
# Characters browsers ignore inside a scheme ("java\tscript:")
_URL_INVISIBLES = re.compile(r"[\x00-\x20\x7f]+")

UNSAFE_STYLE = re.compile(r"url\s*\(|expression\s*\(|javascript\s*:", re.IGNORECASE)

BLOCKED_URL = "#"


def sanitize_url(url: str) -> str:
    """
    Neutralize URLs with dangerous schemes.

    Allowed: http(s), mailto, tel, relative paths ('/x', './x'), fragments
    ('#x') and scheme-less strings ('example.com'). Blocked: javascript,
    vbscript, data, and any other scheme.

    Args:
        url: Raw href/src value

    Returns:
        The trimmed URL, or '#' when blocked
    """
    if not url or not isinstance(url, str):
        return BLOCKED_URL

    trimmed = url.strip()
    if BLOCKED_URL_SCHEMES.match(_URL_INVISIBLES.sub("", trimmed)):
        return BLOCKED_URL

    if ALLOWED_URL_SCHEMES.match(trimmed) or trimmed.startswith(("/", "#", ".")):
        return trimmed

    if ":" not in trimmed:
        return trimmed

    return BLOCKED_URL


# ============================================================================
# Sanitizer
# ============================================================================


@dataclass
class SanitizeReport:
    """
    What a sanitize pass removed.

    Attributes:
        removed_tags: Tag name -> count of elements dropped or unwrapped
        removed_attributes: Attribute name -> count of attributes dropped
        blocked_urls: Number of href/src values replaced with '#'
        removed_comments: Number of comments/doctypes/processing instructions removed
    """

    removed_tags: Counter = field(default_factory=Counter)
    removed_attributes: Counter = field(default_factory=Counter)
    blocked_urls: int = 0
    removed_comments: int = 0


class HtmlSanitizer:
    """
    Allow-list sanitizer working in place on a BeautifulSoup tree.

    Holds only its allow-lists, so one instance can be shared.
    """

    def __init__(
        self,
        allowed_tags: FrozenSet[str] = ALLOWED_TAGS,
        allowed_attributes: Mapping[str, FrozenSet[str]] = ALLOWED_ATTRIBUTES,
        dropped_tags: FrozenSet[str] = DROPPED_TAGS,
    ):
        self.allowed_tags = allowed_tags
        self.allowed_attributes = allowed_attributes
        self.dropped_tags = dropped_tags

    def sanitize(self, soup: BeautifulSoup) -> SanitizeReport:
        """
        Clean a parsed document in place.

        Args:
            soup: Parsed markup (modified)

        Returns:
            SanitizeReport describing what was removed
        """
        report = SanitizeReport()

        special_strings = (Comment, CData, Declaration, Doctype, ProcessingInstruction)
        for node in soup.find_all(string=lambda text: isinstance(text, special_strings)):
            node.extract()
            report.removed_comments += 1

        for tag in list(soup.find_all(True)):
            if tag.decomposed:
                continue

            if tag.name in self.dropped_tags:
                report.removed_tags[tag.name] += 1
                tag.decompose()
                continue

            if tag.name not in self.allowed_tags:
                report.removed_tags[tag.name] += 1
                tag.unwrap()
                continue

            self._clean_attributes(tag, report)

        log_sanitize_report(
            dict(report.removed_tags), dict(report.removed_attributes), report.blocked_urls
        )
        return report

    def _allowed_for(self, tag_name: str) -> FrozenSet[str]:
        return self.allowed_attributes.get("*", frozenset()) | self.allowed_attributes.get(
            tag_name, frozenset()
        )

    def _clean_attributes(self, tag, report: SanitizeReport) -> None:
        allowed = self._allowed_for(tag.name)

        for name in list(tag.attrs):
            value = tag.attrs[name]
            lowered = name.lower()

            if lowered.startswith("on") or lowered not in allowed:
                del tag.attrs[name]
                report.removed_attributes[lowered] += 1
                continue

            if lowered in URL_ATTRIBUTES:
                safe = sanitize_url(value if isinstance(value, str) else " ".join(value))
                if safe == BLOCKED_URL and value != BLOCKED_URL:
                    report.blocked_urls += 1
                tag.attrs[name] = safe
            elif lowered == "style" and UNSAFE_STYLE.search(str(value)):
                del tag.attrs[name]
                report.removed_attributes[lowered] += 1


def sanitize_html(markup: str, sanitizer: HtmlSanitizer = None) -> str:
    """
    Sanitize an HTML fragment.

    Args:
        markup: HTML fragment
        sanitizer: Sanitizer to use (defaults to the standard allow-lists)

    Returns:
        Sanitized HTML fragment
    """
    soup = BeautifulSoup(markup, "html.parser")
    (sanitizer or HtmlSanitizer()).sanitize(soup)
    return str(soup)
