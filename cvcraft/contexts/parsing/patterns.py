"""
Reusable regex patterns for CV document parsing.

Pattern classes follow one convention:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions (in the modules that use them) built on these patterns

Patterns run against inline text reconstructed from the document tree, so
emphasis markers (`**`, `*`, `_`) are part of the text they see.
"""

import re
from dataclasses import dataclass

# =============================================================================
# FRONTMATTER PATTERNS
# =============================================================================


@dataclass(frozen=True)
class FrontmatterPatterns:
    """
    Patterns for locating a YAML frontmatter block.

    The block must start on the very first line of the document. An optional
    byte-order mark is tolerated. The closing fence may be `---` or `...`.
    """

    BLOCK: re.Pattern = re.compile(
        r"\A\ufeff?---[ \t]*\r?\n(?P<yaml>.*?)(?:\r?\n)?^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)",
        re.DOTALL | re.MULTILINE,
    )


# =============================================================================
# FIELD FORMAT PATTERNS
# =============================================================================


@dataclass(frozen=True)
class FieldFormatPatterns:
    """
    Format checks applied to frontmatter fields in strict mode.
    """

    # Local part per RFC 5322 atext, dotted domain labels of at most 63 chars
    EMAIL: re.Pattern = re.compile(
        r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
        r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
    )

    # Separators stripped before counting phone digits
    PHONE_SEPARATORS: re.Pattern = re.compile(r"[\s\-()+.]")

    # 10-15 digits covers international numbers with country code
    PHONE_DIGITS: re.Pattern = re.compile(r"^\d{10,15}$")

    URL_SCHEME: re.Pattern = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*$")


# =============================================================================
# CONTACT EXTRACTION PATTERNS (no frontmatter)
# =============================================================================


@dataclass(frozen=True)
class ContactPatterns:
    """
    Patterns for recovering contact details from body paragraphs.

    Each field accepts a keyword prefix ("Phone:", "Location") or one of a
    few pictographic prefixes, case-insensitively. Bold markers around the
    prefix (`**📱**`) are tolerated.
    """

    EMAIL: re.Pattern = re.compile(r"[\w.\-]+@[\w.\-]+\.\w+")

    PHONE: re.Pattern = re.compile(
        r"(?:📱|📞|☎️?|phone|tel|mobile)[\s*]*:?[\s*]*([+\d\s\-().]+)", re.IGNORECASE
    )

    LOCATION: re.Pattern = re.compile(r"(?:📍|location|address)[\s*]*:?[\s*]*([^,\n]+)", re.IGNORECASE)

    LINKEDIN: re.Pattern = re.compile(r"(?:linkedin\.com/in/[\w\-]+|🔗.*linkedin\S*)", re.IGNORECASE)

    GITHUB: re.Pattern = re.compile(r"(?:github\.com/[\w\-]+|💻.*github\S*)", re.IGNORECASE)

    # URL inside a linkedin/github match: full URL or bare profile path
    LINKEDIN_URL: re.Pattern = re.compile(r"(https?://[^\s)]+|linkedin\.com/in/[\w\-]+)")
    GITHUB_URL: re.Pattern = re.compile(r"(https?://[^\s)]+|github\.com/[\w\-]+)")

    WEBSITE: re.Pattern = re.compile(r"(https?://[^\s)]+)")


# =============================================================================
# ENTRY PATTERNS
# =============================================================================


@dataclass(frozen=True)
class EntryPatterns:
    """
    Patterns for splitting entry headings and classifying entry paragraphs.

    Paragraph patterns are tried in the order they are listed here.
    """

    # "Job Title at Company"
    TITLE_AT_COMPANY: re.Pattern = re.compile(r"^(.+?)\s+at\s+(.+)$", re.IGNORECASE)

    # 1) "**Company** | Date" with | · • — as separator
    BOLD_COMPANY_DATE: re.Pattern = re.compile(r"^\*\*(.+?)\*\*\s*(?:\||·|•|—)\s*(.+)$")

    # 2) "**Company**" on its own
    BOLD_ONLY: re.Pattern = re.compile(r"^\*\*[^*]+\*\*$")

    # 4) Anything with a year in it, optionally wrapped in * or _
    DATE_LINE: re.Pattern = re.compile(r"^[*_]*(.*?\d{4}.*?)[*_]*$")

    YEAR: re.Pattern = re.compile(r"\d{4}")


# =============================================================================
# SKILL PATTERNS
# =============================================================================


@dataclass(frozen=True)
class SkillPatterns:
    """
    Patterns for categorised skill lists.

    Accepted category forms: `**Cat:** a, b`, `**Cat**: a, b`, `Cat: a, b`.
    """

    # Bold label must close with `:**` or `**:`; plain label ends at the first colon
    CATEGORY_LINE: re.Pattern = re.compile(
        r"^(?:\*\*([^:*\n]+?)(?::\*\*|\*\*:)|([^:*\n]+?):)\s*(.+)$"
    )

    # Label with nothing after it: `**Cat:**`, `**Cat**:`, `Cat:`, `**Cat**`
    LABEL_ONLY: re.Pattern = re.compile(r"^(?:\*\*([^:*\n]+?)(?::\*\*|\*\*:|\*\*)|([^:*\n]+?):)$")


# =============================================================================
# MARKER PATTERNS
# =============================================================================


@dataclass(frozen=True)
class MarkerPatterns:
    """
    Patterns for comment-style markers embedded in the markdown body.
    """

    # <!-- break --> with any casing and inner whitespace
    PAGE_BREAK: re.Pattern = re.compile(r"^<!--\s*break\s*-->$", re.IGNORECASE)

    # H1 check used by the validator, without building a tree
    H1_HEADING: re.Pattern = re.compile(r"^ {0,3}#[ \t]+\S.*$", re.MULTILINE)
