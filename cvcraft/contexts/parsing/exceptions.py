"""Custom exceptions for the parsing context."""

from typing import Any, Optional


class CVParserError(Exception):
    """
    Base class for every error a parse can raise.

    Attributes:
        message: Error description
        cause: The underlying exception, if any
    """

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class DocumentParseError(CVParserError):
    """
    Exception raised when the document body cannot be turned into a tree.

    Attributes:
        message: Error description
        snippet: The start of the offending input (truncated)
        cause: The underlying exception, if any
    """

    def __init__(
        self,
        message: str,
        snippet: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        self.snippet = snippet

        parts = [message]
        if snippet:
            truncated = snippet[:200] + "..." if len(snippet) > 200 else snippet
            parts.append(f"\nInput:\n{truncated}")

        super().__init__("\n".join(parts), cause=cause)
        self.message = message


class FrontmatterSyntaxError(DocumentParseError):
    """
    Exception raised when a frontmatter block is present but is not a YAML mapping.

    The Validator reports this as a single error string instead of raising.
    """

    pass


class FrontmatterMissingField(CVParserError):
    """
    Exception raised when a required frontmatter field is absent.

    Only raised when required-field validation is enabled.

    Attributes:
        field: Name of the missing field
    """

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Frontmatter field '{field}' is required and must be a non-empty string")


class FrontmatterInvalidField(CVParserError):
    """
    Exception raised when a present frontmatter field fails its format check.

    Attributes:
        field: Name of the offending field
        value: The raw value as found in the frontmatter
    """

    def __init__(self, field: str, value: Any, reason: str = "Invalid format"):
        self.field = field
        self.value = value
        super().__init__(f"{reason} for '{field}': {value!r}")
