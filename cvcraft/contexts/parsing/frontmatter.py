"""
YAML frontmatter handling for CV documents.

Splits the leading `---` block from the markdown body, loads it with
PyYAML, and normalizes/validates the identity fields. A block that is
empty or loads to null is treated as if there were no block at all, so the
body fallback in metadata_extractor can take over.
"""

from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlsplit

import yaml

from cvcraft.contexts.parsing.cv_data_structure import CVParserOptions
from cvcraft.contexts.parsing.exceptions import (
    FrontmatterInvalidField,
    FrontmatterMissingField,
    FrontmatterSyntaxError,
)
from cvcraft.contexts.parsing.logger import _log_debug, _log_warning
from cvcraft.contexts.parsing.patterns import FieldFormatPatterns, FrontmatterPatterns

REQUIRED_FIELDS = ("name", "email")
URL_FIELDS = ("website", "linkedin", "github")
TRIMMED_FIELDS = ("name", "location", "website", "linkedin", "github")

# Schemes that are meaningless without a host part
_HOST_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})


def split_frontmatter(text: str) -> Tuple[Optional[Dict[str, Any]], str]:
    """
    Split a document into its frontmatter mapping and markdown body.

    Args:
        text: Full CV document

    Returns:
        (frontmatter, body). frontmatter is None when the document has no
        block, and may be an empty dict when the block is empty.

    Raises:
        FrontmatterSyntaxError: Block is present but is not valid YAML or
            does not load to a mapping
    """
    match = FrontmatterPatterns.BLOCK.match(text)
    if not match:
        return None, text

    raw_yaml = match.group("yaml")
    body = text[match.end():]

    try:
        data = yaml.safe_load(raw_yaml)
    except yaml.YAMLError as e:
        raise FrontmatterSyntaxError(str(e), snippet=raw_yaml, cause=e) from e
    except RecursionError as e:
        # PyYAML composes nested collections recursively
        raise FrontmatterSyntaxError(
            "Frontmatter is nested too deeply", snippet=raw_yaml, cause=e
        ) from e

    if data is None:
        return {}, body

    if not isinstance(data, dict):
        raise FrontmatterSyntaxError(
            f"Frontmatter must be a mapping of fields, got {type(data).__name__}",
            snippet=raw_yaml,
        )

    # YAML allows non-string keys (numbers, dates); field names are strings
    return {str(key): value for key, value in data.items()}, body


# ============================================================================
# Field format checks
# ============================================================================


def is_valid_email(value: str) -> bool:
    """Email check: RFC 5322-style address with a dotted domain and a TLD of 2+ chars."""
    if not FieldFormatPatterns.EMAIL.match(value):
        return False

    parts = value.split("@")
    if len(parts) != 2:
        return False

    domain_parts = parts[1].split(".")
    return len(domain_parts) >= 2 and len(domain_parts[-1]) >= 2


def is_valid_phone(value: str) -> bool:
    """Phone check: 10-15 digits once spaces, dashes, dots, parens and + are removed."""
    cleaned = FieldFormatPatterns.PHONE_SEPARATORS.sub("", value)
    return bool(FieldFormatPatterns.PHONE_DIGITS.match(cleaned))


def is_valid_url(value: str) -> bool:
    """
    Absolute URL check.

    Requires a scheme. Web schemes also require a host, so
    `linkedin.com/in/jane` (no scheme) and `https://` (no host) both fail
    while `mailto:jane@x.io` passes.
    """
    try:
        parts = urlsplit(value.strip())
        # Raises ValueError for a non-numeric or out-of-range port
        parts.port
    except ValueError:
        return False

    if not parts.scheme or not FieldFormatPatterns.URL_SCHEME.match(parts.scheme):
        return False

    if parts.scheme.lower() in _HOST_SCHEMES and not parts.hostname:
        return False

    return True


# ============================================================================
# Validation and normalization
# ============================================================================


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _check_required(data: Dict[str, Any]) -> None:
    for field in REQUIRED_FIELDS:
        if _is_blank(data.get(field)):
            _log_warning(f"Required frontmatter field '{field}' is missing")
            raise FrontmatterMissingField(field)


def _check_formats(data: Dict[str, Any]) -> None:
    """Strict-mode format checks for fields that are present (not None)."""
    name = data.get("name")
    if name is not None and _is_blank(name):
        raise FrontmatterInvalidField("name", name, "Expected a non-empty string")

    email = data.get("email")
    if email is not None:
        if _is_blank(email) or not is_valid_email(email.strip()):
            raise FrontmatterInvalidField("email", email, "Invalid email format")

    phone = data.get("phone")
    if phone is not None and not is_valid_phone(str(phone)):
        raise FrontmatterInvalidField("phone", phone, "Invalid phone format")

    for field in URL_FIELDS:
        value = data.get(field)
        if value is None:
            continue
        if not isinstance(value, str) or not is_valid_url(value):
            raise FrontmatterInvalidField(field, value, "Invalid URL format")


def _normalize(data: Dict[str, Any]) -> Dict[str, Any]:
    """Trim identity fields and lowercase the email. Unknown fields pass through."""
    normalized = dict(data)

    for field in TRIMMED_FIELDS:
        if isinstance(normalized.get(field), str):
            normalized[field] = normalized[field].strip()

    if isinstance(normalized.get("email"), str):
        normalized["email"] = normalized["email"].strip().lower()

    if normalized.get("phone") is not None:
        normalized["phone"] = str(normalized["phone"]).strip()

    return normalized


def validate_frontmatter(data: Dict[str, Any], options: CVParserOptions) -> Dict[str, Any]:
    """
    Validate and normalize a non-empty frontmatter mapping.

    Required-field checks run first (when enabled), then strict format
    checks (when enabled). Fields other than the identity fields are kept
    unchanged.

    Args:
        data: Mapping loaded from the frontmatter block
        options: Parser options

    Returns:
        Normalized copy of the mapping

    Raises:
        FrontmatterMissingField: validate_required is on and name/email is
            absent, not a string, or blank
        FrontmatterInvalidField: strict_frontmatter is on and a present
            field fails its format check
    """
    if options.validate_required:
        _check_required(data)

    if options.strict_frontmatter:
        try:
            _check_formats(data)
        except FrontmatterInvalidField as e:
            _log_warning(f"Rejected frontmatter: {e.message}")
            raise

    normalized = _normalize(data)
    _log_debug(f"Frontmatter fields: {', '.join(sorted(normalized)) or '(none)'}")
    return normalized
