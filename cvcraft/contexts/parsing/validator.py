"""
Cheap validation of a CV document.

Checks identity fields without building the document tree. Every problem
is collected into the result; nothing is raised.
"""

from cvcraft.contexts.parsing.cv_data_structure import ValidationResult
from cvcraft.contexts.parsing.exceptions import FrontmatterSyntaxError
from cvcraft.contexts.parsing.frontmatter import is_valid_email, split_frontmatter
from cvcraft.contexts.parsing.logger import _log_debug
from cvcraft.contexts.parsing.patterns import MarkerPatterns

MISSING_NAME = 'Frontmatter must include a valid "name" field'
MISSING_EMAIL = 'Frontmatter must include a valid "email" field'
INVALID_EMAIL = "Email format is invalid"
MISSING_HEADING = "CV must have a name as the first H1 heading (# Name) or in frontmatter"
INVALID_FRONTMATTER = "Invalid YAML frontmatter: {detail}"
INVALID_INPUT = "CV content must be text"


def validate_cv_content(text: str) -> ValidationResult:
    """
    Validate a CV document.

    With frontmatter: name and email must be non-empty strings and email
    must be well-formed. Without frontmatter: the body must contain a
    level-1 heading; a missing email is not an error.

    Args:
        text: Full CV document

    Returns:
        ValidationResult with one error string per problem
    """
    errors = []

    if not isinstance(text, str):
        errors.append(INVALID_INPUT)
        return ValidationResult(valid=False, errors=errors)

    try:
        frontmatter, body = split_frontmatter(text)
    except FrontmatterSyntaxError as e:
        errors.append(INVALID_FRONTMATTER.format(detail=e.message))
        return ValidationResult(valid=False, errors=errors)

    if frontmatter:
        name = frontmatter.get("name")
        if not isinstance(name, str) or not name.strip():
            errors.append(MISSING_NAME)

        email = frontmatter.get("email")
        if not isinstance(email, str) or not email.strip():
            errors.append(MISSING_EMAIL)
        elif not is_valid_email(email.strip()):
            errors.append(INVALID_EMAIL)
    else:
        if not MarkerPatterns.H1_HEADING.search(body):
            errors.append(MISSING_HEADING)

    _log_debug(f"Validation collected {len(errors)} error(s)")
    return ValidationResult(valid=not errors, errors=errors)
