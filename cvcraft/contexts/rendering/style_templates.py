"""
Inline style templates for rendered CV markup.

Each template is a CSS declaration list that refers to design tokens with
`var(--token)`. Templates are resolved against the style variables before
injection, so the rendered markup carries concrete values and does not need
a stylesheet defining the custom properties.
"""

import re
from typing import Dict, Mapping

VAR_REFERENCE = re.compile(r"var\(\s*(--[\w-]+)\s*\)")

STYLE_TEMPLATES: Dict[str, str] = {
    "h1": """
        font-family: var(--heading-font-family);
        font-size: var(--name-font-size);
        font-weight: var(--name-font-weight);
        color: var(--name-color);
        line-height: var(--heading-line-height);
        letter-spacing: var(--name-letter-spacing);
        text-transform: var(--name-text-transform);
        margin-bottom: var(--name-margin-bottom);
    """,
    "h2": """
        font-family: var(--heading-font-family);
        font-size: var(--section-header-font-size);
        font-weight: var(--section-header-font-weight);
        color: var(--section-header-color);
        line-height: var(--heading-line-height);
        letter-spacing: var(--section-header-letter-spacing);
        text-transform: var(--section-header-text-transform);
        border-bottom: var(--section-header-border-bottom);
        border-color: var(--section-header-divider-color);
        padding: var(--section-header-padding);
        margin-top: var(--section-header-margin-top);
        margin-bottom: var(--section-header-margin-bottom);
    """,
    "h3": """
        font-family: var(--heading-font-family);
        font-size: var(--job-title-font-size);
        font-weight: var(--job-title-font-weight);
        color: var(--job-title-color);
        line-height: var(--heading-line-height);
        margin-bottom: var(--job-title-margin-bottom);
    """,
    "h4": """
        font-family: var(--heading-font-family);
        font-size: var(--h3-font-size);
        font-weight: var(--subheading-weight);
        color: var(--text-color);
        line-height: var(--heading-line-height);
        margin-bottom: 0.5em;
    """,
    "h5": """
        font-family: var(--heading-font-family);
        font-size: var(--body-font-size);
        font-weight: var(--subheading-weight);
        color: var(--text-color);
        line-height: var(--heading-line-height);
        margin-bottom: 0.5em;
    """,
    "h6": """
        font-family: var(--heading-font-family);
        font-size: var(--small-font-size);
        font-weight: var(--subheading-weight);
        color: var(--text-secondary);
        line-height: var(--heading-line-height);
        margin-bottom: 0.5em;
    """,
    "p": """
        font-size: var(--body-font-size);
        font-weight: var(--body-weight);
        line-height: var(--body-line-height);
        color: var(--on-background-color);
        margin-bottom: var(--paragraph-spacing);
    """,
    "strong": """
        font-weight: var(--bold-weight);
        color: var(--emphasis-color);
    """,
    "em": """
        font-style: italic;
        color: var(--emphasis-color);
    """,
    "a": """
        color: var(--link-color);
        text-decoration: underline;
    """,
    "code": """
        font-size: var(--inline-code-font-size);
        font-family: monospace;
        background-color: var(--muted-color);
        padding: 0.125rem 0.25rem;
        border-radius: 0.25rem;
    """,
    "pre": """
        background-color: var(--muted-color);
        padding: 1rem;
        border-radius: 0.25rem;
        overflow-x: auto;
        margin-bottom: var(--paragraph-spacing);
    """,
    "ul": """
        margin-left: var(--bullet-level1-indent);
        margin-bottom: var(--paragraph-spacing);
        list-style-type: disc;
        color: var(--bullet-level1-color);
    """,
    "ol": """
        margin-left: var(--bullet-level1-indent);
        margin-bottom: var(--paragraph-spacing);
        list-style-type: decimal;
    """,
    "li": """
        line-height: var(--body-line-height);
        margin-bottom: calc(var(--paragraph-spacing) / 2);
        font-size: var(--body-font-size);
    """,
    "blockquote": """
        border-left: 4px solid var(--primary-color);
        padding-left: 1rem;
        margin-left: 0;
        margin-bottom: var(--paragraph-spacing);
        font-style: italic;
        color: var(--text-secondary);
    """,
    "table": """
        width: 100%;
        border-collapse: collapse;
        margin-bottom: var(--paragraph-spacing);
        font-size: var(--body-font-size);
    """,
    "th": """
        background-color: var(--surface-color);
        padding: 0.5rem;
        text-align: left;
        font-weight: var(--bold-weight);
        border-bottom: 2px solid var(--border-color);
    """,
    "td": """
        padding: 0.5rem;
        border-bottom: 1px solid var(--border-color);
    """,
    "hr": """
        border: none;
        border-top: 1px solid var(--border-color);
        margin: var(--section-spacing) 0;
    """,
}

# Nested list overrides by depth bucket (1 uses the plain ul/ol template)
NESTED_LIST_TEMPLATES: Dict[int, str] = {
    2: "margin-left: var(--bullet-level2-indent); color: var(--bullet-level2-color);",
    3: "margin-left: var(--bullet-level3-indent); color: var(--bullet-level3-color);",
}

MAX_LIST_DEPTH = 3


def resolve_style_template(template: str, variables: Mapping[str, str]) -> str:
    """
    Substitute variable references in a declaration list.

    Declarations referring to a variable that is not defined are dropped.

    Args:
        template: CSS declarations using var(--token)
        variables: Style variables from generate_style_variables()

    Returns:
        Declarations joined with '; ' (no trailing semicolon)
    """
    declarations = []
    for declaration in template.split(";"):
        declaration = " ".join(declaration.split())
        if not declaration:
            continue

        names = VAR_REFERENCE.findall(declaration)
        if any(name not in variables for name in names):
            continue

        declarations.append(VAR_REFERENCE.sub(lambda m: variables[m.group(1)], declaration))

    return "; ".join(declarations)


def merge_styles(existing: str, addition: str) -> str:
    """Append declarations to an existing inline style, keeping both."""
    existing = existing.strip().rstrip(";").strip()
    if not existing:
        return addition
    if not addition:
        return existing
    return f"{existing}; {addition}"
