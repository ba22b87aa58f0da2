"""
CV-Craft - Markdown CV parsing and styled rendering

Turns a markdown CV document (YAML frontmatter plus free-form body) into a
normalized, typed record that preview and print layers can render.

Architecture:
- Parsing Context: frontmatter extraction, document tree, section segmentation,
  content classification and cheap validation
- Rendering Context: sanitized HTML generation with template-driven inline styles
"""

__version__ = "0.1.0"
