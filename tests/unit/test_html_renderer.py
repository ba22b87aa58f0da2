"""Unit tests for styled HTML rendering and style template resolution."""

import pytest
from bs4 import BeautifulSoup

from cvcraft.contexts.rendering.config_resolver import create_template_config
from cvcraft.contexts.rendering.html_renderer import StyledRenderer, list_depth, render_styled_markup
from cvcraft.contexts.rendering.style_templates import merge_styles, resolve_style_template


@pytest.fixture
def render():
    renderer = StyledRenderer()
    config = create_template_config()

    def _render(body):
        markup, _ = renderer.render(body, config)
        return BeautifulSoup(markup, "html.parser")

    return _render


class TestStyleTemplates:
    """Tests for template resolution."""

    def test_substitutes_variables(self):
        assert resolve_style_template("color: var(--a);", {"--a": "red"}) == "color: red"

    def test_drops_declarations_with_undefined_variables(self):
        template = "color: var(--missing); margin: 0; padding: var(--p)"
        assert resolve_style_template(template, {"--p": "4px"}) == "margin: 0; padding: 4px"

    def test_collapses_whitespace(self):
        assert resolve_style_template("\n   border:  1px   solid;\n", {}) == "border: 1px solid"

    def test_merge_styles(self):
        assert merge_styles("a: 1;", "b: 2") == "a: 1; b: 2"
        assert merge_styles("", "b: 2") == "b: 2"
        assert merge_styles("a: 1", "") == "a: 1"


class TestStyledRenderer:
    """Tests for inline style injection."""

    def test_headings_and_paragraphs_are_styled(self, render):
        soup = render("# Jane Doe\n\n## Experience\n\nBuilt **things**.\n")

        assert "font-size: 32.0pt" in soup.h1["style"]
        assert "text-transform: uppercase" in soup.h2["style"]
        assert "font-size: 16.0pt" in soup.p["style"]
        assert "font-weight: 600" in soup.strong["style"]

    def test_no_unresolved_variables(self, render):
        soup = render("# A\n\n## B\n\n### C\n\n- d\n\n> e\n\n`f`\n")
        for tag in soup.find_all(style=True):
            assert "var(" not in tag["style"]

    def test_nested_list_indents(self, render):
        soup = render("- a\n  - b\n    - c\n      - d\n")
        lists = soup.find_all("ul")

        assert [list_depth(tag) for tag in lists] == [1, 2, 3, 3]
        assert "margin-left: 20px" in lists[0]["style"]
        assert "40px" not in lists[0]["style"]
        assert "margin-left: 40px" in lists[1]["style"]
        assert "margin-left: 60px" in lists[2]["style"]
        assert "margin-left: 60px" in lists[3]["style"]

    def test_existing_inline_style_is_kept_first(self, render):
        soup = render('<p style="color: red">x</p>\n')
        assert soup.p["style"].startswith("color: red; ")

    def test_tables_and_strikethrough(self, render):
        soup = render("| a | b |\n|---|---|\n| 1 | ~~2~~ |\n")

        assert "border-bottom: 2px solid #e2e8f0" in soup.th["style"]
        assert "padding: 0.5rem" in soup.td["style"]
        assert soup.s.get_text() == "2"

    def test_unstyled_tags_untouched(self, render):
        soup = render("<div>plain</div>\n")
        assert not soup.div.has_attr("style")


@pytest.mark.unit
def test_render_styled_markup_returns_variables():
    markup, variables = render_styled_markup("Hello\n", create_template_config())

    assert markup.startswith("<p style=")
    assert variables["--primary-color"] == "#2563eb"
