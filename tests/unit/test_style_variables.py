"""
Unit tests for style variable generation and colour resolution.

Expected values come from the default template configuration
(10pt base font, A4 page, blue primary, amber tertiary).
"""

import pytest

from cvcraft.contexts.rendering.color_resolver import (
    as_opacity,
    hex_to_rgba,
    resolve_color_pair,
    resolve_semantic_color,
)
from cvcraft.contexts.rendering.config_resolver import create_template_config
from cvcraft.contexts.rendering.defaults import DEFAULT_MUTED, DEFAULT_ON_MUTED
from cvcraft.contexts.rendering.style_variables import (
    calculate_font_size,
    calculate_main_width,
    css_number,
    ensure_margin_units,
    generate_style_variables,
)


@pytest.fixture
def config():
    return create_template_config()


class TestValueHelpers:
    """Tests for unit arithmetic."""

    @pytest.mark.parametrize(
        "scale,base,expected",
        [
            (1.6, "10pt", "16.0pt"),
            (3.2, "10pt", "32.0pt"),
            (2.4, "12px", "28.8px"),
            ("1.5", "1rem", "1.5rem"),
            ("big", "10pt", "10pt"),
            (1.5, "large", "large"),
        ],
    )
    def test_calculate_font_size(self, scale, base, expected):
        assert calculate_font_size(scale, base) == expected

    @pytest.mark.parametrize(
        "page,sidebar,expected",
        [
            ("210mm", "84mm", "126mm"),
            ("210", "84", "126mm"),
            ("800px", "250.5px", "549.5px"),
            ("100%", "40%", "calc(100% - 40%)"),
            ("210mm", "3in", "calc(210mm - 3in)"),
        ],
    )
    def test_calculate_main_width(self, page, sidebar, expected):
        assert calculate_main_width(page, sidebar) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [(None, "20mm"), ("", "20mm"), (15, "15mm"), (12.5, "12.5mm"), (10.0, "10mm"), ("1in", "1in")],
    )
    def test_ensure_margin_units(self, value, expected):
        assert ensure_margin_units(value) == expected

    def test_css_number(self):
        assert css_number(700.0) == "700"
        assert css_number(1.2) == "1.2"
        assert css_number(True) == "true"


class TestColorResolver:
    """Tests for semantic colour keys and colour pairs."""

    def test_hex_to_rgba(self):
        assert hex_to_rgba("#f59e0b", 0.2) == "rgba(245, 158, 11, 0.2)"
        assert hex_to_rgba("fff", 0.5) == "rgba(255, 255, 255, 0.5)"
        assert hex_to_rgba("#000000", 1.0) == "rgba(0, 0, 0, 1)"

    @pytest.mark.parametrize("value", ["red", "#12345", "rgb(0, 0, 0)"])
    def test_hex_to_rgba_passes_through_non_hex(self, value):
        assert hex_to_rgba(value, 0.5) == value

    def test_as_opacity(self):
        assert as_opacity("0.4", 1.0) == 0.4
        assert as_opacity(3, 0.2) == 1.0
        assert as_opacity(-1, 0.2) == 0.0
        assert as_opacity(None, 0.2) == 0.2

    def test_semantic_color(self, config):
        assert resolve_semantic_color("text-secondary", config) == "#475569"
        assert resolve_semantic_color("on-custom2", config) == "#ffffff"

    def test_semantic_color_with_opacity(self, config):
        assert resolve_semantic_color("primary", config, 0.5) == "rgba(37, 99, 235, 0.5)"

    @pytest.mark.parametrize("key", [None, "", "no-such-colour"])
    def test_unset_or_unknown_key_is_text_primary(self, config, key):
        assert resolve_semantic_color(key, config) == "#0f172a"

    def test_color_pairs(self, config):
        assert resolve_color_pair("primary", config) == ("#2563eb", "#ffffff")
        assert resolve_color_pair("custom3", config) == ("#14b8a6", "#ffffff")
        assert resolve_color_pair("unknown", config) == ("#f59e0b", "#ffffff")
        assert resolve_color_pair("muted", {}) == (DEFAULT_MUTED, DEFAULT_ON_MUTED)


class TestGenerateStyleVariables:
    """Tests for the full variable set."""

    def test_default_config(self, config):
        variables = generate_style_variables(config)

        assert variables["--primary-color"] == "#2563eb"
        assert variables["--title-font-size"] == "32.0pt"
        assert variables["--body-font-size"] == "16.0pt"
        assert variables["--main-width"] == "126mm"
        assert variables["--page-margin-top"] == "20mm"
        assert variables["--tag-bg-color"] == "rgba(245, 158, 11, 0.2)"
        assert variables["--heading-weight"] == "700"
        assert variables["--link-color"] == "#2563eb"
        assert variables["--section-header-divider-color"] == "#2563eb"

    def test_all_values_are_strings(self, config):
        variables = generate_style_variables(config)
        assert all(name.startswith("--") for name in variables)
        assert all(isinstance(value, str) and value for value in variables.values())

    def test_missing_config_uses_fallbacks(self):
        variables = generate_style_variables(None)

        assert "--primary-color" not in variables
        assert variables["--body-font-size"] == "16.0pt"
        assert variables["--page-margin-left"] == "20mm"
        assert variables["--tag-bg-color"] == "rgba(245, 158, 11, 0.2)"

    def test_malformed_groups_are_tolerated(self):
        variables = generate_style_variables({"colors": "blue", "typography": [1, 2]})
        assert variables["--base-font-size"] == "10pt"

    def test_color_key_overrides_plain_color(self):
        config = create_template_config(
            {"components": {"links": {"colorKey": "secondary", "colorOpacity": 0.5}}}
        )
        variables = generate_style_variables(config)
        assert variables["--link-color"] == "rgba(100, 116, 139, 0.5)"

    def test_base_font_size_scales_everything(self):
        config = create_template_config({"typography": {"baseFontSize": "12px"}})
        variables = generate_style_variables(config)

        assert variables["--base-font-size"] == "12px"
        assert variables["--title-font-size"] == "38.4px"

    def test_unitless_margin(self):
        config = create_template_config({"layout": {"pageMargin": {"top": 15}}})
        variables = generate_style_variables(config)

        assert variables["--page-margin-top"] == "15mm"
        assert variables["--page-margin-bottom"] == "20mm"
