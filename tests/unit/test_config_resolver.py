"""Unit tests for template config loading, merging and lookup."""

import pytest

from cvcraft.contexts.rendering.config_resolver import (
    create_template_config,
    get_config_value,
    load_template_config,
    validate_template_config,
)
from cvcraft.contexts.rendering.defaults import DEFAULT_TEMPLATE_CONFIG


class TestCreateTemplateConfig:
    """Tests for merging overrides over the defaults."""

    def test_no_overrides_is_a_copy_of_defaults(self):
        config = create_template_config()

        assert config == DEFAULT_TEMPLATE_CONFIG
        config["colors"]["primary"] = "#000000"
        assert DEFAULT_TEMPLATE_CONFIG["colors"]["primary"] == "#2563eb"

    def test_group_override_keeps_sibling_keys(self):
        config = create_template_config({"colors": {"primary": "#16a34a"}})

        assert config["colors"]["primary"] == "#16a34a"
        assert config["colors"]["secondary"] == "#64748b"

    def test_merge_is_one_level_deep(self):
        config = create_template_config({"colors": {"text": {"primary": "#111111"}}})
        assert config["colors"]["text"] == {"primary": "#111111"}

    def test_unknown_groups_and_non_mappings_are_ignored(self):
        config = create_template_config({"colors": "red", "extras": {"a": 1}})

        assert config["colors"] == DEFAULT_TEMPLATE_CONFIG["colors"]
        assert "extras" not in config


class TestValidateTemplateConfig:
    """Tests for the structural check."""

    def test_defaults_are_valid(self):
        assert validate_template_config(create_template_config())

    @pytest.mark.parametrize(
        "config",
        [None, "config", {}, {"colors": {}, "typography": {}, "layout": {}, "components": {}}],
    )
    def test_invalid(self, config):
        assert not validate_template_config(config)

    def test_group_must_be_a_mapping(self):
        config = create_template_config()
        config["pdf"] = "A4"
        assert not validate_template_config(config)


class TestGetConfigValue:
    """Tests for dotted lookups."""

    def test_nested_value(self):
        config = create_template_config()
        assert get_config_value(config, "colors.text.secondary") == "#475569"

    @pytest.mark.parametrize(
        "config,path",
        [
            ({}, "colors.primary"),
            ({"a": {"b": ""}}, "a.b"),
            ({"a": {"b": None}}, "a.b"),
            ({"a": 5}, "a.b"),
            (None, "a"),
        ],
    )
    def test_default_for_missing_or_empty(self, config, path):
        assert get_config_value(config, path, "fallback") == "fallback"

    def test_zero_is_a_value(self):
        assert get_config_value({"a": {"b": 0}}, "a.b", 1) == 0


class TestLoadTemplateConfig:
    """Tests for loading YAML config files."""

    def test_loads_and_merges(self, tmp_path):
        path = tmp_path / "modern.yaml"
        path.write_text("colors:\n  primary: '#000000'\nlayout:\n  sidebarWidth: 70mm\n")

        config = load_template_config(path)

        assert config["colors"]["primary"] == "#000000"
        assert config["colors"]["secondary"] == "#64748b"
        assert config["layout"]["sidebarWidth"] == "70mm"
        assert validate_template_config(config)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_template_config(tmp_path / "missing.yaml")

    def test_top_level_must_be_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ValueError):
            load_template_config(path)

    def test_defaults_without_path_ignore_environment(self, monkeypatch):
        monkeypatch.setenv("CV_TEMPLATE_CONFIG_PATH", "/nonexistent/template.yaml")
        assert load_template_config() == DEFAULT_TEMPLATE_CONFIG
