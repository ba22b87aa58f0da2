"""
Template Configuration Resolution

Loads template configurations (the named design tokens a CV is styled with),
merges partial overrides over the defaults, and reads tokens defensively.

Template configs come from an external template store, so nothing here
rejects a config: missing groups and tokens just fall back to defaults.

Examples:
    # Default config with a different primary colour
    >>> config = create_template_config({"colors": {"primary": "#16a34a"}})

    # Dotted lookup with fallback
    >>> get_config_value(config, "components.links.colorKey", "primary")
"""

from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from omegaconf import OmegaConf

from cvcraft.contexts.rendering.defaults import (
    CONFIG_GROUPS,
    REQUIRED_CONFIG_GROUPS,
    get_default_template_config,
)
from cvcraft.contexts.rendering.logger import _log_debug


def load_template_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load a template config YAML file and merge it over the defaults.

    Args:
        config_path: Path to YAML config; None returns the defaults

    Returns:
        Plain dict template configuration

    Raises:
        FileNotFoundError: If the config file does not exist
        ValueError: If the file does not hold a mapping at the top level
    """
    if config_path is None:
        return get_default_template_config()

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Template config not found: {config_path}")

    loaded = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    if not isinstance(loaded, dict):
        raise ValueError(f"Template config must be a mapping: {config_path}")

    _log_debug(f"Loaded template config {config_path.name} ({', '.join(loaded)})")
    return create_template_config(loaded)


def create_template_config(overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """
    Create a template config by merging overrides with defaults.

    Each top-level group (colors, typography, ...) is merged one level deep:
    a key present in the override replaces the default key entirely.

    Args:
        overrides: Partial template config

    Returns:
        Complete template config (fresh copy)
    """
    config = get_default_template_config()
    if not overrides:
        return config

    for group in CONFIG_GROUPS:
        override = overrides.get(group)
        if isinstance(override, Mapping):
            config[group] = {**config[group], **override}

    return config


def validate_template_config(config: Any) -> bool:
    """
    Check that a template config has every required group as a mapping.

    Args:
        config: Candidate template config

    Returns:
        True if colors, typography, layout, components and pdf are all mappings
    """
    if not isinstance(config, Mapping):
        return False
    return all(isinstance(config.get(group), Mapping) for group in REQUIRED_CONFIG_GROUPS)


def get_config_value(config: Optional[Mapping[str, Any]], path: str, default: Any = None) -> Any:
    """
    Read a token by dotted path, tolerating any missing or malformed level.

    Args:
        config: Template config (may be partial)
        path: Dotted key path, e.g. "components.name.colorKey"
        default: Returned when the token is missing, None or an empty string

    Returns:
        Token value or default
    """
    node: Any = config
    for key in path.split("."):
        if not isinstance(node, Mapping):
            return default
        node = node.get(key)
    if node is None or node == "":
        return default
    return node
