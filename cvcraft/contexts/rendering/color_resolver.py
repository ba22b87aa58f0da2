"""
Colour resolution for template configs.

Semantic colour keys ("primary", "text-secondary", "on-custom2", ...) name
a colour of the template palette; components refer to colours by key so a
palette change restyles everything at once.
"""

from typing import Any, Mapping, Optional, Tuple

from cvcraft.contexts.rendering.config_resolver import get_config_value
from cvcraft.contexts.rendering.defaults import (
    DEFAULT_MUTED,
    DEFAULT_ON_MUTED,
    DEFAULT_ON_TERTIARY,
    DEFAULT_TERTIARY,
)

# Semantic key -> dotted path in the config
SEMANTIC_COLOR_PATHS = {
    "primary": "colors.primary",
    "secondary": "colors.secondary",
    "tertiary": "colors.tertiary",
    "muted": "colors.muted",
    "text-primary": "colors.text.primary",
    "text-secondary": "colors.text.secondary",
    "text-muted": "colors.text.muted",
    "custom1": "colors.custom1",
    "custom2": "colors.custom2",
    "custom3": "colors.custom3",
    "custom4": "colors.custom4",
    "on-primary": "colors.onPrimary",
    "on-secondary": "colors.onSecondary",
    "on-tertiary": "colors.onTertiary",
    "on-muted": "colors.onMuted",
    "on-custom1": "colors.onCustom1",
    "on-custom2": "colors.onCustom2",
    "on-custom3": "colors.onCustom3",
    "on-custom4": "colors.onCustom4",
}

# Fallbacks for keys older palettes may not define
_SEMANTIC_FALLBACKS = {
    "on-tertiary": DEFAULT_ON_TERTIARY,
    "on-muted": DEFAULT_ON_MUTED,
}

# Colour pair -> (base colour path, on-colour path)
COLOR_PAIRS = {
    "primary": ("colors.primary", "colors.onPrimary"),
    "secondary": ("colors.secondary", "colors.onSecondary"),
    "tertiary": ("colors.tertiary", "colors.onTertiary"),
    "muted": ("colors.muted", "colors.onMuted"),
    "custom1": ("colors.custom1", "colors.onCustom1"),
    "custom2": ("colors.custom2", "colors.onCustom2"),
    "custom3": ("colors.custom3", "colors.onCustom3"),
    "custom4": ("colors.custom4", "colors.onCustom4"),
}


def hex_to_rgba(hex_color: str, opacity: float) -> str:
    """
    Convert a hex colour to an rgba() string.

    Args:
        hex_color: '#rrggbb' or '#rgb' (leading '#' optional)
        opacity: 0-1

    Returns:
        'rgba(r, g, b, opacity)'. Values that are not hex are returned unchanged.
    """
    clean = str(hex_color).strip().lstrip("#")
    if len(clean) == 3:
        clean = "".join(char * 2 for char in clean)

    try:
        r, g, b = (int(clean[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return hex_color

    if len(clean) != 6:
        return hex_color

    return f"rgba({r}, {g}, {b}, {_format_opacity(opacity)})"


def as_opacity(value: Any, default: float) -> float:
    """Opacity token as a float in 0-1; unusable values give the default."""
    try:
        opacity = float(value)
    except (TypeError, ValueError):
        return default
    return min(max(opacity, 0.0), 1.0)


def _format_opacity(opacity: float) -> str:
    """0.2 -> '0.2', 1.0 -> '1', 0 -> '0'."""
    return f"{float(opacity):g}"


def resolve_semantic_color(
    color_key: Optional[str],
    config: Mapping[str, Any],
    opacity: Optional[float] = None,
) -> Optional[str]:
    """
    Resolve a semantic colour key to a colour value.

    An unset or unknown key resolves to the primary text colour. With an
    opacity other than 1 the colour is returned as rgba().

    Args:
        color_key: Semantic key, e.g. 'primary' or 'text-secondary'
        config: Template config
        opacity: 0-1, defaults to 1

    Returns:
        Colour string, or None when the config defines no usable colour
    """
    text_primary = get_config_value(config, "colors.text.primary")
    if not color_key:
        return text_primary

    path = SEMANTIC_COLOR_PATHS.get(color_key)
    color = get_config_value(config, path, _SEMANTIC_FALLBACKS.get(color_key)) if path else None
    color = color or text_primary
    if color is None:
        return None

    opacity = as_opacity(opacity, 1.0)
    if opacity == 1.0:
        return color
    return hex_to_rgba(color, opacity)


def resolve_color_pair(pair_key: Optional[str], config: Mapping[str, Any]) -> Tuple[str, str]:
    """
    Resolve a colour pair to (base colour, on-colour).

    Unknown pairs and the tertiary pair fall back through tertiary, the
    legacy accent colour, and finally amber on white.

    Args:
        pair_key: 'primary', 'secondary', 'tertiary', 'muted' or 'custom1'-'custom4'
        config: Template config

    Returns:
        (base colour, on-colour)
    """
    if pair_key == "muted":
        return (
            get_config_value(config, "colors.muted", DEFAULT_MUTED),
            get_config_value(config, "colors.onMuted", DEFAULT_ON_MUTED),
        )

    if pair_key in COLOR_PAIRS and pair_key != "tertiary":
        base_path, on_path = COLOR_PAIRS[pair_key]
        base = get_config_value(config, base_path)
        on = get_config_value(config, on_path)
        if base and on:
            return base, on

    return (
        get_config_value(config, "colors.tertiary")
        or get_config_value(config, "colors.accent", DEFAULT_TERTIARY),
        get_config_value(config, "colors.onTertiary", DEFAULT_ON_TERTIARY),
    )
