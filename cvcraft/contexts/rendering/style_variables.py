"""
Style Variable Generation

Derives the named design tokens (`--primary-color`, `--body-font-size`, ...)
used by the style templates from a template configuration. This is the single
place where token names and their fallbacks are defined, so screen preview
and print output agree on every value.

Every lookup is defensive: a missing group or token falls back to its
default, or the variable is left out. Nothing here raises on a partial or
malformed config.
"""

import re
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from cvcraft.contexts.rendering.color_resolver import (
    as_opacity,
    hex_to_rgba,
    resolve_color_pair,
    resolve_semantic_color,
)
from cvcraft.contexts.rendering.config_resolver import get_config_value
from cvcraft.contexts.rendering.defaults import (
    DEFAULT_BASE_FONT_SIZE,
    DEFAULT_FONT_SCALE,
    DEFAULT_MUTED,
    DEFAULT_ON_MUTED,
    DEFAULT_ON_TERTIARY,
    DEFAULT_PAGE_MARGIN,
    DEFAULT_PAGE_WIDTH,
    DEFAULT_SIDEBAR_WIDTH,
    DEFAULT_TERTIARY,
    PHOTO_FILTERS,
    SHADOWS,
)
from cvcraft.contexts.rendering.logger import _log_debug

_UNITLESS_NUMBER = re.compile(r"^\d+(?:\.\d+)?$")
_LENGTH = re.compile(r"^(\d+(?:\.\d+)?)(mm|px|rem|%)?$")
_NUMBER_CHARS = re.compile(r"[0-9.]")
_LEADING_NUMBER = re.compile(r"^\s*([+-]?\d*\.?\d+)")

# Shadow names a component heading may use (profile photos also accept xl)
_HEADING_SHADOWS = {name: value for name, value in SHADOWS.items() if name != "xl"}


# ============================================================================
# Value helpers
# ============================================================================


def css_number(value: Any) -> str:
    """Numbers without a trailing '.0' (700.0 -> '700', 1.2 -> '1.2'); other values as str."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def calculate_font_size(scale: Any, base_font_size: str) -> str:
    """
    Font size as base × scale, one decimal, in the base unit.

    Examples:
        >>> calculate_font_size(1.6, "10pt")
        '16.0pt'
        >>> calculate_font_size(2.4, "12px")
        '28.8px'

    Args:
        scale: Multiplier from typography.fontScale
        base_font_size: Base size with unit, e.g. '10pt'

    Returns:
        Scaled size, or base_font_size unchanged when it has no leading number
    """
    match = _LEADING_NUMBER.match(str(base_font_size))
    try:
        factor = float(scale)
    except (TypeError, ValueError):
        return str(base_font_size)
    if not match:
        return str(base_font_size)

    unit = _NUMBER_CHARS.sub("", str(base_font_size)).strip()
    return f"{float(match.group(1)) * factor:.1f}{unit}"


def ensure_margin_units(value: Any, default: str = DEFAULT_PAGE_MARGIN) -> str:
    """Append 'mm' to unitless margins; missing margins get the default."""
    if value is None or value == "":
        return default
    text = css_number(value)
    if _UNITLESS_NUMBER.match(text):
        return f"{text}mm"
    return text


def calculate_main_width(page_width: str, sidebar_width: str) -> str:
    """
    Main column width: page width minus sidebar width.

    Computed directly when both lengths share a unit (unitless means mm);
    percentages and mixed units fall back to CSS calc().
    """
    page = _LENGTH.match(str(page_width))
    sidebar = _LENGTH.match(str(sidebar_width))

    if page and sidebar:
        page_unit = page.group(2) or "mm"
        sidebar_unit = sidebar.group(2) or "mm"
        if page_unit == sidebar_unit and page_unit != "%":
            width = float(page.group(1)) - float(sidebar.group(1))
            return f"{width:g}{page_unit}"

    return f"calc({page_width} - {sidebar_width})"


def _shadow(name: Any, table: Mapping[str, str] = _HEADING_SHADOWS) -> str:
    return table.get(name, "none") if isinstance(name, str) else "none"


# ============================================================================
# Variable groups
# ============================================================================


class _Tokens:
    """Bound accessors over one template config."""

    def __init__(self, config: Mapping[str, Any]):
        self.config = config
        self.base_font_size = css_number(
            get_config_value(config, "typography.baseFontSize", DEFAULT_BASE_FONT_SIZE)
        )
        scale = get_config_value(config, "typography.fontScale")
        self.font_scale = scale if isinstance(scale, Mapping) else DEFAULT_FONT_SCALE

    def get(self, path: str, default: Any = None) -> Any:
        return get_config_value(self.config, path, default)

    def text(self, path: str, default: Any = None) -> Optional[str]:
        value = self.get(path, default)
        return None if value is None else css_number(value)

    def font_size(self, scale_key: str) -> str:
        scale = self.font_scale.get(scale_key) or DEFAULT_FONT_SCALE[scale_key]
        return calculate_font_size(scale, self.base_font_size)

    def color(self, path: str, key: str = "color", opacity_default: Any = None) -> Optional[str]:
        """
        Semantic colour set through `<key>Key` and `<key>Opacity` under path.

        None when no key is set, so callers fall through to their plain
        colour tokens.
        """
        color_key = self.get(f"{path}.{key}Key")
        if not color_key:
            return None
        opacity = self.get(f"{path}.{key}Opacity", opacity_default)
        return resolve_semantic_color(color_key, self.config, opacity)


def _first(*values: Any) -> Optional[str]:
    """First value that is not None/empty, as str."""
    for value in values:
        if value is not None and value != "":
            return css_number(value)
    return None


def _palette_variables(t: _Tokens) -> Dict[str, Optional[str]]:
    tertiary = _first(t.get("colors.tertiary"), t.get("colors.accent"), DEFAULT_TERTIARY)
    return {
        # Main colour pairs
        "--primary-color": t.text("colors.primary"),
        "--on-primary-color": t.text("colors.onPrimary"),
        "--secondary-color": t.text("colors.secondary"),
        "--on-secondary-color": t.text("colors.onSecondary"),
        "--tertiary-color": tertiary,
        "--on-tertiary-color": t.text("colors.onTertiary", DEFAULT_ON_TERTIARY),
        "--muted-color": t.text("colors.muted", DEFAULT_MUTED),
        "--on-muted-color": t.text("colors.onMuted", DEFAULT_ON_MUTED),
        "--background-color": t.text("colors.background"),
        "--on-background-color": t.text("colors.text.primary"),
        # Custom colour pairs
        "--custom1-color": t.text("colors.custom1"),
        "--on-custom1-color": t.text("colors.onCustom1"),
        "--custom2-color": t.text("colors.custom2"),
        "--on-custom2-color": t.text("colors.onCustom2"),
        "--custom3-color": t.text("colors.custom3"),
        "--on-custom3-color": t.text("colors.onCustom3"),
        "--custom4-color": t.text("colors.custom4"),
        "--on-custom4-color": t.text("colors.onCustom4"),
        # Legacy names
        "--accent-color": tertiary,
        "--surface-color": t.text("colors.secondary"),
        "--text-color": t.text("colors.text.primary"),
        "--text-secondary": t.text("colors.text.secondary"),
        "--text-muted": t.text("colors.text.muted"),
        "--border-color": t.text("colors.borders"),
    }


def _link_variables(t: _Tokens) -> Dict[str, Optional[str]]:
    return {
        "--link-color": _first(
            t.color("components.links"), t.get("components.links.color"), t.get("colors.links.default")
        ),
        "--link-hover-color": _first(
            t.color("components.links", "hoverColor"),
            t.get("components.links.hoverColor"),
            t.get("colors.links.hover"),
        ),
        "--link-font-size": t.text("components.links.fontSize", "inherit"),
        "--link-font-weight": t.text("components.links.fontWeight", 500),
        "--link-letter-spacing": t.text("components.links.letterSpacing", "0em"),
        "--link-text-transform": t.text("components.links.textTransform", "none"),
        "--link-font-style": t.text("components.links.fontStyle", "normal"),
        "--link-underline-style": t.text("components.links.underlineStyle", "always"),
    }


def _typography_variables(t: _Tokens) -> Dict[str, Optional[str]]:
    return {
        "--font-family": t.text("typography.fontFamily.body"),
        "--heading-font-family": t.text("typography.fontFamily.heading"),
        # Sizes from base × scale
        "--base-font-size": t.base_font_size,
        "--title-font-size": t.font_size("h1"),
        "--h2-font-size": t.font_size("h2"),
        "--h3-font-size": t.font_size("h3"),
        "--body-font-size": t.font_size("body"),
        "--small-font-size": t.font_size("small"),
        "--tiny-font-size": t.font_size("tiny"),
        "--tag-font-size": t.font_size("tag"),
        "--date-line-font-size": t.font_size("dateLine"),
        "--inline-code-font-size": t.font_size("inlineCode"),
        # Weights
        "--heading-weight": t.text("typography.fontWeight.heading", 700),
        "--subheading-weight": t.text("typography.fontWeight.subheading", 600),
        "--body-weight": t.text("typography.fontWeight.body", 400),
        "--bold-weight": t.text("typography.fontWeight.bold", 600),
        # Line heights
        "--heading-line-height": t.text("typography.lineHeight.heading", 1.2),
        "--body-line-height": t.text("typography.lineHeight.body", 1.6),
        "--compact-line-height": t.text("typography.lineHeight.compact", 1.4),
    }


def _layout_variables(t: _Tokens) -> Dict[str, Optional[str]]:
    page_width = t.text("layout.pageWidth", DEFAULT_PAGE_WIDTH)
    sidebar_width = t.text("layout.sidebarWidth", DEFAULT_SIDEBAR_WIDTH)
    return {
        "--page-width": page_width,
        "--page-margin-top": ensure_margin_units(t.get("layout.pageMargin.top")),
        "--page-margin-right": ensure_margin_units(t.get("layout.pageMargin.right")),
        "--page-margin-bottom": ensure_margin_units(t.get("layout.pageMargin.bottom")),
        "--page-margin-left": ensure_margin_units(t.get("layout.pageMargin.left")),
        "--section-spacing": t.text("layout.sectionSpacing", "24px"),
        "--paragraph-spacing": t.text("layout.paragraphSpacing", "12px"),
        # Two-column layout
        "--sidebar-width": sidebar_width,
        "--main-width": calculate_main_width(page_width, sidebar_width),
    }


def _tag_variables(t: _Tokens) -> Dict[str, Optional[str]]:
    base_color, on_color = resolve_color_pair(t.get("components.tags.colorPair", "tertiary"), t.config)
    background_opacity = as_opacity(t.get("components.tags.backgroundOpacity"), 0.2)
    text_opacity = as_opacity(t.get("components.tags.textOpacity"), 1.0)
    return {
        "--tag-bg-color": hex_to_rgba(base_color, background_opacity),
        "--tag-text-color": hex_to_rgba(on_color, text_opacity),
        "--tag-border-radius": t.text("components.tags.borderRadius"),
        "--tag-font-size-custom": _first(t.get("components.tags.fontSize"), t.font_size("tag")),
        "--tag-font-weight": t.text("components.tags.fontWeight", 500),
        "--tag-letter-spacing": t.text("components.tags.letterSpacing", "0em"),
        "--tag-text-transform": t.text("components.tags.textTransform", "none"),
        "--tag-font-style": t.text("components.tags.fontStyle", "normal"),
        "--tag-padding": t.text("components.tags.padding", "4px 8px"),
        "--tag-gap": t.text("components.tags.gap", "8px"),
    }


def _date_line_variables(t: _Tokens) -> Dict[str, Optional[str]]:
    return {
        "--date-line-color": _first(
            t.color("components.dateLine"),
            t.get("components.dateLine.color"),
            t.get("colors.text.primary"),
        ),
        "--date-line-font-size-custom": _first(
            t.get("components.dateLine.fontSize"), t.font_size("dateLine")
        ),
        "--date-line-font-weight": t.text("components.dateLine.fontWeight", 400),
        "--date-line-font-style": t.text("components.dateLine.fontStyle", "italic"),
        "--date-line-alignment": t.text("components.dateLine.alignment", "right"),
        "--date-line-letter-spacing": t.text("components.dateLine.letterSpacing", "0em"),
        "--date-line-text-transform": t.text("components.dateLine.textTransform", "none"),
    }


def _heading_component_variables(
    t: _Tokens, component: str, prefix: str, defaults: Mapping[str, Any]
) -> Dict[str, Optional[str]]:
    """
    Variables shared by the name, section header and job title headings.

    Args:
        t: Token accessors
        component: Key under components (e.g. 'sectionHeader')
        prefix: Variable prefix (e.g. '--section-header')
        defaults: Per-component defaults (font size, weight, colour fallbacks, ...)
    """
    path = f"components.{component}"
    return {
        f"{prefix}-font-size": _first(t.get(f"{path}.fontSize"), defaults["fontSize"]),
        f"{prefix}-font-weight": t.text(f"{path}.fontWeight", defaults["fontWeight"]),
        f"{prefix}-color": _first(t.color(path), t.get(f"{path}.color"), defaults["color"]),
        f"{prefix}-letter-spacing": t.text(f"{path}.letterSpacing", defaults["letterSpacing"]),
        f"{prefix}-text-transform": t.text(f"{path}.textTransform", defaults["textTransform"]),
        f"{prefix}-line-height": t.text(f"{path}.lineHeight", defaults["lineHeight"]),
        f"{prefix}-font-style": t.text(f"{path}.fontStyle", "normal"),
        # Spacing
        f"{prefix}-margin-top": t.text(f"{path}.marginTop", defaults["marginTop"]),
        f"{prefix}-margin-bottom": t.text(f"{path}.marginBottom", defaults["marginBottom"]),
        f"{prefix}-padding": t.text(f"{path}.padding", defaults["padding"]),
        # Background
        f"{prefix}-background-color": _first(t.color(path, "backgroundColor", 0), "transparent"),
        f"{prefix}-border-radius": t.text(f"{path}.borderRadius", "0px"),
        # Border
        f"{prefix}-border-style": t.text(f"{path}.borderStyle", "none"),
        f"{prefix}-border-width": t.text(f"{path}.borderWidth", "0px"),
        f"{prefix}-border-color": _first(t.color(path, "borderColor", 1), "transparent"),
        # Divider
        f"{prefix}-divider-style": t.text(f"{path}.dividerStyle", "none"),
        f"{prefix}-divider-width": t.text(f"{path}.dividerWidth", "2px"),
        f"{prefix}-divider-color": _first(
            t.color(path, "dividerColor", 1), *defaults["dividerColor"]
        ),
        f"{prefix}-shadow": _shadow(t.get(f"{path}.shadow")),
    }


def _name_variables(t: _Tokens) -> Dict[str, Optional[str]]:
    variables = _heading_component_variables(
        t,
        "name",
        "--name",
        {
            "fontSize": t.font_size("h1"),
            "fontWeight": 700,
            "color": _first(t.get("colors.primary"), "#0f172a"),
            "letterSpacing": "-0.02em",
            "textTransform": "uppercase",
            "lineHeight": 1.2,
            "marginTop": "0px",
            "marginBottom": "8px",
            "padding": "0px",
            "dividerColor": (t.get("colors.primary"),),
        },
    )
    variables["--name-alignment"] = t.text("components.name.alignment", "left")
    variables["--header-alignment"] = t.text("components.header.alignment", "left")
    return variables


def _section_header_variables(t: _Tokens) -> Dict[str, Optional[str]]:
    variables = _heading_component_variables(
        t,
        "sectionHeader",
        "--section-header",
        {
            "fontSize": t.font_size("h2"),
            "fontWeight": 700,
            "color": t.get("colors.primary"),
            "letterSpacing": "0.05em",
            "textTransform": "uppercase",
            "lineHeight": 1.2,
            "marginTop": "24px",
            "marginBottom": "12px",
            "padding": "4px 12px",
            "dividerColor": (
                t.get("components.sectionHeader.dividerColor"),
                t.get("components.sectionHeader.borderColor"),
                t.get("colors.primary"),
            ),
        },
    )
    # Legacy single-value divider
    variables["--section-header-border-bottom"] = t.text(
        "components.sectionHeader.borderBottom", "2px solid"
    )
    return variables


def _job_title_variables(t: _Tokens) -> Dict[str, Optional[str]]:
    return _heading_component_variables(
        t,
        "jobTitle",
        "--job-title",
        {
            "fontSize": t.font_size("h3"),
            "fontWeight": 600,
            "color": t.get("colors.text.primary"),
            "letterSpacing": "0em",
            "textTransform": "none",
            "lineHeight": 1.3,
            "marginTop": "0px",
            "marginBottom": "4px",
            "padding": "0px",
            "dividerColor": (t.get("colors.primary"),),
        },
    )


def _contact_variables(t: _Tokens) -> Dict[str, Optional[str]]:
    path = "components.contactInfo"
    return {
        "--contact-layout": t.text(f"{path}.layout", "inline"),
        "--contact-icon-size": t.text(f"{path}.iconSize", "16px"),
        "--contact-icon-color": _first(
            t.color("components.contactInfo", "iconColor"),
            t.get(f"{path}.iconColor"),
            t.get("colors.text.secondary"),
        ),
        "--contact-spacing": t.text(f"{path}.spacing", "12px"),
        "--contact-font-size": _first(t.get(f"{path}.fontSize"), t.font_size("small")),
        "--contact-font-weight": t.text(f"{path}.fontWeight", 400),
        "--contact-color": _first(
            t.color("components.contactInfo"), t.get(f"{path}.textColor"), t.get("colors.text.secondary")
        ),
        "--contact-letter-spacing": t.text(f"{path}.letterSpacing", "0em"),
        "--contact-text-transform": t.text(f"{path}.textTransform", "none"),
        "--contact-font-style": t.text(f"{path}.fontStyle", "normal"),
    }


def _profile_photo_variables(t: _Tokens) -> Dict[str, Optional[str]]:
    path = "components.profilePhoto"
    border_width = t.text(f"{path}.borderWidth", "3px")
    border_style = t.text(f"{path}.borderStyle", "solid")
    border_color = t.text(f"{path}.borderColor", "#e2e8f0")
    filter_name = t.get(f"{path}.filter", "none")
    return {
        "--profile-photo-size": t.text(f"{path}.size", "160px"),
        "--profile-photo-border-radius": t.text(f"{path}.borderRadius", "50%"),
        "--profile-photo-border-width": border_width,
        "--profile-photo-border-style": border_style,
        "--profile-photo-border-color": border_color,
        "--profile-photo-border": f"{border_width} {border_style} {border_color}",
        "--profile-photo-position": t.text(f"{path}.position", "center"),
        "--profile-photo-margin-top": t.text(f"{path}.marginTop", "0px"),
        "--profile-photo-margin-bottom": t.text(f"{path}.marginBottom", "16px"),
        "--profile-photo-margin-left": t.text(f"{path}.marginLeft", "0px"),
        "--profile-photo-margin-right": t.text(f"{path}.marginRight", "0px"),
        "--profile-photo-opacity": t.text(f"{path}.opacity", 1),
        "--profile-photo-shadow": _shadow(t.get(f"{path}.shadow"), SHADOWS),
        "--profile-photo-filter": _shadow(filter_name, PHOTO_FILTERS),
    }


def _text_component_variables(t: _Tokens) -> Dict[str, Optional[str]]:
    return {
        # Organisation names
        "--org-name-font-size": _first(
            t.get("components.organizationName.fontSize"), t.font_size("body")
        ),
        "--org-name-font-weight": t.text("components.organizationName.fontWeight", 500),
        "--org-name-color": _first(
            t.get("components.organizationName.color"), t.get("colors.text.secondary")
        ),
        "--org-name-font-style": t.text("components.organizationName.fontStyle", "normal"),
        # Key-value pairs
        "--key-value-label-color": _first(
            t.get("components.keyValue.labelColor"), t.get("colors.text.primary")
        ),
        "--key-value-label-weight": t.text("components.keyValue.labelWeight", 600),
        "--key-value-value-color": _first(
            t.get("components.keyValue.valueColor"), t.get("colors.text.secondary")
        ),
        "--key-value-value-weight": t.text("components.keyValue.valueWeight", 400),
        "--key-value-separator": t.text("components.keyValue.separator", ":"),
        "--key-value-spacing": t.text("components.keyValue.spacing", "4px"),
        # Emphasis
        "--emphasis-font-weight": t.text("components.emphasis.fontWeight", 600),
        "--emphasis-color": _first(t.get("components.emphasis.color"), t.get("colors.text.primary")),
    }


def _list_variables(t: _Tokens) -> Dict[str, Optional[str]]:
    return {
        "--bullet-level1-color": _first(t.get("components.list.level1.color"), t.get("colors.primary")),
        "--bullet-level2-color": _first(
            t.get("components.list.level2.color"), t.get("colors.text.secondary")
        ),
        "--bullet-level3-color": _first(
            t.get("components.list.level3.color"), t.get("colors.text.muted")
        ),
        "--bullet-level1-indent": t.text("components.list.level1.indent", "20px"),
        "--bullet-level2-indent": t.text("components.list.level2.indent", "40px"),
        "--bullet-level3-indent": t.text("components.list.level3.indent", "60px"),
    }


def _effects_variables(t: _Tokens) -> Dict[str, Optional[str]]:
    shadows = bool(t.get("advanced.shadows", False))
    return {
        "--animation-duration": "0.2s" if t.get("advanced.animations", False) else "0s",
        "--shadow-default": "0 1px 3px rgba(0, 0, 0, 0.1)" if shadows else "none",
        "--shadow-hover": "0 4px 12px rgba(0, 0, 0, 0.15)" if shadows else "none",
    }


def _page_number_variables(t: _Tokens) -> Dict[str, Optional[str]]:
    path = "pdf.pageNumbers"
    return {
        "--page-number-font-size": t.text(f"{path}.fontSize", "10px"),
        "--page-number-font-weight": t.text(f"{path}.fontWeight", 400),
        "--page-number-color": _first(
            t.color(path),
            t.get("colors.text.secondary"),
        ),
        "--page-number-margin": t.text(f"{path}.margin", "10mm"),
        "--page-number-position": t.text(f"{path}.position", "bottom-center"),
    }


_VARIABLE_GROUPS: Tuple[Callable[[_Tokens], Dict[str, Optional[str]]], ...] = (
    _palette_variables,
    _link_variables,
    _typography_variables,
    _layout_variables,
    _tag_variables,
    _date_line_variables,
    _name_variables,
    _contact_variables,
    _profile_photo_variables,
    _section_header_variables,
    _job_title_variables,
    _text_component_variables,
    _list_variables,
    _effects_variables,
    _page_number_variables,
)


def generate_style_variables(config: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """
    Generate style variables from a template configuration.

    Args:
        config: Template config (complete or partial; None counts as empty)

    Returns:
        Dict mapping variable names ('--primary-color') to CSS values.
        Variables with no value and no default are omitted.
    """
    tokens = _Tokens(config if isinstance(config, Mapping) else {})

    variables: Dict[str, str] = {}
    for group in _VARIABLE_GROUPS:
        for name, value in group(tokens).items():
            if value is not None and value != "":
                variables[name] = str(value)

    _log_debug(f"Generated {len(variables)} style variables")
    return variables
