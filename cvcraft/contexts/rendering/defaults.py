"""
Default values for CV template configuration.

Provides shared defaults used by:
- config_resolver.py (create_template_config: merge overrides over defaults)
- style_variables.py (fallbacks for missing tokens)

Keys keep the camelCase names of the template configuration format, since
template configs are authored and stored outside this package.
"""

import copy
from typing import Any, Dict

# Font scale relative to typography.baseFontSize
DEFAULT_FONT_SCALE = {
    "h1": 3.2,  # Name
    "h2": 2.4,  # Section headers
    "h3": 2.0,  # Job titles
    "body": 1.6,
    "small": 1.4,  # Contact info
    "tiny": 1.2,
    "tag": 1.3,
    "dateLine": 1.3,
    "inlineCode": 1.2,
}

DEFAULT_BASE_FONT_SIZE = "10pt"
DEFAULT_PAGE_MARGIN = "20mm"
DEFAULT_PAGE_WIDTH = "210mm"  # A4
DEFAULT_SIDEBAR_WIDTH = "84mm"  # 40% of A4

# Fallbacks for colour pair members that older configs may lack
DEFAULT_TERTIARY = "#f59e0b"
DEFAULT_ON_TERTIARY = "#ffffff"
DEFAULT_MUTED = "#f1f5f9"
DEFAULT_ON_MUTED = "#334155"

SHADOWS = {
    "none": "none",
    "sm": "0 1px 2px rgba(0, 0, 0, 0.05)",
    "md": "0 4px 6px rgba(0, 0, 0, 0.1)",
    "lg": "0 10px 15px rgba(0, 0, 0, 0.1)",
    "xl": "0 20px 25px rgba(0, 0, 0, 0.15)",
}

PHOTO_FILTERS = {
    "none": "none",
    "grayscale": "grayscale(100%)",
    "sepia": "sepia(100%)",
}

# Top-level groups every template config must carry
REQUIRED_CONFIG_GROUPS = ("colors", "typography", "layout", "components", "pdf")
CONFIG_GROUPS = REQUIRED_CONFIG_GROUPS + ("advanced",)

DEFAULT_TEMPLATE_CONFIG: Dict[str, Any] = {
    "colors": {
        "primary": "#2563eb",
        "onPrimary": "#ffffff",
        "secondary": "#64748b",
        "onSecondary": "#ffffff",
        "tertiary": DEFAULT_TERTIARY,
        "onTertiary": DEFAULT_ON_TERTIARY,
        "background": "#ffffff",
        "muted": DEFAULT_MUTED,
        "onMuted": DEFAULT_ON_MUTED,
        "text": {
            "primary": "#0f172a",
            "secondary": "#475569",
            "muted": "#94a3b8",
        },
        "borders": "#e2e8f0",
        "links": {
            "default": "#2563eb",
            "hover": "#1d4ed8",
        },
        "custom1": "#8b5cf6",
        "onCustom1": "#ffffff",
        "custom2": "#ec4899",
        "onCustom2": "#ffffff",
        "custom3": "#14b8a6",
        "onCustom3": "#ffffff",
        "custom4": "#f97316",
        "onCustom4": "#ffffff",
        # Deprecated, use tertiary
        "accent": DEFAULT_TERTIARY,
    },
    "typography": {
        "baseFontSize": DEFAULT_BASE_FONT_SIZE,
        "fontFamily": {
            "heading": "Inter, system-ui, -apple-system, sans-serif",
            "body": 'Georgia, "Times New Roman", serif',
            "monospace": '"Fira Code", "Courier New", monospace',
        },
        "fontScale": dict(DEFAULT_FONT_SCALE),
        "fontWeight": {
            "heading": 700,
            "subheading": 600,
            "body": 400,
            "bold": 600,
        },
        "lineHeight": {
            "heading": 1.2,
            "body": 1.6,
            "compact": 1.4,
        },
    },
    "layout": {
        "templateType": "two-column",
        "sidebarWidth": DEFAULT_SIDEBAR_WIDTH,
        "pageWidth": DEFAULT_PAGE_WIDTH,
        "pageMargin": {
            "top": DEFAULT_PAGE_MARGIN,
            "right": DEFAULT_PAGE_MARGIN,
            "bottom": DEFAULT_PAGE_MARGIN,
            "left": DEFAULT_PAGE_MARGIN,
        },
        "sectionSpacing": "24px",
        "paragraphSpacing": "12px",
    },
    "components": {
        "name": {
            "fontWeight": 700,
            "color": "#0f172a",
            "letterSpacing": "-0.02em",
            "textTransform": "uppercase",
            "alignment": "left",
            "marginBottom": "8px",
        },
        "contactInfo": {
            "layout": "inline",
            "iconSize": "16px",
            "iconColor": "#64748b",
            "textColor": "#475569",
            "spacing": "12px",
        },
        "profilePhoto": {
            "size": "200px",
            "borderRadius": "50%",
            "borderColor": "#e2e8f0",
            "position": "center",
        },
        "header": {
            "alignment": "left",
        },
        "sectionHeader": {
            "fontWeight": 700,
            "color": "#0f172a",
            "textTransform": "uppercase",
            "dividerStyle": "underline",
            "dividerColor": "#2563eb",
            "dividerWidth": "2px",
            "borderBottom": "2px solid #2563eb",
            "borderColor": "#2563eb",
            "borderWidth": "2px",
            "padding": "0 0 4px 0",
            "marginTop": "24px",
            "marginBottom": "12px",
            "letterSpacing": "0.05em",
        },
        "jobTitle": {
            "fontWeight": 600,
            "color": "#0f172a",
            "fontStyle": "normal",
            "marginBottom": "4px",
            "textTransform": "none",
        },
        "organizationName": {
            "fontWeight": 500,
            "color": "#475569",
            "fontStyle": "normal",
        },
        "keyValue": {
            "labelColor": "#0f172a",
            "labelWeight": 600,
            "valueColor": "#475569",
            "valueWeight": 400,
            "separator": ":",
            "spacing": "4px",
        },
        "emphasis": {
            "fontWeight": 600,
            "color": "#0f172a",
        },
        "tags": {
            "colorPair": "tertiary",
            "backgroundOpacity": 0.2,
            "textOpacity": 1.0,
            "borderRadius": "4px",
            "padding": "4px 8px",
            "gap": "8px",
            "fontWeight": 500,
        },
        "dateLine": {
            "color": "#64748b",
            "fontStyle": "italic",
            "fontWeight": 400,
            "alignment": "right",
        },
        "list": {
            "level1": {"color": "#2563eb", "indent": "20px"},
            "level2": {"color": "#64748b", "indent": "40px"},
            "level3": {"color": "#94a3b8", "indent": "60px"},
        },
        "links": {
            "color": "#2563eb",
            "hoverColor": "#1d4ed8",
            "underlineStyle": "always",
            "fontWeight": 500,
        },
    },
    "pdf": {
        "pageSize": "A4",
        "orientation": "portrait",
        "pageNumbers": {
            "enabled": False,
            "position": "bottom-center",
        },
    },
    "advanced": {
        "animations": False,
        "shadows": False,
    },
}


def get_default_template_config() -> Dict[str, Any]:
    """
    Get a fresh copy of the default template configuration.

    Returns:
        Deep copy of DEFAULT_TEMPLATE_CONFIG, safe to mutate
    """
    return copy.deepcopy(DEFAULT_TEMPLATE_CONFIG)
