from typing import Any, Dict, List, Optional

DEFAULT_THEME_ID = "dark-modern"

THEMES: Dict[str, Dict[str, Any]] = {
    "dark-modern": {
        "id": "dark-modern",
        "name": "Dark Modern",
        "description": "Fond sombre avec accent bleu moderne",
        "background_color": "#111827",
        "primary_color": "#3B82F6",
        "text_color": "#FFFFFF",
        "text_secondary_color": "#9CA3AF",
        "accent_color": "#60A5FA",
        "border_color": "#374151",
        "input_background": "#1F2937",
        "input_border": "#374151",
        "container_border_color": "#374151",
        "container_shadow": "0 4px 6px -1px rgba(0, 0, 0, 0.3), 0 2px 4px -1px rgba(0, 0, 0, 0.2)",
    },
    "light-minimal": {
        "id": "light-minimal",
        "name": "Light Minimal",
        "description": "Minimaliste noir et blanc",
        "background_color": "#FFFFFF",
        "primary_color": "#000000",
        "text_color": "#000000",
        "text_secondary_color": "#666666",
        "accent_color": "#333333",
        "border_color": "#E5E5E5",
        "input_background": "#FAFAFA",
        "input_border": "#E5E5E5",
        "container_border_color": "#000000",
        "container_shadow": "0 4px 6px -1px rgba(0, 0, 0, 0.1), 0 2px 4px -1px rgba(0, 0, 0, 0.06)",
    },
    "light-gray": {
        "id": "light-gray",
        "name": "Light Gray",
        "description": "Clair et moderne dans les tons gris",
        "background_color": "#F5F5F5",
        "primary_color": "#6366F1",
        "text_color": "#1F2937",
        "text_secondary_color": "#6B7280",
        "accent_color": "#818CF8",
        "border_color": "#E5E7EB",
        "input_background": "#FFFFFF",
        "input_border": "#D1D5DB",
        "container_border_color": "#D1D5DB",
        "container_shadow": "0 4px 6px -1px rgba(0, 0, 0, 0.08), 0 2px 4px -1px rgba(0, 0, 0, 0.04)",
    },
    "vibrant-purple": {
        "id": "vibrant-purple",
        "name": "Vibrant Purple",
        "description": "Sombre avec accents violet et magenta vibrants",
        "background_color": "#0F0F1E",
        "primary_color": "#A855F7",
        "text_color": "#FFFFFF",
        "text_secondary_color": "#C4B5FD",
        "accent_color": "#EC4899",
        "border_color": "#4C1D95",
        "input_background": "#1E1B2E",
        "input_border": "#6D28D9",
        "container_border_color": "#7C3AED",
        "container_shadow": "0 8px 16px -4px rgba(168, 85, 247, 0.3), 0 4px 8px -2px rgba(168, 85, 247, 0.2)",
    },
}


def get_theme(theme_id: Optional[str]) -> Dict[str, Any]:
    """Tokens for ``theme_id``; unknown or missing ids get the default theme."""
    return THEMES.get(theme_id or DEFAULT_THEME_ID, THEMES[DEFAULT_THEME_ID])


def list_themes() -> List[Dict[str, Any]]:
    return list(THEMES.values())
