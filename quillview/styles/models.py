from dataclasses import dataclass


@dataclass
class ThemeColors:
    """Color definitions for a theme."""
    # Background colors
    bg_primary: str
    bg_secondary: str
    bg_tertiary: str
    bg_viewer: str

    # Text colors
    text_primary: str
    text_secondary: str
    text_muted: str

    # Accent colors
    accent_primary: str
    accent_hover: str

    # Border colors
    border_primary: str
    border_secondary: str

    # Annotation overlay
    annotation_primary: str
    annotation_secondary: str
    popup_background: str
    notice_background: str
