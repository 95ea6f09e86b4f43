"""
Viewer configuration values.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ViewerConfig:
    """Tunable constants for the viewer."""

    # Zoom
    zoom_step: float = 1.1
    min_zoom: float = 0.3
    max_zoom: float = 5.0
    fit_width_max_zoom: float = 2.0
    fit_width_padding: int = 40
    fit_width_epsilon: float = 0.01

    # Scroll / navigation
    scroll_debounce_ms: int = 100
    page_spacing: int = 20
    page_top_margin: int = 20

    # Overlay
    drag_threshold: float = 5.0
    popup_anchor_gap: int = 10
    popup_max_width: int = 200
    popup_base_z: int = 15
    popup_raised_z: int = 20
    content_serialize_limit: int = 200
    strike_line_width: float = 2.0

    # Misc UI
    copy_notice_ms: int = 1500
    thumbnail_scale: float = 0.2


DEFAULT_CONFIG = ViewerConfig()
