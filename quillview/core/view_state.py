"""
View state and the arithmetic behind zooming and scrolling.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from quillview.config import DEFAULT_CONFIG, ViewerConfig


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass
class ViewState:
    """
    The single source of truth for zoom, active page and scroll offset.

    Only the ViewController mutates it.
    """

    zoom: float = 1.0
    current_page: int = 1  # 1-based
    page_count: int = 0
    scroll_x: int = 0
    scroll_y: int = 0
    config: ViewerConfig = DEFAULT_CONFIG

    def set_zoom(self, zoom: float) -> float:
        self.zoom = clamp(zoom, self.config.min_zoom, self.config.max_zoom)
        return self.zoom

    def set_page(self, page_num: int) -> int:
        if self.page_count <= 0:
            self.current_page = 1
        else:
            self.current_page = int(clamp(page_num, 1, self.page_count))
        return self.current_page

    def reset(self, page_count: int = 0) -> None:
        self.page_count = page_count
        self.current_page = 1
        self.scroll_x = 0
        self.scroll_y = 0

    @property
    def zoom_percent(self) -> int:
        return int(round(self.zoom * 100))


def zoom_in(zoom: float, config: ViewerConfig = DEFAULT_CONFIG) -> float:
    return clamp(zoom * config.zoom_step, config.min_zoom, config.max_zoom)


def zoom_out(zoom: float, config: ViewerConfig = DEFAULT_CONFIG) -> float:
    return clamp(zoom / config.zoom_step, config.min_zoom, config.max_zoom)


def fit_width_zoom(
    viewer_width: float, page_width: float, config: ViewerConfig = DEFAULT_CONFIG
) -> Optional[float]:
    """
    Zoom that makes a page of `page_width` points fill the viewer.

    Args:
        viewer_width: Visible width of the viewer in pixels
        page_width: Page width in points at zoom 1.0

    Returns:
        The zoom factor, or None if it cannot be computed
    """
    if page_width <= 0:
        return None
    available = viewer_width - config.fit_width_padding
    if available <= 0:
        return None
    return clamp(available / page_width, config.min_zoom, config.fit_width_max_zoom)


def zoom_differs(current: float, target: float, config: ViewerConfig = DEFAULT_CONFIG) -> bool:
    return abs(current - target) > config.fit_width_epsilon


@dataclass(frozen=True)
class ScrollFraction:
    """
    Scroll position as a fraction of the scrollable extent, per axis.

    The fraction survives a zoom change; absolute offsets do not because the
    extent changes with the zoom.
    """

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def capture(cls, x_value: int, x_max: int, y_value: int, y_max: int) -> "ScrollFraction":
        return cls(
            x=x_value / x_max if x_max > 0 else 0.0,
            y=y_value / y_max if y_max > 0 else 0.0,
        )

    def restore(self, x_max: int, y_max: int) -> Tuple[int, int]:
        """Absolute offsets for the new extents."""
        return int(round(self.x * max(0, x_max))), int(round(self.y * max(0, y_max)))


def page_at_midpoint(
    page_spans: Sequence[Tuple[int, int]], viewport_top: int, viewport_height: int
) -> Optional[int]:
    """
    Find the page straddling the vertical middle of the viewport.

    Args:
        page_spans: (top, bottom) of each page in content coordinates
        viewport_top: Current vertical scroll offset
        viewport_height: Height of the visible area

    Returns:
        1-based page number, or None if the midpoint is between pages
    """
    middle = viewport_top + viewport_height / 2
    for index, (top, bottom) in enumerate(page_spans):
        if top <= middle <= bottom:
            return index + 1
    return None
