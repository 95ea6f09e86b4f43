from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

from ..geometry import Point, Rect

# ==============================================================================
# Types
# ==============================================================================


class Subtype:
    """PDF annotation subtypes the overlay treats specially."""

    TEXT = "Text"
    FREE_TEXT = "FreeText"
    HIGHLIGHT = "Highlight"
    UNDERLINE = "Underline"
    STRIKE_OUT = "StrikeOut"
    POPUP = "Popup"
    UNKNOWN = "Unknown"


class PopupStyle(Enum):
    """Accent used for a popup's border and text."""

    PRIMARY = "primary"
    SECONDARY = "secondary"  # Region markup such as StrikeOut


Quad = Tuple[float, float, float, float, float, float, float, float]

# ==============================================================================
# Records
# ==============================================================================


@dataclass(frozen=True)
class RawAnnotation:
    """One annotation as stored in the PDF. Never mutated by the viewer."""

    id: str
    subtype: str
    content: Any = None
    reply_to: Optional[str] = None
    modified: Optional[str] = None
    rect: Optional[Rect] = None  # PDF user-space x1, y1, x2, y2
    quad_points: Tuple[Quad, ...] = ()
    author: Optional[str] = None


@dataclass
class AnnotationGroup:
    """A main annotation plus the secondary records sharing its dedup key."""

    key: str
    main: RawAnnotation
    secondary: List[RawAnnotation] = field(default_factory=list)

    @property
    def members(self) -> List[RawAnnotation]:
        return [self.main] + self.secondary


@dataclass
class Decoration:
    """A horizontal strike line in viewport pixels."""

    x: float
    y: float
    width: float
    annotation_id: str = ""


@dataclass
class OverlayPopup:
    """Everything needed to build one popup widget."""

    group: AnnotationGroup
    text: str
    anchor: Point  # viewport pixels; the popup grows upward from here
    style: PopupStyle = PopupStyle.PRIMARY

    @property
    def annotation_id(self) -> str:
        return self.group.main.id

    @property
    def subtype(self) -> str:
        return self.group.main.subtype


@dataclass
class OverlayLayerModel:
    """Overlay content for one page."""

    popups: List[OverlayPopup] = field(default_factory=list)
    decorations: List[Decoration] = field(default_factory=list)
    skipped: int = 0  # groups that failed to render

    @property
    def count(self) -> int:
        """Number of unique groups shown on the page."""
        return len(self.popups)

    @property
    def is_empty(self) -> bool:
        return not self.popups and not self.decorations
