"""
Pointer interaction for annotation popups.

A press either leaves an existing text selection alone or arms a drag. The
popup only moves once the pointer travels past the drag threshold; a release
before that is a click, which focuses and raises the popup.
"""

import math
from enum import Enum
from typing import Dict, Hashable, Optional, Tuple

from quillview.config import DEFAULT_CONFIG

Point = Tuple[float, float]


class InteractionState(Enum):
    IDLE = "idle"
    CANDIDATE_DRAG = "candidate_drag"
    DRAGGING = "dragging"


class PointerOutcome(Enum):
    """What a pointer release meant."""

    NONE = "none"  # Press was left to text selection
    CLICK = "click"
    DROP = "drop"


class SelectAllTarget(Enum):
    POPUP = "popup"
    DEFAULT = "default"


class PopupInteraction:
    """Drag / click state machine for a single popup."""

    def __init__(self, drag_threshold: float = DEFAULT_CONFIG.drag_threshold):
        self.drag_threshold = drag_threshold
        self.state = InteractionState.IDLE
        self.focused = False

        self._origin: Optional[Point] = None
        self._grab_offset: Point = (0.0, 0.0)

    @property
    def is_dragging(self) -> bool:
        return self.state == InteractionState.DRAGGING

    def pointer_down(self, pos: Point, popup_pos: Point, has_selection: bool) -> None:
        """
        Handle a button press on the popup.

        Args:
            pos: Pointer position in the overlay's coordinates
            popup_pos: Current top-left of the popup
            has_selection: Whether the popup has selected text
        """
        if has_selection:
            self.state = InteractionState.IDLE
            self._origin = None
            return

        self.state = InteractionState.CANDIDATE_DRAG
        self._origin = pos
        self._grab_offset = (pos[0] - popup_pos[0], pos[1] - popup_pos[1])

    def pointer_move(self, pos: Point) -> Optional[Point]:
        """
        Handle pointer movement with the button held.

        Returns:
            New top-left for the popup, or None if it should not move
        """
        if self.state == InteractionState.IDLE or self._origin is None:
            return None

        if self.state == InteractionState.CANDIDATE_DRAG:
            if self._distance(pos) <= self.drag_threshold:
                return None
            self.state = InteractionState.DRAGGING

        return pos[0] - self._grab_offset[0], pos[1] - self._grab_offset[1]

    def pointer_up(self, pos: Point) -> PointerOutcome:
        """Handle the button release."""
        if self.state == InteractionState.IDLE or self._origin is None:
            return PointerOutcome.NONE

        moved = self.state == InteractionState.DRAGGING or (
            self._distance(pos) > self.drag_threshold
        )

        self.state = InteractionState.IDLE
        self._origin = None

        if moved:
            return PointerOutcome.DROP

        self.focused = True
        return PointerOutcome.CLICK

    def blur(self) -> None:
        self.focused = False

    def _distance(self, pos: Point) -> float:
        return math.hypot(pos[0] - self._origin[0], pos[1] - self._origin[1])


class FocusManager:
    """
    Tracks stacking order of the popups on a page.

    Only one popup holds the raised z-order at a time.
    """

    def __init__(
        self,
        base_z: int = DEFAULT_CONFIG.popup_base_z,
        raised_z: int = DEFAULT_CONFIG.popup_raised_z,
    ):
        self.base_z = base_z
        self.raised_z = raised_z
        self._z: Dict[Hashable, int] = {}
        self.raised: Optional[Hashable] = None

    def register(self, popup: Hashable) -> None:
        self._z[popup] = self.base_z

    def unregister(self, popup: Hashable) -> None:
        self._z.pop(popup, None)
        if self.raised == popup:
            self.raised = None

    def focus(self, popup: Hashable) -> None:
        """Raise `popup` and demote every sibling."""
        for key in self._z:
            self._z[key] = self.base_z
        if popup in self._z:
            self._z[popup] = self.raised_z
            self.raised = popup

    def z_order(self, popup: Hashable) -> int:
        return self._z.get(popup, self.base_z)

    def clear(self) -> None:
        self._z.clear()
        self.raised = None


def resolve_select_all(focused_is_popup: bool, has_selection: bool) -> SelectAllTarget:
    """
    Decide what Select All acts on.

    A focused popup without a manual selection gets its own text selected;
    otherwise the default behavior applies.
    """
    if focused_is_popup and not has_selection:
        return SelectAllTarget.POPUP
    return SelectAllTarget.DEFAULT
