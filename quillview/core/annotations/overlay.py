"""
Construction of overlay popups and strike lines for annotation groups.
"""

import logging
from typing import Iterable, List, Optional

from quillview.config import DEFAULT_CONFIG, ViewerConfig

from ..errors import AnnotationRenderError
from ..geometry import Viewport, normalize_rect, to_viewport_point
from .content import fallback_label, normalize
from .grouper import group_annotations
from .models import (
    AnnotationGroup,
    Decoration,
    OverlayLayerModel,
    OverlayPopup,
    PopupStyle,
    RawAnnotation,
    Subtype,
)

logger = logging.getLogger(__name__)

REPLY_MARKER = "↪ "


class OverlayRenderer:
    """
    Turns annotation groups into overlay models for one viewport.

    Renders:
    - One popup per group, anchored at the lower-left of its rectangle
    - Strike lines for StrikeOut quads
    """

    def __init__(self, config: ViewerConfig = DEFAULT_CONFIG):
        self.config = config

    def render_page(
        self, annotations: Iterable[RawAnnotation], viewport: Viewport
    ) -> OverlayLayerModel:
        """
        Build the overlay for a page.

        A group that fails to render is logged and skipped; the rest of the
        page is unaffected.

        Args:
            annotations: Raw annotations of the page
            viewport: Viewport of the rendered page

        Returns:
            OverlayLayerModel with popups and decorations
        """
        layer = OverlayLayerModel()

        for group in group_annotations(annotations):
            try:
                decorations = self.decorations(group, viewport)
                popup = self.render(group, viewport)
            except AnnotationRenderError as e:
                logger.warning("Skipping annotation overlay: %s", e)
                layer.skipped += 1
                continue
            except Exception as e:
                logger.warning(
                    "Skipping annotation overlay: %s",
                    AnnotationRenderError(group.main.id, str(e)),
                )
                layer.skipped += 1
                continue

            layer.decorations.extend(decorations)
            if popup is not None:
                layer.popups.append(popup)

        return layer

    def render(self, group: AnnotationGroup, viewport: Viewport) -> Optional[OverlayPopup]:
        """
        Build the popup model for a group.

        Args:
            group: Annotation group
            viewport: Viewport of the rendered page

        Returns:
            OverlayPopup, or None if the anchor falls outside the page
        """
        main = group.main
        if main.rect is None or len(main.rect) < 4:
            raise AnnotationRenderError(main.id, "annotation has no rectangle")

        x1, y1, _, _ = normalize_rect(main.rect)
        anchor = to_viewport_point(x1, y1, viewport)

        if not viewport.contains(*anchor):
            return None

        return OverlayPopup(
            group=group,
            text=self.display_text(group),
            anchor=anchor,
            style=self.style_for(main.subtype),
        )

    def display_text(self, group: AnnotationGroup) -> str:
        """Main content followed by one marked line per secondary record."""
        main = group.main
        text = normalize(main.content, main.subtype).strip()
        if not text:
            text = fallback_label(main.subtype)

        lines = [text]
        for annotation in group.secondary:
            extra = normalize(annotation.content, annotation.subtype).strip()
            if extra:
                lines.append(f"{REPLY_MARKER}{extra}")

        return "\n".join(lines)

    def decorations(self, group: AnnotationGroup, viewport: Viewport) -> List[Decoration]:
        """Strike lines for a StrikeOut group, one per quad."""
        main = group.main
        if main.subtype != Subtype.STRIKE_OUT or not main.quad_points:
            return []

        lines = []
        for quad in main.quad_points:
            if len(quad) < 8:
                continue

            # First and last points are diagonal corners of the quad
            ax, ay = to_viewport_point(quad[0], quad[1], viewport)
            bx, by = to_viewport_point(quad[6], quad[7], viewport)

            left = min(ax, bx)
            lines.append(
                Decoration(
                    x=left,
                    y=(ay + by) / 2,
                    width=abs(bx - ax),
                    annotation_id=main.id,
                )
            )

        return lines

    @staticmethod
    def style_for(subtype: str) -> PopupStyle:
        if subtype == Subtype.STRIKE_OUT:
            return PopupStyle.SECONDARY
        return PopupStyle.PRIMARY
