"""
Annotation grouping, content normalization and overlay construction.
"""

from .content import ContentShape, classify, normalize
from .grouper import flatten_groups, group_annotations
from .models import (
    AnnotationGroup,
    Decoration,
    OverlayLayerModel,
    OverlayPopup,
    PopupStyle,
    RawAnnotation,
    Subtype,
)
from .overlay import OverlayRenderer

__all__ = [
    "AnnotationGroup",
    "ContentShape",
    "Decoration",
    "OverlayLayerModel",
    "OverlayPopup",
    "OverlayRenderer",
    "PopupStyle",
    "RawAnnotation",
    "Subtype",
    "classify",
    "flatten_groups",
    "group_annotations",
    "normalize",
]
