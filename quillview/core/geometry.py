"""
PDF user-space to viewport pixel-space transforms.

PDF user-space has its origin at the bottom-left of the page, the viewport
has its origin at the top-left of the rendered image. The matrix is taken
from PyMuPDF itself so overlay geometry always agrees with the rasterized
page.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

import fitz

Point = Tuple[float, float]
Rect = Tuple[float, float, float, float]
Matrix = Tuple[float, float, float, float, float, float]


@dataclass(frozen=True)
class Viewport:
    """Pixel-space description of a page rendered at a given scale."""

    width: float
    height: float
    scale: float
    matrix: Matrix  # a, b, c, d, e, f (PDF row-vector convention)

    @classmethod
    def for_page(cls, page: fitz.Page, scale: float) -> "Viewport":
        """
        Build the viewport PyMuPDF uses when rendering `page` at `scale`.

        Args:
            page: PyMuPDF page
            scale: Zoom factor (1.0 = 72 dpi)

        Returns:
            Viewport whose matrix maps PDF user-space to pixels
        """
        mat = page.transformation_matrix * page.rotation_matrix * fitz.Matrix(scale, scale)
        rect = page.rect
        return cls(
            width=rect.width * scale,
            height=rect.height * scale,
            scale=scale,
            matrix=(mat.a, mat.b, mat.c, mat.d, mat.e, mat.f),
        )

    @classmethod
    def from_size(cls, width: float, height: float, scale: float) -> "Viewport":
        """Viewport for an unrotated page of `width` x `height` points."""
        return cls(
            width=width * scale,
            height=height * scale,
            scale=scale,
            matrix=(scale, 0.0, 0.0, -scale, 0.0, height * scale),
        )

    def contains(self, x: float, y: float) -> bool:
        """Check if a viewport point lies on the page."""
        return 0 <= x <= self.width and 0 <= y <= self.height


def _apply(matrix: Matrix, x: float, y: float) -> Point:
    a, b, c, d, e, f = matrix
    return a * x + c * y + e, b * x + d * y + f


def invert_matrix(matrix: Matrix) -> Matrix:
    """Invert an affine matrix. Degenerate matrices map to zero."""
    a, b, c, d, e, f = matrix
    det = a * d - b * c
    if det == 0:
        return (0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
    return (
        d / det,
        -b / det,
        -c / det,
        a / det,
        (c * f - d * e) / det,
        (b * e - a * f) / det,
    )


def to_viewport_point(x: float, y: float, viewport: Viewport) -> Point:
    """Map a PDF user-space point to viewport pixels."""
    return _apply(viewport.matrix, x, y)


def to_viewport_rect(rect: Sequence[float], viewport: Viewport) -> Rect:
    """
    Map a PDF rectangle to viewport pixels.

    The two corners are transformed independently, so the result keeps the
    corner order of the input (y is flipped for unrotated pages).
    """
    vx1, vy1 = to_viewport_point(rect[0], rect[1], viewport)
    vx2, vy2 = to_viewport_point(rect[2], rect[3], viewport)
    return vx1, vy1, vx2, vy2


def to_pdf_point(vx: float, vy: float, viewport: Viewport) -> Point:
    """Map a viewport pixel back to PDF user-space."""
    return _apply(invert_matrix(viewport.matrix), vx, vy)


def to_pdf_rect(rect: Sequence[float], viewport: Viewport) -> Rect:
    """Inverse of `to_viewport_rect`."""
    x1, y1 = to_pdf_point(rect[0], rect[1], viewport)
    x2, y2 = to_pdf_point(rect[2], rect[3], viewport)
    return x1, y1, x2, y2


def normalize_rect(rect: Sequence[float]) -> Rect:
    """Return the rectangle as (min x, min y, max x, max y)."""
    x1, y1, x2, y2 = rect[:4]
    return min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2)
