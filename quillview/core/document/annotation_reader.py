"""
Annotation extraction from PDF pages.

Values are read straight from each annotation's dictionary so rectangles and
quad points stay in PDF user-space, exactly as stored in the file.
"""

import logging
import re
from typing import List, Optional, Tuple

import fitz

from ..annotations.models import Quad, RawAnnotation, Subtype

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_REFERENCE = re.compile(r"^\s*(\d+)\s+\d+\s+R\s*$")
_TAG = re.compile(r"<[^>]+>")

# Navigation and form fields are not comments
IGNORED_SUBTYPES = frozenset({"Link", "Widget"})


def _get_key(doc: fitz.Document, xref: int, key: str) -> Tuple[str, str]:
    try:
        return doc.xref_get_key(xref, key)
    except Exception:
        return "null", "null"


def _string(doc: fitz.Document, xref: int, key: str) -> Optional[str]:
    kind, value = _get_key(doc, xref, key)
    if kind != "string" or not value:
        return None
    return value


def parse_numbers(value: str) -> List[float]:
    """Parse the numbers of a PDF array string such as "[0 0 10 10]"."""
    return [float(n) for n in _NUMBER.findall(value or "")]


def parse_reference(value: str) -> Optional[str]:
    """Turn "12 0 R" into the annotation id "12R"."""
    match = _REFERENCE.match(value or "")
    if not match:
        return None
    return f"{match.group(1)}R"


def strip_rich_text(value: str) -> str:
    """Plain text of an XHTML rich-text value."""
    text = _TAG.sub(" ", value or "")
    return re.sub(r"\s+", " ", text).strip()


def read_annotation(doc: fitz.Document, xref: int) -> Optional[RawAnnotation]:
    """
    Build a RawAnnotation from the annotation object at `xref`.

    Args:
        doc: Open document
        xref: Cross-reference number of the annotation dictionary

    Returns:
        RawAnnotation, or None if the object is not a usable annotation
    """
    kind, subtype = _get_key(doc, xref, "Subtype")
    if kind != "name":
        return None
    subtype = subtype.lstrip("/") or Subtype.UNKNOWN
    if subtype in IGNORED_SUBTYPES:
        return None

    rect = None
    kind, value = _get_key(doc, xref, "Rect")
    if kind == "array":
        numbers = parse_numbers(value)
        if len(numbers) >= 4:
            rect = tuple(numbers[:4])

    quads: List[Quad] = []
    kind, value = _get_key(doc, xref, "QuadPoints")
    if kind == "array":
        numbers = parse_numbers(value)
        quads = [tuple(numbers[i : i + 8]) for i in range(0, len(numbers) - 7, 8)]

    content: Optional[str] = _string(doc, xref, "Contents")
    if not content:
        rich = _string(doc, xref, "RC")
        if rich:
            content = strip_rich_text(rich)

    reply_to = None
    kind, value = _get_key(doc, xref, "IRT")
    if kind == "xref":
        reply_to = parse_reference(value)

    return RawAnnotation(
        id=f"{xref}R",
        subtype=subtype,
        content=content,
        reply_to=reply_to,
        modified=_string(doc, xref, "M"),
        rect=rect,
        quad_points=tuple(quads),
        author=_string(doc, xref, "T"),
    )


def read_page_annotations(doc: fitz.Document, page: fitz.Page) -> List[RawAnnotation]:
    """
    Read all annotations of a page in /Annots order.

    Unreadable entries are skipped.
    """
    annotations = []

    try:
        entries = page.annot_xrefs()
    except Exception as e:
        logger.warning("Failed to list annotations on page %d: %s", page.number + 1, e)
        return annotations

    for entry in entries:
        xref = entry[0]
        try:
            annotation = read_annotation(doc, xref)
        except Exception as e:
            logger.warning("Failed to read annotation %dR: %s", xref, e)
            continue
        if annotation is not None:
            annotations.append(annotation)

    return annotations
