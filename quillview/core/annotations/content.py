"""
Extraction of display text from annotation content.

Content can arrive as a plain string, nothing at all, a mapping or object
with a `str`, `text` or `content` field, a sequence of such items, or some
other structure. `classify` names the shape, `normalize` turns every shape
into a string.
"""

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any, Iterable, Tuple

from quillview.config import DEFAULT_CONFIG

# Fields checked for text, in priority order
TEXT_FIELDS = ("str", "text", "content")

# Keys never shown when serializing an opaque object
HIDDEN_KEYS = frozenset({"rect", "id", "quadPoints", "quad_points"})


class ContentShape(Enum):
    """Shape of an annotation's content value."""

    EMPTY = "empty"
    STRING = "string"
    HAS_STR = "has_str"
    HAS_TEXT = "has_text"
    HAS_CONTENT = "has_content"
    SEQUENCE = "sequence"
    OPAQUE = "opaque"


_FIELD_SHAPES = {
    "str": ContentShape.HAS_STR,
    "text": ContentShape.HAS_TEXT,
    "content": ContentShape.HAS_CONTENT,
}


def _get_field(value: Any, name: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(name)
    try:
        return getattr(value, name, None)
    except Exception:
        return None


def classify(value: Any) -> ContentShape:
    """
    Determine the shape of a content value.

    Args:
        value: Content as supplied by the PDF reader

    Returns:
        The matching ContentShape
    """
    if value is None:
        return ContentShape.EMPTY
    if isinstance(value, str):
        return ContentShape.STRING if value else ContentShape.EMPTY
    if isinstance(value, (bytes, bytearray)):
        return ContentShape.STRING if value else ContentShape.EMPTY
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return ContentShape.STRING
    if isinstance(value, (list, tuple)):
        return ContentShape.SEQUENCE if value else ContentShape.EMPTY

    for name in TEXT_FIELDS:
        if _get_field(value, name):
            return _FIELD_SHAPES[name]

    return ContentShape.OPAQUE


def normalize(value: Any, subtype: str = "Unknown") -> str:
    """
    Convert annotation content to a display string.

    Args:
        value: Content in any shape
        subtype: Annotation subtype, used for the fallback label

    Returns:
        Display text; "" when there is nothing to show. Never raises.
    """
    try:
        return _normalize(value, subtype, depth=0)
    except Exception:
        return fallback_label(subtype)


def fallback_label(subtype: str) -> str:
    return f"{subtype or 'Unknown'} annotation"


def _normalize(value: Any, subtype: str, depth: int) -> str:
    if depth > 32:
        return ""

    shape = classify(value)

    if shape == ContentShape.EMPTY:
        return ""

    if shape == ContentShape.STRING:
        if isinstance(value, (bytes, bytearray)):
            return value.decode("utf-8", errors="replace")
        return value if isinstance(value, str) else str(value)

    if shape in (ContentShape.HAS_STR, ContentShape.HAS_TEXT, ContentShape.HAS_CONTENT):
        name = next(k for k, v in _FIELD_SHAPES.items() if v == shape)
        return _normalize(_get_field(value, name), subtype, depth + 1)

    if shape == ContentShape.SEQUENCE:
        parts = (_normalize(item, subtype, depth + 1) for item in value)
        return " ".join(part for part in parts if part)

    return _serialize_opaque(value, subtype)


def _opaque_items(value: Any) -> Iterable[Tuple[str, Any]]:
    if isinstance(value, Mapping):
        return value.items()
    if hasattr(value, "__dict__"):
        return vars(value).items()
    raise TypeError(f"cannot serialize {type(value).__name__}")


def _serialize_opaque(value: Any, subtype: str) -> str:
    """Render an unrecognized object as "key: value" pairs."""
    try:
        items = list(_opaque_items(value))
        serialized = json.dumps(dict(items), ensure_ascii=False)
    except (TypeError, ValueError):
        return fallback_label(subtype)

    if len(serialized) >= DEFAULT_CONFIG.content_serialize_limit:
        return fallback_label(subtype)

    return ", ".join(
        f"{key}: {item}"
        for key, item in items
        if item and key not in HIDDEN_KEYS
    )
