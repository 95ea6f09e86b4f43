"""
Deduplication of a page's raw annotations into display groups.
"""

from typing import Dict, Iterable, List

from .models import AnnotationGroup, RawAnnotation, Subtype


def dedup_key(annotation: RawAnnotation, position: int) -> str:
    """
    Key under which an annotation is merged with others.

    Annotations sharing a modification timestamp are one logical comment.
    Annotations without a timestamp get a key of their own and are never
    merged.

    Args:
        annotation: The raw annotation
        position: Index of the annotation in its source sequence

    Returns:
        The dedup key
    """
    if annotation.modified:
        return f"M:{annotation.modified}"
    return f"#{position}:{annotation.id}"


def group_annotations(annotations: Iterable[RawAnnotation]) -> List[AnnotationGroup]:
    """
    Partition annotations into groups, one per logical comment.

    Popup annotations are dropped, the remaining records are partitioned by
    dedup key, the first record of each partition becomes the main
    annotation, and groups whose main annotation has no rectangle are
    dropped. Groups keep the first-seen order of their keys.

    Args:
        annotations: Raw annotations of one page, in document order

    Returns:
        List of annotation groups
    """
    partitions: Dict[str, List[RawAnnotation]] = {}

    for position, annotation in enumerate(annotations):
        if annotation is None or annotation.subtype == Subtype.POPUP:
            continue
        partitions.setdefault(dedup_key(annotation, position), []).append(annotation)

    groups: List[AnnotationGroup] = []
    for key, members in partitions.items():
        main = next((m for m in members if m.subtype != Subtype.POPUP), None)
        if main is None or main.rect is None:
            continue
        secondary = [m for m in members if m is not main]
        groups.append(AnnotationGroup(key=key, main=main, secondary=secondary))

    return groups


def flatten_groups(groups: Iterable[AnnotationGroup]) -> List[RawAnnotation]:
    """Flatten groups back into annotations, main first."""
    flat: List[RawAnnotation] = []
    for group in groups:
        flat.extend(group.members)
    return flat
