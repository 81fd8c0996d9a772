"""Turn space trees into check-run annotations and split them into pages."""

from typing import Iterator, List, Sequence, TypeVar

from .models import Annotation, Space
from .report import summarize_metrics

T = TypeVar("T")

# Informational level; metrics are not findings
ANNOTATION_LEVEL = "notice"


def extract_annotations(root: Space) -> List[Annotation]:
    """Build one annotation per nested space of a file record.

    The root itself is skipped because its metrics are already in the
    report body. Order is depth-first, in document order.
    """
    path = root.name or ""
    return [
        Annotation(
            path=path,
            start_line=space.start_line,
            end_line=space.end_line,
            annotation_level=ANNOTATION_LEVEL,
            title=space.display_name,
            message=summarize_metrics(space.metrics),
        )
        for space in root.walk()
    ]


def paginate(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield successive ``size``-sized slices of ``items``, preserving order."""
    if size < 1:
        raise ValueError("page size must be at least 1")
    for start in range(0, len(items), size):
        yield items[start : start + size]
