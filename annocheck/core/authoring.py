"""Helpers for building annotations and annotation sets from document text."""

import logging
from datetime import datetime, timezone
from typing import Optional

from annocheck.core.hashing import compute_content_hash
from annocheck.core.models import Annotation, ExternalAnnotationSet

logger = logging.getLogger(__name__)

FORMAT_VERSION = "1.0"


# ── Text Search ──────────────────────────────────────────────────────


def find_text_occurrences(
    document_text: str, search_text: str, max_results: int = 100
) -> list[tuple[int, int]]:
    """Return ``(start, end)`` for each occurrence of search_text.

    Matching is exact and overlapping occurrences are included.
    """
    if not search_text:
        return []

    results: list[tuple[int, int]] = []
    index = document_text.find(search_text)
    while index >= 0 and len(results) < max_results:
        results.append((index, index + len(search_text)))
        index = document_text.find(search_text, index + 1)
    return results


# ── Annotation Creation ──────────────────────────────────────────────


def create_annotation(
    annotation_id: str,
    label_id: str,
    document_text: str,
    start: int,
    end: int,
) -> Annotation:
    """Create an annotation over ``document_text[start:end]``."""
    if not annotation_id:
        raise ValueError("Annotation id is required")
    if not label_id:
        raise ValueError("Label id is required")
    if start < 0:
        raise ValueError(f"Start offset must be non-negative (got {start})")
    if end < start:
        raise ValueError(f"End offset ({end}) must be >= start offset ({start})")
    if end > len(document_text):
        raise ValueError(
            f"End offset ({end}) exceeds document length ({len(document_text)})"
        )

    return Annotation(
        id=annotation_id,
        start=start,
        end=end,
        text=document_text[start:end],
        label_id=label_id,
    )


def create_annotation_from_search(
    annotation_id: str,
    label_id: str,
    document_text: str,
    search_text: str,
    occurrence: int = 1,
) -> Optional[Annotation]:
    """Annotate the Nth (1-based) occurrence of search_text, or None if absent."""
    if not search_text:
        raise ValueError("Search text is required")
    if occurrence < 1:
        raise ValueError(f"Occurrence must be >= 1 (got {occurrence})")

    offsets = find_text_occurrences(document_text, search_text, max_results=occurrence)
    if occurrence > len(offsets):
        logger.debug(
            "Occurrence %d of %r not found (%d matches)",
            occurrence, search_text, len(offsets),
        )
        return None

    start, end = offsets[occurrence - 1]
    return create_annotation(annotation_id, label_id, document_text, start, end)


# ── Annotation Set Creation ──────────────────────────────────────────


def create_annotation_set(
    document_text: str, document_id: str, title: str = ""
) -> ExternalAnnotationSet:
    """Start an empty annotation set bound to the given document text."""
    if not document_id:
        raise ValueError("Document id is required")

    now = datetime.now(timezone.utc).isoformat()
    annotation_set = ExternalAnnotationSet(
        document_id=document_id,
        document_hash=compute_content_hash(document_text),
        created_at=now,
        updated_at=now,
        version=FORMAT_VERSION,
        title=title,
        content=document_text,
    )
    logger.info(
        "Created annotation set for %s (%d chars, hash %s)",
        document_id, len(document_text), annotation_set.document_hash[:12],
    )
    return annotation_set
