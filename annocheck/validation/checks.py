"""Per-annotation integrity checks: span bounds, span text, label references."""

from typing import Iterable, Optional

from annocheck.core.labels import LabelRegistry
from annocheck.core.models import Annotation, ValidationIssue


# ── Offset / Text ────────────────────────────────────────────────────


def check_span(annotation: Annotation, document_text: str) -> Optional[ValidationIssue]:
    """Check the span lies inside the document and still holds its recorded text.

    Comparison is exact: any drift, including whitespace or case, is reported.
    """
    start, end = annotation.start, annotation.end
    length = len(document_text)

    if start < 0 or start > end:
        return ValidationIssue(
            annotation_id=annotation.id,
            issue_type="OutOfBounds",
            description=f"Invalid offsets: start={start}, end={end}",
        )
    if end > length:
        return ValidationIssue(
            annotation_id=annotation.id,
            issue_type="OutOfBounds",
            description=f"End offset {end} exceeds document length {length}",
        )

    actual = document_text[start:end]
    if actual != annotation.text:
        return ValidationIssue(
            annotation_id=annotation.id,
            issue_type="TextMismatch",
            description="Text at annotation offsets does not match expected text",
            expected_text=annotation.text,
            actual_text=actual,
        )
    return None


# ── Label References ─────────────────────────────────────────────────


def check_label(annotation: Annotation, registry: LabelRegistry) -> Optional[ValidationIssue]:
    """Check the annotation's label id resolves among the text-span labels."""
    if registry.resolve(annotation.label_id, "text") is None:
        return ValidationIssue(
            annotation_id=annotation.id,
            issue_type="MissingLabel",
            description=f"Label '{annotation.label_id}' is not defined in text labels",
        )
    return None


def check_doc_labels(
    applied_label_ids: Iterable[str], registry: LabelRegistry
) -> list[ValidationIssue]:
    """One set-scoped issue per applied document label with no definition."""
    return [
        ValidationIssue(
            annotation_id="",
            issue_type="MissingLabel",
            description=f"Document label '{label_id}' is not defined in document labels",
        )
        for label_id in applied_label_ids
        if registry.resolve(label_id, "document") is None
    ]
