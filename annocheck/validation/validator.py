"""Validate an external annotation set against a document's current text."""

import logging
from collections.abc import Mapping

from annocheck.core.hashing import compute_content_hash, hashes_match
from annocheck.core.labels import LabelRegistry
from annocheck.core.models import (
    AnnotationLabel,
    ExternalAnnotationSet,
    ExternalAnnotationValidationResult,
    ValidationIssue,
)
from annocheck.validation.checks import check_doc_labels, check_label, check_span

logger = logging.getLogger(__name__)


def validate_annotation_set(
    annotation_set: ExternalAnnotationSet,
    document_text: str,
    text_labels: Mapping[str, AnnotationLabel] | None = None,
    doc_labels: Mapping[str, AnnotationLabel] | None = None,
) -> ExternalAnnotationValidationResult:
    """Check hash, span bounds, span text and label references.

    A hash mismatch is recorded but every annotation is still checked, so
    the result shows where a stale set drifted. Issues are ordered by
    annotation (span issue, then label issue), followed by set-scoped
    document label issues.

    ``text_labels`` / ``doc_labels`` override the set's own tables, e.g. to
    validate against an updated label catalog.
    """
    if annotation_set is None:
        raise ValueError("annotation_set is required")
    if document_text is None:
        raise ValueError("document_text is required")
    if not annotation_set.document_hash or not annotation_set.document_hash.strip():
        raise ValueError(
            f"Annotation set for {annotation_set.document_id!r} has no document_hash"
        )

    registry = LabelRegistry(
        annotation_set.text_labels if text_labels is None else text_labels,
        annotation_set.doc_label_definitions if doc_labels is None else doc_labels,
    )

    current_hash = compute_content_hash(document_text)
    hash_mismatch = not hashes_match(annotation_set.document_hash, current_hash)
    if hash_mismatch:
        logger.info(
            "Document %s: hash mismatch (stored %s, current %s)",
            annotation_set.document_id,
            annotation_set.document_hash[:12],
            current_hash[:12],
        )

    issues: list[ValidationIssue] = []
    for annotation in annotation_set.annotations:
        span_issue = check_span(annotation, document_text)
        if span_issue is not None:
            issues.append(span_issue)
        label_issue = check_label(annotation, registry)
        if label_issue is not None:
            issues.append(label_issue)

    issues.extend(check_doc_labels(annotation_set.doc_labels, registry))

    result = ExternalAnnotationValidationResult(hash_mismatch=hash_mismatch, issues=issues)
    logger.info(
        "Validated %d annotations for %s: valid=%s, %d issues",
        len(annotation_set.annotations),
        annotation_set.document_id,
        result.is_valid,
        len(issues),
    )
    return result
