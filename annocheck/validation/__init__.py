"""Validate-from-disk convenience function."""

import logging
from pathlib import Path

from annocheck.core.models import ExternalAnnotationValidationResult, load_annotation_set
from annocheck.diagnostics.log import ComparisonLog
from annocheck.parsers.docx_text import extract_docx_text
from annocheck.validation.validator import validate_annotation_set

logger = logging.getLogger(__name__)

ANNOTATION_SET_STALE = "ANNOTATION_SET_STALE"
ANNOTATION_ISSUE_CODES = {
    "TextMismatch": "ANNOTATION_TEXT_MISMATCH",
    "OutOfBounds": "ANNOTATION_OUT_OF_BOUNDS",
    "MissingLabel": "ANNOTATION_MISSING_LABEL",
}
VALIDATION_SUMMARY = "ANNOTATION_VALIDATION_SUMMARY"


def read_document_text(document_path: str | Path, log: ComparisonLog) -> str:
    """Plain text of a document: DOCX via python-docx, anything else as UTF-8."""
    document_path = Path(document_path)
    if document_path.suffix.lower() == ".docx":
        return extract_docx_text(document_path, log).text
    # Line endings are kept as stored so authored offsets still line up.
    with open(document_path, encoding="utf-8", newline="") as f:
        return f.read()


def validate_files(
    annotation_set_path: str | Path,
    document_path: str | Path,
    log: ComparisonLog | None = None,
) -> ExternalAnnotationValidationResult:
    """Load a set and a document from disk, validate, and record findings in the log."""
    log = log if log is not None else ComparisonLog()

    annotation_set = load_annotation_set(annotation_set_path)
    document_text = read_document_text(document_path, log)
    result = validate_annotation_set(annotation_set, document_text)

    if result.hash_mismatch:
        log.add_warning(
            ANNOTATION_SET_STALE,
            "Document content changed since the annotation set was created",
            details=f"stored hash {annotation_set.document_hash}",
            location=str(document_path),
        )
    for issue in result.issues:
        log.add_warning(
            ANNOTATION_ISSUE_CODES[issue.issue_type],
            issue.description,
            details=(
                f"expected {issue.expected_text!r}, found {issue.actual_text!r}"
                if issue.issue_type == "TextMismatch"
                else None
            ),
            location=issue.annotation_id or None,
        )
    log.add_info(
        VALIDATION_SUMMARY,
        f"{len(annotation_set.annotations)} annotations checked, "
        f"{len(result.issues)} issues, valid={result.is_valid}",
        location=annotation_set.document_id,
    )
    return result
