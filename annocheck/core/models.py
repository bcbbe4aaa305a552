"""Annotation set models, validation results, and JSON interchange."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

IssueType = Literal["TextMismatch", "OutOfBounds", "MissingLabel"]


# ── Labels ───────────────────────────────────────────────────────────


class AnnotationLabel(BaseModel):
    """A named category assignable to a text span or a whole document."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    color: str = "#FFFF00"
    description: str = ""
    icon: str = ""
    label_type: Literal["text", "document"] = "text"


# ── Annotations ──────────────────────────────────────────────────────


class Annotation(BaseModel):
    """A labelled half-open span ``[start, end)`` of the document text.

    Offsets are not range-checked here so that malformed data can still be
    loaded and reported on by the validator.
    """

    id: str
    start: int
    end: int
    text: str = Field(description="Text found at the span when the annotation was authored")
    label_id: str
    page: int = 0


class ExternalAnnotationSet(BaseModel):
    """Annotations and label definitions bound to one document snapshot."""

    document_id: str
    document_hash: str = Field(description="SHA-256 hex digest of the document text")
    created_at: str = ""
    updated_at: str = ""
    version: str = "1.0"
    title: str = ""
    content: Optional[str] = Field(
        default=None, description="Document text at authoring time (optional snapshot)"
    )
    annotations: list[Annotation] = Field(default_factory=list)
    text_labels: dict[str, AnnotationLabel] = Field(default_factory=dict)
    doc_label_definitions: dict[str, AnnotationLabel] = Field(default_factory=dict)
    doc_labels: list[str] = Field(
        default_factory=list, description="Applied document-level label ids"
    )

    @field_validator("document_hash")
    @classmethod
    def hash_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("document_hash is required")
        return v


# ── Validation Results ───────────────────────────────────────────────


class ValidationIssue(BaseModel):
    """A single problem found when validating an annotation set."""

    annotation_id: str = ""
    issue_type: IssueType
    description: str
    expected_text: Optional[str] = None
    actual_text: Optional[str] = None


class ExternalAnnotationValidationResult(BaseModel):
    """Outcome of validating an annotation set against a document."""

    hash_mismatch: bool = False
    issues: list[ValidationIssue] = Field(default_factory=list)

    @computed_field
    @property
    def is_valid(self) -> bool:
        return not self.hash_mismatch and not self.issues

    def issues_of_type(self, issue_type: IssueType) -> list[ValidationIssue]:
        return [i for i in self.issues if i.issue_type == issue_type]


# ── JSON Interchange ─────────────────────────────────────────────────


def annotation_set_to_json(annotation_set: ExternalAnnotationSet) -> str:
    """Serialize an annotation set to indented JSON, omitting null fields."""
    return annotation_set.model_dump_json(indent=2, exclude_none=True)


def parse_annotation_set(json_text: str) -> ExternalAnnotationSet:
    """Parse and validate an annotation set from a JSON string."""
    if not json_text or not json_text.strip():
        raise ValueError("Annotation set JSON is empty")
    return ExternalAnnotationSet.model_validate_json(json_text)


def load_annotation_set(path: str | Path) -> ExternalAnnotationSet:
    """Load an annotation set JSON file from disk."""
    path = Path(path)
    return parse_annotation_set(path.read_text(encoding="utf-8"))
