"""Settings for rendering external annotations, and selection of renderable spans."""

import re
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from annocheck.core.labels import LabelRegistry
from annocheck.core.models import Annotation, ExternalAnnotationSet
from annocheck.validation.checks import check_label, check_span

LabelMode = Literal["above", "inline", "tooltip", "none"]

_CSS_UNSAFE_RE = re.compile(r"[^a-z0-9_-]")


class ProjectionSettings(BaseModel):
    """Options consumed by the HTML annotation renderer."""

    css_class_prefix: str = "ext-annot-"
    label_mode: LabelMode = Field(
        default="above",
        description="above: floating label, inline: at span start, "
        "tooltip: on hover, none: highlight only",
    )
    include_metadata: bool = Field(
        default=True, description="Emit annotation metadata as data attributes"
    )
    validate_before_projection: bool = Field(
        default=True, description="Skip annotations that fail validation"
    )

    @field_validator("css_class_prefix")
    @classmethod
    def prefix_is_css_safe(cls, v: str) -> str:
        if _CSS_UNSAFE_RE.search(v.lower()):
            raise ValueError(f"CSS class prefix contains invalid characters: {v!r}")
        return v


def load_projection_settings(path: str | Path) -> ProjectionSettings:
    """Load projection settings from YAML. An empty file yields the defaults."""
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return ProjectionSettings.model_validate(raw)


def css_class_for(label_id: str, settings: ProjectionSettings) -> str:
    """CSS class name for a label, e.g. ``ext-annot-party-name``."""
    return settings.css_class_prefix + _CSS_UNSAFE_RE.sub("-", label_id.lower())


def select_annotations_for_projection(
    annotation_set: ExternalAnnotationSet,
    document_text: str,
    settings: ProjectionSettings | None = None,
) -> list[Annotation]:
    """Annotations in render order: by start, longer spans first for nesting.

    When ``validate_before_projection`` is set, annotations with a span or
    label issue are left out. A stale document hash alone does not exclude
    anything; each span is judged on its own text.
    """
    settings = settings or ProjectionSettings()
    candidates = list(annotation_set.annotations)

    if settings.validate_before_projection:
        registry = LabelRegistry.from_annotation_set(annotation_set)
        candidates = [
            a
            for a in candidates
            if check_span(a, document_text) is None and check_label(a, registry) is None
        ]

    return sorted(candidates, key=lambda a: (a.start, -a.end))
