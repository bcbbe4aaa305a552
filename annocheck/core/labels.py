"""Read-only lookup over an annotation set's label definitions."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Literal, Optional

from annocheck.core.models import AnnotationLabel, ExternalAnnotationSet

LabelScope = Literal["text", "document"]


class LabelRegistry:
    """Resolves label ids against the text-span and document label tables.

    Each scope has its own table; an id is never looked up in the other one.
    """

    def __init__(
        self,
        text_labels: Mapping[str, AnnotationLabel] | None = None,
        doc_labels: Mapping[str, AnnotationLabel] | None = None,
    ) -> None:
        self._tables: dict[str, Mapping[str, AnnotationLabel]] = {
            "text": MappingProxyType(dict(text_labels or {})),
            "document": MappingProxyType(dict(doc_labels or {})),
        }

    @classmethod
    def from_annotation_set(cls, annotation_set: ExternalAnnotationSet) -> "LabelRegistry":
        return cls(annotation_set.text_labels, annotation_set.doc_label_definitions)

    @property
    def text_labels(self) -> Mapping[str, AnnotationLabel]:
        return self._tables["text"]

    @property
    def doc_labels(self) -> Mapping[str, AnnotationLabel]:
        return self._tables["document"]

    def resolve(self, label_id: str, scope: LabelScope) -> Optional[AnnotationLabel]:
        if scope not in self._tables:
            raise ValueError(f"Unknown label scope: {scope!r}")
        return self._tables[scope].get(label_id)

    def __contains__(self, item: tuple[str, LabelScope]) -> bool:
        label_id, scope = item
        return self.resolve(label_id, scope) is not None
