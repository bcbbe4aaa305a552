"""Shared data models for parsers."""

from datetime import datetime

from pydantic import BaseModel, Field


class ExtractedDocument(BaseModel):
    """Plain text pulled from a source document, ready for hashing and validation."""

    source_path: str
    text: str
    content_hash: str
    paragraph_count: int = Field(ge=0)
    table_count: int = Field(ge=0, default=0)
    extracted_at: datetime
