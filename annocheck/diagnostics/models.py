"""Diagnostic log entry model and the reserved entry codes."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

LogLevel = Literal["Info", "Warning", "Error"]

LEVELS: tuple[str, ...] = ("Info", "Warning", "Error")

# ── Reserved Codes ───────────────────────────────────────────────────

ORPHANED_FOOTNOTE_REFERENCE = "ORPHANED_FOOTNOTE_REFERENCE"
ORPHANED_ENDNOTE_REFERENCE = "ORPHANED_ENDNOTE_REFERENCE"
MISSING_STYLE = "MISSING_STYLE"
MISSING_NUMBERING_DEFINITION = "MISSING_NUMBERING_DEFINITION"
MISSING_RELATIONSHIP = "MISSING_RELATIONSHIP"
MISSING_MEDIA = "MISSING_MEDIA"
MALFORMED_XML = "MALFORMED_XML"
ORPHANED_BOOKMARK = "ORPHANED_BOOKMARK"

RESERVED_CODES: tuple[str, ...] = (
    ORPHANED_FOOTNOTE_REFERENCE,
    ORPHANED_ENDNOTE_REFERENCE,
    MISSING_STYLE,
    MISSING_NUMBERING_DEFINITION,
    MISSING_RELATIONSHIP,
    MISSING_MEDIA,
    MALFORMED_XML,
    ORPHANED_BOOKMARK,
)


# ── Entry Model ──────────────────────────────────────────────────────


class ComparisonLogEntry(BaseModel):
    """One leveled, coded fact about a recoverable problem."""

    model_config = ConfigDict(frozen=True)

    level: LogLevel
    code: str
    message: str
    details: Optional[str] = None
    location: Optional[str] = None  # e.g. "document.xml/w:p[5]/w:r[2]"

    def __str__(self) -> str:
        loc = f" at {self.location}" if self.location is not None else ""
        det = f" ({self.details})" if self.details is not None else ""
        return f"[{self.level}] {self.code}: {self.message}{loc}{det}"
