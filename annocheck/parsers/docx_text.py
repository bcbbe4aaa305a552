"""DOCX to plain text via python-docx, reporting structural problems to a log."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from docx import Document
from docx.oxml.ns import qn
from docx.table import Table

from annocheck.core.hashing import compute_content_hash
from annocheck.diagnostics.log import ComparisonLog
from annocheck.diagnostics.models import MISSING_STYLE, ORPHANED_BOOKMARK
from annocheck.parsers.models import ExtractedDocument

logger = logging.getLogger(__name__)

_PART = "document.xml"


# ── Text ─────────────────────────────────────────────────────────────


def _table_text(table: Table) -> str:
    """One line per row, cells separated by tabs."""
    return "\n".join("\t".join(cell.text for cell in row.cells) for row in table.rows)


def docx_blocks(doc) -> list[str]:
    """Body paragraphs and tables as text blocks, in document order."""
    blocks: list[str] = []
    for item in doc.iter_inner_content():
        if isinstance(item, Table):
            blocks.append(_table_text(item))
        else:
            blocks.append(item.text)
    return blocks


# ── Structural Checks ────────────────────────────────────────────────


def _check_styles(doc, log: ComparisonLog) -> None:
    """Warn for paragraphs whose style id has no definition in styles.xml."""
    defined = {s.style_id for s in doc.styles}
    for i, paragraph in enumerate(doc.paragraphs, 1):
        style_id = paragraph._p.style
        if style_id and style_id not in defined:
            log.add_warning(
                MISSING_STYLE,
                f"Paragraph style '{style_id}' is not defined",
                location=f"{_PART}/w:body/w:p[{i}]",
            )


def _check_bookmarks(doc, log: ComparisonLog) -> None:
    """Warn for bookmark starts without an end and vice versa."""
    body = doc.element.body
    starts = {el.get(qn("w:id")): el.get(qn("w:name")) for el in body.iter(qn("w:bookmarkStart"))}
    ends = {el.get(qn("w:id")) for el in body.iter(qn("w:bookmarkEnd"))}

    for bm_id, name in starts.items():
        if bm_id not in ends:
            log.add_warning(
                ORPHANED_BOOKMARK,
                f"Bookmark '{name}' has no matching end",
                details=f"w:id={bm_id}",
                location=f"{_PART}/w:bookmarkStart[@w:id='{bm_id}']",
            )
    for bm_id in sorted(ends - starts.keys()):
        log.add_warning(
            ORPHANED_BOOKMARK,
            "Bookmark end has no matching start",
            details=f"w:id={bm_id}",
            location=f"{_PART}/w:bookmarkEnd[@w:id='{bm_id}']",
        )


# ── Public API ───────────────────────────────────────────────────────


def extract_docx_text(
    docx_path: str | Path, log: Optional[ComparisonLog] = None
) -> ExtractedDocument:
    """Extract the text of a DOCX body; blocks are joined with newlines."""
    docx_path = Path(docx_path)
    doc = Document(str(docx_path))

    blocks = docx_blocks(doc)
    text = "\n".join(blocks)

    if log is not None:
        _check_styles(doc, log)
        _check_bookmarks(doc, log)

    table_count = len(doc.tables)
    logger.info(
        "Extracted %d chars from %s (%d blocks, %d tables)",
        len(text), docx_path.name, len(blocks), table_count,
    )
    return ExtractedDocument(
        source_path=str(docx_path),
        text=text,
        content_hash=compute_content_hash(text),
        paragraph_count=len(doc.paragraphs),
        table_count=table_count,
        extracted_at=datetime.now(timezone.utc),
    )
