"""Content hashing for annotation staleness checks."""

import hashlib

_CHUNK_CHARS = 8192


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and lone CR to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def compute_content_hash(text: str) -> str:
    """SHA-256 of the document's extracted text (line endings normalized).

    The empty string hashes to the well-known SHA-256 of zero bytes.
    """
    h = hashlib.sha256()
    normalized = normalize_line_endings(text)
    for i in range(0, len(normalized), _CHUNK_CHARS):
        h.update(normalized[i : i + _CHUNK_CHARS].encode("utf-8", "surrogatepass"))
    return h.hexdigest()


def hashes_match(stored: str, current: str) -> bool:
    """Compare two hex digests, ignoring case."""
    return stored.strip().lower() == current.strip().lower()
