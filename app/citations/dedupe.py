"""Citation deduplication across sources."""

from collections.abc import Iterable

from app.citations.types import Citation


def citation_key(citation: Citation) -> str:
    """Identity key: DOI, else title, else id, case-insensitive."""
    raw = citation.doi or citation.title or citation.id
    return raw.strip().lower()


def dedupe_citations(citations: Iterable[Citation]) -> list[Citation]:
    """Collapse citations sharing an identity key to their first occurrence.

    Order of first appearance is preserved.
    """
    seen: set[str] = set()
    unique: list[Citation] = []
    for citation in citations:
        key = citation_key(citation)
        if key in seen:
            continue
        seen.add(key)
        unique.append(citation)
    return unique
