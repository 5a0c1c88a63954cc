"""Tests for citation deduplication."""

from app.citations.dedupe import citation_key, dedupe_citations


def test_doi_match_is_case_insensitive(make_citation):
    citations = [
        make_citation("pubmed:1", doi="10.1/a"),
        make_citation("semantic:2", doi="10.1/A"),
        make_citation("semantic:3", doi="10.2/b"),
    ]

    result = dedupe_citations(citations)

    assert [c.id for c in result] == ["pubmed:1", "semantic:3"]


def test_title_is_key_when_doi_missing(make_citation):
    citations = [
        make_citation("pubmed:1", title="Resistance Training and Longevity"),
        make_citation("semantic:9", title="resistance training and longevity"),
    ]

    assert [c.id for c in dedupe_citations(citations)] == ["pubmed:1"]


def test_doi_takes_precedence_over_title(make_citation):
    """Same title but different DOIs are different works."""
    citations = [
        make_citation("a", title="Same Title", doi="10.1/x"),
        make_citation("b", title="Same Title", doi="10.1/y"),
    ]

    assert len(dedupe_citations(citations)) == 2


def test_id_is_key_when_doi_and_title_missing(make_citation):
    citation = make_citation("AI:Example", title="")

    assert citation_key(citation) == "ai:example"


def test_preserves_first_seen_order_and_never_grows(make_citation):
    citations = [
        make_citation("c", doi="10.3/c"),
        make_citation("a", doi="10.1/a"),
        make_citation("c2", doi="10.3/C"),
        make_citation("b", doi="10.2/b"),
        make_citation("a2", doi="10.1/a"),
    ]

    result = dedupe_citations(citations)

    assert [c.id for c in result] == ["c", "a", "b"]
    assert len(result) <= len(citations)
    keys = [citation_key(c) for c in result]
    assert len(keys) == len(set(keys))


def test_empty_input():
    assert dedupe_citations([]) == []
