from __future__ import annotations

import pytest

from differential_message.core.errors import UsageError
from differential_message.core.markers import (
    GitSVNIdMatcher,
    RevisionFieldMatcher,
    parse_revision_token,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("D123", 123),
        ("123", 123),
        ("http://example.test/D77", 77),
        ("https://phabricator.example.com/D9/", 9),
    ],
)
def test_revision_matcher_accepts_historical_forms(value: str, expected: int) -> None:
    ref = RevisionFieldMatcher().match(f"Title\n\nDifferential Revision: {value}\n")
    assert ref is not None
    assert ref.revision_id == expected


def test_revision_matcher_field_name_is_case_insensitive() -> None:
    ref = RevisionFieldMatcher().match("differential revision: D5")
    assert ref is not None
    assert ref.revision_id == 5


def test_revision_matcher_blank_value_is_absent() -> None:
    ref = RevisionFieldMatcher().match("Differential Revision:   \nnext line D9")
    assert ref is not None
    assert ref.revision_id is None


def test_revision_matcher_no_line() -> None:
    assert RevisionFieldMatcher().match("Just a title\n\nSummary: stuff") is None


def test_revision_matcher_requires_line_start() -> None:
    assert RevisionFieldMatcher().match("See Differential Revision: D1") is None


def test_revision_matcher_first_line_wins() -> None:
    corpus = "Differential Revision: D1\nDifferential Revision: D2\n"
    ref = RevisionFieldMatcher().match(corpus)
    assert ref is not None
    assert ref.revision_id == 1


def test_revision_matcher_rejects_bad_uri_path() -> None:
    with pytest.raises(UsageError, match="http://example.test/Z77"):
        RevisionFieldMatcher().match("Differential Revision: http://example.test/Z77")


def test_revision_matcher_uri_path_needs_marker() -> None:
    with pytest.raises(UsageError):
        RevisionFieldMatcher().match("Differential Revision: http://example.test/77")


def test_parse_revision_token() -> None:
    assert parse_revision_token("D42") == 42
    assert parse_revision_token("42") == 42
    assert parse_revision_token("X42") is None
    assert parse_revision_token("D") is None


def test_git_svn_matcher_extracts_provenance() -> None:
    corpus = "Fix things\n\ngit-svn-id: https://host/repo@4521 abcd-uuid\n"
    prov = GitSVNIdMatcher().match(corpus)
    assert prov is not None
    assert prov.base_revision == "https://host/repo@4521"
    assert prov.base_path == "https://host/repo"
    assert prov.uuid == "abcd-uuid"


def test_git_svn_matcher_first_line_wins() -> None:
    corpus = (
        "git-svn-id: svn://a/trunk@1 uuid-a\n"
        "git-svn-id: svn://b/trunk@2 uuid-b\n"
    )
    prov = GitSVNIdMatcher().match(corpus)
    assert prov is not None
    assert prov.base_path == "svn://a/trunk"


def test_git_svn_matcher_ignores_malformed_line() -> None:
    assert GitSVNIdMatcher().match("git-svn-id: https://host/repo abcd") is None


@pytest.mark.parametrize(
    "value",
    ["D١٢٣", "１２３", "http://example.test/D٧٧"],
)
def test_revision_matcher_rejects_non_ascii_digits(value: str) -> None:
    with pytest.raises(UsageError):
        RevisionFieldMatcher().match(f"Differential Revision: {value}")


def test_parse_revision_token_ascii_only() -> None:
    assert parse_revision_token("D١٢٣") is None


def test_git_svn_matcher_rejects_non_ascii_revision() -> None:
    assert GitSVNIdMatcher().match("git-svn-id: https://host/repo@٤٥ abcd-uuid") is None
