from __future__ import annotations

import httpx
import pytest

from differential_message.core.errors import CommitMessageParserError
from differential_message.core.parser import parse
from differential_message.core.sync import synchronize


def test_synchronize_replaces_fields(make_service) -> None:
    msg = parse("Add feature\n\nDifferential Revision: D12\n")
    service = make_service({"fields": {"title": "Add feature", "reviewerPHIDs": ["PHID-USER-1"]}})

    out = synchronize(msg, service, partial=True)

    assert out is msg
    assert msg.fields == {"title": "Add feature", "reviewerPHIDs": ["PHID-USER-1"]}
    assert service.calls == [(msg.raw_corpus, True)]


def test_synchronize_keeps_revision_id(make_service) -> None:
    msg = parse("Differential Revision: D12\n")
    synchronize(msg, make_service({"fields": {"revisionID": 99}}))
    assert msg.revision_id == 12


def test_synchronize_second_call_drops_stale_keys(make_service) -> None:
    msg = parse("Title")
    service = make_service(
        {"fields": {"title": "Title", "summary": "old"}},
        {"fields": {"title": "Title 2"}},
    )
    synchronize(msg, service)
    synchronize(msg, service)
    assert msg.fields == {"title": "Title 2"}


def test_synchronize_errors_still_populate_fields(make_service) -> None:
    msg = parse("Title")
    errors = ["Invalid reviewer 'nobody'.", "Test Plan is required."]
    service = make_service({"fields": {"title": "Title"}, "errors": errors})

    with pytest.raises(CommitMessageParserError) as exc_info:
        synchronize(msg, service)

    assert exc_info.value.errors == errors
    assert msg.fields == {"title": "Title"}


def test_synchronize_accepts_empty_list_fields(make_service) -> None:
    msg = parse("Title").set_field_value("summary", "local")
    synchronize(msg, make_service({"fields": [], "errors": []}))
    assert msg.fields == {}


def test_synchronize_transport_error_propagates() -> None:
    class Unreachable:
        def parse_commit_message(self, corpus: str, *, partial: bool):
            raise httpx.ConnectError("connection refused")

    msg = parse("Title").set_field_value("title", "Title")
    with pytest.raises(httpx.ConnectError):
        synchronize(msg, Unreachable())
    assert msg.fields == {"title": "Title"}


def test_pull_data_from_conduit_delegates(make_service) -> None:
    msg = parse("Title")
    assert msg.pull_data_from_conduit(make_service({"fields": {"title": "T"}})) is msg
    assert msg.get_field_value("title") == "T"
    assert msg.get_field_value("missing") is None
