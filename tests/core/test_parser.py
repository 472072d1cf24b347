from __future__ import annotations

import json
from pathlib import Path

import pytest

from differential_message.core.errors import UsageError
from differential_message.core.parser import GIT_SVN_CONFIG_KEY, GitSVNGate, is_truthy_config, parse
from differential_message.core.working_copy import WorkingCopyConfig

GIT_SVN_CORPUS = "Update docs\n\ngit-svn-id: https://host/repo@4521 abcd-uuid\n"


def test_parse_without_revision_line() -> None:
    msg = parse("Add feature\n\nSummary: adds it\n")
    assert msg.revision_id is None
    assert msg.git_svn is None
    assert msg.fields == {}


@pytest.mark.parametrize(
    ("corpus", "expected"),
    [
        ("Differential Revision: D123", 123),
        ("Differential Revision: 123", 123),
        ("Differential Revision: http://example.test/D77", 77),
        ("Differential Revision: ", None),
    ],
)
def test_parse_revision_id(corpus: str, expected: int | None) -> None:
    assert parse(corpus).revision_id == expected


def test_parse_malformed_revision_raises() -> None:
    with pytest.raises(UsageError, match="Invalid 'Differential Revision' field"):
        parse("Differential Revision: http://example.test/Z77")


def test_parse_keeps_raw_corpus() -> None:
    corpus = "Title\n\nDifferential Revision: D1\n"
    assert parse(corpus).raw_corpus == corpus


def test_parse_without_gate_ignores_git_svn() -> None:
    assert parse(GIT_SVN_CORPUS).git_svn is None


def test_parse_confirmed_git_svn(wc_config: WorkingCopyConfig, make_confirm) -> None:
    confirm = make_confirm(True)
    msg = parse(GIT_SVN_CORPUS, gate=GitSVNGate(wc_config, confirm))
    assert msg.git_svn_base_revision == "https://host/repo@4521"
    assert msg.git_svn_base_path == "https://host/repo"
    assert msg.git_svn_uuid == "abcd-uuid"
    assert len(confirm.questions) == 1
    assert "WebKit" in confirm.questions[0]


def test_parse_declined_git_svn(wc_config: WorkingCopyConfig, make_confirm) -> None:
    msg = parse(GIT_SVN_CORPUS, gate=GitSVNGate(wc_config, make_confirm(False)))
    assert msg.git_svn is None
    assert msg.git_svn_base_path is None


def test_gate_prompts_once_and_caches(wc_config: WorkingCopyConfig, make_confirm) -> None:
    confirm = make_confirm(True)
    gate = GitSVNGate(wc_config, confirm)
    parse(GIT_SVN_CORPUS, gate=gate)
    parse(GIT_SVN_CORPUS, gate=gate)
    assert len(confirm.questions) == 1
    assert wc_config.get_config(GIT_SVN_CONFIG_KEY) is True


def test_gate_not_consulted_without_git_svn_line(
    wc_config: WorkingCopyConfig, make_confirm
) -> None:
    confirm = make_confirm(True)
    parse("Differential Revision: D3\n", gate=GitSVNGate(wc_config, confirm))
    assert confirm.questions == []
    assert wc_config.get_config(GIT_SVN_CONFIG_KEY) is None


def test_gate_uses_local_config(tmp_path: Path, make_confirm) -> None:
    local = tmp_path / ".arc" / "config"
    local.parent.mkdir()
    local.write_text(json.dumps({"repo.gitsvn": "YES"}), encoding="utf-8")
    config = WorkingCopyConfig(tmp_path, global_path=tmp_path / "missing")

    confirm = make_confirm(False)
    msg = parse(GIT_SVN_CORPUS, gate=GitSVNGate(config, confirm))
    assert msg.git_svn is not None
    assert confirm.questions == []


@pytest.mark.parametrize(
    ("value", "expected"),
    [("yes", True), ("True", True), ("1", True), (True, True), ("no", False), ("0", False), (False, False)],
)
def test_is_truthy_config(value: object, expected: bool) -> None:
    assert is_truthy_config(value) is expected
