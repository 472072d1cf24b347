from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from differential_message.core.conduit import ParseCommitMessageResult
from differential_message.core.working_copy import WorkingCopyConfig


class FakeParsingService:
    """RemoteParsingService stub returning queued results in order."""

    def __init__(self, *results: ParseCommitMessageResult) -> None:
        self.results = list(results)
        self.calls: list[tuple[str, bool]] = []

    def parse_commit_message(self, corpus: str, *, partial: bool) -> ParseCommitMessageResult:
        self.calls.append((corpus, partial))
        return self.results.pop(0)


class RecordingConfirm:
    def __init__(self, answer: bool) -> None:
        self.answer = answer
        self.questions: list[str] = []

    def __call__(self, question: str, default: bool = False) -> bool:
        self.questions.append(question)
        return self.answer


@pytest.fixture
def make_service() -> Callable[..., FakeParsingService]:
    def _make(*results: dict[str, Any]) -> FakeParsingService:
        return FakeParsingService(*(ParseCommitMessageResult.model_validate(r) for r in results))

    return _make


@pytest.fixture
def make_confirm() -> Callable[[bool], RecordingConfirm]:
    return RecordingConfirm


@pytest.fixture
def wc_config(tmp_path: Path) -> WorkingCopyConfig:
    """Working-copy config isolated from the user's real ~/.arcrc."""
    return WorkingCopyConfig(tmp_path, global_path=tmp_path / "home" / ".arcrc")


@pytest.fixture
def write_message() -> Callable[[Path, list[str]], None]:
    def _write(path: Path, lines: list[str]) -> None:
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    return _write
