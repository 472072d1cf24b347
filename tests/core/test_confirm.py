from __future__ import annotations

import io

import pytest

from differential_message.core.confirm import console_confirm, fixed_confirm


@pytest.mark.parametrize(
    ("answer", "expected"),
    [("y\n", True), ("YES\n", True), ("n\n", False), ("no\n", False)],
)
def test_console_confirm_answers(answer: str, expected: bool) -> None:
    out = io.StringIO()
    assert console_confirm("Continue?", stdin=io.StringIO(answer), stdout=out) is expected
    assert out.getvalue() == "Continue? [y/N] "


@pytest.mark.parametrize("default", [True, False])
def test_console_confirm_empty_input_uses_default(default: bool) -> None:
    assert console_confirm("Continue?", default, stdin=io.StringIO("\n"), stdout=io.StringIO()) is default


@pytest.mark.parametrize("default", [True, False])
def test_console_confirm_eof_uses_default(default: bool) -> None:
    assert console_confirm("Continue?", default, stdin=io.StringIO(""), stdout=io.StringIO()) is default


def test_console_confirm_reasks_on_invalid_answer() -> None:
    out = io.StringIO()
    assert console_confirm("Continue?", True, stdin=io.StringIO("maybe\nn\n"), stdout=out) is False
    assert out.getvalue() == "Continue? [Y/n] " * 2


def test_fixed_confirm_ignores_question() -> None:
    assert fixed_confirm(True)("Anything?", default=False) is True
    assert fixed_confirm(False)("Anything?", default=True) is False
