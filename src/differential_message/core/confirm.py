"""Operator confirmation prompts."""

from __future__ import annotations

import sys
from typing import Protocol, TextIO


class ConfirmFn(Protocol):
    def __call__(self, question: str, default: bool = False) -> bool: ...


def console_confirm(
    question: str,
    default: bool = False,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> bool:
    """Ask a yes/no question on the terminal; empty input picks the default."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    hint = "[Y/n]" if default else "[y/N]"
    while True:
        stdout.write(f"{question} {hint} ")
        stdout.flush()
        line = stdin.readline()
        if not line:  # EOF
            return default
        answer = line.strip().lower()
        if not answer:
            return default
        if answer in ("y", "yes"):
            return True
        if answer in ("n", "no"):
            return False


def fixed_confirm(answer: bool) -> ConfirmFn:
    """Return a non-interactive confirm that always gives the same answer."""

    def _confirm(question: str, default: bool = False) -> bool:
        return answer

    return _confirm
