"""Minimal git backend for the amend workflow."""

from __future__ import annotations

import logging
import subprocess

from .parser import is_truthy_config, parse
from .working_copy import WorkingCopyConfig

logger = logging.getLogger(__name__)


class GitRepository:
    """RepositoryAPI over the ``git`` command line, scoped to HEAD."""

    def __init__(self, config: WorkingCopyConfig) -> None:
        self.config = config

    def _git(self, *args: str, stdin: str | None = None) -> str:
        proc = subprocess.run(
            ["git", *args],
            cwd=self.config.project_root,
            input=stdin,
            capture_output=True,
            text=True,
            check=True,
        )
        return proc.stdout

    def supports_amend(self) -> bool:
        return True

    def has_uncommitted_changes(self) -> bool:
        return bool(self._git("status", "--porcelain", "--untracked-files=no").strip())

    def is_history_immutable(self) -> bool:
        return is_truthy_config(self.config.get_config("history.immutable", False))

    def working_copy_revision_ids(self) -> list[int]:
        message = parse(self._git("log", "-1", "--format=%B", "HEAD"))
        return [] if message.revision_id is None else [message.revision_id]

    def amend_commit(self, message: str) -> None:
        logger.debug("git commit --amend (%d bytes)", len(message))
        self._git("commit", "--amend", "--file=-", stdin=message)
