"""``git-svn-id:`` trailer matcher."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..models import GitSVNProvenance


@dataclass(frozen=True, slots=True)
class GitSVNIdMatcher:
    """Match the first ``git-svn-id: <path>@<revision> <uuid>`` line."""

    _line = re.compile(
        r"^git-svn-id:[^\S\n]*"
        r"(?P<path>[^@\n]+)@(?P<revision>[0-9]+)[^\S\n]+"
        r"(?P<uuid>.*)$",
        re.MULTILINE,
    )

    def match(self, corpus: str) -> GitSVNProvenance | None:
        """Return provenance for the first git-svn-id line, if any."""
        m = self._line.search(corpus)
        if not m:
            return None

        path = m.group("path")
        return GitSVNProvenance(
            base_revision=f"{path}@{m.group('revision')}",
            base_path=path,
            uuid=m.group("uuid").strip(),
        )
