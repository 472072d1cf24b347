"""``Differential Revision:`` field matcher."""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from ..errors import UsageError


@dataclass(frozen=True, slots=True)
class RevisionReference:
    """The raw field value and the revision ID it names (None when blank)."""

    raw: str
    revision_id: int | None


def parse_revision_token(token: str) -> int | None:
    """Parse ``D123`` or ``123`` into 123; return None for anything else."""
    m = RevisionFieldMatcher._token.match(token)
    if not m:
        return None
    return int(m.group("id"))


@dataclass(frozen=True, slots=True)
class RevisionFieldMatcher:
    """Match the first ``Differential Revision:`` line of a commit message.

    Three historical value forms are accepted, tried in this order:
    ``123``, ``D123``, and a URI whose path is ``D123``.
    """

    _line = re.compile(
        r"^Differential Revision:[^\S\n]*(?P<value>.*)$",
        re.IGNORECASE | re.MULTILINE,
    )
    # Marker letter is case-sensitive even though the field name is not.
    _token = re.compile(r"^D?(?P<id>[0-9]+)$")
    _uri_path = re.compile(r"^D(?P<id>[0-9]+)$")

    def match(self, corpus: str) -> RevisionReference | None:
        """Return the first revision reference, raising UsageError if malformed."""
        m = self._line.search(corpus)
        if not m:
            return None

        raw = m.group("value")
        value = raw.strip()
        if not value:
            return RevisionReference(raw=raw, revision_id=None)

        revision_id = parse_revision_token(value)
        if revision_id is not None:
            return RevisionReference(raw=raw, revision_id=revision_id)

        try:
            path = urlsplit(value).path.strip("/")
        except ValueError:  # e.g. unbalanced IPv6 brackets
            path = ""
        pm = self._uri_path.match(path)
        if pm:
            return RevisionReference(raw=raw, revision_id=int(pm.group("id")))

        raise UsageError(
            "Invalid 'Differential Revision' field. The field should have a "
            "Phabricator URI like 'http://phabricator.example.com/D123', "
            f"but has '{raw}'."
        )
