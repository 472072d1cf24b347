"""Core data models for commit message parsing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .conduit import RemoteParsingService


@dataclass(frozen=True, slots=True)
class GitSVNProvenance:
    """Mirror provenance taken from a confirmed ``git-svn-id:`` line."""

    base_revision: str  # path@revision
    base_path: str
    uuid: str


class ParsedMessage:
    """A commit message split into its raw text and structured fields.

    The raw corpus, revision ID and git-svn provenance are fixed at
    construction. Fields are empty until set by the caller or replaced by a
    sync against the remote parser.
    """

    __slots__ = ("_raw_corpus", "_revision_id", "_git_svn", "fields")

    def __init__(
        self,
        raw_corpus: str,
        *,
        revision_id: int | None = None,
        git_svn: GitSVNProvenance | None = None,
    ) -> None:
        self._raw_corpus = raw_corpus
        self._revision_id = revision_id
        self._git_svn = git_svn
        self.fields: dict[str, Any] = {}

    def __repr__(self) -> str:
        return (
            f"ParsedMessage(revision_id={self._revision_id!r}, "
            f"git_svn={self._git_svn!r}, fields={self.fields!r})"
        )

    @property
    def raw_corpus(self) -> str:
        return self._raw_corpus

    @property
    def revision_id(self) -> int | None:
        return self._revision_id

    @property
    def git_svn(self) -> GitSVNProvenance | None:
        return self._git_svn

    @property
    def git_svn_base_revision(self) -> str | None:
        return self._git_svn.base_revision if self._git_svn else None

    @property
    def git_svn_base_path(self) -> str | None:
        return self._git_svn.base_path if self._git_svn else None

    @property
    def git_svn_uuid(self) -> str | None:
        return self._git_svn.uuid if self._git_svn else None

    def get_field_value(self, key: str) -> Any:
        """Return a field value, or None when the key is not set."""
        return self.fields.get(key)

    def set_field_value(self, key: str, value: Any) -> ParsedMessage:
        self.fields[key] = value
        return self

    def pull_data_from_conduit(
        self, service: RemoteParsingService, partial: bool = False
    ) -> ParsedMessage:
        """Replace fields with the remote parser's view of the corpus."""
        from .sync import synchronize

        return synchronize(self, service, partial=partial)

    def get_checksum(self) -> str:
        from .fingerprint import fingerprint

        return fingerprint(self)


class TestStatus(str, Enum):
    """Outcome of a single test case reported by a test runner."""

    __test__ = False

    PASS = "pass"
    FAIL = "fail"


@dataclass(frozen=True, slots=True)
class TestResult:
    """One test case record produced by a unit test engine."""

    __test__ = False

    name: str
    status: TestStatus
    duration: float
    user_data: str = ""
    coverage: dict[str, Any] | None = None  # not collected by any engine yet
