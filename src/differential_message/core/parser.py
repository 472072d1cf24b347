"""Raw corpus parsing.

Turns commit message text into a ParsedMessage. No network access happens
here; the only blocking step is the git-svn confirmation prompt.
"""

from __future__ import annotations

import logging

from .confirm import ConfirmFn
from .markers import GitSVNIdMatcher, MarkerMatcher, RevisionFieldMatcher, RevisionReference
from .models import GitSVNProvenance, ParsedMessage
from .working_copy import WorkingCopyConfig

logger = logging.getLogger(__name__)

GIT_SVN_CONFIG_KEY = "repo.gitsvn"
_TRUTHY = ("yes", "true", "1")

GIT_SVN_QUESTION = (
    "This *seems* to be a git-svn repository, but be aware that some projects "
    "-- such as WebKit -- will appear as being a git-svn repo even if in "
    "practice, the actual repository is not using it (such as when you are "
    "using a git mirror of WebKit).\n"
    "Is this really a git-svn repo?"
)

_REVISION_MATCHER: MarkerMatcher[RevisionReference] = RevisionFieldMatcher()
_GIT_SVN_MATCHER: MarkerMatcher[GitSVNProvenance] = GitSVNIdMatcher()


def is_truthy_config(value: object) -> bool:
    """Interpret a stored boolean config value (``repo.gitsvn``, ``history.immutable``)."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


class GitSVNGate:
    """Decides whether a git-svn-id line really means a git-svn checkout.

    The answer comes from ``repo.gitsvn`` in the working-copy config. When
    unset, the operator is asked once and the answer is stored in the
    config's runtime layer.
    """

    def __init__(self, config: WorkingCopyConfig, confirm: ConfirmFn) -> None:
        self.config = config
        self.confirm = confirm

    def is_git_svn(self) -> bool:
        value = self.config.get_config(GIT_SVN_CONFIG_KEY)
        if value is None:
            ok = self.confirm(GIT_SVN_QUESTION, default=False)
            self.config.set_runtime_config(GIT_SVN_CONFIG_KEY, ok)
            return ok
        return is_truthy_config(value)


def parse(corpus: str, *, gate: GitSVNGate | None = None) -> ParsedMessage:
    """Parse a raw commit message.

    Raises UsageError when the Differential Revision field holds something
    other than ``123``, ``D123`` or a URI ending in ``/D123``. Without a gate,
    git-svn provenance is never recorded.
    """
    ref = _REVISION_MATCHER.match(corpus)
    revision_id = ref.revision_id if ref is not None else None

    git_svn = _GIT_SVN_MATCHER.match(corpus)
    if git_svn is not None and (gate is None or not gate.is_git_svn()):
        logger.debug("Ignoring git-svn-id line (not confirmed as git-svn)")
        git_svn = None

    logger.debug("Parsed commit message (revision_id=%s, git_svn=%s)", revision_id, git_svn)
    return ParsedMessage(corpus, revision_id=revision_id, git_svn=git_svn)
