"""Commit message marker matchers.

Contains the pattern matchers for the well-known lines a commit message may
carry (Differential revision field, git-svn-id trailer).
"""

from __future__ import annotations

from .base import MarkerMatcher
from .gitsvn import GitSVNIdMatcher
from .revision import RevisionFieldMatcher, RevisionReference, parse_revision_token

__all__ = [
    "GitSVNIdMatcher",
    "MarkerMatcher",
    "RevisionFieldMatcher",
    "RevisionReference",
    "parse_revision_token",
]
