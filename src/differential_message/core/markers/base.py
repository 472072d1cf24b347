"""Marker matcher interface."""

from __future__ import annotations

from typing import Protocol, TypeVar

T_co = TypeVar("T_co", covariant=True)


class MarkerMatcher(Protocol[T_co]):
    """Matcher interface: return the first marker found in a corpus, else None."""

    def match(self, corpus: str) -> T_co | None:
        """Find the first occurrence of the marker in a commit message."""
        ...
