"""Unit test engine wrappers."""

from __future__ import annotations

from .buster import BusterJSEngine, parse_buster_results

__all__ = ["BusterJSEngine", "parse_buster_results"]
