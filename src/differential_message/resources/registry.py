"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from mcp.server.fastmcp import FastMCP

from differential_message.core.conduit import ParseCommitMessageResult
from differential_message.core.corpus_io import read_corpus
from differential_message.tools.commit_message import parse_commit_message_impl

ALLOWED_FILE_SUFFIXES = {".txt", ".msg", ".md", ""}
BASE_DIR_ENV = "DIFF_MESSAGE_BASE_DIR"

SAMPLE_MESSAGE = (
    "Fix crash when the cache directory is missing\n"
    "\n"
    "Summary: Create the cache directory lazily instead of at startup.\n"
    "\n"
    "Test Plan: Removed ~/.cache/app and restarted.\n"
    "\n"
    "Reviewers: alice\n"
    "\n"
    "Differential Revision: https://phabricator.example.com/D123\n"
)


def _base_dir() -> Path:
    """Return the resolved base directory for file resources."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def _safe_resolve(path: str) -> Path:
    """Resolve a path under the configured base directory."""
    base = _base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError("Path escapes base dir")
    return p


def _allowed_suffix(path: Path) -> str:
    """Return the effective suffix for allowlist checks."""
    suffix = path.suffix.lower()
    if suffix == ".gz":
        suffix = path.with_suffix("").suffix.lower()
    return suffix


def _resolve_resource_path(path: str) -> Path:
    """Resolve and validate a commit message file path."""
    resolved = _safe_resolve(path)
    if not resolved.is_file():
        raise FileNotFoundError(f"File not found: {resolved}")
    if _allowed_suffix(resolved) not in ALLOWED_FILE_SUFFIXES:
        allowed = ", ".join(sorted(s or "(none)" for s in ALLOWED_FILE_SUFFIXES))
        raise ValueError(f"File type not allowed. Allowed: {allowed}.")
    return resolved


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://differential-message/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        base = _base_dir()
        return (
            "Resources:\n"
            "- app://differential-message/help\n"
            "- app://differential-message/examples/commit-message\n"
            "- app://differential-message/schemas/parse-result\n"
            f"- commit-message://{{path}} (restricted to {BASE_DIR_ENV})\n"
            f"\nBase directory: {base}\n"
        )

    @mcp.resource("app://differential-message/examples/commit-message")
    def sample_message() -> str:
        """Return a sample commit message for demos and tests."""
        return SAMPLE_MESSAGE

    @mcp.resource("app://differential-message/schemas/parse-result")
    def parse_result_schema() -> dict[str, Any]:
        """Return the JSON schema of the remote parser's result."""
        return ParseCommitMessageResult.model_json_schema()

    @mcp.resource("commit-message://{path}")
    async def read_message(path: str) -> dict[str, Any]:
        """Parse a commit message file from within DIFF_MESSAGE_BASE_DIR."""
        p = _resolve_resource_path(path)
        corpus = await read_corpus(p)
        return {"corpus": corpus, **parse_commit_message_impl(corpus=corpus)}
