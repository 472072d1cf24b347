"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: callable actions (e.g., parse a commit message)
- Resources: addressable data blobs (e.g., a commit message file via URI)
- Prompts: reusable conversation templates that clients can invoke

Run locally (stdio):
    python -m differential_message.server.mcp_server
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from differential_message.core.logging_config import configure_logging
from differential_message.prompts.registry import register_prompts
from differential_message.resources.registry import register_resources
from differential_message.tools.commit_message import (
    commit_message_fingerprint_impl,
    parse_commit_message_impl,
)

LOGGER = logging.getLogger(__name__)

mcp = FastMCP("differential-message", json_response=True)

register_resources(mcp)
register_prompts(mcp)


@mcp.tool()
def parse_commit_message(
    corpus: str,
    project_root: str | None = None,
    assume_git_svn: bool | None = None,
    sync: bool = False,
    partial: bool = False,
) -> dict[str, Any]:
    """Parse a commit message into its revision ID, git-svn provenance and fields.

    Parameters
    ----------
    corpus:
        Full commit message text.
    project_root:
        Working copy whose config decides whether git-svn-id lines are trusted.
        Defaults to the server's working directory.
    assume_git_svn:
        Overrides ``repo.gitsvn`` for this call. When neither is set,
        git-svn-id lines are ignored.
    sync:
        When true, ask the Conduit server to parse the fields
        (needs DIFF_MESSAGE_CONDUIT_URI).
    partial:
        With sync, tolerate missing required fields (drafts).

    Returns
    -------
    dict:
        {"revision_id": int | None, "fields": dict, "fingerprint": str,
         "git_svn"?: dict, "errors"?: list[str]}
    """
    return parse_commit_message_impl(
        corpus=corpus,
        project_root=project_root,
        assume_git_svn=assume_git_svn,
        sync=sync,
        partial=partial,
    )


@mcp.tool()
def commit_message_fingerprint(fields: dict[str, Any]) -> dict[str, Any]:
    """Return the change-detection fingerprint of a commit message field set."""
    return commit_message_fingerprint_impl(fields=fields)


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
