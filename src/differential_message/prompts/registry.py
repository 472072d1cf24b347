"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def review_commit_message(message_path: str, partial: bool = False) -> list[dict[str, Any]]:
        """Build a prompt that checks a commit message before it is sent for review."""
        mode = "draft (missing required fields are fine)" if partial else "final"
        return [
            {
                "role": "system",
                "content": (
                    "You are a careful code review assistant. Check commit messages against "
                    "the review server's field rules. Do not invent field values."
                ),
            },
            {
                "role": "user",
                "content": (
                    f"Check this {mode} commit message. Follow this workflow:\n"
                    "- Call parse_commit_message with the file contents, sync=true and "
                    f"partial={'true' if partial else 'false'}.\n"
                    "- If errors are returned, list each one and suggest a fix.\n"
                    "- If revision_id is set, mention which revision the commit updates.\n"
                    "- Report the fingerprint so later edits can be compared.\n"
                ),
            },
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "The commit message:"},
                    {"type": "resource", "uri": f"commit-message://{message_path}"},
                ],
            },
        ]
