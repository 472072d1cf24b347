"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

import os
from typing import Any

from differential_message.core.conduit import (
    ConduitClient,
    ConduitParsingService,
    RemoteParsingService,
    resolve_conduit_config,
)
from differential_message.core.confirm import fixed_confirm
from differential_message.core.errors import CommitMessageParserError, UsageError
from differential_message.core.fingerprint import fingerprint
from differential_message.core.models import ParsedMessage
from differential_message.core.parser import GIT_SVN_CONFIG_KEY, GitSVNGate, parse
from differential_message.core.sync import synchronize
from differential_message.core.working_copy import WorkingCopyConfig


def message_to_dict(message: ParsedMessage) -> dict[str, Any]:
    """Convert a ParsedMessage into a JSON-serializable dict."""
    d: dict[str, Any] = {
        "revision_id": message.revision_id,
        "fields": dict(message.fields),
        "fingerprint": fingerprint(message),
    }
    if message.git_svn is not None:
        d["git_svn"] = {
            "base_revision": message.git_svn.base_revision,
            "base_path": message.git_svn.base_path,
            "uuid": message.git_svn.uuid,
        }
    return d


def _gate(project_root: str | None, assume_git_svn: bool | None) -> GitSVNGate:
    """Build a non-interactive git-svn gate (an MCP client cannot be prompted)."""
    config = WorkingCopyConfig.from_path(project_root or os.getcwd())
    if assume_git_svn is not None:
        config.set_runtime_config(GIT_SVN_CONFIG_KEY, assume_git_svn)
    return GitSVNGate(config, fixed_confirm(False))


def _sync(message: ParsedMessage, service: RemoteParsingService, *, partial: bool) -> list[str]:
    """Sync fields and return the remote validation errors (empty on success)."""
    try:
        synchronize(message, service, partial=partial)
    except CommitMessageParserError as e:
        return e.errors
    return []


def parse_commit_message_impl(
    *,
    corpus: str,
    project_root: str | None = None,
    assume_git_svn: bool | None = None,
    sync: bool = False,
    partial: bool = False,
    service: RemoteParsingService | None = None,
) -> dict[str, Any]:
    """Implementation for the `parse_commit_message` MCP tool.

    Notes
    -----
    - Without ``assume_git_svn`` the ``repo.gitsvn`` config decides; an unset
      value counts as "not git-svn".
    - Remote validation errors are returned under ``errors`` next to whatever
      fields the server did parse.
    """
    try:
        message = parse(corpus, gate=_gate(project_root, assume_git_svn))
    except UsageError as e:
        raise ValueError(str(e)) from e

    errors: list[str] = []
    if sync:
        if service is not None:
            errors = _sync(message, service, partial=partial)
        else:
            with ConduitClient.from_config(resolve_conduit_config()) as client:
                errors = _sync(message, ConduitParsingService(client), partial=partial)

    out = message_to_dict(message)
    if sync:
        out["errors"] = errors
    return out


def commit_message_fingerprint_impl(*, fields: dict[str, Any]) -> dict[str, Any]:
    """Implementation for the `commit_message_fingerprint` MCP tool."""
    message = ParsedMessage("")
    message.fields = dict(fields)
    return {"fingerprint": fingerprint(message)}
