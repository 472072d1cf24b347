"""Conduit transport package."""

from __future__ import annotations

from .client import (
    PARSE_COMMIT_MESSAGE_METHOD,
    ConduitClient,
    ConduitClientError,
    ConduitParsingService,
    RemoteParsingService,
)
from .models import (
    ConduitConfig,
    ConduitEnvelope,
    ParseCommitMessageResult,
    resolve_conduit_config,
)

__all__ = [
    "PARSE_COMMIT_MESSAGE_METHOD",
    "ConduitClient",
    "ConduitClientError",
    "ConduitConfig",
    "ConduitEnvelope",
    "ConduitParsingService",
    "ParseCommitMessageResult",
    "RemoteParsingService",
    "resolve_conduit_config",
]
