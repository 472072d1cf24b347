"""Field synchronization against the remote commit message parser."""

from __future__ import annotations

import logging

from .conduit import RemoteParsingService
from .errors import CommitMessageParserError
from .models import ParsedMessage

logger = logging.getLogger(__name__)


def synchronize(
    message: ParsedMessage,
    service: RemoteParsingService,
    partial: bool = False,
) -> ParsedMessage:
    """Replace the message's fields with the remote parser's result.

    ``partial`` asks the service to tolerate missing required fields. Fields
    are replaced before validation errors are raised, so callers catching
    CommitMessageParserError can still inspect what was parsed. Transport
    errors propagate unchanged.
    """
    result = service.parse_commit_message(message.raw_corpus, partial=partial)

    message.fields = dict(result.fields)
    logger.debug(
        "Synced %d field(s) from remote parser (partial=%s)", len(message.fields), partial
    )

    if result.errors:
        raise CommitMessageParserError(result.errors)
    return message
