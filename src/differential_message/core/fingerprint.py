"""Commit message fingerprinting for change detection."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from typing import Any

from .models import ParsedMessage


def canonical_fields(fields: Mapping[str, Any]) -> str:
    """Encode non-empty fields as compact, key-sorted JSON."""
    kept = {k: v for k, v in fields.items() if v}
    return json.dumps(kept, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def fingerprint(message: ParsedMessage) -> str:
    """Digest of the message's non-empty fields (hex SHA-256)."""
    encoded = canonical_fields(message.fields)
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()
