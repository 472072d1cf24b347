"""Conduit wire models and client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any

from pydantic import BaseModel, Field, field_validator


class ConduitEnvelope(BaseModel):
    """Outer JSON object of every Conduit response."""

    result: Any = None
    error_code: str | None = None
    error_info: str | None = None


class ParseCommitMessageResult(BaseModel):
    """Result of ``differential.parsecommitmessage``."""

    fields: dict[str, Any] = Field(
        default_factory=dict, description="Structured commit message fields."
    )
    errors: list[str] = Field(
        default_factory=list, description="Field-level validation errors."
    )

    @field_validator("fields", mode="before")
    @classmethod
    def _empty_list_is_empty_map(cls, value: Any) -> Any:
        # The server encodes an empty map as [].
        if value is None or value == []:
            return {}
        return value

    @field_validator("errors", mode="before")
    @classmethod
    def _null_errors(cls, value: Any) -> Any:
        return [] if value is None else value


@dataclass(frozen=True, slots=True)
class ConduitConfig:
    uri: str | None = None
    token: str | None = None
    timeout: float | None = None  # None leaves the request unbounded
    max_retries: int = 1


def _env_int(name: str, *, minimum: int) -> int | None:
    env = os.getenv(name)
    if env is None or env == "":
        return None
    try:
        value = int(env)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value


def resolve_conduit_config(cfg: ConduitConfig | None = None) -> ConduitConfig:
    """Return config with optional env overrides applied."""
    if cfg is None:
        cfg = ConduitConfig()

    changes: dict[str, Any] = {}
    uri = os.getenv("DIFF_MESSAGE_CONDUIT_URI")
    if uri:
        changes["uri"] = uri
    token = os.getenv("DIFF_MESSAGE_CONDUIT_TOKEN")
    if token:
        changes["token"] = token

    timeout = _env_int("DIFF_MESSAGE_CONDUIT_TIMEOUT", minimum=1)
    if timeout is not None:
        changes["timeout"] = float(timeout)
    retries = _env_int("DIFF_MESSAGE_CONDUIT_MAX_RETRIES", minimum=1)
    if retries is not None:
        changes["max_retries"] = retries

    return replace(cfg, **changes) if changes else cfg
