"""Conduit API client and the remote commit message parser built on it."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Mapping
from typing import Any, Protocol

import httpx

from .models import ConduitConfig, ConduitEnvelope, ParseCommitMessageResult

logger = logging.getLogger(__name__)

PARSE_COMMIT_MESSAGE_METHOD = "differential.parsecommitmessage"


class ConduitClientError(Exception):
    """The server answered with a Conduit error code."""

    def __init__(self, code: str, info: str | None = None) -> None:
        self.code = code
        self.info = info
        super().__init__(f"{code}: {info}" if info else code)


class ConduitClient:
    """Synchronous Conduit client.

    Transport failures are retried up to ``max_retries`` attempts and then
    re-raised as-is. Conduit error envelopes raise ConduitClientError and are
    never retried.
    """

    def __init__(
        self,
        uri: str,
        *,
        token: str | None = None,
        timeout: float | None = None,
        max_retries: int = 1,
        http: httpx.Client | None = None,
    ) -> None:
        if max_retries < 1:
            raise ValueError("max_retries must be >= 1")
        self.uri = uri.rstrip("/")
        self.token = token
        self.max_retries = max_retries
        self._http = http if http is not None else httpx.Client(timeout=timeout)

    @classmethod
    def from_config(cls, cfg: ConduitConfig) -> ConduitClient:
        if not cfg.uri:
            raise ValueError("Missing Conduit URI (set DIFF_MESSAGE_CONDUIT_URI).")
        return cls(
            cfg.uri,
            token=cfg.token,
            timeout=cfg.timeout,
            max_retries=cfg.max_retries,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> ConduitClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _post(self, method: str, data: dict[str, str]) -> httpx.Response:
        url = f"{self.uri}/api/{method}"
        for attempt in range(1, self.max_retries + 1):
            try:
                return self._http.post(url, data=data)
            except httpx.TransportError as e:
                if attempt >= self.max_retries:
                    raise
                sleep_s = min(8, 2 ** (attempt - 1))
                logger.warning(
                    "Conduit call %s failed (attempt %s/%s): %s",
                    method,
                    attempt,
                    self.max_retries,
                    e,
                )
                time.sleep(sleep_s)
        raise AssertionError("unreachable")

    def call_method_synchronous(self, method: str, params: Mapping[str, Any]) -> Any:
        """Call a Conduit method and return its ``result`` payload."""
        payload = dict(params)
        if self.token:
            payload["__conduit__"] = {"token": self.token}

        logger.debug("Calling Conduit method %s", method)
        resp = self._post(
            method,
            {
                "params": json.dumps(payload),
                "output": "json",
                "__conduit__": "1",
            },
        )
        resp.raise_for_status()

        envelope = ConduitEnvelope.model_validate_json(resp.content)
        if envelope.error_code:
            raise ConduitClientError(envelope.error_code, envelope.error_info)
        return envelope.result


class RemoteParsingService(Protocol):
    """Remote commit message parser/validator."""

    def parse_commit_message(self, corpus: str, *, partial: bool) -> ParseCommitMessageResult:
        ...


class ConduitParsingService:
    """RemoteParsingService backed by ``differential.parsecommitmessage``."""

    def __init__(self, client: ConduitClient) -> None:
        self.client = client

    def parse_commit_message(self, corpus: str, *, partial: bool) -> ParseCommitMessageResult:
        result = self.client.call_method_synchronous(
            PARSE_COMMIT_MESSAGE_METHOD,
            {"corpus": corpus, "partial": partial},
        )
        return ParseCommitMessageResult.model_validate(result or {})
