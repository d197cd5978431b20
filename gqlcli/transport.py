"""GraphQL over HTTP with httpx.

One POST per call, no retries:

    {"query": <document source>, "variables": {...}, "operationName": "GetUser"}

The ``data`` member of the response is returned exactly as the server wrote it.
A response carrying ``errors`` is a failure even when ``data`` is present.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Mapping

import httpx

from .errors import GraphQLResponseError, TransportError

logger = logging.getLogger(__name__)

_HEADERS = {"Accept": "application/json"}

# Longest response body quoted in an error message
_MAX_ERROR_BODY = 500

_WHITESPACE = re.compile(r"[ \t\n\r]*")
_decoder = json.JSONDecoder()


def _error_messages(errors: Any) -> list[str]:
    """Pull the message of each GraphQL error, falling back to its JSON."""
    if not isinstance(errors, list):
        return [json.dumps(errors)]
    messages = []
    for error in errors:
        if isinstance(error, dict) and "message" in error:
            messages.append(str(error["message"]))
        else:
            messages.append(json.dumps(error))
    return messages


def _raw_member(text: str, key: str) -> str | None:
    """Source text of member ``key`` of the JSON object in ``text``.

    The last occurrence wins, as with json.loads. None when absent.
    """
    found = None
    idx = _WHITESPACE.match(text, 0).end()
    if text[idx:idx + 1] != "{":
        raise ValueError("expected a JSON object")
    idx = _WHITESPACE.match(text, idx + 1).end()
    if text[idx:idx + 1] == "}":
        return None
    while True:
        if text[idx:idx + 1] != '"':
            raise ValueError(f"expected a member name at {idx}")
        name, idx = json.decoder.scanstring(text, idx + 1)
        idx = _WHITESPACE.match(text, idx).end()
        if text[idx:idx + 1] != ":":
            raise ValueError(f"expected ':' at {idx}")
        start = _WHITESPACE.match(text, idx + 1).end()
        _, end = _decoder.raw_decode(text, start)
        if name == key:
            found = text[start:end]
        idx = _WHITESPACE.match(text, end).end()
        if text[idx:idx + 1] == "}":
            return found
        if text[idx:idx + 1] != ",":
            raise ValueError(f"expected ',' at {idx}")
        idx = _WHITESPACE.match(text, idx + 1).end()


class GraphQLTransport:
    """Send GraphQL requests to ``url``.

    ``timeout`` is in seconds; None waits indefinitely. ``transport`` is passed
    through to httpx (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        url: str,
        timeout: float | None = None,
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.headers = {**_HEADERS, **(headers or {})}
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=self.headers,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def execute(
        self,
        query: str,
        variables: Mapping[str, Any],
        operation_name: str | None = None,
    ) -> bytes:
        body: dict[str, Any] = {"query": query, "variables": dict(variables)}
        if operation_name:
            body["operationName"] = operation_name

        logger.debug("posting request", extra={"url": self.url, "operation": operation_name or ""})
        try:
            async with self._client() as client:
                resp = await client.post(self.url, json=body)
        except httpx.HTTPError as exc:
            raise TransportError(f"{self.url}: {exc}") from exc

        if not resp.is_success:
            raise TransportError(
                f"{self.url}: status {resp.status_code}: {resp.text[:_MAX_ERROR_BODY]}",
                status_code=resp.status_code,
            )

        try:
            result = resp.json()
        except ValueError as exc:
            raise TransportError(f"{self.url}: invalid JSON response: {exc}") from exc
        if not isinstance(result, dict):
            raise TransportError(f"{self.url}: unexpected response: {resp.text[:_MAX_ERROR_BODY]}")

        if result.get("errors"):
            raise GraphQLResponseError(_error_messages(result["errors"]))

        try:
            data = _raw_member(resp.text, "data")
        except ValueError as exc:
            raise TransportError(f"{self.url}: invalid JSON response: {exc}") from exc
        return (data if data is not None else "null").encode("utf-8")
