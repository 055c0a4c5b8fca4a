# =============================================================================
# core/everything.py  —  Everything HTTP Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Sends one SearchRequest to Everything's built-in HTTP server and returns
#   the parsed SearchResponse.  Everything (voidtools) answers
#
#       GET http://127.0.0.1:8011/?search=...&json=1&...
#
#   with a body like
#
#       {"totalResults": 2,
#        "results": [{"type": "file", "name": "a.txt", "path": "C:\\docs",
#                     "size": "1024", "date_modified": "132514560000000000"}]}
#
# HOW IT WORKS (the flow):
#   1. Sleep the configured rate-limit delay (a throttle, not a retry)
#   2. GET the base URL with the parameters from core/query.py
#   3. Validate the JSON shape (parse_search_response)
#   4. Classify anything that went wrong into a core.errors type
#
# TESTING:
#   EverythingClient accepts an httpx transport.  Tests pass an
#   httpx.MockTransport so no Everything instance is needed.
# =============================================================================

import asyncio
import logging
from typing import Any

import httpx

from core.config import EverythingSettings
from core.errors import (
    ExternalServiceError,
    ProtocolError,
    RequestTimeoutError,
    UnavailableError,
)
from core.models import RawSearchResult, SearchRequest, SearchResponse
from core.query import build_query_params

logger = logging.getLogger(__name__)

# How much of an unexpected body ends up in the log
_SNIPPET_LENGTH = 500


def _optional_text(entry: dict[str, Any], key: str) -> str | None:
    value = entry.get(key)
    if value is None:
        return None
    return str(value)


def parse_search_response(body: Any) -> SearchResponse:
    """Validate Everything's JSON body and build a SearchResponse.

    Rules:
      - body must be an object with a numeric totalResults (null counts as 0)
      - a missing or null results list becomes an empty list; the reported
        total is kept as-is
      - results must otherwise be a list of objects

    Raises:
        ProtocolError: If the body violates any of the rules above.
    """
    if not isinstance(body, dict) or "totalResults" not in body:
        raise ProtocolError()

    total = body["totalResults"]
    if total is None:
        total = 0
    elif isinstance(total, bool) or not isinstance(total, (int, float)):
        raise ProtocolError()

    raw_results = body.get("results")
    if raw_results is None:
        raw_results = []
    if not isinstance(raw_results, list):
        raise ProtocolError()

    results = []
    for entry in raw_results:
        if not isinstance(entry, dict):
            raise ProtocolError()
        results.append(RawSearchResult(
            name=str(entry.get("name", "")),
            path=str(entry.get("path", "")),
            size=_optional_text(entry, "size"),
            date_modified=_optional_text(entry, "date_modified"),
            type=_optional_text(entry, "type"),
        ))

    return SearchResponse(total_results=int(total), results=results)


class EverythingClient:
    """Async client for Everything's HTTP search API."""

    def __init__(
        self,
        settings: EverythingSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self._transport = transport

    async def search(self, request: SearchRequest) -> SearchResponse:
        params = build_query_params(request)

        if self.settings.rate_limit_ms > 0:
            await asyncio.sleep(self.settings.rate_limit_seconds)

        url = f"{self.settings.base_url}/"
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
        except httpx.ConnectError as e:
            logger.error("Could not connect to %s (params=%s): %s", url, params, e)
            raise UnavailableError() from e
        except httpx.TimeoutException as e:
            logger.error("Request to %s timed out after %ss (params=%s)", url, self.settings.timeout, params)
            raise RequestTimeoutError() from e
        except httpx.HTTPStatusError as e:
            logger.error(
                "Everything returned HTTP %s for %s (params=%s): %s",
                e.response.status_code, url, params, e.response.text[:_SNIPPET_LENGTH],
            )
            # str(e) embeds the full URL, query included; that stays in the log
            raise ExternalServiceError(
                f"Everything Search API error: HTTP {e.response.status_code} {e.response.reason_phrase}"
            ) from e
        except httpx.HTTPError as e:
            logger.error("HTTP error talking to %s (params=%s): %r", url, params, e)
            raise ExternalServiceError(f"Everything Search API error: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            logger.error("Non-JSON body from %s: %s", url, response.text[:_SNIPPET_LENGTH])
            raise ProtocolError() from e

        try:
            return parse_search_response(body)
        except ProtocolError:
            logger.error("Unexpected response shape from %s: %s", url, response.text[:_SNIPPET_LENGTH])
            raise
