# modcore/http/client.py
from __future__ import annotations
import asyncio
import json
import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any

import httpx

logger = logging.getLogger(__name__)

__all__ = ["USER_AGENT", "HTTPError", "HttpResponse", "request"]



USER_AGENT = "modcore/0.1"

# Answers worth asking again for
_TRANSIENT_STATUSES = frozenset({408, 429, 500, 502, 503, 504})



class HTTPError(Exception):
    """A transient failure status that survived every retry."""
    def __init__(self, status: int, body: str):
        super().__init__(f"HTTP {status}: {body[:200]}")
        self.status = status
        self.body = body



@dataclass(frozen=True, slots=True)
class HttpResponse:
    status: int
    text: str
    headers: dict[str, str] = field(default_factory=dict)
    # Parsed body, set when the server said it's JSON and it parsed
    data: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        """The JSON body, parsing `text` when the content type didn't announce JSON."""
        if self.data is not None:
            return self.data
        return json.loads(self.text)



def _parseRetryAfter(value: str | None) -> float | None:
    """Seconds to wait according to a Retry-After header, or None."""
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        seconds = None
    if seconds is not None:
        return seconds if seconds >= 0 else None

    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max(0.0, when.timestamp() - datetime.now(timezone.utc).timestamp())



def _backoffMs(attempt: int, backoffBaseMs: int, backoffMaxMs: int) -> float:
    # Exponential, +-25% jitter
    base = min(backoffMaxMs, backoffBaseMs * (2 ** attempt))
    jitter = base * 0.25
    return max(0.0, base + random.uniform(-jitter, jitter))



def _toResponse(resp: httpx.Response) -> HttpResponse:
    data = None
    if "json" in resp.headers.get("Content-Type", "").lower():
        try:
            data = resp.json()
        except ValueError:
            logger.debug("Body of %s claims to be JSON but doesn't parse", resp.request.url)
    return HttpResponse(
        status=resp.status_code,
        text=resp.text,
        # Duplicate header keys are collapsed
        headers=dict(resp.headers),
        data=data,
    )



async def request(
    method: str,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    timeoutMs: int = 30_000,
    retries: int = 2,
    backoffBaseMs: int = 250,
    backoffMaxMs: int = 1_000,
    followRedirects: bool = True
) -> HttpResponse:
    """
    Outbound HTTP with a timeout and retries.

    Transient statuses (408, 429, 5xx) and transport errors are retried up to
    `retries` times, honouring Retry-After when the server sends one. Any other
    status, 4xx included, is returned for the caller to judge.

    Raises HTTPError when a transient status outlives the retries, and re-raises
    the last httpx.HTTPError when the transport keeps failing.
    """
    timeout = httpx.Timeout(max(1, timeoutMs) / 1_000)
    method = method.upper()
    retries = max(0, retries)
    sendHeaders = {"User-Agent": USER_AGENT, **(headers or {})}
    attempt = 0

    async with httpx.AsyncClient(timeout=timeout, http2=True) as cli:
        while True:
            try:
                resp = await cli.request(method, url, headers=sendHeaders, follow_redirects=followRedirects)
            except httpx.HTTPError as err:
                attempt += 1
                if attempt > retries:
                    logger.warning("%s %s failed after %d attempts: %s", method, url, attempt, err)
                    raise
                delayMs = _backoffMs(attempt - 1, backoffBaseMs, backoffMaxMs)
                logger.debug("Transport error on %s %s: %s (retrying in %.0fms)", method, url, err, delayMs)
                await asyncio.sleep(delayMs / 1000.0)
                continue

            status = resp.status_code
            if status not in _TRANSIENT_STATUSES:
                logger.debug("%s %s -> %d (%d bytes)", method, url, status, len(resp.content))
                return _toResponse(resp)

            if attempt >= retries:
                raise HTTPError(status, resp.text)

            retryAfter = _parseRetryAfter(resp.headers.get("Retry-After"))
            delayMs = retryAfter * 1000.0 if retryAfter is not None else _backoffMs(attempt, backoffBaseMs, backoffMaxMs)
            logger.debug("Retrying %s %s after HTTP %d (attempt %d, delay %.0fms)", method, url, status, attempt + 1, delayMs)
            attempt += 1
            await asyncio.sleep(delayMs / 1000.0)
