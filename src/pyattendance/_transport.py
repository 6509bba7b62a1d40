"""HTTP transport for the GitHub contents API."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import aiohttp

from pyattendance._constants import ACCEPT, API_VERSION
from pyattendance._redact import redact_for_log
from pyattendance.config import StoreConfig
from pyattendance.exceptions import MalformedResponseError, StoreCredentialError, StoreTransportError

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Status and decoded body of one HTTP exchange.

    ``body`` is the parsed JSON value, or ``None`` when the response was
    empty or not JSON; ``text`` always holds the raw body.
    """

    status: int
    body: Any
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`GitHubTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        json_body: Mapping[str, Any] | None = None,
    ) -> HttpResponse:
        ...


class GitHubTransport:
    """HTTP transport that authenticates every request with the configured token."""

    def __init__(
        self,
        config: StoreConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session
        self._timeout = (
            aiohttp.ClientTimeout(total=config.request_timeout) if config.request_timeout is not None else None
        )

    def _build_headers(self) -> dict[str, str]:
        if not self._config.has_credential:
            raise StoreCredentialError("GitHub token is missing")
        return {
            "accept": ACCEPT,
            "authorization": f"Bearer {self._config.token.strip()}",
            "user-agent": self._config.user_agent,
            "x-github-api-version": API_VERSION,
        }

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        json_body: Mapping[str, Any] | None = None,
    ) -> HttpResponse:
        """Send one request and return its status and decoded JSON body.

        Non-success statuses are returned, not raised.  Network-level
        failures raise :class:`StoreTransportError`; a body that is not
        UTF-8 raises :class:`MalformedResponseError`.
        """
        headers = self._build_headers()
        kwargs: dict[str, Any] = {"headers": headers}
        if params:
            kwargs["params"] = dict(params)
        if json_body is not None:
            headers["content-type"] = "application/json; charset=utf-8"
            kwargs["data"] = json.dumps(json_body, separators=(",", ":"))
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        _logger.debug("%s %s body=%s", method, url, redact_for_log(json_body))

        try:
            async with self._http.request(method, url, **kwargs) as resp:
                raw = await resp.read()
                status = resp.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise StoreTransportError(f"{method} {url} failed: {exc!r}") from exc

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedResponseError(f"{method} {url}: body is not UTF-8 text") from exc

        _logger.debug("%s %s -> HTTP %d", method, url, status)

        body: Any = None
        if text:
            try:
                body = json.loads(text)
            except json.JSONDecodeError:
                _logger.debug("Non-JSON body from %s: %s", url, text[:200])
        return HttpResponse(status=status, body=body, text=text)
