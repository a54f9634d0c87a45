"""HTTP transport for the bundle tracker command endpoint."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from bundlevalley._constants import INVOKE_PATH, USER_AGENT
from bundlevalley._redact import redact_for_log
from bundlevalley.config import BundleValleyConfig
from bundlevalley.exceptions import BundleValleyTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the command modules.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def invoke(self, command: str, args: Mapping[str, Any] | None = None) -> dict[str, Any]:
        ...


class HttpTransport:
    """Posts commands as JSON and returns the decoded response envelope."""

    def __init__(
        self,
        config: BundleValleyConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "accept": "application/json",
            "content-type": "application/json; charset=UTF-8",
            "user-agent": USER_AGENT,
        }
        if self._config.api_token:
            headers["authorization"] = f"Bearer {self._config.api_token}"
        return headers

    async def invoke(self, command: str, args: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Send *command* with *args* and return the decoded JSON envelope.

        1. JSON-encode the arguments (``{}`` when there are none)
        2. POST to ``{base_url}/invoke/{command}``
        3. Require HTTP 200 and a JSON object body
        """
        url = f"{self._config.base_url}{INVOKE_PATH}/{command}"
        body = json.dumps(dict(args or {}), separators=(",", ":"))
        headers = self._headers()

        _logger.debug("POST %s", url)
        if self._config.trace_enabled:
            _logger.debug("-> %s headers=%s body=%s", command, redact_for_log(headers), redact_for_log(args or {}))

        try:
            async with self._http.post(url, data=body, headers=headers, timeout=self._timeout) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise BundleValleyTransportError(
                        f"HTTP {resp.status} from {command}: {text[:200]}",
                        status_code=resp.status,
                        command=command,
                    )
        except BundleValleyTransportError:
            raise
        except aiohttp.ClientError as exc:
            raise BundleValleyTransportError(
                f"Request to {command} failed: {exc}",
                command=command,
            ) from exc
        except asyncio.TimeoutError as exc:
            raise BundleValleyTransportError(
                f"Request to {command} timed out after {self._config.request_timeout}s",
                command=command,
            ) from exc

        try:
            body_json = json.loads(text)
        except json.JSONDecodeError as exc:
            raise BundleValleyTransportError(
                f"Invalid JSON from {command}: {text[:200]}",
                command=command,
            ) from exc

        if not isinstance(body_json, dict):
            raise BundleValleyTransportError(
                f"Response from {command} is not a JSON object",
                command=command,
            )

        if self._config.trace_enabled:
            _logger.debug("<- %s %s", command, redact_for_log(body_json))

        return body_json
