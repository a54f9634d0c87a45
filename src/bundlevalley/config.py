"""Client configuration for bundlevalley."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from bundlevalley._constants import DEFAULT_BASE_URL, DEFAULT_REQUEST_TIMEOUT
from bundlevalley.exceptions import BundleValleyConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise BundleValleyConfigError(f"{name} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class BundleValleyConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Root URL of the bundle tracker service. Commands are posted to
        ``{base_url}/invoke/{command}``.
    request_timeout : float
        Total timeout in seconds for a single command round trip.
    api_token : str or None
        Optional bearer token sent in the ``Authorization`` header.
    trace_enabled : bool
        Log redacted request and response bodies at DEBUG level.
    """

    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    api_token: str | None = None
    trace_enabled: bool = False

    def __post_init__(self) -> None:
        if self.request_timeout <= 0:
            raise BundleValleyConfigError("request_timeout must be positive")
        # Normalise so endpoint joins never produce a double slash.
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, **overrides: Any) -> BundleValleyConfig:
        """Create configuration from environment variables.

        Reads ``BUNDLE_VALLEY_BASE_URL``, ``BUNDLE_VALLEY_REQUEST_TIMEOUT``,
        ``BUNDLE_VALLEY_API_TOKEN`` and ``BUNDLE_VALLEY_TRACE_ENABLED``.
        Explicit keyword arguments override environment values.

        Raises
        ------
        BundleValleyConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("BUNDLE_VALLEY_BASE_URL")
        if base_url:
            config_kwargs["base_url"] = base_url

        token = env.get("BUNDLE_VALLEY_API_TOKEN")
        if token:
            config_kwargs["api_token"] = token

        timeout_env = env.get("BUNDLE_VALLEY_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = _env_float("BUNDLE_VALLEY_REQUEST_TIMEOUT", timeout_env)

        if "trace_enabled" not in overrides:
            config_kwargs["trace_enabled"] = _env_bool(env.get("BUNDLE_VALLEY_TRACE_ENABLED"), False)

        config_kwargs.update(overrides)
        return cls(**config_kwargs)
