"""Custom exception hierarchy for bundlevalley."""

from __future__ import annotations


class BundleValleyError(Exception):
    """Base exception for all bundlevalley errors."""


class BundleValleyConfigError(BundleValleyError):
    """Invalid or missing configuration."""


class BundleValleyTransportError(BundleValleyError):
    """HTTP-level failure (network, timeout, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        command: str = "",
    ) -> None:
        self.status_code = status_code
        self.command = command
        super().__init__(message)


class BundleValleyApiError(BundleValleyError):
    """The service answered with a non-zero code or an unusable payload."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "",
        command: str = "",
    ) -> None:
        self.code = code
        self.command = command
        super().__init__(message)


class BundleValleyItemNotFoundError(BundleValleyApiError):
    """The item id is unknown to the service."""


class BundleValleyInvalidStatusError(BundleValleyApiError):
    """The service rejected the status value.

    Only reachable when talking to a service whose status set differs
    from :class:`bundlevalley.models.ItemStatus`.
    """
