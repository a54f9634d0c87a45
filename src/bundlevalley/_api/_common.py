"""Shared helpers for the command modules.

This module centralizes the repeated patterns:
- invoking a command through the transport
- mapping envelope error codes onto exceptions
- validating payloads into models

It is internal to bundlevalley and may change at any time.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from bundlevalley._constants import INVALID_STATUS_CODES, ITEM_NOT_FOUND_CODES, SUCCESS_CODE
from bundlevalley._transport import Transport
from bundlevalley.exceptions import (
    BundleValleyApiError,
    BundleValleyInvalidStatusError,
    BundleValleyItemNotFoundError,
)

TModel = TypeVar("TModel", bound=BaseModel)


def _raise_for_code(*, command: str, code: str, message: str) -> None:
    if code in ITEM_NOT_FOUND_CODES:
        raise BundleValleyItemNotFoundError(
            f"{command} failed: {message or 'item not found'}",
            code=code,
            command=command,
        )
    if code in INVALID_STATUS_CODES:
        raise BundleValleyInvalidStatusError(
            f"{command} failed: {message or 'invalid status'}",
            code=code,
            command=command,
        )
    raise BundleValleyApiError(
        f"{command} failed: code={code} message={message}",
        code=code,
        command=command,
    )


async def invoke_command(
    transport: Transport,
    command: str,
    args: Mapping[str, Any] | None = None,
) -> Any:
    """Invoke *command* and return the envelope's ``data`` payload.

    Returns `Any` since commands may answer with objects, lists or nothing.
    """
    response = await transport.invoke(command, args)
    code = str(response.get("code", ""))
    if code != SUCCESS_CODE:
        _raise_for_code(command=command, code=code, message=str(response.get("message", "")))
    return response.get("data")


def validate_model(model: type[TModel], payload: Any, *, command: str) -> TModel:
    """Validate *payload* into *model*, reporting failures as API errors."""
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise BundleValleyApiError(
            f"{command} returned an invalid {model.__name__}: {exc.error_count()} error(s)",
            code="invalid_payload",
            command=command,
        ) from exc
