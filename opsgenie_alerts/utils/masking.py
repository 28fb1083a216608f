"""Helpers for masking credentials before request data reaches the logs."""
from __future__ import annotations

from typing import Any, Mapping

MASKED_PLACEHOLDER = "***masked***"

# Keys whose values are credentials and must never be logged.
SECRET_KEYS = {
    "apikey",
    "api_key",
    "authorization",
    "token",
}


def mask_api_key(value: Any) -> str:
    """Keep only the last four characters of an API key."""

    text = "" if value is None else str(value)
    if len(text) <= 4:
        return MASKED_PLACEHOLDER
    return "*" * (len(text) - 4) + text[-4:]


def mask_request_data(data: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    """Return a copy of query params or a JSON body with credentials masked."""

    if data is None:
        return None
    if not isinstance(data, Mapping):
        return data

    masked: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, Mapping):
            # Alert details may carry their own tokens.
            masked[key] = mask_request_data(value)
        elif key.lower() in SECRET_KEYS and value is not None:
            masked[key] = mask_api_key(value)
        else:
            masked[key] = value
    return masked


__all__ = ["MASKED_PLACEHOLDER", "mask_api_key", "mask_request_data"]
