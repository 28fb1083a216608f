"""Exception types raised by the alert client."""
from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError


class OpsgenieError(Exception):
    """Base class for every error raised by this package."""


class AlertValidationError(OpsgenieError, ValueError):
    """Raised when a call is rejected before any request is sent."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        self.errors = errors or [{"type": "value_error", "loc": (), "msg": message}]
        super().__init__(message)

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> "AlertValidationError":
        """Flatten a pydantic ``ValidationError`` into a single readable message."""

        errors = exc.errors(include_url=False)
        parts = []
        for error in errors:
            location = ".".join(str(item) for item in error.get("loc", ()))
            message = error.get("msg", "invalid value")
            parts.append(f"{location}: {message}" if location else message)
        return cls("; ".join(parts) or "Invalid alert request", errors=errors)


class AlertAPIError(OpsgenieError):
    """Raised when the remote API answers with an error status or unreadable body."""

    def __init__(
        self,
        status_code: int,
        message: str | None = None,
        *,
        payload: Any = None,
        method: str | None = None,
        url: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.payload = payload
        self.method = method
        self.url = url
        self.message = message or "Opsgenie request failed"
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"

    @classmethod
    def from_response(cls, response: httpx.Response, message: str | None = None) -> "AlertAPIError":
        payload = error_payload(response)
        return cls(
            response.status_code,
            message or extract_message(payload),
            payload=payload,
            method=response.request.method,
            url=str(response.request.url).split("?", 1)[0],
        )


def error_payload(response: httpx.Response) -> Any:
    """Return the parsed JSON body of ``response``, or its raw text."""

    try:
        return response.json()
    except ValueError:
        return response.text


def extract_message(payload: Any) -> str:
    """Pick the remote error text out of an error payload, verbatim."""

    if isinstance(payload, dict):
        for key in ("error", "message", "detail"):
            value = payload.get(key)
            if value:
                return str(value)
        return ""
    return str(payload or "")


__all__ = [
    "OpsgenieError",
    "AlertValidationError",
    "AlertAPIError",
    "error_payload",
    "extract_message",
]
