"""API error kinds and error-envelope parsing."""

from __future__ import annotations

from typing import Any


class ApiError(Exception):
    """Base class for failed API calls."""

    def __init__(self, messages: list[str] | None = None, status: int | None = None) -> None:
        self.messages = list(messages or [])
        self.status = status
        super().__init__("; ".join(self.messages) or self.__class__.__name__)

    @property
    def message(self) -> str | None:
        return self.messages[0] if self.messages else None


class NetworkUnreachable(ApiError):
    """No response was received."""


class Unauthorized(ApiError):
    """401: the session token was rejected."""


class Forbidden(ApiError):
    """403."""


class NotFound(ApiError):
    """404."""


class ServerFault(ApiError):
    """5xx."""


class ValidationFailed(ApiError):
    """Any other 4xx; the caller owns the feedback."""


def error_messages(payload: Any) -> list[str]:
    """Extract human-readable messages from an error body.

    Accepts ``{"errors": [...]}``, ``{"detail": "..."}`` and the list form of
    ``detail`` where each entry is an object carrying ``msg``.
    """
    if not isinstance(payload, dict):
        return []

    errors = payload.get("errors")
    if isinstance(errors, list) and errors:
        return [str(err) for err in errors]

    detail = payload.get("detail")
    if isinstance(detail, str) and detail:
        return [detail]
    if isinstance(detail, list):
        messages = []
        for entry in detail:
            if isinstance(entry, dict) and entry.get("msg"):
                messages.append(str(entry["msg"]))
            elif isinstance(entry, str):
                messages.append(entry)
        return messages
    return []


def error_for_status(status: int, messages: list[str]) -> ApiError:
    if status == 401:
        return Unauthorized(messages, status)
    if status == 403:
        return Forbidden(messages, status)
    if status == 404:
        return NotFound(messages, status)
    if status >= 500:
        return ServerFault(messages, status)
    return ValidationFailed(messages, status)
