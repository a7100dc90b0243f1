"""Shared pieces of the remote connectors."""

from typing import Optional
import requests


class ConnectorError(Exception):
    """Raised when a remote service call fails. Failures are never retried."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def error_message(response: requests.Response) -> str:
    """Best-effort human readable message from an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip() or response.reason or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("message", "msg", "error_description", "error", "hint"):
            if body.get(key):
                return str(body[key])
    return str(body)
