"""Error taxonomy shared by the aggregation pipeline and the HTTP layer."""

from __future__ import annotations


class HikewiseError(Exception):
    """Base class for all errors raised by the backend."""


class InputError(HikewiseError, ValueError):
    """Caller supplied a missing or malformed value."""


class UpstreamError(HikewiseError, RuntimeError):
    """An upstream provider failed or returned an unusable response."""

    def __init__(self, message: str, *, provider: str, endpoint: str | None = None):
        super().__init__(message)
        self.provider = provider
        self.endpoint = endpoint

    def __str__(self) -> str:
        return f"{self.args[0]} (provider={self.provider})"


__all__ = ["HikewiseError", "InputError", "UpstreamError"]
