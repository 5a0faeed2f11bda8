from __future__ import annotations

from typing import Iterable


class ConfigMissing(RuntimeError):
    """Raised at startup when required configuration values are absent."""

    def __init__(self, names: Iterable[str], message: str | None = None):
        self.names = list(names)
        super().__init__(message or "Missing AWS or S3 configuration in environment variables: " + ", ".join(self.names))


class RemoteSourceError(RuntimeError):
    """Base class for failures fetching the CSV object."""

    def __init__(self, message: str, *, code: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.code = code
        self.status_code = status_code


class RemoteNotFound(RemoteSourceError):
    pass


class RemoteAccessDenied(RemoteSourceError):
    pass


class RemoteTransient(RemoteSourceError):
    pass


class DecodeError(ValueError):
    """Raised when the CSV stream cannot be read or parsed."""
