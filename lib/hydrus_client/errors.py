from __future__ import annotations


class HydrusClientError(Exception):
    """Base client error."""


class ArgumentError(HydrusClientError, ValueError):
    def __init__(self, message: str, argument: str | None = None):
        super().__init__(message)
        self.argument = argument


class MissingArgumentError(ArgumentError):
    """A required argument was not supplied."""


class InvalidArgumentError(ArgumentError):
    """An argument has the wrong shape or type."""


class VersionMismatchError(HydrusClientError):
    def __init__(self, message: str, *, client_version: int, server_version: int | None):
        super().__init__(message)
        self.client_version = client_version
        self.server_version = server_version

    @property
    def server_is_newer(self) -> bool:
        return self.server_version is not None and self.server_version > self.client_version


class NetworkError(HydrusClientError, ConnectionError):
    """Transport/network layer error."""


class TransportError(HydrusClientError):
    def __init__(self, status_code: int, reason: str, details: str | None = None):
        super().__init__(reason)
        self.status_code = status_code
        self.reason = reason
        self.details = details


class AuthError(TransportError):
    """Access key missing, invalid or lacking permission."""
