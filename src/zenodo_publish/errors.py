"""Exceptions raised by the Zenodo client and its collaborators."""

from typing import Optional


class ZenodoError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(ZenodoError):
    """The client or one of its collaborators is misconfigured."""


class TokenMissing(ConfigError):
    """No access token is configured for the selected environment."""

    def __init__(self, message: str = "No token defined for this operation; please contact your administrator"):
        super().__init__(message)


class TransportError(ZenodoError):
    """The request could not be completed or its answer was not JSON."""


class ApiError(ZenodoError):
    """Zenodo refused an operation, or it could not be attempted."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
        self.message = message


class NoSuchFile(ApiError):
    def __init__(self, file_id: str):
        super().__init__(f"No file found for identifier {file_id!r}")
        self.file_id = file_id


class UploadRejected(ApiError):
    """An upload request was refused; the rest of the batch was not sent."""
