"""Exception hierarchy for the image storage gateway."""

from __future__ import annotations


class StorageError(Exception):
    """Base exception for all storage gateway errors."""

    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(StorageError):
    """Raised when the bucket name is missing or a placeholder."""
    pass


class BackendUnavailable(StorageError):
    """Raised on connectivity or auth failures talking to the object store."""
    pass


class PolicyAttachmentFailure(StorageError):
    """Raised when the anonymous-read policy cannot be applied to a bucket."""
    pass


class AssetValidationError(StorageError):
    """Raised when an uploaded asset is not acceptable (type, emptiness, size)."""
    pass


class TooLarge(AssetValidationError):
    """Raised when an uploaded asset exceeds the size ceiling."""
    pass


class WriteFailure(StorageError):
    """Raised when the object write fails after the bucket was provisioned."""
    pass
