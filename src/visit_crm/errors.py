"""Exceptions raised by the storage and sync layers."""

from __future__ import annotations


class StorageError(Exception):
    """Base class for failures the caller must report to the user."""


class LocalStorageError(StorageError):
    """Reading from or writing to the local store failed."""

    def __init__(self, operation: str, cause: BaseException | None = None) -> None:
        self.operation = operation
        self.cause = cause
        message = f"Local store operation '{operation}' failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class RemoteSyncWarning(Warning):
    """Mirroring to the remote store failed. Logged, never raised to callers."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"Supabase {operation} failed: {cause}")


class RegionNotFoundError(LookupError):
    """The region being edited does not exist in the local store."""

    def __init__(self, region_id: str) -> None:
        self.region_id = region_id
        super().__init__(f"Region not found: {region_id}")
