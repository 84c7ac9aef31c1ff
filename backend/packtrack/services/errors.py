"""
Error types shared by the services and the API layer.
"""
from typing import List, Optional


class PackTrackError(Exception):
    """Base class for PackTrack errors."""


class RemoteError(PackTrackError):
    """A backend CRUD call failed."""

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        message = f"{operation} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class ValidationError(PackTrackError):
    """Required parcel fields are missing or carry a value that cannot be stored."""

    def __init__(self, missing_fields: List[str], message: Optional[str] = None):
        self.missing_fields = missing_fields
        super().__init__(message or f"Missing required fields: {', '.join(missing_fields)}")


class SyncAlreadyRunning(PackTrackError):
    def __init__(self, owner_id: str):
        self.owner_id = owner_id
        super().__init__(f"A sync is already running for owner {owner_id}")


class AuthError(PackTrackError):
    """The auth collaborator rejected a request. The message is shown to the user."""

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
