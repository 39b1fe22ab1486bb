"""Custom exception hierarchy for the playlist catalog."""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    # Folder errors
    FOLDER_NOT_FOUND = "FOLDER_NOT_FOUND"
    FOLDER_NOT_EMPTY = "FOLDER_NOT_EMPTY"
    FOLDER_CYCLE = "FOLDER_CYCLE"

    # Playlist errors
    PLAYLIST_NOT_FOUND = "PLAYLIST_NOT_FOUND"
    PLAYLIST_ALREADY_EXISTS = "PLAYLIST_ALREADY_EXISTS"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Auth
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"

    # Recommendation backend
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"


class CatalogException(Exception):
    """
    Base exception for all catalog errors.

    Provides structured error responses with:
    - Human-readable message
    - Machine-readable error code
    - HTTP status code
    - Optional additional details
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        return {
            "error": self.error_code.value,
            "message": self.message,
            "details": self.details
        }


class FolderNotFoundError(CatalogException):
    """Folder not found in database."""

    def __init__(self, folder_id: int):
        super().__init__(
            f"Folder not found: {folder_id}",
            ErrorCode.FOLDER_NOT_FOUND,
            status_code=404,
            details={"folder_id": folder_id}
        )


class FolderNotEmptyError(CatalogException):
    """Folder still has child folders and cannot be deleted."""

    def __init__(self, folder_id: int, child_ids: list[int]):
        super().__init__(
            f"Folder {folder_id} has {len(child_ids)} child folder(s); "
            "move or delete them first",
            ErrorCode.FOLDER_NOT_EMPTY,
            status_code=409,
            details={"folder_id": folder_id, "child_ids": child_ids}
        )


class FolderCycleError(CatalogException):
    """The stored parent chain loops back on itself."""

    def __init__(self, folder_id: int, chain: list[int]):
        super().__init__(
            f"Folder hierarchy contains a cycle starting at {folder_id}",
            ErrorCode.FOLDER_CYCLE,
            status_code=500,
            details={"folder_id": folder_id, "chain": chain}
        )


class PlaylistNotFoundError(CatalogException):
    """Playlist not found in database."""

    def __init__(self, playlist_id: int):
        super().__init__(
            f"Playlist not found: {playlist_id}",
            ErrorCode.PLAYLIST_NOT_FOUND,
            status_code=404,
            details={"playlist_id": playlist_id}
        )


class DuplicatePlaylistError(CatalogException):
    """A playlist with the same Spotify URL is already in the catalog."""

    def __init__(self, spotify_url: str, existing_id: int):
        super().__init__(
            "This playlist already exists in your collection",
            ErrorCode.PLAYLIST_ALREADY_EXISTS,
            status_code=409,
            details={"spotify_url": spotify_url, "existing_id": existing_id}
        )


class ValidationError(CatalogException):
    """Validation failed for user input."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message,
            ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=details
        )


class AuthenticationError(CatalogException):
    """Request lacks valid authentication credentials."""

    def __init__(self, message: str = "Invalid or missing authentication token"):
        super().__init__(
            message,
            ErrorCode.UNAUTHORIZED,
            status_code=401,
        )


class ForbiddenError(CatalogException):
    """Authenticated user lacks permission for the requested action."""

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(
            message,
            ErrorCode.FORBIDDEN,
            status_code=403,
        )


class UpstreamUnavailableError(CatalogException):
    """External recommendation backend failed or returned nothing usable."""

    def __init__(self, message: str, backend: str = ""):
        super().__init__(
            message,
            ErrorCode.UPSTREAM_UNAVAILABLE,
            status_code=503,
            details={"backend": backend} if backend else {}
        )
