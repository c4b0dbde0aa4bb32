"""Exception taxonomy for transfer verification."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ConfigurationError(RuntimeError):
    """Raised when required configuration or credentials are missing."""


class CredentialsNotFoundError(ConfigurationError):
    """Raised when a credentials file lacks the requested section or keys."""

    def __init__(self, section: str, cred_path: Optional[Path] = None, detail: str = "") -> None:
        message = f"No credentials found for '{section}'"
        if cred_path is not None:
            message = f"{message} in {cred_path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class PairVerificationError(RuntimeError):
    """Base class for failures that abort a single source/target pair."""


class ResolutionError(PairVerificationError):
    """Raised when a project, folder or bucket cannot be resolved."""


class ProjectNotFoundError(ResolutionError):
    """Raised when the source project does not exist in the division."""

    def __init__(self, project: str) -> None:
        super().__init__(f"Failed to open SB project {project}")


class FolderNotFoundError(ResolutionError):
    """Raised when a requested sub-folder is missing from the source project."""

    def __init__(self, folder: str) -> None:
        super().__init__(f"Unable to find SB folder {folder}")


class BucketNotFoundError(ResolutionError):
    """Raised when the target bucket is missing or not accessible."""

    def __init__(self, bucket: str, reason: Optional[str] = None) -> None:
        message = f"Failed to open bucket {bucket}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class CollectionError(PairVerificationError):
    """Raised when a listing cannot be collected completely."""


class ListingStreamError(CollectionError):
    """Raised when a paginated bucket listing fails before exhaustion."""

    def __init__(self, label: str, reason: str) -> None:
        super().__init__(f"Failed to drain listing for {label}: {reason}")


class EmptyListingError(CollectionError):
    """Raised when a listing yields no files at all."""

    def __init__(self, label: str) -> None:
        super().__init__(f"Listing for {label} returned no files")
        self.label = label


class EnrichmentError(CollectionError):
    """Raised when bulk size lookup on source files fails."""

    def __init__(self, file_count: int) -> None:
        super().__init__(f"Failed to collect bulk details on {file_count:,} SB file objects")


class SbgApiError(CollectionError):
    """Raised when the Seven Bridges API returns an unexpected response."""

    def __init__(self, method: str, url: str, status: Optional[int], reason: str) -> None:
        status_str = status if status is not None else "no response"
        super().__init__(f"{method} {url} failed ({status_str}): {reason}")
        self.status = status


class MalformedResponseError(CollectionError):
    """Raised when a Seven Bridges response lacks the fields the client reads."""

    def __init__(self, method: str, url: str, detail: str) -> None:
        super().__init__(f"{method} {url} returned a malformed response: {detail}")


__all__ = [
    "BucketNotFoundError",
    "CollectionError",
    "ConfigurationError",
    "CredentialsNotFoundError",
    "EmptyListingError",
    "EnrichmentError",
    "FolderNotFoundError",
    "ListingStreamError",
    "MalformedResponseError",
    "PairVerificationError",
    "ProjectNotFoundError",
    "ResolutionError",
    "SbgApiError",
]
