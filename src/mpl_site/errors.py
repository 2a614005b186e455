"""Error taxonomy shared by adapters, services and views."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mpl_site.domain.uploads import UploadedImage


class SiteError(Exception):
    """Base class for every error surfaced to the viewer."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(SiteError):
    """Local validation failure; raised before any network call."""


class AuthError(SiteError):
    """Missing or rejected admin token."""


class NetworkError(SiteError):
    """Transport failure or a non-2xx response unrelated to auth."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConflictError(SiteError):
    """The server refused a write because the record already exists."""


class UploadError(NetworkError):
    """The media host rejected or failed the upload."""


class RegistrationError(SiteError):
    """The image reached the media host but no record was saved for it."""

    def __init__(self, message: str, image: UploadedImage, cause: SiteError) -> None:
        super().__init__(message)
        self.image = image
        self.cause = cause


class OperationInProgressError(SiteError):
    """The same write was triggered again while still pending."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} is already in progress")
        self.operation = operation
