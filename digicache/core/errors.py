"""Error kinds raised by the stores and the catalog client, with their HTTP status."""
from typing import Optional


class DigiCacheError(Exception):
    """Base class; the API layer serializes these as {"error": message}."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class InvalidInputError(DigiCacheError):
    status_code = 400


class _RejectedUploadError(DigiCacheError):
    def __init__(self, message: str, detected_mime: Optional[str] = None) -> None:
        super().__init__(message)
        self.detected_mime = detected_mime

    def to_dict(self) -> dict:
        return {"error": self.message, "detectedMime": self.detected_mime}


class WrongEndpointError(_RejectedUploadError):
    """Image upload received a text payload."""
    status_code = 400


class UnsupportedMediaError(_RejectedUploadError):
    status_code = 415


class NotFoundError(DigiCacheError):
    status_code = 404


class ConflictError(DigiCacheError):
    status_code = 409


class StorageError(DigiCacheError):
    status_code = 500


class CatalogAuthError(DigiCacheError):
    """Token endpoint refused the client credentials."""
    status_code = 500


class CatalogRequestError(DigiCacheError):
    status_code = 500

    def __init__(self, message: str, remote_status: Optional[int] = None) -> None:
        super().__init__(message)
        self.remote_status = remote_status


class CatalogShapeError(DigiCacheError):
    """A required field is missing from a catalog response."""
    status_code = 500
