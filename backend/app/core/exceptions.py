"""
Error taxonomy shared by the stores, the retrieval engine and the API layer.

Every error carries the HTTP status it maps to and a message that is safe to
return to the caller. Upstream and persistence failures keep their internal
detail out of ``message``; it is logged where the failure is caught.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)


class PhotoVaultError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PhotoVaultError):
    status_code = 400
    default_message = "Invalid request"


class InvalidUrlError(ValidationError):
    default_message = "Invalid image URL"


class InvalidTagsError(ValidationError):
    default_message = "Tags must be non-empty strings."


class InvalidRequestError(ValidationError):
    default_message = "A single valid tag must be provided."


class InvalidSortOrderError(ValidationError):
    default_message = "Invalid sort order"


class InvalidUserIdError(ValidationError):
    default_message = "Valid userId is required."


class NotFoundError(PhotoVaultError):
    status_code = 404
    default_message = "Not found"


class LimitExceededError(PhotoVaultError):
    status_code = 400
    default_message = "Limit exceeded"


class TagLimitExceededError(LimitExceededError):
    default_message = "A photo can have maximum of 5 tags."


class UpstreamError(PhotoVaultError):
    status_code = 502
    default_message = "Failed to fetch images from image provider"


class PersistenceError(PhotoVaultError):
    status_code = 500
    default_message = "Internal server error"


async def photo_vault_error_handler(request: Request, exc: PhotoVaultError):
    """Translate domain errors into JSON responses."""
    if exc.status_code >= 500:
        logger.error(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}"
        )
    else:
        logger.info(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}"
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
