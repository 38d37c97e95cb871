"""Failure taxonomy for the documents API and the broad exception middleware."""
import logging

from fastapi import Request, Response, status

from documents_api.responses import internal_error_response, render_response

logger = logging.getLogger(__name__)


class DocumentsApiError(Exception):
    """Base class for every failure the documents API maps to a response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR


class MalformedRequest(DocumentsApiError):
    """Content-type header missing or not a multipart form encoding."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnsupportedFileType(DocumentsApiError):
    """The uploaded file's extension is not in the allow-list."""

    status_code = status.HTTP_400_BAD_REQUEST


class MissingFilePart(DocumentsApiError):
    """The multipart body decoded cleanly but carried no file payload."""


class ParseError(DocumentsApiError):
    """The multipart grammar was violated (bad boundary, truncated stream, ...)."""


class InvalidAction(DocumentsApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class MissingDocumentKey(DocumentsApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class DocumentNotFound(DocumentsApiError):
    status_code = status.HTTP_404_NOT_FOUND


class StoreWriteError(DocumentsApiError):
    """Raised when putting an object into the store fails."""


class StoreReadError(DocumentsApiError):
    """Raised when listing or fetching from the store fails for any reason but a missing key."""


async def handle_broad_exceptions(request: Request, call_next) -> Response:
    """Handle any exception that goes unhandled by a more specific exception handler."""
    try:
        return await call_next(request)
    except Exception as err:  # pylint: disable=broad-except
        logger.exception(f"Unhandled error while serving {request.method} {request.url.path}")
        return render_response(internal_error_response(err))
