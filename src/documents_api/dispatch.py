"""
Route a request envelope to the upload, list or download flow.

`dispatch` is the failure boundary: each flow maps its own expected
failures to a response, and anything that still escapes becomes a 500
carrying the error message.
"""
import logging
import time
from enum import Enum
from typing import Optional

from fastapi import status

from documents_api.content_types import resolve_content_type, supported_types_message
from documents_api.errors import (
    DocumentNotFound,
    InvalidAction,
    MalformedRequest,
    MissingDocumentKey,
    UnsupportedFileType,
)
from documents_api.multipart import decode_form
from documents_api.responses import (
    download_response,
    error_response,
    internal_error_response,
    json_response,
    preflight_response,
)
from documents_api.schemas import (
    DocumentRequest,
    DocumentResponse,
    DocumentSummary,
    ListDocumentsResponse,
    UploadFileResponse,
)
from documents_api.store import DocumentStore

logger = logging.getLogger(__name__)

PREFLIGHT_METHOD = "OPTIONS"


class Action(str, Enum):
    """Values accepted in the `action` query parameter."""

    UPLOAD_FILE = "uploadFile"
    LIST_DOCUMENTS = "listDocuments"
    DOWNLOAD_FILE = "downloadFile"

    @classmethod
    def from_query(cls, value: Optional[str]) -> Optional["Action"]:
        """The matching action, or None for an absent or unknown value."""
        try:
            return cls(value)
        except ValueError:
            return None


def display_name(key: str) -> str:
    """Last path segment of an object key."""
    return key.split("/")[-1]


def new_document_key(prefix: str, filename: str) -> str:
    """`<prefix><epoch millis>-<filename>`; the timestamp keeps keys unique and roughly ordered."""
    return f"{prefix}{time.time_ns() // 1_000_000}-{filename}"


def dispatch(request: DocumentRequest, store: DocumentStore, prefix: str = "documents/") -> DocumentResponse:
    """
    Handle one request envelope.

    :param request: The inbound request.
    :param store: Gateway to the bucket holding the documents.
    :param prefix: Key prefix under which documents are stored and listed.
    """
    content_type = request.header("content-type")
    logger.info(
        f"Received request: method={request.method} query={request.query_params} "
        f"content-type={content_type} isBase64Encoded={request.is_base64_encoded} "
        f"bodyLength={len(request.body)}"
    )

    try:
        if request.method.upper() == PREFLIGHT_METHOD:
            logger.info("Handling OPTIONS preflight request")
            return preflight_response()

        action = Action.from_query(request.query_params.get("action"))
        if action is Action.UPLOAD_FILE:
            return upload_file(request, store, prefix)
        if action is Action.LIST_DOCUMENTS:
            return list_documents(store, prefix)
        if action is Action.DOWNLOAD_FILE:
            return download_file(request, store)
        return error_response(InvalidAction.status_code, "Invalid action specified")
    except Exception as err:  # pylint: disable=broad-except
        logger.exception(f"Error: {err}")
        return internal_error_response(err)


def upload_file(request: DocumentRequest, store: DocumentStore, prefix: str) -> DocumentResponse:
    """Decode the multipart body, resolve its content type and store it with its metadata."""
    logger.info("Processing file upload request")
    try:
        extracted, fields = decode_form(request.header("content-type"), request.raw_body())
        logger.info(
            f"Form fields - documentValueCode: {fields.document_value_code}, "
            f"documentValueTypeCode: {fields.document_value_type_code}"
        )

        content_type = resolve_content_type(extracted.filename, extracted.declared_content_type)
        key = new_document_key(prefix, extracted.filename)
        logger.info(
            f"Uploading file: {extracted.filename}, Content-Type: {content_type}, "
            f"Size: {len(extracted.payload)} bytes"
        )
        store.put(key, extracted.payload, content_type, fields.to_metadata())
    except UnsupportedFileType as err:
        return error_response(err.status_code, "Invalid file type", message=supported_types_message())
    except MalformedRequest as err:
        return error_response(err.status_code, "Malformed request", str(err))
    except Exception as err:  # pylint: disable=broad-except
        logger.error(f"Error uploading file to S3: {err}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to upload file", str(err))

    logger.info(f"File uploaded successfully to {key} with metadata")
    return json_response(
        status.HTTP_200_OK,
        UploadFileResponse(
            key=key,
            file_name=extracted.filename,
            document_value_code=fields.document_value_code,
            document_value_type_code=fields.document_value_type_code,
        ),
    )


def list_documents(store: DocumentStore, prefix: str) -> DocumentResponse:
    """List every document under the prefix; store failures escape to `dispatch`."""
    documents = [
        DocumentSummary(
            key=item.key,
            file_name=display_name(item.key),
            size=item.size,
            last_modified=item.last_modified,
        )
        for item in store.list(prefix)
    ]
    return json_response(status.HTTP_200_OK, ListDocumentsResponse(documents=documents))


def download_file(request: DocumentRequest, store: DocumentStore) -> DocumentResponse:
    """Fetch the document named by the `key` query parameter."""
    key = request.query_params.get("key")
    if not key:
        return error_response(MissingDocumentKey.status_code, "Document key is required")

    try:
        document = store.get(key)
    except DocumentNotFound as err:
        logger.info(f"Document not found: {key}")
        return error_response(err.status_code, "Document not found")
    except Exception as err:  # pylint: disable=broad-except
        logger.error(f"Error downloading file: {err}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to download file", str(err))

    file_name = display_name(key)
    logger.info(
        f"Downloaded file: {file_name}, Size: {len(document.payload)} bytes, Type: {document.content_type}"
    )
    logger.debug(f"Document metadata: {document.metadata}")
    return download_response(document, file_name)
