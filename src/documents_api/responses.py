"""Build the uniform response envelope and render it for Starlette."""
import base64
import json
from typing import Any, Dict, Optional
from urllib.parse import quote

from fastapi import Response, status
from pydantic import BaseModel

from documents_api.schemas import (
    MISSING_METADATA_VALUE,
    DocumentResponse,
    StoredObject,
    TextDocumentEnvelope,
)

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Requested-With,Accept",
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Max-Age": "86400",
}

JSON_CONTENT_TYPE = "application/json"
TEXT_PLAIN = "text/plain"


def cors_headers() -> Dict[str, str]:
    return dict(CORS_HEADERS)


def json_response(status_code: int, payload: Any) -> DocumentResponse:
    """JSON body with the CORS headers; `payload` is a dict or a camelCase model."""
    if isinstance(payload, BaseModel):
        body = payload.model_dump_json(by_alias=True)
    else:
        body = json.dumps(payload)
    return DocumentResponse(
        status_code=status_code,
        headers={**cors_headers(), "Content-Type": JSON_CONTENT_TYPE},
        body=body,
    )


def error_response(status_code: int, error: str, details: Optional[str] = None, **extra: str) -> DocumentResponse:
    payload: Dict[str, str] = {"error": error}
    if details is not None:
        payload["details"] = details
    payload.update(extra)
    return json_response(status_code, payload)


def internal_error_response(err: Exception) -> DocumentResponse:
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", str(err))


def preflight_response() -> DocumentResponse:
    return json_response(status.HTTP_200_OK, {"message": "Preflight request successful"})


def content_disposition(file_name: str) -> str:
    """
    Attachment header for `file_name`.

    Names that are not plain ASCII get an ASCII `filename` fallback plus an
    RFC 5987 `filename*`, since header values go out latin-1 encoded.
    """
    if file_name.isascii() and not any(c in file_name for c in '"\\'):
        return f'attachment; filename="{file_name}"'

    fallback = file_name.encode("ascii", "replace").decode("ascii")
    fallback = fallback.replace("\\", "\\\\").replace('"', '\\"')
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(file_name)}"


def download_response(document: StoredObject, file_name: str) -> DocumentResponse:
    """
    Response for a fetched document.

    Plain-text documents come back as a JSON envelope carrying the base64
    content and metadata; everything else is a base64 attachment with the
    metadata surfaced as `X-Document-Value-*` headers.
    """
    encoded = base64.b64encode(document.payload).decode("ascii")

    if document.content_type == TEXT_PLAIN:
        envelope = TextDocumentEnvelope(
            file_name=file_name,
            content_type=document.content_type,
            file_content=encoded,
            metadata=document.metadata,
        )
        return json_response(status.HTTP_200_OK, envelope)

    headers = {
        **cors_headers(),
        "Content-Type": document.content_type,
        "Content-Disposition": content_disposition(file_name),
        "Content-Length": str(len(document.payload)),
        "X-Document-Value-Code": document.metadata.get("documentvaluecode") or MISSING_METADATA_VALUE,
        "X-Document-Value-Type-Code": document.metadata.get("documentvaluetypecode") or MISSING_METADATA_VALUE,
    }
    return DocumentResponse(
        status_code=status.HTTP_200_OK,
        headers=headers,
        body=encoded,
        is_base64_encoded=True,
    )


def render_response(response: DocumentResponse) -> Response:
    """Turn the envelope into a Starlette response; base64 bodies go out as raw bytes."""
    if response.is_base64_encoded:
        content = base64.b64decode(response.body)
    else:
        content = response.body.encode("utf-8")
    return Response(content=content, status_code=response.status_code, headers=response.headers)
