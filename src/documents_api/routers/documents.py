from fastapi import APIRouter, Request, Response

from documents_api.dispatch import dispatch
from documents_api.responses import render_response
from documents_api.schemas import DocumentRequest
from documents_api.settings import Settings
from documents_api.store import DocumentStore

router = APIRouter()

DOCUMENT_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]


@router.api_route("/{path:path}", methods=DOCUMENT_METHODS, include_in_schema=False)
@router.api_route("/documents", methods=DOCUMENT_METHODS)
async def handle_documents(request: Request) -> Response:
    """
    Upload, list or download documents, selected by the `action` query parameter.

    - `action=uploadFile`: multipart body with one file part and optional
      `documentValueCode` / `documentValueTypeCode` fields.
    - `action=listDocuments`: every document under the documents prefix.
    - `action=downloadFile&key=<objectKey>`: the stored document.
    """
    settings: Settings = request.app.state.settings
    store: DocumentStore = request.app.state.document_store

    document_request = DocumentRequest(
        method=request.method,
        query_params=dict(request.query_params),
        headers=dict(request.headers),
        body=await request.body(),
    )
    return render_response(dispatch(document_request, store, prefix=settings.documents_prefix))
