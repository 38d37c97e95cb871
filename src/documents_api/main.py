import logging
from textwrap import dedent
from typing import Optional

from fastapi import FastAPI
from fastapi.routing import APIRoute

from documents_api.errors import handle_broad_exceptions
from documents_api.routers.documents import router as documents_router
from documents_api.routers.health import router as health_router
from documents_api.s3.client import create_s3_client
from documents_api.settings import Settings
from documents_api.store import DocumentStore

try:
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def create_app(settings: Settings | None = None, s3_client: Optional["S3Client"] = None) -> FastAPI:
    """
    Create a FastAPI application.

    The S3 client and the document store are built once here and shared
    by every request served by the app.
    """
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)

    app = FastAPI(
        title="Documents API",
        summary="Upload, list and download documents stored in S3",
        version="v1",
        description=dedent(
            """\
        Select the operation with the `action` query parameter:

        | Action | Notes |
        | --- | --- |
        | `uploadFile` | multipart/form-data body with one file part |
        | `listDocuments` | every document under the documents prefix |
        | `downloadFile` | requires `key`; `text/plain` documents come back as JSON |
        """
        ),
        docs_url="/docs",
        generate_unique_id_function=custom_generate_unique_id,
    )

    app.state.settings = settings
    s3_client = s3_client or create_s3_client(settings)
    app.state.document_store = DocumentStore(s3_client, settings.s3_bucket_name)
    logger.info(f"Serving documents from bucket {settings.s3_bucket_name} under {settings.documents_prefix}")

    app.include_router(health_router, tags=["health"])
    app.include_router(documents_router, tags=["documents"])

    app.middleware("http")(handle_broad_exceptions)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    app = create_app()
    uvicorn.run(app, host="0.0.0.0", port=8000)
