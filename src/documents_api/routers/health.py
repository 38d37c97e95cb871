from fastapi import APIRouter, Request

from documents_api.settings import Settings

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """
    Health check endpoint for monitoring API status.

    Returns the configured bucket and region; the bucket itself is not contacted.
    """
    settings: Settings = request.app.state.settings
    return {
        "status": "healthy",
        "bucket": settings.s3_bucket_name,
        "region": settings.aws_region,
    }
