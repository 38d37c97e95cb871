"""S3 client construction."""
import logging

import boto3

from documents_api.settings import Settings

try:
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...

logger = logging.getLogger(__name__)


def create_s3_client(settings: Settings) -> "S3Client":
    """
    Create the S3 client shared by every request of this process.

    :param settings: Application settings; region and optional endpoint override are read from it.
    """
    client_kwargs = {"region_name": settings.aws_region}
    if settings.aws_endpoint_url:
        client_kwargs["endpoint_url"] = settings.aws_endpoint_url

    logger.info(f"Creating S3 client for region {settings.aws_region}")
    logger.debug(f"  Endpoint: {settings.aws_endpoint_url}")
    return boto3.client("s3", **client_kwargs)
