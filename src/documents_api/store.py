"""Store gateway: put, list and get documents in the configured S3 bucket."""
import logging
from typing import Dict, List

from botocore.exceptions import BotoCoreError, ClientError

from documents_api.errors import DocumentNotFound, StoreReadError, StoreWriteError
from documents_api.s3.read_objects import fetch_s3_object, fetch_s3_objects_metadata
from documents_api.s3.write_objects import upload_s3_object
from documents_api.schemas import ObjectDescriptor, StoredObject
from documents_api.utils.decorators import log_execution_time

try:
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...

logger = logging.getLogger(__name__)

NOT_FOUND_ERROR_CODES = {"NoSuchKey", "404", "NotFound"}
DEFAULT_CONTENT_TYPE = "application/octet-stream"


class DocumentStore:
    """
    Thin facade over one S3 bucket.

    Every call is a single round trip with no retries; failures surface as
    `StoreWriteError`, `StoreReadError` or `DocumentNotFound`.
    """

    def __init__(self, s3_client: "S3Client", bucket_name: str) -> None:
        self.s3_client = s3_client
        self.bucket_name = bucket_name

    @log_execution_time
    def put(self, key: str, payload: bytes, content_type: str, metadata: Dict[str, str]) -> None:
        try:
            upload_s3_object(
                bucket_name=self.bucket_name,
                object_key=key,
                file_content=payload,
                s3_client=self.s3_client,
                content_type=content_type,
                metadata=metadata,
            )
        except (ClientError, BotoCoreError) as err:
            raise StoreWriteError(f"Failed to write {key}: {err}") from err
        logger.info(f"Stored {key} ({len(payload)} bytes, {content_type}) in {self.bucket_name}")

    @log_execution_time
    def list(self, prefix: str) -> List[ObjectDescriptor]:
        """List objects under `prefix`; only the first page the store returns."""
        try:
            contents = fetch_s3_objects_metadata(self.bucket_name, prefix, self.s3_client)
        except (ClientError, BotoCoreError) as err:
            raise StoreReadError(f"Failed to list {prefix}: {err}") from err
        return [
            ObjectDescriptor(key=item["Key"], size=item["Size"], last_modified=item["LastModified"])
            for item in contents
        ]

    @log_execution_time
    def get(self, key: str) -> StoredObject:
        try:
            response = fetch_s3_object(self.bucket_name, key, self.s3_client)
            payload = response["Body"].read()
        except ClientError as err:
            if err.response.get("Error", {}).get("Code") in NOT_FOUND_ERROR_CODES:
                raise DocumentNotFound(f"Document {key} not found") from err
            raise StoreReadError(f"Failed to read {key}: {err}") from err
        except BotoCoreError as err:
            raise StoreReadError(f"Failed to read {key}: {err}") from err

        # S3 lower-cases user metadata keys on the way back
        metadata = {name.lower(): value for name, value in response.get("Metadata", {}).items()}
        return StoredObject(
            key=key,
            payload=payload,
            content_type=response.get("ContentType") or DEFAULT_CONTENT_TYPE,
            metadata=metadata,
        )
