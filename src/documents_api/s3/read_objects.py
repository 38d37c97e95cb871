"""Functions for reading objects from an S3 bucket."""

from typing import Any, Dict, List

try:
    from mypy_boto3_s3 import S3Client
    from mypy_boto3_s3.type_defs import GetObjectOutputTypeDef, ObjectTypeDef
except ImportError:
    ...


def fetch_s3_object(bucket_name: str, object_key: str, s3_client: "S3Client") -> "GetObjectOutputTypeDef":
    """
    Fetch an object from an S3 bucket.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: path to the object in the S3 bucket.
    :param s3_client: The boto3 S3 client to issue the call with.
    :return: The get_object response; `Body` is a streaming body the caller must read.
    """
    return s3_client.get_object(Bucket=bucket_name, Key=object_key)


def fetch_s3_objects_metadata(bucket_name: str, prefix: str, s3_client: "S3Client") -> List["ObjectTypeDef"]:
    """
    Fetch the first page of object descriptors under a prefix.

    Only a single list_objects_v2 call is made, so at most one page
    (1000 keys by default) is returned.

    :param bucket_name: The name of the S3 bucket.
    :param prefix: Only keys starting with this prefix are returned.
    :param s3_client: The boto3 S3 client to issue the call with.
    """
    response: Dict[str, Any] = s3_client.list_objects_v2(Bucket=bucket_name, Prefix=prefix)
    return response.get("Contents", [])
