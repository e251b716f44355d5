"""S3 calls used to empty and delete buckets."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from botocore.exceptions import ClientError

from .client import error_code

logger = logging.getLogger(__name__)

# DeleteObjects accepts at most 1000 keys per request
MAX_DELETE_OBJECTS = 1000

BUCKET_NOT_FOUND_CODES = {"404", "NoSuchBucket", "NotFound"}


class S3:
    """S3 capability wrapper around a boto3 client."""

    def __init__(self, client: Any) -> None:
        self.client = client

    def bucket_exists(self, bucket_name: str) -> bool:
        """Check whether a bucket exists.

        Raises:
            ClientError: For errors other than bucket not found
        """
        try:
            self.client.head_bucket(Bucket=bucket_name)
        except ClientError as e:
            if error_code(e) in BUCKET_NOT_FOUND_CODES:
                return False
            raise
        return True

    def list_object_versions(self, bucket_name: str) -> List[Dict[str, str]]:
        """List every object version and delete marker of a bucket.

        Returns:
            List of ``{"Key": ..., "VersionId": ...}`` identifiers
        """
        objects: List[Dict[str, str]] = []
        paginator = self.client.get_paginator("list_object_versions")

        for page in paginator.paginate(Bucket=bucket_name):
            for version in page.get("Versions", []):
                objects.append({"Key": version["Key"], "VersionId": version["VersionId"]})
            for marker in page.get("DeleteMarkers", []):
                objects.append({"Key": marker["Key"], "VersionId": marker["VersionId"]})

        logger.debug(f"Listed {len(objects)} object versions in {bucket_name}")
        return objects

    def delete_objects(self, bucket_name: str, objects: List[Dict[str, str]]) -> List[Dict[str, Any]]:
        """Delete up to 1000 object versions in one request.

        Returns:
            Per-object error entries reported by S3 (empty on full success)

        Raises:
            ValueError: If more objects than a single request accepts are given
        """
        if len(objects) > MAX_DELETE_OBJECTS:
            raise ValueError(f"DeleteObjects accepts at most {MAX_DELETE_OBJECTS} objects, got {len(objects)}")
        if not objects:
            return []

        output = self.client.delete_objects(
            Bucket=bucket_name,
            Delete={"Objects": objects, "Quiet": True},
        )
        return output.get("Errors", [])

    def delete_bucket(self, bucket_name: str) -> None:
        self.client.delete_bucket(Bucket=bucket_name)
