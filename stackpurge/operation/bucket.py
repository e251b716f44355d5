"""S3 bucket operator.

Empties buckets (every object version and delete marker) before deleting them.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from ..aws.s3 import MAX_DELETE_OBJECTS, S3
from ..models.stack_resource import StackResourceSummary
from ..resource_types import ResourceType
from .base import Operator
from .concurrency import DEFAULT_CONCURRENCY
from .errors import BucketNotEmptyError, DeleteObjectsError

logger = logging.getLogger(__name__)

MAX_EMPTY_PASSES = 10


class BucketOperator(Operator):
    """Force deletes non-empty and versioned S3 buckets."""

    def __init__(self, client: S3, concurrency: int = DEFAULT_CONCURRENCY) -> None:
        super().__init__(concurrency)
        self.client = client

    @property
    def resource_type(self) -> str:
        return ResourceType.S3_BUCKET.value

    def delete_resource(self, resource: StackResourceSummary) -> None:
        self.delete_bucket(resource.physical_resource_id)

    def delete_bucket(self, bucket_name: str) -> None:
        """Empty and delete a bucket.

        A bucket that no longer exists is treated as deleted.

        Args:
            bucket_name: Bucket name

        Raises:
            DeleteObjectsError: If S3 reports per-object failures while objects remain
            BucketNotEmptyError: If the bucket never reports an empty listing
            ClientError: Any remote call failure, unchanged
        """
        if not self.client.bucket_exists(bucket_name):
            logger.info(f"Bucket {bucket_name} already deleted")
            return

        self._empty_bucket(bucket_name)
        self.client.delete_bucket(bucket_name)
        logger.info(f"Deleted bucket {bucket_name}")

    def _empty_bucket(self, bucket_name: str) -> None:
        # Each pass re-lists the bucket; a delete is only issued while entries remain,
        # so failures are fatal only when the remaining count was nonzero.
        for attempt in range(1, MAX_EMPTY_PASSES + 1):
            versions = self.client.list_object_versions(bucket_name)
            remaining = len(versions)
            if remaining == 0:
                return

            logger.debug(f"Deleting {remaining} object versions from {bucket_name} (pass {attempt})")
            # Sequential within one bucket; buckets already run in the operator pool
            for start in range(0, remaining, MAX_DELETE_OBJECTS):
                self._delete_batch(bucket_name, versions[start : start + MAX_DELETE_OBJECTS])

        remaining = len(self.client.list_object_versions(bucket_name))
        if remaining:
            raise BucketNotEmptyError(bucket_name, remaining, MAX_EMPTY_PASSES)

    def _delete_batch(self, bucket_name: str, objects: List[Dict[str, str]]) -> None:
        errors = self.client.delete_objects(bucket_name, objects)
        if errors:
            raise DeleteObjectsError(bucket_name, errors)
