"""Operator factory.

Creates operators with the AWS capability each one needs. Tests substitute the
factory, or ``create_boto_client``, to inject fake capabilities.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional

from ..aws.backup import Backup
from ..aws.client import create_boto_client
from ..aws.cloudformation import CloudFormation
from ..aws.ecr import ECR
from ..aws.iam import DEFAULT_SLEEP_SECONDS, IAM
from ..aws.s3 import S3
from .backup_vault import BackupVaultOperator
from .bucket import BucketOperator
from .concurrency import DEFAULT_CONCURRENCY
from .custom import CustomOperator
from .ecr import EcrOperator
from .role import RoleOperator
from .stack import StackOperator


class OperatorFactory:
    """Factory for deletion operators.

    boto3 clients are created lazily, once per service, and shared by every
    operator the factory builds (including nested stack levels).

    Attributes:
        region_name: AWS region (optional)
        profile_name: AWS profile name (optional)
        concurrency: Concurrency ceiling passed to every operator
        iam_sleep_seconds: Delay between IAM retries
    """

    def __init__(
        self,
        region_name: Optional[str] = None,
        profile_name: Optional[str] = None,
        concurrency: int = DEFAULT_CONCURRENCY,
        iam_sleep_seconds: float = DEFAULT_SLEEP_SECONDS,
    ) -> None:
        if concurrency < 1:
            raise ValueError(f"Concurrency must be at least 1, got {concurrency}")

        self.region_name = region_name
        self.profile_name = profile_name
        self.concurrency = concurrency
        self.iam_sleep_seconds = iam_sleep_seconds
        self._clients: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def _client(self, service_name: str) -> Any:
        # Nested stack operators build collections from worker threads
        with self._lock:
            if service_name not in self._clients:
                self._clients[service_name] = create_boto_client(
                    service_name=service_name,
                    region_name=self.region_name,
                    profile_name=self.profile_name,
                )
            return self._clients[service_name]

    # Capabilities

    def create_s3(self) -> S3:
        return S3(self._client("s3"))

    def create_iam(self) -> IAM:
        return IAM(self._client("iam"))

    def create_ecr(self) -> ECR:
        return ECR(self._client("ecr"))

    def create_backup(self) -> Backup:
        return Backup(self._client("backup"))

    def create_cloudformation(self) -> CloudFormation:
        return CloudFormation(self._client("cloudformation"))

    # Operators

    def create_bucket_operator(self) -> BucketOperator:
        return BucketOperator(self.create_s3(), self.concurrency)

    def create_role_operator(self) -> RoleOperator:
        return RoleOperator(self.create_iam(), self.concurrency, self.iam_sleep_seconds)

    def create_ecr_operator(self) -> EcrOperator:
        return EcrOperator(self.create_ecr(), self.concurrency)

    def create_backup_vault_operator(self) -> BackupVaultOperator:
        return BackupVaultOperator(self.create_backup(), self.concurrency)

    def create_stack_operator(self, target_resource_types: List[str]) -> StackOperator:
        return StackOperator(self.create_cloudformation(), self, target_resource_types, self.concurrency)

    def create_custom_operator(self) -> CustomOperator:
        return CustomOperator(self.concurrency)
