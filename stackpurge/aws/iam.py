"""IAM calls used to detach policies from roles and delete them."""

from __future__ import annotations

import logging
from typing import Any, List

from botocore.exceptions import ClientError

from .client import call_with_retry, error_code

logger = logging.getLogger(__name__)

# Attachment changes take a while to be visible to DeleteRole
RETRYABLE_CODES = {"DeleteConflict", "ConcurrentModification", "Throttling"}

DEFAULT_SLEEP_SECONDS = 5


class IAM:
    """IAM capability wrapper around a boto3 client."""

    def __init__(self, client: Any) -> None:
        self.client = client

    def role_exists(self, role_name: str) -> bool:
        try:
            self.client.get_role(RoleName=role_name)
        except ClientError as e:
            if error_code(e) == "NoSuchEntity":
                return False
            raise
        return True

    def list_attached_role_policies(self, role_name: str) -> List[str]:
        """List the ARNs of managed policies attached to a role."""
        policy_arns: List[str] = []
        paginator = self.client.get_paginator("list_attached_role_policies")

        for page in paginator.paginate(RoleName=role_name):
            for policy in page.get("AttachedPolicies", []):
                policy_arns.append(policy["PolicyArn"])

        return policy_arns

    def detach_role_policies(
        self, role_name: str, policy_arns: List[str], sleep_seconds: float = DEFAULT_SLEEP_SECONDS
    ) -> None:
        """Detach policies one after another, each retried independently."""
        for policy_arn in policy_arns:
            self.detach_role_policy(role_name, policy_arn, sleep_seconds)

    def detach_role_policy(self, role_name: str, policy_arn: str, sleep_seconds: float = DEFAULT_SLEEP_SECONDS) -> None:
        try:
            call_with_retry(
                lambda: self.client.detach_role_policy(RoleName=role_name, PolicyArn=policy_arn),
                retryable_codes=RETRYABLE_CODES,
                sleep_seconds=sleep_seconds,
            )
        except ClientError as e:
            if error_code(e) != "NoSuchEntity":
                raise
            logger.debug(f"Policy {policy_arn} already detached from {role_name}")

    def delete_role(self, role_name: str, sleep_seconds: float = DEFAULT_SLEEP_SECONDS) -> None:
        try:
            call_with_retry(
                lambda: self.client.delete_role(RoleName=role_name),
                retryable_codes=RETRYABLE_CODES,
                sleep_seconds=sleep_seconds,
            )
        except ClientError as e:
            if error_code(e) != "NoSuchEntity":
                raise
            logger.debug(f"Role {role_name} already deleted")
