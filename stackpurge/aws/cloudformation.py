"""CloudFormation calls used to inspect and delete stacks."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from botocore.exceptions import ClientError, WaiterError

from ..models.stack_resource import StackResourceSummary
from .client import error_code

logger = logging.getLogger(__name__)

# Waiter polling: 30s x 120 attempts = 1 hour
WAITER_DELAY_SECONDS = 30
WAITER_MAX_ATTEMPTS = 120


class CloudFormation:
    """CloudFormation capability wrapper around a boto3 client."""

    def __init__(self, client: Any) -> None:
        self.client = client

    def describe_stack(self, stack_name: str) -> Optional[Dict[str, Any]]:
        """Describe a stack.

        Returns:
            Stack description, or None if the stack does not exist

        Raises:
            ClientError: For errors other than stack not found
        """
        try:
            response = self.client.describe_stacks(StackName=stack_name)
        except ClientError as e:
            message = e.response.get("Error", {}).get("Message", "")
            if error_code(e) == "ValidationError" and "does not exist" in message:
                return None
            raise

        stacks = response.get("Stacks", [])
        if not stacks or stacks[0].get("StackStatus") == "DELETE_COMPLETE":
            return None
        return stacks[0]

    @staticmethod
    def stack_name_from_id(stack_id: str) -> str:
        """Extract the stack name from a stack ARN; plain names are returned unchanged."""
        if stack_id.startswith("arn:") and ":stack/" in stack_id:
            return stack_id.split(":stack/", 1)[1].split("/", 1)[0]
        return stack_id

    def stack_exists(self, stack_name: str) -> bool:
        return self.describe_stack(stack_name) is not None

    def list_stack_resources(self, stack_name: str) -> List[StackResourceSummary]:
        """List every resource summary of a stack."""
        summaries: List[StackResourceSummary] = []
        paginator = self.client.get_paginator("list_stack_resources")

        for page in paginator.paginate(StackName=stack_name):
            for summary in page.get("StackResourceSummaries", []):
                summaries.append(StackResourceSummary.from_boto(summary))

        return summaries

    def delete_stack(self, stack_name: str, role_arn: Optional[str] = None) -> None:
        params: Dict[str, Any] = {"StackName": stack_name}
        if role_arn:
            params["RoleARN"] = role_arn
        self.client.delete_stack(**params)

    def wait_stack_delete_complete(self, stack_name: str) -> bool:
        """Wait until a stack is deleted.

        Returns:
            True if the stack was deleted, False if the deletion ended in DELETE_FAILED

        Raises:
            botocore.exceptions.WaiterError: If waiting failed for another reason
        """
        waiter = self.client.get_waiter("stack_delete_complete")
        try:
            waiter.wait(
                StackName=stack_name,
                WaiterConfig={"Delay": WAITER_DELAY_SECONDS, "MaxAttempts": WAITER_MAX_ATTEMPTS},
            )
        except WaiterError as e:
            last_response = getattr(e, "last_response", None) or {}
            stacks = last_response.get("Stacks", [])
            if stacks and stacks[0].get("StackStatus") == "DELETE_FAILED":
                logger.debug(f"{stack_name} deletion ended in DELETE_FAILED")
                return False
            raise
        return True
