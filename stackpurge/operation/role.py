"""IAM role operator.

Detaches managed policies attached from outside the stack before deleting roles.
"""

from __future__ import annotations

import logging

from ..aws.iam import DEFAULT_SLEEP_SECONDS, IAM
from ..models.stack_resource import StackResourceSummary
from ..resource_types import ResourceType
from .base import Operator
from .concurrency import DEFAULT_CONCURRENCY

logger = logging.getLogger(__name__)


class RoleOperator(Operator):
    """Force deletes IAM roles that still have attached policies."""

    def __init__(
        self,
        client: IAM,
        concurrency: int = DEFAULT_CONCURRENCY,
        sleep_seconds: float = DEFAULT_SLEEP_SECONDS,
    ) -> None:
        super().__init__(concurrency)
        self.client = client
        self.sleep_seconds = sleep_seconds

    @property
    def resource_type(self) -> str:
        return ResourceType.IAM_ROLE.value

    def delete_resource(self, resource: StackResourceSummary) -> None:
        self.delete_role(resource.physical_resource_id)

    def delete_role(self, role_name: str) -> None:
        """Detach every attached managed policy, then delete the role.

        Raises:
            ClientError: Any remote call failure, unchanged
        """
        if not self.client.role_exists(role_name):
            logger.info(f"Role {role_name} already deleted")
            return

        policy_arns = self.client.list_attached_role_policies(role_name)
        if policy_arns:
            logger.debug(f"Detaching {len(policy_arns)} policies from {role_name}")
            self.client.detach_role_policies(role_name, policy_arns, self.sleep_seconds)

        self.client.delete_role(role_name, self.sleep_seconds)
        logger.info(f"Deleted role {role_name}")
