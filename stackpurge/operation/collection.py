"""Operator collection.

Classifies the DELETE_FAILED resources of a stack across the operators and keeps
track of the resources that no operator is allowed to handle.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from ..models.stack_resource import StackResourceSummary
from ..resource_types import ResourceType, is_custom_resource
from .base import Operator
from .errors import UnsupportedResourceError
from .reporter import format_unsupported_resources

if TYPE_CHECKING:
    from .factory import OperatorFactory

logger = logging.getLogger(__name__)

# Insertion order is the execution order: independent, usually fast deletions
# first, the recursive nested stack pass after them.
OPERATOR_CONSTRUCTORS: Dict[ResourceType, Callable[["OperatorFactory", List[str]], Operator]] = {
    ResourceType.S3_BUCKET: lambda factory, _: factory.create_bucket_operator(),
    ResourceType.IAM_ROLE: lambda factory, _: factory.create_role_operator(),
    ResourceType.ECR_REPOSITORY: lambda factory, _: factory.create_ecr_operator(),
    ResourceType.BACKUP_VAULT: lambda factory, _: factory.create_backup_vault_operator(),
    ResourceType.CLOUDFORMATION_STACK: lambda factory, types: factory.create_stack_operator(types),
    ResourceType.CUSTOM_RESOURCE: lambda factory, _: factory.create_custom_operator(),
}


def resolve_operator_type(resource_type: str) -> Optional[ResourceType]:
    """Map a CloudFormation resource type to the operator handling it.

    Returns:
        ResourceType of the operator, or None if no operator handles the type
    """
    if is_custom_resource(resource_type):
        return ResourceType.CUSTOM_RESOURCE
    for candidate in OPERATOR_CONSTRUCTORS:
        if candidate.value == resource_type:
            return candidate
    return None


class OperatorCollection:
    """Classifier and dispatcher for the DELETE_FAILED resources of one stack.

    Attributes:
        stack_name: Name of the stack the resources belong to, used in reports
        stack_id: Name or ID of the stack used for remote calls
        target_resource_types: Resource types the run may force delete
        logical_resource_ids: Every DELETE_FAILED logical ID seen, supported or not
        unsupported_resources: DELETE_FAILED resources no operator may handle
        operators: One operator per supported type, in execution order
    """

    def __init__(self, operator_factory: "OperatorFactory", target_resource_types: List[str]) -> None:
        self.operator_factory = operator_factory
        self.target_resource_types = list(target_resource_types)
        self.stack_name = ""
        self.stack_id = ""
        self.logical_resource_ids: List[str] = []
        self.unsupported_resources: List[StackResourceSummary] = []
        self.operators: List[Operator] = []

    def set_operator_collection(
        self,
        stack_name: str,
        resources: List[StackResourceSummary],
        stack_id: Optional[str] = None,
    ) -> None:
        """Build the operators and classify the DELETE_FAILED resources.

        Args:
            stack_name: Stack the resources belong to
            resources: Resource summaries reported by the stack (any status)
            stack_id: Stack ID for remote calls (defaults to stack_name)
        """
        self.stack_name = stack_name
        self.stack_id = stack_id or stack_name
        operators = {
            resource_type: constructor(self.operator_factory, self.target_resource_types)
            for resource_type, constructor in OPERATOR_CONSTRUCTORS.items()
        }

        for resource in resources:
            if not resource.is_delete_failed:
                continue

            self.logical_resource_ids.append(resource.logical_resource_id)

            operator_type = resolve_operator_type(resource.resource_type)
            if operator_type is None or not self.contains_resource_type(resource.resource_type):
                self.unsupported_resources.append(resource)
                continue

            operators[operator_type].add_resource(resource)

        self.operators = list(operators.values())
        logger.debug(
            f"Classified {len(self.logical_resource_ids)} DELETE_FAILED resources of {stack_name}, "
            f"{len(self.unsupported_resources)} unsupported"
        )

    def contains_resource_type(self, resource_type: str) -> bool:
        """Check if a resource type is allowed by the target resource types.

        The ``Custom::`` entry matches the whole custom resource family.
        """
        for target in self.target_resource_types:
            if target == resource_type:
                return True
            if target == ResourceType.CUSTOM_RESOURCE.value and is_custom_resource(resource_type):
                return True
        return False

    def get_logical_resource_ids(self) -> List[str]:
        return self.logical_resource_ids

    def get_operators(self) -> List[Operator]:
        return self.operators

    def unsupported_resource_error(self) -> UnsupportedResourceError:
        """Build the aggregate error describing unsupported resources."""
        report = format_unsupported_resources(self.stack_name, self.unsupported_resources)
        return UnsupportedResourceError(self.stack_name, list(self.unsupported_resources), report)

    def raise_unsupported_resource_error(self) -> None:
        raise self.unsupported_resource_error()
