"""Nested stack operator.

Runs the whole classify, dispatch and delete pipeline against each nested stack,
then deletes the nested stack itself.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from ..aws.cloudformation import CloudFormation
from ..models.stack_resource import StackResourceSummary
from ..resource_types import ResourceType
from .base import Operator
from .collection import OperatorCollection
from .concurrency import DEFAULT_CONCURRENCY
from .errors import StackPurgeError
from .manager import OperatorManager

if TYPE_CHECKING:
    from .factory import OperatorFactory

logger = logging.getLogger(__name__)


class StackOperator(Operator):
    """Force deletes nested stacks that failed to delete.

    Every stack gets a freshly classified operator collection, so each level of
    the stack tree runs with its own operators and concurrency groups.
    """

    def __init__(
        self,
        client: CloudFormation,
        operator_factory: "OperatorFactory",
        target_resource_types: List[str],
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> None:
        super().__init__(concurrency)
        self.client = client
        self.operator_factory = operator_factory
        self.target_resource_types = list(target_resource_types)

    @property
    def resource_type(self) -> str:
        return ResourceType.CLOUDFORMATION_STACK.value

    def delete_resource(self, resource: StackResourceSummary) -> None:
        self.delete_stack(resource.physical_resource_id)

    def delete_stack(self, stack_id: str) -> Optional[OperatorCollection]:
        """Force delete the DELETE_FAILED resources of a stack, then the stack.

        Args:
            stack_id: Stack name or ID

        Returns:
            The collection used for the stack, or None if the stack was already deleted
        """
        if not self.client.stack_exists(stack_id):
            logger.info(f"Stack {stack_id} already deleted")
            return None

        collection = self.classify(stack_id)
        self.delete_classified(collection)
        return collection

    def classify(self, stack_id: str, display_name: Optional[str] = None) -> OperatorCollection:
        """Classify the current DELETE_FAILED resources of a stack.

        Args:
            stack_id: Stack name or ID used for remote calls
            display_name: Name shown in logs and reports (default: derived from stack_id)
        """
        resources = self.client.list_stack_resources(stack_id)
        collection = OperatorCollection(self.operator_factory, self.target_resource_types)
        collection.set_operator_collection(
            display_name or CloudFormation.stack_name_from_id(stack_id), resources, stack_id=stack_id
        )
        return collection

    def delete_classified(self, collection: OperatorCollection) -> None:
        """Run the operators of a classified stack and delete the stack.

        Raises:
            UnsupportedResourceError: If the stack holds resources no operator may handle
            ForceDeletionError: If several operators failed
            StackPurgeError: If the stack still fails to delete afterwards
        """
        stack_name = collection.stack_name
        if collection.logical_resource_ids:
            logger.info(
                f"Force deleting DELETE_FAILED resources of {stack_name}: "
                f"{', '.join(collection.logical_resource_ids)}"
            )

        OperatorManager(collection).delete_resource_collection()

        self.client.delete_stack(collection.stack_id)
        if not self.client.wait_stack_delete_complete(collection.stack_id):
            raise StackPurgeError(f"{stack_name} deletion is FAILED after force deleting its resources")
        logger.info(f"Deleted stack {stack_name}")
