"""Root stack force deletion.

Main orchestrator with preview and execution modes.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List

from botocore.exceptions import BotoCoreError, ClientError

from ..models.operation import ForceDeleteOperation, OperationStatus
from ..models.stack_resource import DELETE_FAILED
from .collection import OperatorCollection
from .errors import NotRootStackError, StackNotFoundError, StackPurgeError, TerminationProtectionError
from .factory import OperatorFactory

logger = logging.getLogger(__name__)


class StackDeleter:
    """Root stack force deletion orchestrator.

    Tries an ordinary deletion first. If the stack ends in DELETE_FAILED, its
    DELETE_FAILED resources are classified, force deleted by the operators
    (recursing into nested stacks) and the stack deletion is retried.

    Attributes:
        operator_factory: Factory for operators and AWS capabilities
        target_resource_types: Resource types the run may force delete
    """

    def __init__(self, operator_factory: OperatorFactory, target_resource_types: List[str]) -> None:
        self.operator_factory = operator_factory
        self.target_resource_types = list(target_resource_types)
        self.stack_operator = operator_factory.create_stack_operator(self.target_resource_types)
        self.cloudformation = self.stack_operator.client

    def preview(self, stack_name: str) -> OperatorCollection:
        """Classify the DELETE_FAILED resources of a stack without deleting anything.

        Raises:
            StackNotFoundError: If the stack does not exist
            TerminationProtectionError: If termination protection is enabled
            NotRootStackError: If the stack is a nested stack
        """
        stack = self._describe_root_stack(stack_name)
        return self.stack_operator.classify(stack["StackId"], stack.get("StackName", stack_name))

    def execute(self, stack_name: str) -> ForceDeleteOperation:
        """Delete a stack, force deleting DELETE_FAILED resources when needed.

        Args:
            stack_name: Name or ID of the root stack

        Returns:
            ForceDeleteOperation with the result of the run

        Raises:
            StackNotFoundError: If the stack does not exist
            TerminationProtectionError: If termination protection is enabled
            NotRootStackError: If the stack is a nested stack
        """
        stack = self._describe_root_stack(stack_name)
        stack_id = stack["StackId"]

        operation = ForceDeleteOperation(
            stack_name=stack_name,
            status=OperationStatus.EXECUTING,
            target_resource_types=self.target_resource_types,
        )

        try:
            if stack["StackStatus"] != DELETE_FAILED:
                logger.info(f"Deleting stack {stack_name}")
                self.cloudformation.delete_stack(stack_id)
                if self.cloudformation.wait_stack_delete_complete(stack_id):
                    logger.info(f"Deleted stack {stack_name}")
                    return self._finish(operation, OperationStatus.COMPLETED)

            logger.info(f"Stack {stack_name} is {DELETE_FAILED}, force deleting its resources")
            collection = self.stack_operator.classify(stack_id, stack.get("StackName", stack_name))
            operation.logical_resource_ids = list(collection.logical_resource_ids)
            operation.force_deleted = True

            self.stack_operator.delete_classified(collection)
        except (StackPurgeError, ClientError, BotoCoreError) as e:
            logger.error(f"Failed to delete stack {stack_name}: {e}")
            operation.error_message = str(e)
            return self._finish(operation, OperationStatus.FAILED)

        return self._finish(operation, OperationStatus.COMPLETED)

    def _describe_root_stack(self, stack_name: str) -> Dict[str, Any]:
        stack = self.cloudformation.describe_stack(stack_name)
        if stack is None:
            raise StackNotFoundError(stack_name)

        if stack.get("EnableTerminationProtection"):
            raise TerminationProtectionError(stack_name)

        if stack.get("ParentId"):
            raise NotRootStackError(stack_name, stack.get("RootId"))

        status = stack.get("StackStatus", "")
        if status.endswith("_IN_PROGRESS"):
            raise StackPurgeError(f"{stack_name} is {status}, wait for the operation to finish")

        return stack

    def _finish(self, operation: ForceDeleteOperation, status: OperationStatus) -> ForceDeleteOperation:
        operation.status = status
        operation.completed_at = datetime.utcnow()
        return operation
