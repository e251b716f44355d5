"""Runs the operators of a classified stack."""

from __future__ import annotations

import logging
from typing import List

from .collection import OperatorCollection
from .errors import ForceDeletionError

logger = logging.getLogger(__name__)


class OperatorManager:
    """Executes every operator of a collection in order and aggregates failures.

    A failing operator does not stop the operators after it, so resources of
    later types are still cleared before the failures are reported together.
    """

    def __init__(self, collection: OperatorCollection) -> None:
        self.collection = collection

    def delete_resource_collection(self) -> None:
        """Run all operators, then report failures and unsupported resources.

        Raises:
            Exception: The only failure, when exactly one occurred
            ForceDeletionError: When more than one failure occurred
        """
        errors: List[Exception] = []

        for operator in self.collection.get_operators():
            try:
                operator.delete_resources()
            except Exception as e:
                logger.error(f"Failed to force delete {operator.resource_type} resources: {e}")
                errors.append(e)

        if self.collection.unsupported_resources:
            errors.append(self.collection.unsupported_resource_error())

        if len(errors) == 1:
            raise errors[0]
        if errors:
            raise ForceDeletionError(self.collection.stack_name, errors)
