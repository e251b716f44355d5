"""Base class for deletion operators."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from functools import partial
from typing import List

from ..models.stack_resource import StackResourceSummary
from .concurrency import DEFAULT_CONCURRENCY, run_with_concurrency

logger = logging.getLogger(__name__)


class Operator(ABC):
    """Abstract base class for all deletion operators.

    Each operator:
    1. Handles exactly one resource type
    2. Collects resources during classification (single threaded)
    3. Deletes them once with bounded concurrency, clearing whatever blocks
       the ordinary deletion first
    """

    def __init__(self, concurrency: int = DEFAULT_CONCURRENCY) -> None:
        self.resources: List[StackResourceSummary] = []
        self.concurrency = concurrency

    @property
    @abstractmethod
    def resource_type(self) -> str:
        """Resource type handled by this operator.

        Returns:
            CloudFormation resource type (e.g., "AWS::S3::Bucket")
        """
        pass

    def add_resource(self, resource: StackResourceSummary) -> None:
        self.resources.append(resource)

    def resource_count(self) -> int:
        return len(self.resources)

    def delete_resources(self) -> None:
        """Delete every collected resource.

        No-op when the operator holds no resources.

        Raises:
            Exception: The first failure of any resource deletion
        """
        if not self.resources:
            return

        logger.info(f"Force deleting {self.resource_count()} {self.resource_type} resources")
        run_with_concurrency(
            [partial(self.delete_resource, resource) for resource in self.resources],
            self.concurrency,
        )

    @abstractmethod
    def delete_resource(self, resource: StackResourceSummary) -> None:
        """Clear the blocking state of one resource and delete it."""
        pass
