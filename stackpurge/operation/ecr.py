"""ECR repository operator."""

from __future__ import annotations

import logging

from ..aws.ecr import ECR
from ..models.stack_resource import StackResourceSummary
from ..resource_types import ResourceType
from .base import Operator
from .concurrency import DEFAULT_CONCURRENCY

logger = logging.getLogger(__name__)


class EcrOperator(Operator):
    """Force deletes ECR repositories that still contain images."""

    def __init__(self, client: ECR, concurrency: int = DEFAULT_CONCURRENCY) -> None:
        super().__init__(concurrency)
        self.client = client

    @property
    def resource_type(self) -> str:
        return ResourceType.ECR_REPOSITORY.value

    def delete_resource(self, resource: StackResourceSummary) -> None:
        self.delete_repository(resource.physical_resource_id)

    def delete_repository(self, repository_name: str) -> None:
        if not self.client.repository_exists(repository_name):
            logger.info(f"Repository {repository_name} already deleted")
            return

        self.client.delete_repository(repository_name)
        logger.info(f"Deleted repository {repository_name}")
