"""Backup vault operator.

Deletes every recovery point held by a vault before deleting the vault.
"""

from __future__ import annotations

import logging

from ..aws.backup import Backup
from ..models.stack_resource import StackResourceSummary
from ..resource_types import ResourceType
from .base import Operator
from .concurrency import DEFAULT_CONCURRENCY

logger = logging.getLogger(__name__)


class BackupVaultOperator(Operator):
    """Force deletes backup vaults that still contain recovery points."""

    def __init__(self, client: Backup, concurrency: int = DEFAULT_CONCURRENCY) -> None:
        super().__init__(concurrency)
        self.client = client

    @property
    def resource_type(self) -> str:
        return ResourceType.BACKUP_VAULT.value

    def delete_resource(self, resource: StackResourceSummary) -> None:
        self.delete_backup_vault(resource.physical_resource_id)

    def delete_backup_vault(self, backup_vault_name: str) -> None:
        """Delete all recovery points of a vault, then the vault.

        Raises:
            ClientError: The listing failure or the first recovery point / vault deletion failure
        """
        recovery_point_arns = self.client.list_recovery_points(backup_vault_name)

        if recovery_point_arns:
            logger.debug(f"Deleting {len(recovery_point_arns)} recovery points from {backup_vault_name}")
            for arn in recovery_point_arns:
                self.client.delete_recovery_point(backup_vault_name, arn)

        self.client.delete_backup_vault(backup_vault_name)
        logger.info(f"Deleted backup vault {backup_vault_name}")
