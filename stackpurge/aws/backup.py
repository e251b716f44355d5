"""AWS Backup calls used to empty and delete backup vaults."""

from __future__ import annotations

import logging
from typing import Any, List

logger = logging.getLogger(__name__)


class Backup:
    """AWS Backup capability wrapper around a boto3 client."""

    def __init__(self, client: Any) -> None:
        self.client = client

    def list_recovery_points(self, backup_vault_name: str) -> List[str]:
        """List the ARNs of every recovery point held by a vault."""
        recovery_point_arns: List[str] = []
        paginator = self.client.get_paginator("list_recovery_points_by_backup_vault")

        for page in paginator.paginate(BackupVaultName=backup_vault_name):
            for recovery_point in page.get("RecoveryPoints", []):
                recovery_point_arns.append(recovery_point["RecoveryPointArn"])

        logger.debug(f"Listed {len(recovery_point_arns)} recovery points in {backup_vault_name}")
        return recovery_point_arns

    def delete_recovery_point(self, backup_vault_name: str, recovery_point_arn: str) -> None:
        self.client.delete_recovery_point(
            BackupVaultName=backup_vault_name,
            RecoveryPointArn=recovery_point_arn,
        )

    def delete_backup_vault(self, backup_vault_name: str) -> None:
        self.client.delete_backup_vault(BackupVaultName=backup_vault_name)
