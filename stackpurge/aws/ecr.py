"""ECR calls used to delete repositories that still hold images."""

from __future__ import annotations

from typing import Any

from botocore.exceptions import ClientError

from .client import error_code


class ECR:
    """ECR capability wrapper around a boto3 client."""

    def __init__(self, client: Any) -> None:
        self.client = client

    def repository_exists(self, repository_name: str) -> bool:
        try:
            self.client.describe_repositories(repositoryNames=[repository_name])
        except ClientError as e:
            if error_code(e) == "RepositoryNotFoundException":
                return False
            raise
        return True

    def delete_repository(self, repository_name: str) -> None:
        """Delete a repository together with any images it still holds."""
        self.client.delete_repository(repositoryName=repository_name, force=True)
