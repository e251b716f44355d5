"""Resource types supported for force deletion.

The registry is closed: every supported type has a dedicated operator, plus the
custom resource family which is matched by prefix.
"""

from __future__ import annotations

from enum import Enum


class ResourceType(str, Enum):
    """CloudFormation resource types that can be force deleted."""

    S3_BUCKET = "AWS::S3::Bucket"
    IAM_ROLE = "AWS::IAM::Role"
    ECR_REPOSITORY = "AWS::ECR::Repository"
    BACKUP_VAULT = "AWS::Backup::BackupVault"
    CLOUDFORMATION_STACK = "AWS::CloudFormation::Stack"
    CUSTOM_RESOURCE = "Custom::"


# Generic custom resource type, handled like the Custom:: family
CLOUDFORMATION_CUSTOM_RESOURCE = "AWS::CloudFormation::CustomResource"

RESOURCE_TYPE_DESCRIPTIONS = {
    ResourceType.S3_BUCKET: "S3 Buckets, including buckets with Non-empty or Versioning enabled and DeletionPolicy not Retain.",
    ResourceType.IAM_ROLE: "IAM Roles, including roles with policies from outside the stack.",
    ResourceType.ECR_REPOSITORY: "ECR Repositories, including repositories containing images.",
    ResourceType.BACKUP_VAULT: "Backup Vaults, including vaults containing recovery points.",
    ResourceType.CLOUDFORMATION_STACK: "Nested Child Stacks that failed to delete.",
    ResourceType.CUSTOM_RESOURCE: "Custom Resources, but they will be deleted on its own.",
}

SUPPORTED_RESOURCE_TYPES = [resource_type.value for resource_type in ResourceType]


def is_custom_resource(resource_type: str) -> bool:
    """Return True if the type belongs to the custom resource family."""
    return resource_type.startswith(ResourceType.CUSTOM_RESOURCE.value) or (
        resource_type == CLOUDFORMATION_CUSTOM_RESOURCE
    )


def display_name(resource_type: ResourceType) -> str:
    """Name shown to users; the custom family is shown with a placeholder suffix."""
    if resource_type is ResourceType.CUSTOM_RESOURCE:
        return "Custom::Xxx"
    return resource_type.value


def validate_resource_types(resource_types: list[str]) -> list[str]:
    """Validate user supplied resource types against the registry.

    Args:
        resource_types: Resource type identifiers (``Custom::Xxx`` is accepted for the custom family)

    Returns:
        Normalized list of resource types without duplicates

    Raises:
        ValueError: If any resource type is not supported
    """
    normalized: list[str] = []
    for resource_type in resource_types:
        value = resource_type.strip()
        if is_custom_resource(value):
            value = ResourceType.CUSTOM_RESOURCE.value
        if value not in SUPPORTED_RESOURCE_TYPES:
            raise ValueError(
                f"Unsupported resource type: {resource_type}. "
                f"Supported types: {', '.join(SUPPORTED_RESOURCE_TYPES)}"
            )
        if value not in normalized:
            normalized.append(value)
    return normalized
