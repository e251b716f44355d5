"""Stack resource summary model.

Read-only snapshot of one resource as reported by the owning CloudFormation stack.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

DELETE_FAILED = "DELETE_FAILED"


@dataclass(frozen=True)
class StackResourceSummary:
    """Stack resource summary entity.

    Mirrors the fields of a CloudFormation ``StackResourceSummary`` that matter
    for force deletion. Instances are immutable once collected from the stack.

    Attributes:
        logical_resource_id: Logical ID of the resource in the template
        physical_resource_id: Physical name or ARN of the resource (may be empty)
        resource_type: CloudFormation resource type (e.g., "AWS::S3::Bucket")
        resource_status: Current status reported by CloudFormation
        resource_status_reason: Reason reported with the status (optional)
    """

    logical_resource_id: str
    physical_resource_id: str
    resource_type: str
    resource_status: str
    resource_status_reason: Optional[str] = None

    @property
    def is_delete_failed(self) -> bool:
        """True if CloudFormation failed to delete this resource."""
        return self.resource_status == DELETE_FAILED

    @classmethod
    def from_boto(cls, data: Dict[str, Any]) -> "StackResourceSummary":
        """Create summary from a ``list_stack_resources`` response entry."""
        return cls(
            logical_resource_id=data["LogicalResourceId"],
            physical_resource_id=data.get("PhysicalResourceId", ""),
            resource_type=data["ResourceType"],
            resource_status=data["ResourceStatus"],
            resource_status_reason=data.get("ResourceStatusReason"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert summary to dictionary for display and logging."""
        return {
            "logical_resource_id": self.logical_resource_id,
            "physical_resource_id": self.physical_resource_id,
            "resource_type": self.resource_type,
            "resource_status": self.resource_status,
            "resource_status_reason": self.resource_status_reason,
        }
