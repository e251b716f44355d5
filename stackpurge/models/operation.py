"""Force delete operation model.

Represents one force deletion run against a root stack with its outcome.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class OperationStatus(Enum):
    """Operation execution status with state transitions."""

    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class ForceDeleteOperation:
    """Force delete operation entity.

    State transitions:
        executing → completed (stack deleted)
        executing → failed (an operator, the unsupported check or the stack deletion failed)

    Attributes:
        stack_name: Name or ID of the root stack
        status: Current execution status
        target_resource_types: Resource types the run was allowed to force delete
        logical_resource_ids: DELETE_FAILED logical IDs found on the root stack
        force_deleted: True if DELETE_FAILED resources had to be cleared first
        error_message: Error reported to the user if failed (optional)
        started_at: When the run started
        completed_at: When the run finished (optional)
    """

    stack_name: str
    status: OperationStatus
    target_resource_types: list[str] = field(default_factory=list)
    logical_resource_ids: list[str] = field(default_factory=list)
    force_deleted: bool = False
    error_message: Optional[str] = None
    started_at: datetime = field(default_factory=datetime.utcnow)
    completed_at: Optional[datetime] = None

    @property
    def duration_seconds(self) -> Optional[float]:
        """Elapsed seconds between start and completion."""
        if self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()

    def validate(self) -> bool:
        """Validate operation invariants.

        Returns:
            True if validation passes

        Raises:
            ValueError: If any validation rule fails
        """
        if self.status == OperationStatus.FAILED and not self.error_message:
            raise ValueError("Failed status requires error_message")

        if self.status == OperationStatus.COMPLETED and self.error_message:
            raise ValueError("Completed status cannot have an error_message")

        if self.completed_at and self.completed_at < self.started_at:
            raise ValueError("Completion time before start time")

        return True
