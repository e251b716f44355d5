"""Exceptions raised while force deleting stacks."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..models.stack_resource import StackResourceSummary


class StackPurgeError(Exception):
    """Base exception for all force deletion errors."""

    pass


class StackNotFoundError(StackPurgeError):
    """Raised when the stack to delete does not exist."""

    def __init__(self, stack_name: str):
        self.stack_name = stack_name
        super().__init__(f"{stack_name} not found")


class TerminationProtectionError(StackPurgeError):
    """Raised when the stack has termination protection enabled."""

    def __init__(self, stack_name: str):
        self.stack_name = stack_name
        super().__init__(
            f"TerminationProtectionError: {stack_name} has termination protection enabled. "
            "Disable it before force deleting the stack."
        )


class NotRootStackError(StackPurgeError):
    """Raised when a nested stack is requested directly."""

    def __init__(self, stack_name: str, root_stack_id: Optional[str] = None):
        self.stack_name = stack_name
        self.root_stack_id = root_stack_id
        message = f"NotRootStackError: {stack_name} is a nested stack, delete its root stack instead"
        if root_stack_id:
            message = f"{message} ({root_stack_id})"
        super().__init__(message)


class UnsupportedResourceError(StackPurgeError):
    """Raised when DELETE_FAILED resources were not handled by any operator.

    Carries the rendered report built by
    :func:`stackpurge.operation.reporter.format_unsupported_resources`.
    """

    def __init__(self, stack_name: str, resources: List[StackResourceSummary], report: str):
        self.stack_name = stack_name
        self.resources = resources
        self.report = report
        super().__init__(f"UnsupportedResourceError: {report}")


class DeleteObjectsError(StackPurgeError):
    """Raised when S3 reports per-object failures for a DeleteObjects request."""

    def __init__(self, bucket_name: str, errors: List[Dict[str, Any]]):
        self.bucket_name = bucket_name
        self.errors = errors
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Enumerate Code, Key, VersionId and Message of every failed object."""
        lines = [f"DeleteObjectsError: failed to delete the following objects from {self.bucket_name}"]
        for error in self.errors:
            lines.append(f"Code: {error.get('Code', '')}")
            lines.append(f"Key: {error.get('Key', '')}")
            lines.append(f"VersionId: {error.get('VersionId', '')}")
            lines.append(f"Message: {error.get('Message', '')}")
        return "\n".join(lines) + "\n"


class BucketNotEmptyError(StackPurgeError):
    """Raised when a bucket still reports objects after the maximum number of emptying passes."""

    def __init__(self, bucket_name: str, remaining: int, passes: int):
        self.bucket_name = bucket_name
        self.remaining = remaining
        self.passes = passes
        super().__init__(
            f"BucketNotEmptyError: {bucket_name} still has {remaining} object versions after {passes} passes"
        )


class ForceDeletionError(StackPurgeError):
    """Aggregate of the failures raised by the operators of one stack."""

    def __init__(self, stack_name: str, errors: List[Exception]):
        self.stack_name = stack_name
        self.errors = errors
        details = "\n".join(f"- {error}" for error in errors)
        super().__init__(f"{stack_name} force deletion failed with {len(errors)} errors:\n{details}")
