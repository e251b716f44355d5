"""Data models for stack force deletion."""

from __future__ import annotations

from .operation import ForceDeleteOperation, OperationStatus
from .stack_resource import DELETE_FAILED, StackResourceSummary

__all__ = [
    "DELETE_FAILED",
    "ForceDeleteOperation",
    "OperationStatus",
    "StackResourceSummary",
]
