"""Custom resource operator."""

from __future__ import annotations

from ..models.stack_resource import StackResourceSummary
from ..resource_types import ResourceType
from .base import Operator


class CustomOperator(Operator):
    """Marks custom resources as handled without calling any API.

    Custom resources are deleted by their provider when the stack deletion is
    retried, so there is nothing to clear beforehand.
    """

    @property
    def resource_type(self) -> str:
        return ResourceType.CUSTOM_RESOURCE.value

    def delete_resources(self) -> None:
        return None

    def delete_resource(self, resource: StackResourceSummary) -> None:
        return None
