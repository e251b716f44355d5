"""Failure report rendering.

Formats the unsupported resource report shown when DELETE_FAILED resources of a
stack could not be handled.
"""

from __future__ import annotations

from typing import List

from rich.console import Console
from rich.table import Table

from ..models.stack_resource import StackResourceSummary
from ..resource_types import RESOURCE_TYPE_DESCRIPTIONS, display_name

REPORT_WIDTH = 160


def _render(table: Table) -> str:
    console = Console(width=REPORT_WIDTH, color_system=None)
    with console.capture() as capture:
        console.print(table)
    return capture.get()


def unsupported_resources_table(resources: List[StackResourceSummary]) -> Table:
    """Build a table of unsupported (or unselected) resources."""
    table = Table()
    table.add_column("ResourceType")
    table.add_column("Resource")
    for resource in resources:
        table.add_row(resource.resource_type, resource.logical_resource_id)
    return table


def supported_resource_types_table() -> Table:
    """Build a reference table of every supported resource type."""
    table = Table()
    table.add_column("ResourceType")
    table.add_column("Description")
    for resource_type, description in RESOURCE_TYPE_DESCRIPTIONS.items():
        table.add_row(display_name(resource_type), description)
    return table


def format_unsupported_resources(stack_name: str, resources: List[StackResourceSummary]) -> str:
    """Format the full unsupported resource report.

    Args:
        stack_name: Stack whose deletion failed
        resources: Resources whose type was unsupported or not selected

    Returns:
        Multi-section plain text report
    """
    title = f"{stack_name} deletion is FAILED !!!\n"
    unsupported = (
        "\nThese are the resources unsupported (or you did not select), so failed delete:\n"
        + _render(unsupported_resources_table(resources))
    )
    supported = (
        "\nSupported resources for force deletion of DELETE_FAILED resources are followings.\n"
        + _render(supported_resource_types_table())
    )
    return title + unsupported + supported
