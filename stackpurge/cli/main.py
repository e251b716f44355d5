"""Main CLI entry point using Typer."""

import logging
import sys
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models.operation import OperationStatus
from ..operation.collection import OperatorCollection
from ..operation.deleter import StackDeleter
from ..operation.errors import StackPurgeError
from ..operation.factory import OperatorFactory
from ..operation.reporter import supported_resource_types_table
from ..resource_types import validate_resource_types
from ..utils.logging import setup_logging
from .config import Config

logger = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="stackpurge",
    help="Force delete CloudFormation stacks stuck in DELETE_FAILED",
    add_completion=False,
)

# Create Rich console for output
console = Console()

# Global config
config: Optional[Config] = None


@app.callback()
def main(
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="AWS profile name"),
    region: Optional[str] = typer.Option(None, "--region", "-r", help="AWS region"),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to YAML config (default: $STACKPURGE_CONFIG or ~/.stackpurge/config.yaml)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output except errors"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
):
    """Force delete CloudFormation stacks stuck in DELETE_FAILED."""
    global config

    # Load configuration
    try:
        config = Config.load(config_path)
    except ValueError as e:
        console.print(f"✗ Error: {e}", style="bold red")
        raise typer.Exit(code=1)

    # Override with CLI options
    if profile:
        config.aws_profile = profile
    if region:
        config.region = region

    # Setup logging
    log_level = "ERROR" if quiet else ("DEBUG" if verbose else config.log_level)
    setup_logging(level=log_level, verbose=verbose)

    # Disable colors if requested
    if no_color:
        console.no_color = True


@app.command()
def version():
    """Show version information."""
    import boto3

    from .. import __version__

    console.print(f"stackpurge version {__version__}")
    console.print(f"Python {sys.version.split()[0]}")
    console.print(f"boto3 {boto3.__version__}")


@app.command("types")
def list_types():
    """List the resource types supported for force deletion."""
    table = supported_resource_types_table()
    table.title = "Supported Resource Types"
    console.print(table)


def _print_preview(collection: OperatorCollection) -> None:
    if not collection.logical_resource_ids:
        console.print(f"No DELETE_FAILED resources in {collection.stack_name}", style="green")
        return

    table = Table(title=f"DELETE_FAILED resources of {collection.stack_name}")
    table.add_column("ResourceType")
    table.add_column("Resource")
    table.add_column("Action")
    for operator in collection.get_operators():
        for resource in operator.resources:
            table.add_row(resource.resource_type, resource.logical_resource_id, "[green]force delete[/green]")
    for resource in collection.unsupported_resources:
        table.add_row(resource.resource_type, resource.logical_resource_id, "[red]unsupported[/red]")
    console.print(table)

    if collection.unsupported_resources:
        console.print(
            f"\n⚠ {len(collection.unsupported_resources)} resources are unsupported or not selected, "
            "the deletion would fail",
            style="yellow",
        )


@app.command("delete")
def delete(
    stack_name: str = typer.Option(..., "--stack-name", "-s", help="Name or ID of the stack to delete"),
    resource_types: Optional[List[str]] = typer.Option(
        None,
        "--resource-type",
        "-t",
        help="Resource type allowed to be force deleted (repeatable, default: all supported types)",
    ),
    concurrency: Optional[int] = typer.Option(
        None, "--concurrency", "-c", min=1, help="Maximum concurrent deletions per resource type"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be force deleted without deleting"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """Delete a stack, force deleting its DELETE_FAILED resources.

    Examples:
        # Preview the DELETE_FAILED resources of a stack
        stackpurge delete --stack-name my-stack --dry-run

        # Only allow buckets and roles to be force deleted
        stackpurge delete -s my-stack -t AWS::S3::Bucket -t AWS::IAM::Role --yes
    """
    try:
        target_types = validate_resource_types(resource_types) if resource_types else config.resource_types
    except ValueError as e:
        console.print(f"✗ Error: {e}", style="bold red")
        raise typer.Exit(code=1)

    factory = OperatorFactory(
        region_name=config.region,
        profile_name=config.aws_profile,
        concurrency=concurrency or config.concurrency,
        iam_sleep_seconds=config.iam_retry_delay,
    )
    deleter = StackDeleter(factory, target_types)

    try:
        if dry_run:
            console.print("🔍 [bold]DRY-RUN MODE[/bold] - no resources will be deleted\n")
            _print_preview(deleter.preview(stack_name))
            return

        if not yes:
            typer.confirm(f"Delete stack {stack_name} and force delete its DELETE_FAILED resources?", abort=True)

        operation = deleter.execute(stack_name)
    except typer.Abort:
        raise
    except StackPurgeError as e:
        console.print(f"✗ {e}", style="bold red", markup=False)
        raise typer.Exit(code=1)
    except Exception as e:
        console.print(f"✗ Error: {e}", style="bold red", markup=False)
        logger.exception("Error in delete command")
        raise typer.Exit(code=1)

    if operation.logical_resource_ids:
        console.print(f"DELETE_FAILED resources: {', '.join(operation.logical_resource_ids)}")

    if operation.status != OperationStatus.COMPLETED:
        console.print(
            Panel(
                Text(operation.error_message or "Unknown error"),
                title=f"[bold red]✗ {stack_name} deletion failed[/bold red]",
                border_style="red",
            )
        )
        raise typer.Exit(code=1)

    console.print(f"✓ Deleted stack {stack_name} ({operation.duration_seconds:.1f}s)", style="green")


def cli_main():
    """Entry point for console script."""
    app()


if __name__ == "__main__":
    cli_main()
