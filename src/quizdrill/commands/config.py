"""
Configuration Commands

This module contains the configuration display and validation commands.
"""

import json

import click
import yaml
from rich.console import Console
from rich.table import Table

from ..core.exceptions import ConfigurationError
from ..utils.logging import get_logger

console = Console()
logger = get_logger(__name__)


@click.command()
@click.option('--format', 'output_format', type=click.Choice(['table', 'json', 'yaml']), default='table',
              help='Output format')
@click.pass_context
def show(ctx, output_format):
    """Show current configuration.

    \b
    📋 EXAMPLES:

    quizdrill config show
    quizdrill config show --format json
    quizdrill config show --format yaml
    """
    config = ctx.obj.get('config') if ctx.obj else None
    if not config:
        console.print("[red]Configuration not available[/red]")
        return

    config_dict = config.to_dict()

    if output_format == 'json':
        click.echo(json.dumps(config_dict, indent=2))
        return

    if output_format == 'yaml':
        click.echo(yaml.safe_dump(config_dict, default_flow_style=False, indent=2))
        return

    table = Table(title="Configuration")
    table.add_column("Section", style="cyan")
    table.add_column("Setting", style="magenta")
    table.add_column("Value", style="green")

    for key, value in config_dict.items():
        if isinstance(value, dict):
            for setting, setting_value in value.items():
                table.add_row(key, setting, str(setting_value))
        else:
            table.add_row("app", key, str(value))

    console.print(table)


@click.command()
@click.pass_context
def validate(ctx):
    """Validate current configuration.

    \b
    🔍 EXAMPLES:

    quizdrill config validate
    """
    config = ctx.obj.get('config') if ctx.obj else None
    if not config:
        console.print("[red]Configuration not available for validation[/red]")
        ctx.exit(1)

    try:
        config.validate()
    except ConfigurationError as e:
        console.print(f"[red]✗ Configuration invalid: {e.message}[/red]")
        logger.error(f"Configuration validation failed: {e}")
        ctx.exit(1)

    console.print("[green]✓ Configuration is valid[/green]")
