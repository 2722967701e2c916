"""
CLI Entry Point

Main command-line interface for quizdrill, the self-study quiz engine,
using Click framework with rich output formatting.
"""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel

from .core.config import get_config, reload_config
from .core.exceptions import QuizDrillException
from .utils.logging import setup_logging, get_logger
from .utils.help_text import show_help_with_markdown

from .commands import bank, demo, document, results, quiz, config_show, config_validate

console = Console()
logger = get_logger(__name__)


@click.group(invoke_without_command=True)
@click.option('--config', '-c', type=click.Path(exists=True), help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--debug', is_flag=True, help='Enable debug mode')
@click.option('--help', '-h', is_flag=True, expose_value=False, is_eager=True,
              callback=show_help_with_markdown, help='Show this message and exit')
@click.pass_context
def cli(ctx, config, verbose, debug):
    """quizdrill - Self-study quiz engine"""

    ctx.ensure_object(dict)

    try:
        if config:
            app_config = reload_config(Path(config))
        else:
            app_config = get_config()

        if debug:
            app_config.debug = debug

        if verbose or debug:
            app_config.logging.level = 'DEBUG'
        setup_logging(app_config)

        ctx.obj['config'] = app_config

    except Exception as e:
        console.print(f"[red]Error initializing application: {str(e)}[/red]")
        sys.exit(1)

    if ctx.invoked_subcommand is None:
        _display_banner()


def _display_banner():
    """Display application banner."""
    banner = Panel.fit(
        "[bold blue]quizdrill[/bold blue]\n"
        "[dim]Self-study quiz engine[/dim]\n\n"
        "Use --help for available commands",
        title="📚 Study",
        border_style="blue"
    )
    console.print(banner)


# ===== CONFIG COMMANDS =====

@cli.group()
def config():
    """Configuration management commands."""
    pass


config.add_command(config_show, name='show')
config.add_command(config_validate, name='validate')


# ===== FEATURE GROUPS =====

cli.add_command(bank)
cli.add_command(quiz)
cli.add_command(results)
cli.add_command(document)
cli.add_command(demo)


def main():
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(1)
    except QuizDrillException as e:
        logger.error(f"Application error: {str(e)}")
        console.print(f"[red]Error: {str(e)}[/red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Unexpected error: {str(e)}[/red]")
        logger.exception("Unexpected error in main")
        sys.exit(1)


if __name__ == '__main__':
    main()
