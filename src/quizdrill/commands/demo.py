"""
Demo Commands

Loads the built-in demo question set and starts a test over it.
"""

import click
from rich.console import Console

from ..cli.formatting import format_current_question
from ..cli.services import get_question_bank, save_session
from ..core.session import resolve_current_question
from ..data.demo import start_demo_session
from ..utils.logging import get_logger

console = Console()
logger = get_logger(__name__)


@click.group()
def demo():
    """Demo question set commands."""
    pass


@demo.command('start')
@click.option('--yes', is_flag=True, help='Replace the question bank without asking')
@click.pass_context
def start_demo(ctx, yes):
    """Replace the question bank with the demo set and start a test.

    \b
    🎲 EXAMPLES:

    quizdrill demo start --yes
    quizdrill test run
    """
    question_bank = get_question_bank(ctx)

    if len(question_bank) and not yes:
        if not click.confirm(f"This replaces all {len(question_bank)} questions in the bank. Continue?"):
            console.print("[dim]Cancelled[/dim]")
            return

    session = start_demo_session(question_bank)
    save_session(ctx, session)

    console.print(f"[green]✓ Loaded {len(question_bank)} demo questions and started test {session.id}[/green]")
    console.print(format_current_question(session, resolve_current_question(session, question_bank.index())))
    console.print("[dim]Answer with 'quizdrill test run' or 'quizdrill test answer'[/dim]")
