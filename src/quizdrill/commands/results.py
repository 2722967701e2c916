"""
Results Commands

This module contains the commands for reviewing, exporting and following
up on the results of a finished test session.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
import pandas as pd
from rich.console import Console
from rich.table import Table

from ..cli.formatting import format_results_summary, format_results_table, format_tag_table
from ..cli.services import get_app_config, get_question_bank, get_session_store
from ..core.session import TestSession
from ..evaluation.evaluator import AnswerEvaluator
from ..evaluation.keywords import generate_search_links, review_keywords
from ..evaluation.metrics import ResultsAggregator, SessionResults
from ..utils.logging import get_logger

console = Console()
logger = get_logger(__name__)


def compute_results(ctx: click.Context, session: TestSession) -> SessionResults:
    """Score a session against the current bank with the configured threshold."""
    threshold = get_app_config(ctx).evaluation.similarity_threshold_percent
    aggregator = ResultsAggregator(AnswerEvaluator(threshold))
    return aggregator.aggregate(session, get_question_bank(ctx).index())


def show_session_results(ctx: click.Context, session: TestSession, detailed: bool = False) -> SessionResults:
    session_results = compute_results(ctx, session)
    console.print(format_results_summary(session_results))
    console.print(format_results_table(session_results, detailed=detailed))

    tag_table = format_tag_table(session_results)
    if detailed and tag_table is not None:
        console.print(tag_table)

    return session_results


def _load_finished_session(ctx: click.Context) -> Optional[TestSession]:
    session = get_session_store(ctx).load_active()
    if session is None or not session.is_finished:
        console.print("[yellow]No finished test session found. Start one with 'quizdrill test start'[/yellow]")
        return None
    return session


@click.group()
def results():
    """Test results commands."""
    pass


@results.command('show')
@click.option('--detailed', '-d', is_flag=True, help='Show normalized answers and the per-tag breakdown')
@click.option('--format', 'output_format', type=click.Choice(['table', 'json']), default='table',
              help='Output format')
@click.pass_context
def show_results(ctx, detailed, output_format):
    """Show the results of the finished test session.

    \b
    📊 EXAMPLES:

    quizdrill results show
    quizdrill results show --detailed
    quizdrill results show --format json
    """
    session = _load_finished_session(ctx)
    if session is None:
        return

    if output_format == 'json':
        session_results = compute_results(ctx, session)
        click.echo(json.dumps(session_results.to_dict(), indent=2))
        return

    show_session_results(ctx, session, detailed=detailed)


@results.command('export')
@click.option('--format', 'output_format', type=click.Choice(['csv', 'json']), default='csv',
              help='Export format')
@click.option('--output', '-o', type=click.Path(), help='Output file path')
@click.pass_context
def export_results(ctx, output_format, output):
    """Export per-question results of the finished test session.

    \b
    📤 EXAMPLES:

    quizdrill results export
    quizdrill results export --format json --output results.json
    """
    session = _load_finished_session(ctx)
    if session is None:
        return

    session_results = compute_results(ctx, session)

    if not output:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output = f"results_{session.id}_{timestamp}.{output_format}"
    output_path = Path(output)

    try:
        if output_format == 'csv':
            frame = pd.DataFrame([item.to_row() for item in session_results.items])
            frame.to_csv(output_path, index=False)
        else:
            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump(session_results.to_dict(), f, indent=2)
    except OSError as e:
        console.print(f"[red]Error exporting results: {str(e)}[/red]")
        logger.exception("Results export failed")
        ctx.exit(1)

    console.print(f"[green]✓ Exported {session_results.total} result(s) to {output_path}[/green]")


@results.command('keywords')
@click.option('--links', is_flag=True, help='Include search links for each keyword')
@click.pass_context
def keywords(ctx, links):
    """List study keywords from the questions you missed."""
    session = _load_finished_session(ctx)
    if session is None:
        return

    session_results = compute_results(ctx, session)
    min_length = get_app_config(ctx).evaluation.keyword_min_length
    found = review_keywords(session_results, min_length=min_length)

    if not found:
        console.print("[green]Nothing to review: every question was answered correctly[/green]")
        return

    table = Table(title="Keywords to Review", show_header=True, header_style="bold blue")
    table.add_column("Keyword", style="cyan")
    if links:
        table.add_column("Links", style="dim", overflow="fold")

    for keyword in found:
        if links:
            search = generate_search_links(keyword)
            table.add_row(keyword, "\n".join([search.google, search.wikipedia, search.youtube]))
        else:
            table.add_row(keyword)

    console.print(table)
