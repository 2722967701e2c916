"""
Question Bank Commands

This module contains the commands for authoring and managing questions.
"""

import click
from rich.console import Console

from ..cli.formatting import format_question_table
from ..cli.services import get_question_bank
from ..core.types import QuestionSource
from ..utils.logging import get_logger

console = Console()
logger = get_logger(__name__)

SOURCE_CHOICES = [source.value for source in QuestionSource]


@click.group()
def bank():
    """Question bank management commands."""
    pass


@bank.command('add')
@click.argument('prompt')
@click.argument('answer')
@click.option('--tag', '-t', 'tags', multiple=True, help='Tag for grouping (repeatable)')
@click.option('--source', type=click.Choice(SOURCE_CHOICES), default=QuestionSource.MANUAL.value,
              help='Where the question comes from')
@click.pass_context
def add_question(ctx, prompt, answer, tags, source):
    """Add a question and its expected answer.

    \b
    📝 EXAMPLES:

    quizdrill bank add "What is the capital of France?" "Paris"
    quizdrill bank add "Chemical symbol for gold?" "Au" --tag science
    """
    question = get_question_bank(ctx).add_question(prompt, answer, source=QuestionSource(source), tags=tags)

    if question is None:
        console.print("[yellow]Both the question and the expected answer are required; nothing was added[/yellow]")
        return

    console.print(f"[green]✓ Added question {question.id}[/green]")


@bank.command('list')
@click.option('--tag', '-t', help='Only show questions with this tag')
@click.pass_context
def list_questions(ctx, tag):
    """List the questions in the bank."""
    question_bank = get_question_bank(ctx)
    questions = [q for q in question_bank if tag is None or q.has_tag(tag)]

    if not questions:
        console.print("[yellow]No questions found. Add one with 'quizdrill bank add'[/yellow]")
        return

    console.print(format_question_table(questions))
    console.print(f"\n[dim]Showing {len(questions)} of {len(question_bank)} questions[/dim]")


@bank.command('update')
@click.argument('question_id')
@click.option('--prompt', '-p', help='New question text')
@click.option('--answer', '-a', help='New expected answer')
@click.pass_context
def update_question(ctx, question_id, prompt, answer):
    """Update a question's text or expected answer.

    \b
    Blank values keep the current text.
    """
    updated = get_question_bank(ctx).update_question(question_id, prompt=prompt, expected_answer=answer)

    if updated is None:
        console.print(f"[red]Question {question_id} not found[/red]")
        return

    console.print(f"[green]✓ Updated question {question_id}[/green]")


@bank.command('delete')
@click.argument('question_id')
@click.pass_context
def delete_question(ctx, question_id):
    """Delete a question by id."""
    if not get_question_bank(ctx).delete_question(question_id):
        console.print(f"[red]Question {question_id} not found[/red]")
        return

    console.print(f"[green]✓ Deleted question {question_id}[/green]")


@bank.command('clear')
@click.option('--yes', is_flag=True, help='Skip the confirmation prompt')
@click.pass_context
def clear_questions(ctx, yes):
    """Delete every question in the bank."""
    question_bank = get_question_bank(ctx)

    if not yes and not click.confirm(f"Delete all {len(question_bank)} questions?"):
        console.print("[dim]Cancelled[/dim]")
        return

    question_bank.clear()
    console.print("[green]✓ Question bank cleared[/green]")
