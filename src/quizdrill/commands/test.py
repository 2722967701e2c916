"""
Test Session Commands

This module contains the commands for taking a test: starting a session,
answering and moving between questions, finishing and retaking. The
active session is saved after every step, so a run can continue across
invocations.
"""

import random
from typing import Optional

import click
from rich.console import Console

from ..cli.formatting import format_current_question
from ..cli.services import get_app_config, get_question_bank, get_session_store, save_session
from ..core.session import (
    TestSession,
    finish_session,
    missing_question_ids,
    navigate,
    next_question,
    previous_question,
    record_answer,
    resolve_current_question,
    retake_session,
    start_session,
)
from ..utils.logging import get_logger
from .results import show_session_results

console = Console()
logger = get_logger(__name__)

RUN_COMMANDS_HINT = "Answer (:back, :skip, :finish, :quit)"


def _load_session(ctx: click.Context) -> Optional[TestSession]:
    session = get_session_store(ctx).load_active()
    if session is None:
        console.print("[yellow]No active test session. Start one with 'quizdrill test start'[/yellow]")
    return session


def _show_current(ctx: click.Context, session: TestSession) -> None:
    question = resolve_current_question(session, get_question_bank(ctx).index())
    console.print(format_current_question(session, question))


def _finish_and_report(ctx: click.Context, session: TestSession, draft: Optional[str] = None) -> TestSession:
    session = save_session(ctx, finish_session(session, final_draft=draft))
    console.print("[green]✓ Test finished[/green]\n")
    show_session_results(ctx, session)
    return session


@click.group(name='test')
def quiz():
    """Test session commands."""
    pass


@quiz.command('start')
@click.option('--shuffle/--no-shuffle', default=None, help='Shuffle question order')
@click.option('--limit', '-l', type=click.IntRange(min=1), help='Maximum number of questions')
@click.option('--tag', '-t', help='Only use questions with this tag')
@click.pass_context
def start(ctx, shuffle, limit, tag):
    """Start a new test over the question bank.

    Any previous session, finished or not, is replaced.

    \b
    🎯 EXAMPLES:

    quizdrill test start
    quizdrill test start --shuffle --limit 10
    quizdrill test start --tag science
    """
    session_config = get_app_config(ctx).session
    question_ids = get_question_bank(ctx).question_ids(tag)

    if not question_ids:
        if tag:
            console.print(f"[yellow]No questions tagged '{tag}'[/yellow]")
        else:
            console.print("[yellow]The question bank is empty. Add questions with 'quizdrill bank add' "
                          "or try 'quizdrill demo start'[/yellow]")
        return

    if shuffle is None:
        shuffle = session_config.shuffle
    if limit is None:
        limit = session_config.default_limit

    if shuffle:
        random.shuffle(question_ids)
    if limit:
        question_ids = question_ids[:limit]

    session = save_session(ctx, start_session(question_ids))
    console.print(f"[green]✓ Started test {session.id} with {session.total} question(s)[/green]")
    _show_current(ctx, session)


@quiz.command('status')
@click.pass_context
def status(ctx):
    """Show the current question of the active session."""
    session = _load_session(ctx)
    if session is None:
        return

    answered = sum(1 for qid in session.question_ids if session.answer_for(qid).strip())
    console.print(f"[bold]Session:[/bold] {session.id}   "
                  f"[bold]State:[/bold] {session.state.value}   "
                  f"[bold]Answered:[/bold] {answered}/{session.total}")

    missing = missing_question_ids(session, get_question_bank(ctx).index())
    if missing:
        console.print(f"[yellow]{len(missing)} question(s) in this test are no longer in the bank[/yellow]")
    _show_current(ctx, session)


@quiz.command('answer')
@click.argument('text')
@click.pass_context
def answer(ctx, text):
    """Store an answer for the current question.

    \b
    📝 EXAMPLES:

    quizdrill test answer "Paris"
    """
    session = _load_session(ctx)
    if session is None:
        return

    if session.is_finished:
        console.print("[yellow]This test is finished; answers can no longer be changed[/yellow]")
        return

    question_id = session.current_question_id
    if question_id is None:
        console.print("[yellow]This test has no questions[/yellow]")
        return

    save_session(ctx, record_answer(session, question_id, text))
    console.print(f"[green]✓ Answer saved for question {session.current_index + 1}[/green]")


@quiz.command('next')
@click.option('--draft', help='Answer to save for the current question before moving')
@click.pass_context
def next_(ctx, draft):
    """Move to the next question."""
    session = _load_session(ctx)
    if session is None:
        return

    session = save_session(ctx, next_question(session, draft))
    _show_current(ctx, session)


@quiz.command('back')
@click.option('--draft', help='Answer to save for the current question before moving')
@click.pass_context
def back(ctx, draft):
    """Move to the previous question."""
    session = _load_session(ctx)
    if session is None:
        return

    session = save_session(ctx, previous_question(session, draft))
    _show_current(ctx, session)


@quiz.command('goto')
@click.argument('number', type=int)
@click.option('--draft', help='Answer to save for the current question before moving')
@click.pass_context
def goto(ctx, number, draft):
    """Jump to question NUMBER (1-based, clamped to the test)."""
    session = _load_session(ctx)
    if session is None:
        return

    session = save_session(ctx, navigate(session, number - 1, draft))
    _show_current(ctx, session)


@quiz.command('finish')
@click.option('--draft', help='Answer to save for the current question before finishing')
@click.pass_context
def finish(ctx, draft):
    """Finish the test and show the results."""
    session = _load_session(ctx)
    if session is None:
        return

    if session.is_finished:
        console.print("[dim]This test was already finished[/dim]\n")
        show_session_results(ctx, session)
        return

    _finish_and_report(ctx, session, draft)


@quiz.command('retake')
@click.pass_context
def retake(ctx):
    """Start over with the same questions in the same order."""
    session = _load_session(ctx)
    if session is None:
        return

    session = save_session(ctx, retake_session(session))
    console.print(f"[green]✓ Started retake {session.id} with {session.total} question(s)[/green]")
    _show_current(ctx, session)


@quiz.command('exit')
@click.pass_context
def exit_(ctx):
    """Discard the active session."""
    get_session_store(ctx).clear_active()
    console.print("[green]✓ Test session cleared[/green]")


@quiz.command('run')
@click.pass_context
def run(ctx):
    """Answer the active test interactively.

    \b
    Type an answer and press Enter to move on. Commands:
      :back    previous question
      :skip    next question without changing the answer
      :finish  finish the test now
      :quit    stop here and keep the session for later
    """
    session = _load_session(ctx)
    if session is None:
        return

    if session.is_finished:
        console.print("[yellow]This test is finished. Use 'quizdrill results show' or "
                      "'quizdrill test retake'[/yellow]")
        return

    if session.total == 0:
        console.print("[yellow]This test has no questions[/yellow]")
        return

    while not session.is_finished:
        _show_current(ctx, session)
        existing = session.answer_for(session.current_question_id)
        reply = click.prompt(RUN_COMMANDS_HINT, default=existing, show_default=bool(existing))
        command = reply.strip().lower()
        at_last = session.current_index >= session.total - 1

        if command == ':quit':
            save_session(ctx, session)
            console.print("[dim]Session saved. Continue with 'quizdrill test run'[/dim]")
            return
        if command == ':finish':
            session = _finish_and_report(ctx, session)
            break
        if command == ':back':
            session = save_session(ctx, previous_question(session))
            continue

        draft = None if command == ':skip' else reply
        if at_last:
            session = save_session(ctx, navigate(session, session.current_index, draft))
            if click.confirm("That was the last question. Finish the test?", default=True):
                session = _finish_and_report(ctx, session)
        else:
            session = save_session(ctx, next_question(session, draft))

    logger.debug(f"Interactive run ended for session {session.id}")
