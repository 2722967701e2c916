"""
CLI Service Wiring

Builds the store, question bank and session slot once per invocation
and keeps them on the click context.
"""

import click
from rich.console import Console

from ..core.config import get_config
from ..core.session import TestSession
from ..storage.kv_store import KeyValueStore
from ..storage.question_bank import QuestionBank
from ..storage.session_store import SessionStore

console = Console()


def _obj(ctx: click.Context) -> dict:
    ctx.ensure_object(dict)
    return ctx.obj


def get_app_config(ctx: click.Context):
    return _obj(ctx).get('config') or get_config()


def get_store(ctx: click.Context) -> KeyValueStore:
    obj = _obj(ctx)
    if 'store' not in obj:
        obj['store'] = KeyValueStore(get_app_config(ctx).storage.url)
    return obj['store']


def get_question_bank(ctx: click.Context) -> QuestionBank:
    obj = _obj(ctx)
    if 'bank' not in obj:
        obj['bank'] = QuestionBank(get_store(ctx))
    return obj['bank']


def get_session_store(ctx: click.Context) -> SessionStore:
    obj = _obj(ctx)
    if 'session_store' not in obj:
        obj['session_store'] = SessionStore(get_store(ctx))
    return obj['session_store']


def save_session(ctx: click.Context, session: TestSession) -> TestSession:
    """Persist the active session, warning on the console when the write fails."""
    if not get_session_store(ctx).save_active(session):
        console.print("[yellow]Warning: the session could not be saved[/yellow]")
    return session
