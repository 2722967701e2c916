"""
CLI Output Formatting

Rich formatting utilities for question lists, the current test question
and session results.
"""

from typing import Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..core.session import TestSession
from ..core.types import Question
from ..evaluation.evaluator import AnswerStatus
from ..evaluation.metrics import SessionResults

console = Console()

STATUS_STYLES = {
    AnswerStatus.CORRECT: "green",
    AnswerStatus.INCORRECT: "red",
    AnswerStatus.UNANSWERED: "yellow",
}


def format_status(status: AnswerStatus) -> str:
    style = STATUS_STYLES.get(status, "white")
    return f"[{style}]{status.value}[/{style}]"


def truncate(text: Optional[str], width: int = 60) -> str:
    if not text:
        return ""
    return text if len(text) <= width else text[:width - 1] + "…"


def format_question_table(questions: Iterable[Question], title: str = "Question Bank") -> Table:
    """Table of questions with their expected answers."""
    table = Table(title=title, show_header=True, header_style="bold blue")
    table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="cyan")
    table.add_column("Prompt", style="white")
    table.add_column("Expected answer", style="green")
    table.add_column("Source", style="magenta")
    table.add_column("Tags", style="dim")

    for number, question in enumerate(questions, start=1):
        table.add_row(
            str(number),
            question.id,
            truncate(question.prompt),
            truncate(question.expected_answer, 40),
            question.source.value,
            ", ".join(question.tags or []),
        )

    return table


def format_current_question(session: TestSession, question: Optional[Question]) -> Panel:
    """Panel showing the current question of a session and the stored answer."""
    position = f"Question {session.current_index + 1} of {session.total}"

    if question is None:
        body = (
            "[yellow]This question is no longer in the question bank.[/yellow]\n"
            "[dim]It was edited or deleted after the test started; move on or finish the test.[/dim]"
        )
    else:
        answer = session.answer_for(question.id)
        body = f"[bold]{question.prompt}[/bold]\n\n"
        body += f"[dim]Your answer:[/dim] {answer}" if answer else "[dim]Not answered yet[/dim]"

    state = "[blue]finished[/blue]" if session.is_finished else "[green]in progress[/green]"
    return Panel(body, title=position, subtitle=state, border_style="blue")


def format_results_summary(results: SessionResults) -> Panel:
    """Panel with the session KPIs."""
    lines = [
        f"[bold]Accuracy:[/bold] {results.accuracy_percent}% ({results.correct}/{results.answered} answered correctly)",
        f"[bold]Completion:[/bold] {results.completion_percent}% ({results.answered}/{results.total} answered)",
        f"[green]Correct:[/green] {results.correct}   "
        f"[red]Incorrect:[/red] {results.incorrect}   "
        f"[yellow]Unanswered:[/yellow] {results.unanswered}",
    ]
    if results.missing:
        lines.append(f"[dim]{results.missing} question(s) no longer in the bank, counted as unanswered[/dim]")
    if results.duration_seconds is not None:
        minutes, seconds = divmod(int(results.duration_seconds), 60)
        lines.append(f"[dim]Time taken: {minutes}m {seconds:02d}s[/dim]")
    lines.append(f"[dim]Similarity threshold: {results.threshold_percent}%[/dim]")

    return Panel("\n".join(lines), title="Test Results", border_style="green")


def format_results_table(results: SessionResults, detailed: bool = False) -> Table:
    """Per-question results in session order."""
    table = Table(title="Answers", show_header=True, header_style="bold blue")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Prompt", style="white")
    table.add_column("Your answer", style="cyan")
    table.add_column("Expected", style="green")
    table.add_column("Status", justify="center")
    table.add_column("Similarity", justify="right")
    if detailed:
        table.add_column("Normalized (yours / expected)", style="dim")

    for item in results.items:
        if item.missing:
            prompt = "[yellow](missing question)[/yellow]"
            expected = ""
        else:
            prompt = truncate(item.question.prompt, 50)
            expected = truncate(item.question.expected_answer, 30)

        row = [
            str(item.position + 1),
            prompt,
            truncate(item.user_answer, 30),
            expected,
            format_status(item.status),
            f"{item.similarity}%" if item.scorable else "-",
        ]
        if detailed:
            if item.evaluation:
                row.append(f"{item.evaluation.normalized_user_answer} / {item.evaluation.normalized_expected_answer}")
            else:
                row.append("")
        table.add_row(*row)

    return table


def format_tag_table(results: SessionResults) -> Optional[Table]:
    if not results.by_tag:
        return None

    table = Table(title="By Tag", show_header=True, header_style="bold blue")
    table.add_column("Tag", style="magenta")
    table.add_column("Questions", justify="right")
    table.add_column("Answered", justify="right")
    table.add_column("Correct", justify="right", style="green")
    table.add_column("Accuracy", justify="right")

    for tag, breakdown in results.by_tag.items():
        table.add_row(tag, str(breakdown.total), str(breakdown.answered),
                      str(breakdown.correct), f"{breakdown.accuracy_percent}%")

    return table
