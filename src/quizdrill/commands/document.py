"""
Document Commands

Extracts readable text from PDF and DOCX files to help with writing
questions. Extraction is read-only: nothing is added to the question bank.
"""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel

from ..cli.services import get_app_config
from ..core.exceptions import DocumentExtractionError
from ..data.extraction import DocumentExtractor
from ..utils.logging import get_logger

console = Console()
logger = get_logger(__name__)


@click.group()
def document():
    """Document text extraction commands."""
    pass


@document.command('extract')
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', type=click.Path(), help='Write the extracted text (or JSON) to this file')
@click.option('--preview', type=click.IntRange(min=0), help='Number of characters to preview')
@click.option('--json', 'as_json', is_flag=True, help='Print the result as JSON')
@click.pass_context
def extract(ctx, file, output, preview, as_json):
    """Extract text from a PDF or DOCX file.

    \b
    📄 EXAMPLES:

    quizdrill document extract notes.pdf
    quizdrill document extract chapter1.docx --output chapter1.txt
    quizdrill document extract notes.pdf --json
    """
    if preview is None:
        preview = get_app_config(ctx).documents.preview_characters

    try:
        extracted = DocumentExtractor().extract_file(Path(file))
    except DocumentExtractionError as e:
        console.print(f"[red]{e.message}[/red]")
        logger.error(f"Document extraction failed for {file}: {e}")
        ctx.exit(1)

    if output:
        content = json.dumps(extracted.to_dict(), indent=2) if as_json else extracted.text
        Path(output).write_text(content, encoding='utf-8')
        console.print(f"[green]✓ Wrote {extracted.character_count} characters to {output}[/green]")
        return

    if as_json:
        click.echo(json.dumps(extracted.to_dict(), indent=2))
        return

    snippet = extracted.text[:preview]
    if extracted.character_count > preview:
        snippet += "…"

    console.print(Panel(
        snippet or "[dim]No text found[/dim]",
        title=extracted.file_name,
        subtitle=f"{extracted.character_count} characters",
        border_style="blue",
    ))
