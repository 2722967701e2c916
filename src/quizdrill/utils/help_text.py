from rich.console import Console
from rich.markdown import Markdown

console = Console()

def show_help_with_markdown(ctx, param, value):
    """Custom help callback that renders help text using Rich markdown"""
    if not value or ctx.resilient_parsing:
        return

    markdown_help = """
# quizdrill - Self-study Quiz Engine

## 🚀 QUICK START EXAMPLES

```bash
quizdrill demo start --yes
quizdrill test run
quizdrill results show --detailed
quizdrill bank add "What is the capital of France?" "Paris" --tag geography
quizdrill test start --shuffle --limit 10
quizdrill document extract notes.pdf
```

## 💡 TIP
- Use `quizdrill COMMAND --help` for detailed options on any command.
- Answers are matched after normalization; close spellings count as correct
  when their similarity reaches the configured threshold.

## Options
- `--config, -c PATH`: Configuration file path
- `--verbose, -v`: Enable verbose logging
- `--debug`: Enable debug mode
- `--help`: Show this message and exit

## Commands
- bank      Question bank management commands.
- config    Configuration management commands.
- demo      Demo question set commands.
- document  Document text extraction commands.
- results   Test results commands.
- test      Test session commands.
"""

    console.print(Markdown(markdown_help))
    ctx.exit()
