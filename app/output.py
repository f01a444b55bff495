# app/output.py
"""Output formatters for the Lawyer Agent CLI.

This module provides output formatting for query results:
- Console output using Rich library with panels and tables
- JSON output matching the HTTP API's response body

Usage:
    from app.output import format_console, format_json

    result = query("Explain champerty")
    print(format_console(result))  # Rich formatted string
    print(format_json(result))     # JSON string
"""

import json
from enum import Enum
from io import StringIO
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

from app.knowledge import Entry


class OutputFormat(Enum):
    """Supported output formats."""

    CONSOLE = "console"
    JSON = "json"


# Custom theme for console output
CONSOLE_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "red bold",
        "title": "cyan bold",
        "type": "magenta",
        "region": "green",
        "era": "yellow",
        "score": "cyan",
        "highlight": "white",
        "dim": "dim",
    }
)


def _render_result(console: Console, result: dict[str, Any]) -> None:
    """Print answer panel, results table and follow-ups to a console."""
    console.print()
    console.print(
        Panel(
            escape(result.get("answer", "")),
            title="[bold blue]ANSWER[/bold blue]",
            border_style="blue",
            padding=(1, 2),
        )
    )

    results = result.get("results", [])
    console.print()
    console.rule("[dim]Matched Entries[/dim]")
    console.print(
        f"[dim]{len(results)} result(s) | "
        f"Search mode: {result.get('search_mode', 'weighted')}[/dim]"
    )

    if results:
        console.print()
        table = Table(show_header=True, header_style="bold", border_style="dim")
        table.add_column("#", justify="right", width=3)
        table.add_column("Entry", style="title")
        table.add_column("Type", style="type")
        table.add_column("Region", style="region")
        table.add_column("Score", style="score", justify="right")
        table.add_column("Evidence", style="highlight", max_width=60)

        for i, item in enumerate(results, 1):
            highlights = item.get("highlights", [])
            evidence = highlights[0] if highlights else ""
            if len(evidence) > 120:
                evidence = evidence[:117] + "..."
            table.add_row(
                str(i),
                escape(item.get("title", "")),
                item.get("type", ""),
                item.get("region", ""),
                f"{item.get('score', 0.0):.2f}",
                escape(evidence),
            )

        console.print(table)

    follow_ups = result.get("followUps", [])
    if follow_ups:
        console.print()
        console.print("[bold]Follow-up questions[/bold]")
        for suggestion in follow_ups:
            console.print(f"  [info]>[/info] {escape(suggestion)}")

    console.print()


def format_console(result: dict[str, Any]) -> str:
    """Format query result for console output using Rich.

    Args:
        result: Query result dictionary from query().

    Returns:
        Formatted string for console display.
    """
    string_buffer = StringIO()
    console = Console(file=string_buffer, force_terminal=True, theme=CONSOLE_THEME)
    _render_result(console, result)
    return string_buffer.getvalue()


def format_json(result: dict[str, Any], pretty: bool = True) -> str:
    """Format query result as JSON in the API response shape.

    Args:
        result: Query result dictionary from query().
        pretty: If True, format with indentation. Default True.

    Returns:
        JSON string with answer, results, followUps and timestamp.
    """
    output = {
        "answer": result.get("answer", ""),
        "results": result.get("results", []),
        "followUps": result.get("followUps", []),
        "timestamp": result.get("timestamp"),
    }
    if pretty:
        return json.dumps(output, indent=2, ensure_ascii=False)
    return json.dumps(output, ensure_ascii=False)


def print_result(result: dict[str, Any], output_format: OutputFormat) -> None:
    """Print query result in the specified format.

    Args:
        result: Query result dictionary from query().
        output_format: Output format to use.
    """
    if output_format == OutputFormat.JSON:
        print(format_json(result))
    else:
        _render_result(Console(theme=CONSOLE_THEME), result)


def print_entries(entries: list[Entry]) -> None:
    """Print a table of knowledge-base entries."""
    console = Console(theme=CONSOLE_THEME)
    table = Table(show_header=True, header_style="bold", border_style="dim")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="title")
    table.add_column("Type", style="type")
    table.add_column("Region", style="region")
    table.add_column("Era", style="era")
    for entry in entries:
        table.add_row(entry.id, entry.title, entry.type, entry.region, entry.era)
    console.print(table)
    console.print(f"\nTotal: {len(entries)} entries")


def print_entry(entry: Entry) -> None:
    """Print one knowledge-base entry in full."""
    console = Console(theme=CONSOLE_THEME)
    body = [
        f"[type]{entry.type}[/type] | [region]{escape(entry.region)}[/region] | "
        f"[era]{escape(entry.era)}[/era]",
        "",
        f"[bold]{escape(entry.summary)}[/bold]",
        "",
        escape(entry.excerpt),
    ]
    if entry.citations:
        body += ["", "[bold]Citations[/bold]"] + [
            f"  - {escape(c)}" for c in entry.citations
        ]
    if entry.sources:
        body += ["", "[bold]Sources[/bold]"] + [
            f"  - {escape(s.label)}: {s.url}" for s in entry.sources
        ]
    console.print(
        Panel(
            "\n".join(body),
            title=f"[title]{escape(entry.title)}[/title]",
            border_style="blue",
            padding=(1, 2),
        )
    )
