# src/interface/cli.py

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.markup import escape
from rich.table import Table

from src.domain.models import Document


console = Console()

LABEL_WIDTH = 15
TEXT_WIDTH = 120


# ─── Text helpers ─────────────────────────────────────────────────────────────

def default_text(value: Optional[str]) -> str:
    return "" if value is None else value


def sanitize(text: str) -> str:
    """Keep letters, digits and spaces only."""
    return "".join(c for c in text if c.isalnum() or c == " ")


def indent(label: str, width: int) -> str:
    """Right-align label in a column of the given width."""
    if not label:
        return label
    return " " * max(0, width - len(label)) + label


def abbreviate(text: Optional[str], max_width: int) -> Optional[str]:
    """
    Fit text into max_width characters by eliding its middle: "start...end".

    Text that already fits is returned untouched; longer text is sanitized
    first. Below a width of 5 there is no room for "a...b", so it is cut.
    """
    if not text or len(text) <= max_width:
        return text

    text = sanitize(text)

    if max_width < 5:
        return text[:max_width]

    available = max_width - 3
    start_chars = available // 2
    end_chars = available - start_chars
    return text[:start_chars] + "..." + text[len(text) - end_chars:]


# ─── Display ──────────────────────────────────────────────────────────────────

def display_welcome_banner() -> None:
    console.print(Panel.fit(
        "[bold cyan]🎙 Podcast Episode Search[/bold cyan]\n"
        "[dim]relational store → index store → relational or full-text search[/dim]",
        box=box.DOUBLE,
        border_style="cyan",
    ))


def display_sync_status(num_documents: int) -> None:
    console.print(
        f"\n[green]✓[/green] Index synced — [bold]{num_documents}[/bold] documents ready for search.\n"
    )


def display_results(query: str, strategy: str, documents: List[Document]) -> None:
    console.print(
        f"\nthere are [bold]{len(documents)}[/bold] results for the search term "
        f"\\[{escape(query)}] [dim]({strategy})[/dim]\n"
    )

    for rank, document in enumerate(documents, start=1):
        table = Table(show_header=False, box=box.SIMPLE, padding=(0, 1))
        table.add_column(width=LABEL_WIDTH, style="dim")
        table.add_column(max_width=TEXT_WIDTH)

        for label, value in (
            ("id", document.id),
            ("title", document.title),
            ("description", document.description),
            ("transcript", document.transcript),
        ):
            table.add_row(indent(label, LABEL_WIDTH), abbreviate(default_text(value), TEXT_WIDTH))

        console.print(Panel(
            table,
            title=f"[bold]#{rank}[/bold]",
            border_style="cyan",
            box=box.ROUNDED,
        ))


def display_error(message: str) -> None:
    console.print(f"\n[bold red]✗ Error:[/bold red] {message}\n")
