import json
from typing import List, Any, Dict, Optional
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from config import settings

# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODES = {"plain", "json", "rich"}

_output_mode = settings.output_mode if settings.output_mode in OUTPUT_MODES else "plain"
_console = Console(highlight=False)

def set_output_mode(mode: str) -> None:
    global _output_mode
    mode = (mode or "").lower().strip()
    if mode in OUTPUT_MODES:
        _output_mode = mode
    # Unknown values are ignored; the current mode stays in effect

def get_output_mode() -> str:
    return _output_mode

def print_books(books: List[Any], console: Optional[Console] = None) -> None:
    """Print the book list in the current output mode.
    - plain: one 'ID: .., Title: .., Author: .., Status: ..' line per book, or 'No books available.'
    - json: JSON array of id, title, author, is_available
    - rich: Rich table
    """
    console = console or _console
    mode = get_output_mode()

    if mode == "json":
        console.print_json(json.dumps([b.to_dict() for b in books], ensure_ascii=False), highlight=False)
        return

    if not books:
        console.print("No books available.")
        return

    if mode == "rich":
        table = Table(title="📚 Books", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True, justify="right")
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Status")
        for b in books:
            status = "[green]Available[/]" if b.is_available else "[yellow]Borrowed[/]"
            table.add_row(str(b.id), escape(b.title), escape(b.author), status)
        console.print(table)
    else:
        for b in books:
            console.print(str(b), markup=False, soft_wrap=True)

def print_members(members: List[Any], console: Optional[Console] = None) -> None:
    """Same as print_books, for the member roster."""
    console = console or _console
    mode = get_output_mode()

    if mode == "json":
        console.print_json(json.dumps([m.to_dict() for m in members], ensure_ascii=False), highlight=False)
        return

    if not members:
        console.print("No members registered.")
        return

    if mode == "rich":
        table = Table(title="👥 Members", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True, justify="right")
        table.add_column("Name", style="white")
        for m in members:
            table.add_row(str(m.id), escape(m.name))
        console.print(table)
    else:
        for m in members:
            console.print(str(m), markup=False, soft_wrap=True)

def print_stats_result(stats: Dict[str, Any], console: Optional[Console] = None) -> None:
    console = console or _console
    mode = get_output_mode()

    total = stats.get("total_books", 0)
    available = stats.get("available_books", 0)
    borrowed = stats.get("borrowed_books", 0)
    members = stats.get("total_members", 0)

    if mode == "json":
        console.print_json(json.dumps({
            "total_books": total,
            "available_books": available,
            "borrowed_books": borrowed,
            "total_members": members,
        }), highlight=False)
    elif mode == "rich":
        content = (
            f"[bold]Total Books:[/] {total}\n"
            f"[bold]Available:[/] {available}\n"
            f"[bold]Borrowed:[/] {borrowed}\n"
            f"[bold]Members:[/] {members}"
        )
        console.print(Panel.fit(content, title="📊 Stats", border_style="blue"))
    else:
        console.print(f"Total Books: {total}")
        console.print(f"Available Books: {available}")
        console.print(f"Borrowed Books: {borrowed}")
        console.print(f"Total Members: {members}")
