import logging
from typing import Optional, TextIO

import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt
from rich.markup import escape
from rich import box

from library import Library, LoanResult
from config import settings
from utils.ui_helpers import set_output_mode, print_books, print_members, print_stats_result
from utils.validators import TextValidator

APP_NAME = settings.app_name

console = Console(highlight=False)

MENU_ITEMS = [
    ("1", "Add Book"),
    ("2", "Delete Book"),
    ("3", "Display Books"),
    ("4", "Add Member"),
    ("5", "Delete Member"),
    ("6", "Display Members"),
    ("7", "Borrow Book"),
    ("8", "Return Book"),
    ("9", "Exit"),
]

SAVE_FAILED = "Some changes could not be saved."

LOAN_ERRORS = {
    LoanResult.BOOK_NOT_FOUND: "Error: Book not found.",
    LoanResult.MEMBER_NOT_FOUND: "Error: Member not found.",
    LoanResult.ALREADY_BORROWED: "Error: Book is already borrowed.",
    LoanResult.NOT_BORROWED: "Error: Book is not borrowed.",
}


def configure_logging() -> None:
    logging.basicConfig(level=settings.log_level, format="%(levelname)s: %(message)s")


# --- Result reporting shared by the menu and the one-shot commands ---
def _success(out: Console, message: str) -> None:
    out.print(f"[green]{escape(message)}[/]")

def _failure(out: Console, message: str) -> None:
    out.print(f"[bold red]{escape(message)}[/]")

def report_book_added(out: Console, book) -> None:
    _success(out, f"Book added successfully! (ID: {book.id})")

def report_member_added(out: Console, member) -> None:
    _success(out, f"Member added successfully! (ID: {member.id})")

def report_deleted(out: Console, deleted: bool, kind: str) -> None:
    if deleted:
        _success(out, f"{kind} deleted successfully!")
    else:
        _failure(out, f"Error: {kind} not found.")

def report_loan(out: Console, result: LoanResult, success: str) -> None:
    if result.ok:
        _success(out, success)
    else:
        _failure(out, LOAN_ERRORS[result])


# --- Interactive menu ---
def render_menu(out: Console) -> None:
    table = Table.grid(padding=(0, 2))
    table.add_column(justify="right", style="bold cyan", width=4)
    table.add_column(justify="left", style="white")
    for key, label in MENU_ITEMS:
        table.add_row(f"{key}.", label)

    out.print(Panel(table, title=APP_NAME, border_style="cyan", box=box.HEAVY, padding=(1, 2)))


def _ask_text(out: Console, prompt: str, stream: Optional[TextIO]) -> str:
    return TextValidator.sanitize_text(Prompt.ask(prompt, console=out, stream=stream))


def _ask_id(out: Console, prompt: str, stream: Optional[TextIO]) -> int:
    # IntPrompt re-asks until it gets an integer
    return IntPrompt.ask(prompt, console=out, stream=stream)


class _ScriptedInput:
    """Wraps a prompt stream so that running out of input raises EOFError, as input() does."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def readline(self) -> str:
        line = self._stream.readline()
        if not line:
            raise EOFError
        return line


def _exit_menu(lib: Library, out: Console) -> None:
    if not lib.close():
        out.print(f"[yellow]{SAVE_FAILED}[/]")
    out.print("Exiting the system. Goodbye!")


def run_menu(lib: Library, out: Optional[Console] = None, stream: Optional[TextIO] = None) -> None:
    """Numbered menu loop. Choosing Exit, or reaching the end of input, saves the library and returns."""
    out = out or console
    if stream is not None:
        stream = _ScriptedInput(stream)
    choices = [key for key, _ in MENU_ITEMS]

    try:
        while True:
            render_menu(out)
            # Prompt re-asks on anything outside the menu
            choice = Prompt.ask("Enter your choice", choices=choices, show_choices=False,
                                console=out, stream=stream)

            if choice == "1":
                title = _ask_text(out, "Enter book title", stream)
                author = _ask_text(out, "Enter book author", stream)
                report_book_added(out, lib.add_book(title, author))
            elif choice == "2":
                book_id = _ask_id(out, "Enter book ID to delete", stream)
                report_deleted(out, lib.delete_book(book_id), "Book")
            elif choice == "3":
                print_books(lib.list_books(), console=out)
            elif choice == "4":
                name = _ask_text(out, "Enter member name", stream)
                report_member_added(out, lib.add_member(name))
            elif choice == "5":
                member_id = _ask_id(out, "Enter member ID to delete", stream)
                report_deleted(out, lib.delete_member(member_id), "Member")
            elif choice == "6":
                print_members(lib.list_members(), console=out)
            elif choice == "7":
                book_id = _ask_id(out, "Enter book ID to borrow", stream)
                member_id = _ask_id(out, "Enter member ID", stream)
                report_loan(out, lib.borrow_book(book_id, member_id), "Book borrowed successfully!")
            elif choice == "8":
                book_id = _ask_id(out, "Enter book ID to return", stream)
                report_loan(out, lib.return_book(book_id), "Book returned successfully!")
            elif choice == "9":
                _exit_menu(lib, out)
                return
            out.print()  # blank line between operations
    except EOFError:
        out.print()
        _exit_menu(lib, out)


# --- Typer CLI ---
app = typer.Typer(help=APP_NAME)


def _open_library(ctx: typer.Context) -> Library:
    options = ctx.obj or {}
    return Library(books_file=options.get("books_file"), members_file=options.get("members_file"))


@app.callback(invoke_without_command=True)
def _global_options(
    ctx: typer.Context,
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    books_file: Optional[str] = typer.Option(None, "--books-file", help="Books store (default: books.txt)"),
    members_file: Optional[str] = typer.Option(None, "--members-file", help="Members store (default: members.txt)"),
):
    """Global options. Without a command the interactive menu starts."""
    configure_logging()
    if output:
        set_output_mode(output)
    ctx.obj = {"books_file": books_file, "members_file": members_file}
    if ctx.invoked_subcommand is None:
        run_menu(_open_library(ctx))


@app.command("menu")
def cli_menu(ctx: typer.Context):
    """Start the interactive menu."""
    run_menu(_open_library(ctx))


def _save(lib: Library) -> None:
    if not lib.close():
        console.print(f"[yellow]{SAVE_FAILED}[/]")


@app.command("add-book")
def cli_add_book(ctx: typer.Context, title: str, author: str):
    """Add a book to the catalog."""
    lib = _open_library(ctx)
    book = lib.add_book(TextValidator.sanitize_text(title), TextValidator.sanitize_text(author))
    report_book_added(console, book)
    _save(lib)


@app.command("delete-book")
def cli_delete_book(ctx: typer.Context, book_id: int):
    """Delete a book by ID."""
    lib = _open_library(ctx)
    report_deleted(console, lib.delete_book(book_id), "Book")
    _save(lib)


@app.command("list-books")
def cli_list_books(ctx: typer.Context):
    """List all books."""
    print_books(_open_library(ctx).list_books())


@app.command("add-member")
def cli_add_member(ctx: typer.Context, name: str):
    """Register a member."""
    lib = _open_library(ctx)
    report_member_added(console, lib.add_member(TextValidator.sanitize_text(name)))
    _save(lib)


@app.command("delete-member")
def cli_delete_member(ctx: typer.Context, member_id: int):
    """Delete a member by ID."""
    lib = _open_library(ctx)
    report_deleted(console, lib.delete_member(member_id), "Member")
    _save(lib)


@app.command("list-members")
def cli_list_members(ctx: typer.Context):
    """List all members."""
    print_members(_open_library(ctx).list_members())


@app.command("borrow")
def cli_borrow(ctx: typer.Context, book_id: int, member_id: int):
    """Lend a book to a member."""
    lib = _open_library(ctx)
    report_loan(console, lib.borrow_book(book_id, member_id), "Book borrowed successfully!")
    _save(lib)


@app.command("return")
def cli_return(ctx: typer.Context, book_id: int):
    """Return a borrowed book."""
    lib = _open_library(ctx)
    report_loan(console, lib.return_book(book_id), "Book returned successfully!")
    _save(lib)


@app.command("stats")
def cli_stats(ctx: typer.Context):
    """Show catalog statistics."""
    print_stats_result(_open_library(ctx).get_statistics())


if __name__ == "__main__":
    app()
