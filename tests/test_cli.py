import json

import pytest
from typer.testing import CliRunner

from main import app
from library import Library
from utils.ui_helpers import set_output_mode

runner = CliRunner()


@pytest.fixture(autouse=True)
def plain_output():
    set_output_mode("plain")
    yield
    set_output_mode("plain")


def invoke(store, *args):
    return runner.invoke(
        app, ["--books-file", store["books_file"], "--members-file", store["members_file"], *args]
    )


def test_list_no_books(store):
    result = invoke(store, "list-books")
    assert result.exit_code == 0
    assert "No books available." in result.stdout

def test_list_no_members(store):
    result = invoke(store, "list-members")
    assert result.exit_code == 0
    assert "No members registered." in result.stdout

def test_add_book_is_saved(store):
    result = invoke(store, "add-book", "Dune", "Frank Herbert")
    assert result.exit_code == 0
    assert "Book added successfully! (ID: 1)" in result.stdout

    result = invoke(store, "list-books")
    assert "ID: 1, Title: Dune, Author: Frank Herbert, Status: Available" in result.stdout

def test_delete_book(store):
    invoke(store, "add-book", "Dune", "Frank Herbert")

    result = invoke(store, "delete-book", "1")
    assert result.exit_code == 0
    assert "Book deleted successfully!" in result.stdout

    result = invoke(store, "delete-book", "1")
    assert result.exit_code == 0
    assert "Error: Book not found." in result.stdout

def test_add_and_delete_member(store):
    result = invoke(store, "add-member", "Alice")
    assert "Member added successfully! (ID: 1)" in result.stdout
    assert "ID: 1, Name: Alice" in invoke(store, "list-members").stdout

    assert "Member deleted successfully!" in invoke(store, "delete-member", "1").stdout
    assert "Error: Member not found." in invoke(store, "delete-member", "1").stdout

def test_borrow_and_return(store):
    invoke(store, "add-book", "Dune", "Frank Herbert")
    invoke(store, "add-member", "Alice")

    assert "Book borrowed successfully!" in invoke(store, "borrow", "1", "1").stdout
    assert "Error: Book is already borrowed." in invoke(store, "borrow", "1", "1").stdout
    assert Library(**store).find_book(1).is_available is False

    assert "Book returned successfully!" in invoke(store, "return", "1").stdout
    assert "Error: Book is not borrowed." in invoke(store, "return", "1").stdout
    assert Library(**store).find_book(1).is_available is True

def test_borrow_errors(store):
    assert "Error: Book not found." in invoke(store, "borrow", "3", "1").stdout
    invoke(store, "add-book", "Dune", "Frank Herbert")
    assert "Error: Member not found." in invoke(store, "borrow", "1", "9").stdout
    assert "Error: Book not found." in invoke(store, "return", "3").stdout

def test_non_numeric_id_is_rejected(store):
    result = invoke(store, "delete-book", "abc")
    assert result.exit_code != 0

def test_list_books_json(store):
    invoke(store, "add-book", "Dune", "Frank Herbert")
    result = invoke(store, "--output", "json", "list-books")
    assert result.exit_code == 0
    assert json.loads(result.stdout) == [
        {"id": 1, "title": "Dune", "author": "Frank Herbert", "is_available": True}
    ]

def test_list_members_rich(store):
    invoke(store, "add-member", "Alice")
    result = invoke(store, "-o", "rich", "list-members")
    assert result.exit_code == 0
    assert "Members" in result.stdout
    assert "Alice" in result.stdout

def test_stats(store):
    invoke(store, "add-book", "Dune", "Frank Herbert")
    invoke(store, "add-book", "Emma", "Jane Austen")
    invoke(store, "add-member", "Alice")
    invoke(store, "borrow", "2", "1")

    result = invoke(store, "stats")
    assert result.exit_code == 0
    assert "Total Books: 2" in result.stdout
    assert "Available Books: 1" in result.stdout
    assert "Borrowed Books: 1" in result.stdout
    assert "Total Members: 1" in result.stdout

def test_menu_command_reads_stdin(store):
    result = runner.invoke(
        app,
        ["--books-file", store["books_file"], "--members-file", store["members_file"], "menu"],
        input="4\nAlice\n9\n",
    )
    assert result.exit_code == 0
    assert "Member added successfully! (ID: 1)" in result.stdout
    assert "Exiting the system. Goodbye!" in result.stdout
    assert [m.name for m in Library(**store).list_members()] == ["Alice"]

def test_failed_save_is_reported(tmp_path):
    store = {
        "books_file": str(tmp_path / "missing" / "books.txt"),
        "members_file": str(tmp_path / "members.txt"),
    }
    result = invoke(store, "add-book", "Dune", "Frank Herbert")
    assert result.exit_code == 0
    assert "Book added successfully! (ID: 1)" in result.stdout
    assert "Some changes could not be saved." in result.stdout

def test_successful_save_has_no_notice(store):
    result = invoke(store, "add-member", "Alice")
    assert "Some changes could not be saved." not in result.stdout
