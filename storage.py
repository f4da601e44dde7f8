"""Flat-file persistence for the catalog.

Books are stored as four lines per record (id, title, author, availability
as ``0``/``1``) and members as two lines (id, name). Decoding is a
best-effort prefix parse: the first malformed or incomplete record marks the
end of the data and everything before it is kept.
"""
import logging
import re
from typing import Iterable, List, Optional, Tuple

from book import Book
from member import Member

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"^\s*[-+]?\d+\s*$")
_FLAG_VALUES = {"0": False, "1": True}


class StorageError(Exception):
    """Base class for storage failures."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class StorageUnreadable(StorageError):
    pass


class StorageUnwritable(StorageError):
    pass


# ------------------------- Codec ------------------------- #
def _split_lines(text: str) -> List[str]:
    lines = text.split("\n")
    # A trailing newline terminates the last line; it does not start a new one.
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _skip_blank(lines: List[str], pos: int) -> int:
    while pos < len(lines) and not lines[pos].strip():
        pos += 1
    return pos


def _parse_id(line: str) -> Optional[int]:
    if not _ID_PATTERN.match(line):
        return None
    return int(line.strip())


def _read_id(lines: List[str], pos: int, fields: int) -> Tuple[Optional[int], int]:
    """Read an id line and check that ``fields`` more lines follow it."""
    pos = _skip_blank(lines, pos)
    if pos + fields >= len(lines):
        return None, pos
    return _parse_id(lines[pos]), pos + 1


def decode_books(text: str) -> List[Book]:
    lines = _split_lines(text)
    books: List[Book] = []
    pos = 0
    while True:
        book_id, pos = _read_id(lines, pos, 3)
        if book_id is None:
            break
        title = lines[pos].lstrip()
        author = lines[pos + 1]
        flag = _FLAG_VALUES.get(lines[pos + 2].strip())
        if flag is None:
            break
        books.append(Book(book_id, title, author, flag))
        pos += 3
    return books


def decode_members(text: str) -> List[Member]:
    lines = _split_lines(text)
    members: List[Member] = []
    pos = 0
    while True:
        member_id, pos = _read_id(lines, pos, 1)
        if member_id is None:
            break
        members.append(Member(member_id, lines[pos].lstrip()))
        pos += 1
    return members


def encode_books(books: Iterable[Book]) -> str:
    return "".join(
        f"{book.id}\n{book.title}\n{book.author}\n{int(book.is_available)}\n" for book in books
    )


def encode_members(members: Iterable[Member]) -> str:
    return "".join(f"{member.id}\n{member.name}\n" for member in members)


# ------------------------- Files ------------------------- #
def _read_text(path: str, label: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise StorageUnreadable(f"Unable to open {label} file: {path}", path) from exc


def _write_text(path: str, text: str, label: str) -> None:
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
    except OSError as exc:
        raise StorageUnwritable(f"Unable to save {label} file: {path}", path) from exc


def read_books(path: str) -> List[Book]:
    books = decode_books(_read_text(path, "books"))
    logger.info(f"Loaded {len(books)} books from {path}")
    return books


def read_members(path: str) -> List[Member]:
    members = decode_members(_read_text(path, "members"))
    logger.info(f"Loaded {len(members)} members from {path}")
    return members


def write_books(path: str, books: Iterable[Book]) -> None:
    _write_text(path, encode_books(books), "books")
    logger.info(f"Saved books to {path}")


def write_members(path: str, members: Iterable[Member]) -> None:
    _write_text(path, encode_members(members), "members")
    logger.info(f"Saved members to {path}")
