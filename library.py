import logging
from enum import Enum
from typing import List, Optional, Dict, Any, Sequence, TypeVar

import storage
from book import Book
from config import settings
from member import Member
from storage import StorageError

logger = logging.getLogger(__name__)

_Record = TypeVar("_Record", Book, Member)


class LoanResult(str, Enum):
    """Outcome of a borrow or return request."""

    OK = "ok"
    BOOK_NOT_FOUND = "book_not_found"
    MEMBER_NOT_FOUND = "member_not_found"
    ALREADY_BORROWED = "already_borrowed"
    NOT_BORROWED = "not_borrowed"

    @property
    def ok(self) -> bool:
        return self is LoanResult.OK


class Library:
    """Owns the book catalog and member roster and their flat-file persistence.

    State is read once when the library is opened and written back by
    ``save()``/``close()``. Used as a context manager, the library saves on exit.
    """

    def __init__(self, books_file: Optional[str] = None, members_file: Optional[str] = None,
                 autoload: bool = True) -> None:
        self.books_file = books_file or settings.books_file
        self.members_file = members_file or settings.members_file
        self.books: List[Book] = []
        self.members: List[Member] = []
        if autoload:
            self.load()

    def __enter__(self) -> "Library":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------- Books ------------------------- #
    def add_book(self, title: str, author: str) -> Book:
        book = Book(self._next_id(self.books), title, author)
        self.books.append(book)
        return book

    def delete_book(self, book_id: int) -> bool:
        return self._delete(self.books, book_id)

    def list_books(self) -> List[Book]:
        return list(self.books)

    def find_book(self, book_id: int) -> Optional[Book]:
        return self._find(self.books, book_id)

    # ------------------------- Members ------------------------- #
    def add_member(self, name: str) -> Member:
        member = Member(self._next_id(self.members), name)
        self.members.append(member)
        return member

    def delete_member(self, member_id: int) -> bool:
        return self._delete(self.members, member_id)

    def list_members(self) -> List[Member]:
        return list(self.members)

    def find_member(self, member_id: int) -> Optional[Member]:
        return self._find(self.members, member_id)

    # ------------------------- Loans ------------------------- #
    def borrow_book(self, book_id: int, member_id: int) -> LoanResult:
        book = self.find_book(book_id)
        if book is None:
            return LoanResult.BOOK_NOT_FOUND
        if not book.is_available:
            return LoanResult.ALREADY_BORROWED
        if self.find_member(member_id) is None:
            return LoanResult.MEMBER_NOT_FOUND
        book.is_available = False
        return LoanResult.OK

    def return_book(self, book_id: int) -> LoanResult:
        # No borrower is recorded, so any caller may return a borrowed book.
        book = self.find_book(book_id)
        if book is None:
            return LoanResult.BOOK_NOT_FOUND
        if book.is_available:
            return LoanResult.NOT_BORROWED
        book.is_available = True
        return LoanResult.OK

    def get_statistics(self) -> Dict[str, Any]:
        """Get library statistics."""
        available = sum(1 for book in self.books if book.is_available)
        return {
            "total_books": len(self.books),
            "available_books": available,
            "borrowed_books": len(self.books) - available,
            "total_members": len(self.members),
        }

    # ------------------------- Persistence ------------------------- #
    def load(self) -> None:
        """Replace in-memory state with the stored records.

        An unreadable file leaves its collection empty; the failure is logged
        and loading continues with the other file.
        """
        try:
            self.books = storage.read_books(self.books_file)
        except StorageError as e:
            logger.warning(f"Error: {e}")
            self.books = []
        try:
            self.members = storage.read_members(self.members_file)
        except StorageError as e:
            logger.warning(f"Error: {e}")
            self.members = []

    def save(self) -> bool:
        """Write both collections. Returns False if either file could not be written."""
        saved = True
        try:
            storage.write_books(self.books_file, self.books)
        except StorageError as e:
            logger.error(f"Error: {e}")
            saved = False
        try:
            storage.write_members(self.members_file, self.members)
        except StorageError as e:
            logger.error(f"Error: {e}")
            saved = False
        return saved

    def close(self) -> bool:
        return self.save()

    # ------------------------- Utilities ------------------------- #
    @staticmethod
    def _next_id(records: Sequence[_Record]) -> int:
        # Last id + 1, not max + 1: records keep their stored order.
        return records[-1].id + 1 if records else 1

    @staticmethod
    def _find(records: Sequence[_Record], record_id: int) -> Optional[_Record]:
        for record in records:
            if record.id == record_id:
                return record
        return None

    @staticmethod
    def _delete(records: List[_Record], record_id: int) -> bool:
        for index, record in enumerate(records):
            if record.id == record_id:
                del records[index]
                return True
        return False
