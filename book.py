from __future__ import annotations


class Book:
    """A single book in the catalog."""

    def __init__(self, id: int, title: str, author: str, is_available: bool = True) -> None:
        self.id = id
        self.title = title
        self.author = author
        self.is_available = is_available

    @property
    def status(self) -> str:
        return "Available" if self.is_available else "Borrowed"

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"ID: {self.id}, Title: {self.title}, Author: {self.author}, Status: {self.status}"

    def __repr__(self) -> str:
        return f"Book(id={self.id!r}, title={self.title!r}, author={self.author!r}, is_available={self.is_available!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "is_available": self.is_available,
        }
