from __future__ import annotations


class Member:
    """A registered library member."""

    def __init__(self, id: int, name: str) -> None:
        self.id = id
        self.name = name

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"ID: {self.id}, Name: {self.name}"

    def __repr__(self) -> str:
        return f"Member(id={self.id!r}, name={self.name!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Member):
            return NotImplemented
        return self.id == other.id and self.name == other.name

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}
