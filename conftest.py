import pytest

from library import Library


@pytest.fixture
def store(tmp_path):
    # Each test gets its own pair of storage files
    return {
        "books_file": str(tmp_path / "books.txt"),
        "members_file": str(tmp_path / "members.txt"),
    }


@pytest.fixture
def lib(store):
    return Library(**store)
