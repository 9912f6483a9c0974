"""Library members kept in a small chained hash table keyed by user id."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

DEFAULT_TABLE_SIZE = 10


class UserNotFoundError(LookupError):
    """Raised when no user has the requested id."""


@dataclass
class User:
    """A registered library member."""

    user_name: str = ""
    user_id: str = ""
    batch: str = ""

    def __str__(self) -> str:
        return f"user_name: {self.user_name} user_id: {self.user_id} batch: {self.batch}"


def file_exists(path) -> bool:
    """Return True when ``path`` names an existing file."""
    return Path(path).is_file()


def register_user(path, user_name: str, user_id: str) -> bool:
    """Append ``user_name user_id`` to the batch file; return True if the file was new."""
    created = not file_exists(path)
    with open(path, "a", encoding="utf-8") as handle:
        handle.write(f"{user_name} {user_id}\n")
    return created


class UserTable:
    """Hash table of users with separate chaining; the hash is the sum of character codes."""

    def __init__(self, size: int = DEFAULT_TABLE_SIZE) -> None:
        if size <= 0:
            raise ValueError("table size must be positive")
        self.size = size
        self._slots: list[list[User]] = [[] for _ in range(size)]

    def slot(self, key: str) -> int:
        """Return the slot index for ``key``."""
        return sum(ord(char) for char in key) % self.size

    def insert(self, user_name: str, user_id: str, batch: str) -> bool:
        """Add a user; return False if the same name and id are already present."""
        chain = self._slots[self.slot(user_id)]
        if any(u.user_name == user_name and u.user_id == user_id for u in chain):
            return False
        chain.append(User(user_name, user_id, batch))
        return True

    def search(self, user_id: str) -> User | None:
        """Return the first user with ``user_id``, or None."""
        return next(
            (u for u in self._slots[self.slot(user_id)] if u.user_id == user_id), None
        )

    def remove(self, user_id: str) -> User:
        """Remove and return the first user with ``user_id``."""
        chain = self._slots[self.slot(user_id)]
        for position, user in enumerate(chain):
            if user.user_id == user_id:
                del chain[position]
                return user
        raise UserNotFoundError(f"user with ID {user_id} not found")

    def load_file(self, path) -> list[str]:
        """Insert every ``name id`` line of ``path``; return the lines that could not be split."""
        rejected: list[str] = []
        batch = str(path)
        with open(path, encoding="utf-8") as handle:
            for line in handle:
                line = line.rstrip("\n")
                fields = line.split()
                if len(fields) < 2:
                    rejected.append(line)
                    continue
                self.insert(fields[0], fields[1], batch)
        return rejected

    def rewrite_file(self, path) -> None:
        """Overwrite ``path`` with one ``name id`` line per user, in table order."""
        Path(path).write_text(
            "".join(f"{u.user_name} {u.user_id}\n" for u in self), encoding="utf-8"
        )

    def __iter__(self) -> Iterator[User]:
        for chain in self._slots:
            yield from chain

    def __len__(self) -> int:
        return sum(len(chain) for chain in self._slots)