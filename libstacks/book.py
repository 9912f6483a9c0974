"""Book catalogue kept as a binary search tree ordered by title."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

FINE_PER_DAY = 100
DAYS_PER_MONTH = 30


class BookNotFoundError(LookupError):
    """Raised when no book matches the requested id, title or ISBN."""


@dataclass(eq=False)
class BookNode:
    """One book in the catalogue tree."""

    book_id: int = 0
    title: str = ""
    author: str = ""
    date: str = ""
    isbn: str = ""
    left: BookNode | None = field(default=None, repr=False)
    right: BookNode | None = field(default=None, repr=False)

    def record(self) -> str:
        return f"{self.book_id}|{self.title}|{self.author}|{self.isbn}|{self.date}"


def format_book(node: BookNode) -> str:
    """Return the one-line display form of a book."""
    return (
        f"ID: {node.book_id} | Title: {node.title} | Author: {node.author}"
        f" | ISBN: {node.isbn} | Due date: {node.date}"
    )


def save_fine(path, node: BookNode, current_date: str, fine: int) -> None:
    """Append a fine record for ``node`` to the file at ``path``."""
    with open(path, "a", encoding="utf-8") as handle:
        handle.write(f"{format_book(node)} | Fine: {fine} RS | Paid on: {current_date}\n")


def _shift_date(date: str, days: int) -> str:
    year, month, day = (int(part) for part in date.split("-")[:3])
    day += days
    while day > DAYS_PER_MONTH:
        day -= DAYS_PER_MONTH
        month += 1
        if month > 12:
            month = 1
            year += 1
    return f"{year:04d}-{month:02d}-{day:02d}"


class Library:
    """A collection of books ordered by title."""

    def __init__(self) -> None:
        self.root: BookNode | None = None

    # -- building -------------------------------------------------------

    def insert(self, book_id: int, title: str, author: str, isbn: str, date: str) -> BookNode:
        """Insert a book; an id of 0 takes the next free id. Returns the new node."""
        if book_id == 0:
            book_id = self.max_id() + 1
        node = BookNode(book_id, title, author, date, isbn)
        self._attach(node)
        return node

    def _attach(self, node: BookNode) -> None:
        node.left = node.right = None
        if self.root is None:
            self.root = node
            return
        current = self.root
        while True:
            if node.title < current.title:
                if current.left is None:
                    current.left = node
                    return
                current = current.left
            else:
                if current.right is None:
                    current.right = node
                    return
                current = current.right

    def add_book(self, title: str, author: str, isbn: str, date: str, path) -> BookNode:
        """Insert a book with a fresh id and append its record to ``path``."""
        node = self.insert(0, title, author, isbn, date)
        with open(path, "a", encoding="utf-8") as handle:
            handle.write(node.record() + "\n")
        return node

    def load(self, path) -> None:
        """Insert every ``id|title|author|isbn|date`` record found in ``path``."""
        with open(path, encoding="utf-8") as handle:
            for line in handle:
                line = line.rstrip("\n")
                if not line:
                    continue
                parts = line.split("|", 4)
                if len(parts) < 5:
                    raise ValueError(f"malformed book record: {line!r}")
                book_id, title, author, isbn, date = parts
                self.insert(int(book_id), title, author, isbn, date)

    def _write(self, path, nodes) -> None:
        Path(path).write_text("".join(node.record() + "\n" for node in nodes), encoding="utf-8")

    def save(self, path) -> None:
        """Write all books to ``path`` in title order."""
        self._write(path, self.in_order())

    def save_sorted(self, path) -> None:
        """Write all books to ``path`` in id order."""
        self._write(path, self.sorted_by_id())

    # -- traversal ------------------------------------------------------

    def in_order(self) -> Iterator[BookNode]:
        """Yield the books in tree (title) order."""
        stack: list[BookNode] = []
        current = self.root
        while stack or current is not None:
            while current is not None:
                stack.append(current)
                current = current.left
            current = stack.pop()
            yield current
            current = current.right

    def sorted_by_id(self) -> list[BookNode]:
        """Return the books ordered by id; equal ids keep title order."""
        return sorted(self.in_order(), key=lambda node: node.book_id)

    def rebalance(self) -> None:
        """Rebuild the tree so that it is height balanced."""
        nodes = list(self.in_order())

        def build(start: int, end: int) -> BookNode | None:
            if start > end:
                return None
            mid = start + (end - start) // 2
            node = nodes[mid]
            node.left = build(start, mid - 1)
            node.right = build(mid + 1, end)
            return node

        self.root = build(0, len(nodes) - 1)

    def max_id(self) -> int:
        """Return the largest book id, or 0 for an empty library."""
        return max((node.book_id for node in self.in_order()), default=0)

    # -- searching ------------------------------------------------------

    def search_by_id(self, book_id: int) -> BookNode | None:
        return next((n for n in self.in_order() if n.book_id == book_id), None)

    def search_by_isbn(self, isbn: str) -> BookNode | None:
        found = None
        for node in self.in_order():
            if node.isbn == isbn:
                found = node
        return found

    def search_by_title(self, title: str) -> BookNode | None:
        return next((n for n in self.in_order() if n.title == title), None)

    def _require(self, book_id: int) -> BookNode:
        node = self.search_by_id(book_id)
        if node is None:
            raise BookNotFoundError(f"book with ID {book_id} not found")
        return node

    def _require_borrowed(self, book_id: int) -> BookNode:
        node = self._require(book_id)
        if not node.date:
            raise ValueError(f"book with ID {book_id} is not borrowed")
        return node

    # -- lending --------------------------------------------------------

    def borrow(self, book_id: int, date: str) -> BookNode:
        """Set the due date of a book."""
        node = self._require(book_id)
        node.date = date
        return node

    def return_book(self, book_id: int) -> BookNode:
        """Clear the due date of a book."""
        node = self._require(book_id)
        node.date = ""
        return node

    def extend_due_date(self, book_id: int, days: int) -> str:
        """Push a borrowed book's due date on by ``days`` (30-day months)."""
        node = self._require_borrowed(book_id)
        node.date = _shift_date(node.date, days)
        return node.date

    def fine(self, book_id: int, current_date: str, overdue_days: int) -> int:
        """Return the fine for a borrowed book, 0 when it is not overdue."""
        node = self._require_borrowed(book_id)
        if current_date > node.date:
            return overdue_days * FINE_PER_DAY
        return 0

    # -- editing --------------------------------------------------------

    def update(self, book_id: int, new_id=None, title=None, author=None) -> BookNode:
        """Change a book's id, title or author."""
        node = self._require(book_id)
        if new_id is not None:
            node.book_id = new_id
        if author is not None:
            node.author = author
        if title is not None and title != node.title:
            self._detach(node)
            node.title = title
            self._attach(node)
        return node

    def _detach(self, target: BookNode) -> None:
        parent: BookNode | None = None
        stack: list[tuple[BookNode | None, BookNode]] = [(None, self.root)] if self.root else []
        while stack:
            parent, node = stack.pop()
            if node is target:
                break
            for child in (node.right, node.left):
                if child is not None:
                    stack.append((node, child))
        else:
            raise BookNotFoundError(f"book with ID {target.book_id} not found")
        replacement = self._unlink(target)
        if parent is None:
            self.root = replacement
        elif parent.left is target:
            parent.left = replacement
        else:
            parent.right = replacement

    @staticmethod
    def _unlink(node: BookNode) -> BookNode | None:
        if node.left is None:
            return node.right
        if node.right is None:
            return node.left
        parent, successor = node, node.right
        while successor.left is not None:
            parent, successor = successor, successor.left
        if parent is node:
            parent.right = successor.right
        else:
            parent.left = successor.right
        successor.left, successor.right = node.left, node.right
        return successor

    def remove_by_id(self, book_id: int) -> BookNode:
        node = self._require(book_id)
        self._detach(node)
        return node

    def remove_by_title(self, title: str) -> BookNode:
        node = self.search_by_title(title)
        if node is None:
            raise BookNotFoundError(f"book with title '{title}' not found")
        self._detach(node)
        return node

    def remove_by_isbn(self, isbn: str) -> BookNode:
        node = self.search_by_isbn(isbn)
        if node is None:
            raise BookNotFoundError(f"book with ISBN '{isbn}' not found")
        self._detach(node)
        return node