# libstacks

A small console library management system. It keeps a catalogue of books, the
readers of each batch, the books they have out, and the fines charged for
late returns.

## Running the console

```
pip install .
libstacks --admin alice 1 password
```

Administrator accounts are given on the command line with
`--admin NAME ID PASSWORD`; the option may be repeated. At start-up you log
in with a name, an id and a password, and you get three attempts. After that
the menus let you:

- look after readers: add a reader to a batch, remove a reader from a batch,
  borrow a book for a reader, return a book for a reader;
- look after books: add, search by id, ISBN or title, remove, borrow, return,
  list the catalogue by id (which also rewrites `books.txt` in id order) or in
  title order;
- work out fines for overdue books: 100 RS for each overdue day you enter;
- extend the due date of a borrowed book (months are counted as 30 days).

## Files

The console reads and writes plain text files in the current directory:

- `books.txt`: the catalogue, one book per line as `id|title|author|isbn|due date`.
  The due date is empty while the book is on the shelf. It is loaded at
  start-up when it exists.
- `updated_books.txt`: the whole catalogue, written after each choice in the
  main menu.
- one file per batch, named after the batch, holding `name id` on each line.
- `user_info.txt`: the loans that readers have out, as
  `name id batch book_id due_date`.
- `fine_records.txt`: every fine that has been worked out.

## Using it from Python

```python
from libstacks.book import Library

library = Library()
library.load("books.txt")
library.insert(0, "Dune", "Frank Herbert", "978-0441013593", "")
library.borrow(1, "2024-01-15")
library.extend_due_date(1, 20)
for node in library.sorted_by_id():
    print(node.book_id, node.title, node.date)
library.save("books.txt")
```

`Library` keeps its books in a binary search tree ordered by title. When a
book is inserted with id `0` it gets the next free id, one past the highest in
the catalogue. Lookups that find nothing return `None`; operations on a
missing book raise `libstacks.book.BookNotFoundError`, and fines or
extensions on a book that is not borrowed raise `ValueError`.

Readers are kept in `libstacks.users.UserTable`, a small hash table keyed by
user id, and administrators in `libstacks.admins.AdminList`. The menus are in
`libstacks.cli`; `run(library, users, admins, read, write)` drives them with
any input and output functions.

## What it does not do

Administrator accounts are not stored anywhere: they exist only for the run
in which they are given with `--admin`, and without one no login can succeed.
There is no database or server; everything lives in the text files above.

## Tests

```
pip install ".[test]"
pytest
```