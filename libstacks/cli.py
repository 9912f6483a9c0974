"""Interactive menus for the library: books, members, fines and the admin login."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Callable

from libstacks.admins import AdminList
from libstacks.book import BookNode, BookNotFoundError, Library, format_book, save_fine
from libstacks.users import UserNotFoundError, UserTable, User, file_exists, register_user

BOOKS_FILE = "books.txt"
UPDATED_BOOKS_FILE = "updated_books.txt"
RECORDS_FILE = "user_info.txt"
FINES_FILE = "fine_records.txt"

Reader = Callable[[str], str]
Writer = Callable[[str], None]

MAIN_MENU = (
    "==== Library Management System ====",
    "WELCOME _ ADMIN",
    "1. Admin Operations",
    "2. Exit",
)
ADMIN_MENU = (
    "==== Admin Operations ====",
    "1. USER DATABASE",
    "2. BOOKDATA BASE",
    "3. Calculate Fine",
    "4. Extend due date",
    "5. Back to Main Menu",
)
USER_MENU = (
    "==== User Operations ====",
    "1. Add User",
    "2. Remove User",
    "3. User Book Borrow",
    "4. User Return Book",
    "5. Exit",
)
BOOK_MENU = (
    "==== Book Operations ====",
    "1. Add Book",
    "2. Search Book",
    "3. Remove Book",
    "4. Borrow Book",
    "5. Return Book",
    "6. Display Books Data",
    "7. Root node",
    "8. Back to Main Menu",
)

INVALID_CHOICE = "Invalid choice. Please try again."
AUTH_FAILED = "Authentication failed. User not found or invalid credentials."


def _ask_int(read: Reader, prompt: str) -> int | None:
    try:
        return int(read(prompt).strip())
    except ValueError:
        return None


def _show(write: Writer, lines) -> None:
    for line in lines:
        write(line)


def _load_batch(users: UserTable, batch) -> None:
    if file_exists(batch):
        users.load_file(batch)


def _authenticate(users: UserTable, user_name: str, user_id: str, batch) -> User:
    _load_batch(users, batch)
    user = users.search(user_id)
    if user is None or user.user_name != user_name:
        raise UserNotFoundError(AUTH_FAILED)
    return user


# -- member lending -----------------------------------------------------


def borrow_for_user(library, users, user_name, user_id, batch, book_id, due_date,
                    records_path=RECORDS_FILE) -> BookNode:
    """Lend a book to an authenticated member and append the loan to ``records_path``."""
    _authenticate(users, user_name, user_id, batch)
    node = library.borrow(book_id, due_date)
    with open(records_path, "a", encoding="utf-8") as handle:
        handle.write(f"{user_name} {user_id} {batch} {book_id} {due_date}\n")
    return node


def return_for_user(library, users, user_name, user_id, batch, book_id,
                    records_path=RECORDS_FILE) -> BookNode:
    """Take a book back from an authenticated member and drop the loan record."""
    _authenticate(users, user_name, user_id, batch)
    node = library.return_book(book_id)
    records = Path(records_path)
    kept = []
    for line in records.read_text(encoding="utf-8").splitlines():
        fields = line.split()
        if len(fields) < 5:
            continue
        if fields[:4] == [user_name, user_id, str(batch), str(book_id)]:
            continue
        kept.append(line + "\n")
    records.write_text("".join(kept), encoding="utf-8")
    return node


# -- book menu ----------------------------------------------------------


def _add_books(library: Library, read: Reader, write: Writer) -> None:
    count = _ask_int(read, "Enter the number of books to add. ") or 0
    for _ in range(count):
        write("Enter book details:")
        title = read("Title: ")
        author = read("Author: ")
        isbn = read("ISBN: ")
        date = read("Due Date: ")
        node = library.add_book(title, author, isbn, date, BOOKS_FILE)
        write(f"Book added successfully with ID: {node.book_id}")
        write(f"Book details added to {BOOKS_FILE}.")


def _search_books(library: Library, read: Reader, write: Writer) -> None:
    write("Enter 1 to Search by ID")
    write("Enter 2 to Search by ISBN")
    write("Enter 3 to Search by title")
    kind = _ask_int(read, "Enter your choice. ")
    if kind == 1:
        node = library.search_by_id(_ask_int(read, "Enter the id to search. "))
        label = "ID"
    elif kind == 2:
        node = library.search_by_isbn(read("Enter ISBN to search: ").strip())
        label = "ISBN"
    elif kind == 3:
        node = library.search_by_title(read("Enter the Title to search book: "))
        label = "title"
    else:
        write(INVALID_CHOICE)
        return
    if node is None:
        write(f"Book not found by {label}.")
    else:
        write(f"Book found by {label}:")
        write(f"ID: {node.book_id} | Title: {node.title} | Author: {node.author}")


def _remove_book(library: Library, read: Reader, write: Writer) -> None:
    write("Select how you want to remove the book:")
    write("1. Remove by ID")
    write("2. Remove by Title")
    write("3. Remove by ISBN")
    choice = _ask_int(read, "Enter your choice (1-3): ")
    if choice == 1:
        book_id = _ask_int(read, "Enter the ID of the book to remove: ")
        remover, key, label = library.remove_by_id, book_id, f"ID {book_id}"
    elif choice == 2:
        title = read("Enter the title of the book to remove: ")
        remover, key, label = library.remove_by_title, title, f"title '{title}'"
    elif choice == 3:
        isbn = read("Enter the ISBN of the book to remove: ").strip()
        remover, key, label = library.remove_by_isbn, isbn, f"ISBN '{isbn}'"
    else:
        write("Invalid choice.")
        return
    try:
        remover(key)
    except BookNotFoundError:
        write(f"Book with {label} not found.")
        return
    library.save(BOOKS_FILE)
    write(f"Book with {label} removed successfully.")


def book_menu(library, read, write) -> None:
    """Run the book operations menu until the user goes back."""
    while True:
        _show(write, BOOK_MENU)
        choice = _ask_int(read, "Enter your choice: ")
        if choice == 1:
            _add_books(library, read, write)
        elif choice == 2:
            _search_books(library, read, write)
        elif choice == 3:
            _remove_book(library, read, write)
        elif choice == 4:
            book_id = _ask_int(read, "Enter Book ID to borrow: ")
            date = read("Enter the due date of book. ").strip()
            try:
                library.borrow(book_id, date)
                write("Book is borrowed successfully.")
            except BookNotFoundError:
                write("Book not found.")
        elif choice == 5:
            book_id = _ask_int(read, "Enter Book ID to return: ")
            try:
                library.return_book(book_id)
                write("Book is returned.")
            except BookNotFoundError:
                write("Book not found.")
        elif choice == 6:
            write("Books in Library (Sorted by ID):")
            _show(write, (format_book(node) for node in library.sorted_by_id()))
            library.save_sorted(BOOKS_FILE)
            write(f"Sorted data saved to {BOOKS_FILE}.")
        elif choice == 7:
            write("Books in Library:")
            _show(write, (format_book(node) for node in library.in_order()))
        elif choice == 8:
            return
        else:
            write(INVALID_CHOICE)


# -- user menu ----------------------------------------------------------


def _read_member(read: Reader) -> tuple[str, str, str]:
    user_name = read("Enter your User Name: ").strip()
    user_id = read("Enter your User ID: ").strip()
    batch = read("Enter your Batch: ").strip()
    return user_name, user_id, batch


def _member_loan(library, users, read, write, borrowing: bool) -> None:
    user_name, user_id, batch = _read_member(read)
    try:
        _authenticate(users, user_name, user_id, batch)
        if borrowing:
            book_id = _ask_int(read, "Enter Book ID to borrow: ")
            due_date = read("Enter the due date of the book. ").strip()
            borrow_for_user(library, users, user_name, user_id, batch, book_id, due_date,
                            RECORDS_FILE)
            write("Book is borrowed successfully.")
        else:
            book_id = _ask_int(read, "Enter Book ID to return: ")
            return_for_user(library, users, user_name, user_id, batch, book_id, RECORDS_FILE)
            write("Book is returned.")
    except UserNotFoundError:
        write(AUTH_FAILED)
    except BookNotFoundError:
        write("Book not found.")
    except OSError:
        write(f"Error opening the {RECORDS_FILE} file.")


def user_menu(library, users, read, write) -> None:
    """Run the member operations menu until the user exits it."""
    while True:
        _show(write, USER_MENU)
        choice = _ask_int(read, "Enter your choice: ")
        if choice == 1:
            user_name = read("Enter User Name: ").strip()
            user_id = read("Enter User ID: ").strip()
            batch = read("Enter Batch: ").strip()
            register_user(batch, user_name, user_id)
            users.load_file(batch)
            write(f"User {user_name} added to batch {batch}.")
        elif choice == 2:
            batch = read("Enter User Batch: ").strip()
            user_id = read("Enter User ID to remove: ").strip()
            _load_batch(users, batch)
            try:
                users.remove(user_id)
                write(f"User with ID {user_id} removed successfully.")
            except UserNotFoundError:
                write(f"User with ID {user_id} not found.")
            users.rewrite_file(batch)
            write("Hashtable contents rewritten to file successfully.")
        elif choice == 3:
            _member_loan(library, users, read, write, borrowing=True)
        elif choice == 4:
            _member_loan(library, users, read, write, borrowing=False)
        elif choice == 5:
            return
        else:
            write(INVALID_CHOICE)


# -- admin menu ---------------------------------------------------------


def _fine_for_book(library: Library, book_id, read: Reader, write: Writer) -> None:
    node = library.search_by_id(book_id)
    if node is None or not node.date:
        write("Book not found or not borrowed yet.")
        return
    current_date = read("Enter the current date (YYYY-MM-DD): ").strip()
    if current_date <= node.date:
        write("Book date is not overdue. No fine.")
        return
    days = _ask_int(read, "Enter the days of the overdue book: ") or 0
    charge = library.fine(book_id, current_date, days)
    write("Fine for overdue book:")
    write(f"{format_book(node)} | Fine: {charge} RS")
    save_fine(FINES_FILE, node, current_date, charge)
    write("Fine information saved to file.")


def _fines(library: Library, read: Reader, write: Writer) -> None:
    count = _ask_int(read, "Enter the number of books to calculate fines: ") or 0
    for number in range(1, count + 1):
        book_id = _ask_int(read, f"Enter the ID of book {number}: ")
        _fine_for_book(library, book_id, read, write)


def _extend(library: Library, read: Reader, write: Writer) -> None:
    book_id = _ask_int(read, "Enter the book id to extend date. ")
    days = _ask_int(read, "Enter the days to extend date. ") or 0
    try:
        new_date = library.extend_due_date(book_id, days)
    except (BookNotFoundError, ValueError):
        write("Book not found or not borrowed yet.")
        return
    write(f"Due date extended successfully. New due date: {new_date}")


def _admin_menu(library, users, read, write) -> None:
    while True:
        _show(write, ADMIN_MENU)
        choice = _ask_int(read, "Enter your choice: ")
        if choice == 1:
            user_menu(library, users, read, write)
        elif choice == 2:
            book_menu(library, read, write)
        elif choice == 3:
            _fines(library, read, write)
        elif choice == 4:
            _extend(library, read, write)
        elif choice == 5:
            return
        else:
            write(INVALID_CHOICE)


def run(library, users, admins, read, write) -> bool:
    """Log an administrator in and run the main menu; False if the login fails."""
    if not admins.perform_login(read):
        write("Too many login attempts. Could not access it.")
        return False
    while True:
        _show(write, MAIN_MENU)
        choice = _ask_int(read, "Enter your choice: ")
        if choice == 1:
            _admin_menu(library, users, read, write)
        elif choice == 2:
            write("Exiting the program. Goodbye!")
            return True
        else:
            write(INVALID_CHOICE)
        library.save(UPDATED_BOOKS_FILE)


def main(argv=None) -> int:
    """Start the interactive library manager."""
    parser = argparse.ArgumentParser(description="Library management console.")
    parser.add_argument(
        "--admin", nargs=3, action="append", default=[],
        metavar=("NAME", "ID", "PASSWORD"), help="register an administrator account",
    )
    args = parser.parse_args(argv)

    library = Library()
    if file_exists(BOOKS_FILE):
        library.load(BOOKS_FILE)
    else:
        print("Could not open file.")
    users = UserTable()
    admins = AdminList()
    for name, admin_id, secret in args.admin:
        admins.add(name, admin_id, secret)

    try:
        ok = run(library, users, admins, input, print)
    except (EOFError, KeyboardInterrupt):
        print()
        return 0
    return 0 if ok else 1