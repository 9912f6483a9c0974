from pathlib import Path

import pytest

from libstacks.admins import AdminList
from libstacks.book import FINE_PER_DAY, BookNotFoundError, Library, format_book
from libstacks.cli import (
    book_menu,
    borrow_for_user,
    main,
    return_for_user,
    run,
    user_menu,
)
from libstacks.users import UserNotFoundError, UserTable

PASSWORD = "password"


def scripted(*answers):
    it = iter(answers)

    def read(prompt):
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read


def make_library():
    library = Library()
    library.insert(1, "Dune", "Herbert", "111", "")
    library.insert(2, "Emma", "Austen", "222", "")
    return library


def make_admins():
    admins = AdminList()
    admins.add("ann", "1", PASSWORD)
    return admins


LOGIN = ("ann", "1", PASSWORD)


# -- borrow_for_user / return_for_user ----------------------------------


def test_borrow_for_user_sets_date_and_records(tmp_path):
    batch = tmp_path / "2022"
    batch.write_text("alice 7\n")
    records = tmp_path / "user_info.txt"
    library = make_library()
    node = borrow_for_user(library, UserTable(), "alice", "7", str(batch), 1, "2024-03-01", records)
    assert node.date == "2024-03-01"
    assert library.search_by_id(1).date == "2024-03-01"
    assert records.read_text() == f"alice 7 {batch} 1 2024-03-01\n"


def test_borrow_for_user_rejects_wrong_name(tmp_path):
    batch = tmp_path / "2022"
    batch.write_text("alice 7\n")
    records = tmp_path / "user_info.txt"
    library = make_library()
    with pytest.raises(UserNotFoundError):
        borrow_for_user(library, UserTable(), "mallory", "7", str(batch), 1, "2024-03-01", records)
    assert not records.exists()
    assert library.search_by_id(1).date == ""


def test_borrow_for_user_unknown_book(tmp_path):
    batch = tmp_path / "2022"
    batch.write_text("alice 7\n")
    records = tmp_path / "user_info.txt"
    with pytest.raises(BookNotFoundError):
        borrow_for_user(make_library(), UserTable(), "alice", "7", str(batch), 99, "d", records)
    assert not records.exists()


def test_return_for_user_drops_only_matching_record(tmp_path):
    batch = tmp_path / "2022"
    batch.write_text("alice 7\nbob 8\n")
    records = tmp_path / "user_info.txt"
    records.write_text(
        f"alice 7 {batch} 1 2024-01-01\n"
        f"bob 8 {batch} 2 2024-01-01\n"
        "broken\n"
    )
    library = make_library()
    library.borrow(1, "2024-01-01")
    node = return_for_user(library, UserTable(), "alice", "7", str(batch), 1, records)
    assert node.date == ""
    assert records.read_text() == f"bob 8 {batch} 2 2024-01-01\n"


def test_return_for_user_missing_batch_fails_auth(tmp_path):
    with pytest.raises(UserNotFoundError):
        return_for_user(make_library(), UserTable(), "alice", "7",
                        str(tmp_path / "none"), 1, tmp_path / "r.txt")


# -- book_menu ----------------------------------------------------------


def test_book_menu_add_book(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    library = Library()
    out = []
    book_menu(library, scripted("1", "1", "Title", "Author", "ISBN", "2024-01-01", "8"), out.append)
    node = library.search_by_title("Title")
    assert node.author == "Author"
    assert (tmp_path / "books.txt").read_text() == node.record() + "\n"
    assert f"Book added successfully with ID: {node.book_id}" in out


def test_book_menu_search_by_id(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = []
    book_menu(make_library(), scripted("2", "1", "2", "8"), out.append)
    assert "ID: 2 | Title: Emma | Author: Austen" in out


def test_book_menu_search_missing_isbn(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = []
    book_menu(make_library(), scripted("2", "2", "999", "8"), out.append)
    assert "Book not found by ISBN." in out


def test_book_menu_remove_by_isbn_saves(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    library = make_library()
    book_menu(library, scripted("3", "3", "111", "8"), [].append)
    assert library.search_by_id(1) is None
    assert (tmp_path / "books.txt").read_text() == library.search_by_id(2).record() + "\n"


def test_book_menu_remove_missing_id(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = []
    book_menu(make_library(), scripted("3", "1", "99", "8"), out.append)
    assert "Book with ID 99 not found." in out
    assert not (tmp_path / "books.txt").exists()


def test_book_menu_borrow_and_return(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    library = make_library()
    book_menu(library, scripted("4", "1", "2024-05-01", "8"), [].append)
    assert library.search_by_id(1).date == "2024-05-01"
    book_menu(library, scripted("5", "1", "8"), [].append)
    assert library.search_by_id(1).date == ""


def test_book_menu_sorted_display_writes_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    library = Library()
    library.insert(5, "A", "x", "i5", "")
    library.insert(3, "B", "y", "i3", "")
    out = []
    book_menu(library, scripted("6", "8"), out.append)
    lines = (tmp_path / "books.txt").read_text().splitlines()
    assert [line.split("|")[0] for line in lines] == ["3", "5"]
    assert format_book(library.search_by_id(3)) in out


def test_book_menu_invalid_choice(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = []
    book_menu(make_library(), scripted("9", "8"), out.append)
    assert "Invalid choice. Please try again." in out


def test_book_menu_end_of_input_raises():
    with pytest.raises(EOFError):
        book_menu(make_library(), scripted(), [].append)


# -- user_menu ----------------------------------------------------------


def test_user_menu_add_user(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    users = UserTable()
    user_menu(make_library(), users, scripted("1", "bob", "42", "2022", "5"), [].append)
    assert users.search("42").user_name == "bob"
    assert (tmp_path / "2022").read_text() == "bob 42\n"


def test_user_menu_remove_user(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "2022").write_text("bob 42\ncat 43\n")
    users = UserTable()
    out = []
    user_menu(make_library(), users, scripted("2", "2022", "42", "5"), out.append)
    assert users.search("42") is None
    assert (tmp_path / "2022").read_text() == "cat 43\n"
    assert "User with ID 42 removed successfully." in out


def test_user_menu_borrow(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "2022").write_text("bob 42\n")
    library = make_library()
    user_menu(library, UserTable(),
              scripted("3", "bob", "42", "2022", "1", "2024-06-01", "5"), [].append)
    assert library.search_by_id(1).date == "2024-06-01"
    assert (tmp_path / "user_info.txt").read_text() == "bob 42 2022 1 2024-06-01\n"


def test_user_menu_borrow_auth_failure(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "2022").write_text("bob 42\n")
    out = []
    user_menu(make_library(), UserTable(), scripted("3", "eve", "42", "2022", "5"), out.append)
    assert "Authentication failed. User not found or invalid credentials." in out
    assert not (tmp_path / "user_info.txt").exists()


# -- run ----------------------------------------------------------------


def test_run_login_failure():
    out = []
    ok = run(make_library(), UserTable(), make_admins(), scripted(*(["x"] * 9)), out.append)
    assert ok is False
    assert out == ["Too many login attempts. Could not access it."]


def test_run_exit():
    out = []
    assert run(make_library(), UserTable(), make_admins(), scripted(*LOGIN, "2"), out.append) is True
    assert out[-1] == "Exiting the program. Goodbye!"


def test_run_extend_due_date_and_save(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    library = make_library()
    library.borrow(1, "2024-01-25")
    read = scripted(*LOGIN, "1", "4", "1", "10", "5", "2")
    assert run(library, UserTable(), make_admins(), read, [].append) is True
    assert library.search_by_id(1).date == "2024-02-05"
    saved = (tmp_path / "updated_books.txt").read_text().splitlines()
    assert saved == [node.record() for node in library.in_order()]


def test_run_fine_is_recorded(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    library = make_library()
    library.borrow(1, "2024-01-01")
    read = scripted(*LOGIN, "1", "3", "1", "1", "2024-02-01", "3", "5", "2")
    run(library, UserTable(), make_admins(), read, [].append)
    node = library.search_by_id(1)
    expected = f"{format_book(node)} | Fine: {3 * FINE_PER_DAY} RS | Paid on: 2024-02-01\n"
    assert (tmp_path / "fine_records.txt").read_text() == expected


def test_run_fine_not_overdue(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    library = make_library()
    library.borrow(1, "2024-01-01")
    out = []
    read = scripted(*LOGIN, "1", "3", "1", "1", "2023-12-01", "5", "2")
    run(library, UserTable(), make_admins(), read, out.append)
    assert "Book date is not overdue. No fine." in out
    assert not (tmp_path / "fine_records.txt").exists()


# -- main ---------------------------------------------------------------


def test_main_with_admin_exits_cleanly(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    Path("books.txt").write_text("3|Dune|Herbert|111|\n")
    monkeypatch.setattr("builtins.input", scripted(*LOGIN, "1", "2", "7", "8", "5", "2"))
    assert main(["--admin", "ann", "1", PASSWORD]) == 0
    captured = capsys.readouterr().out
    assert "Title: Dune" in captured
    assert "Exiting the program. Goodbye!" in captured


def test_main_without_admins_fails_login(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("builtins.input", scripted(*(["x"] * 9)))
    assert main([]) == 1