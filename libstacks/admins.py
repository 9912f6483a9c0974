"""Administrator accounts and the login prompt."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

MAX_ATTEMPTS = 3

_LOGIN_PROMPTS = ("Enter username: ", "Enter id: ", "Enter password: ")


@dataclass
class Admin:
    """An administrator account."""

    name: str = ""
    admin_id: str = ""
    password: str = ""


class AdminList:
    """Administrator accounts, newest first."""

    def __init__(self) -> None:
        self.admins: list[Admin] = []

    def add(self, name: str, admin_id: str, password: str) -> Admin:
        """Register an administrator ahead of those already known."""
        admin = Admin(name, admin_id, password)
        self.admins.insert(0, admin)
        return admin

    def login(self, name: str, admin_id: str, password: str) -> bool:
        """Return True when an account matches all three credentials."""
        return any(
            a.name == name and a.admin_id == admin_id and a.password == password
            for a in self.admins
        )

    def perform_login(self, read: Callable[[str], str], attempts: int = MAX_ATTEMPTS) -> bool:
        """Prompt for credentials through ``read`` up to ``attempts`` times."""
        for _ in range(attempts):
            name, admin_id, phrase = (read(prompt) for prompt in _LOGIN_PROMPTS)
            if self.login(name, admin_id, phrase):
                return True
        return False