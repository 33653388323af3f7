"""In-memory implementation of UserRepository for testing."""

from dataclasses import replace

from domain.model.errors import DuplicateError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def insert(self, user: User) -> User:
        if any(u.username == user.username for u in self.store.values()):
            raise DuplicateError("Username already exists")

        self.store[user.id] = replace(user)
        return replace(user)

    def find_one_and_update(self, username: str, fields: dict) -> User | None:
        user = self._find(username)
        if not user:
            return None

        for key, value in fields.items():
            setattr(user, key, value)
        return replace(user)

    def find_one_and_delete(self, username: str) -> User | None:
        user = self._find(username)
        if not user:
            return None
        return self.store.pop(user.id)

    # ── read operations ──────────────────────────────────────

    def find_one(self, username: str) -> User | None:
        user = self._find(username)
        return replace(user) if user else None

    def _find(self, username: str) -> User | None:
        for user in self.store.values():
            if user.username == username:
                return user
        return None
