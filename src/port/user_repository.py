from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Implementations raise ``StoreError`` when the backing store fails and
    ``DuplicateError`` when an insert violates the username unique index.
    """
    def find_one(self, username: str) -> User | None:
        """Find a user by exact username. Return User or None if not found."""
        ...

    def insert(self, user: User) -> User:
        """Insert a new user. Return the stored User."""
        ...

    def find_one_and_update(self, username: str, fields: dict) -> User | None:
        """Apply a partial update. Return the updated User or None if not found."""
        ...

    def find_one_and_delete(self, username: str) -> User | None:
        """Atomically remove a user. Return the removed User or None if not found."""
        ...
