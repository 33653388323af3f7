"""User service — account persistence and credential checks.

Pure business logic with no HTTP dependencies. Every operation returns a
``Result``: ``Ok(SafeUser)`` on success, ``Err(DomainError)`` otherwise.
Store failures are translated here and never escape to the caller.
"""

import logging
import os
import re

import bcrypt

from domain.model.errors import (
    AuthenticationError,
    DuplicateError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from domain.model.result import Err, Ok, Result
from domain.model.user import SafeUser, User, UserCredentials, UserDraft
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

USERNAME_TAKEN = "Username already exists"
USER_NOT_FOUND = "User not found"
INVALID_CREDENTIALS = "Invalid username or password"

# bcrypt only accepts up to 72 bytes of input
MAX_PASSWORD_BYTES = 72
PASSWORD_TOO_LONG = f"Password must be at most {MAX_PASSWORD_BYTES} bytes"

# Fields update_user() may change, keyed by input name
_UPDATABLE_FIELDS = {
    "password": "password_hash",
    "biography": "biography",
}


def _hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def _verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.warning("Stored password hash is malformed")
        return False


def _store_failure(error: StoreError, fallback: str) -> Err:
    return Err(StoreError(error.message or fallback))


def validate_password(password: str) -> Result[str]:
    """Check a new password against the strength policy."""
    if len(password) < 8:
        return Err(ValidationError("Password must be at least 8 characters"))
    if not re.search(r"[A-Z]", password):
        return Err(ValidationError("Password must contain at least one uppercase letter"))
    if not re.search(r"[a-z]", password):
        return Err(ValidationError("Password must contain at least one lowercase letter"))
    if not re.search(r"[0-9]", password):
        return Err(ValidationError("Password must contain at least one number"))
    return Ok(password)


def create_user(repo: UserRepository, draft: UserDraft) -> Result[SafeUser]:
    """Create a new account.

    The password is stored as a bcrypt hash. ``date_joined`` defaults to
    now when the draft leaves it empty.

    Errors:
        ValidationError: username or password missing, or password too long
        DuplicateError: username already taken
        StoreError: the store failed
    """
    if not draft.username or not draft.password:
        return Err(ValidationError("Username and password are required"))
    if _password_too_long(draft.password):
        return Err(ValidationError(PASSWORD_TOO_LONG))

    user = User.create(
        username=draft.username,
        password_hash=_hash_password(draft.password),
        date_joined=draft.date_joined,
    )
    try:
        saved = repo.insert(user)
    except DuplicateError:
        return Err(DuplicateError(USERNAME_TAKEN))
    except StoreError as e:
        return _store_failure(e, "Failed to create user")

    return Ok(saved.to_safe())


def fetch_by_username(repo: UserRepository, username: str) -> Result[SafeUser]:
    """Look up an account by exact username."""
    try:
        user = repo.find_one(username)
    except StoreError as e:
        return _store_failure(e, "Failed to retrieve user")

    if not user:
        return Err(NotFoundError(USER_NOT_FOUND))
    return Ok(user.to_safe())


def authenticate(repo: UserRepository, credentials: UserCredentials) -> Result[SafeUser]:
    """Verify a username/password pair.

    Unknown usernames and wrong passwords yield the same error so callers
    cannot tell which one was wrong.
    """
    try:
        user = repo.find_one(credentials.username)
    except StoreError as e:
        return _store_failure(e, "Failed to authenticate user")

    if not user or not _verify_password(credentials.password, user.password_hash):
        logger.info("Authentication failed", extra={"username": credentials.username})
        return Err(AuthenticationError(INVALID_CREDENTIALS))

    return Ok(user.to_safe())


def delete_by_username(repo: UserRepository, username: str) -> Result[SafeUser]:
    """Remove an account. Returns the projection of the removed record."""
    try:
        user = repo.find_one_and_delete(username)
    except StoreError as e:
        return _store_failure(e, "Failed to delete user")

    if not user:
        return Err(NotFoundError(USER_NOT_FOUND))
    return Ok(user.to_safe())


def update_user(repo: UserRepository, username: str, updates: dict) -> Result[SafeUser]:
    """Apply a partial update to an account.

    Only ``password`` and ``biography`` are accepted; other keys, including
    ``username`` and ``id``, are ignored. A new password is hashed before
    it reaches the store.
    """
    fields = {}
    for key, value in updates.items():
        if key not in _UPDATABLE_FIELDS or value is None:
            continue
        if key == "password":
            if _password_too_long(value):
                return Err(ValidationError(PASSWORD_TOO_LONG))
            value = _hash_password(value)
        fields[_UPDATABLE_FIELDS[key]] = value

    if not fields:
        return Err(ValidationError("No valid fields to update"))

    try:
        user = repo.find_one_and_update(username, fields)
    except StoreError as e:
        return _store_failure(e, "Failed to update user")

    if not user:
        return Err(NotFoundError(USER_NOT_FOUND))
    return Ok(user.to_safe())
