import uuid
from dataclasses import dataclass
from datetime import datetime, timezone


def to_store_precision(moment: datetime) -> datetime:
    """Truncate to the millisecond UTC precision the document store keeps."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)
    return moment.replace(microsecond=moment.microsecond // 1000 * 1000)


@dataclass(frozen=True)
class SafeUser:
    """User projection returned across the service boundary (no password)."""
    id: str
    username: str
    date_joined: datetime
    biography: str | None = None


@dataclass
class User:
    """Domain model representing a persisted user account."""

    id: str
    username: str
    password_hash: str
    date_joined: datetime
    biography: str | None = None

    @staticmethod
    def create(
        username: str,
        password_hash: str,
        date_joined: datetime | None = None,
        biography: str | None = None,
    ) -> 'User':
        """Factory method: assigns a fresh id and defaults date_joined to now."""
        return User(
            id=uuid.uuid4().hex,
            username=username,
            password_hash=password_hash,
            date_joined=to_store_precision(date_joined or datetime.now(timezone.utc)),
            biography=biography,
        )

    def to_safe(self) -> SafeUser:
        return SafeUser(
            id=self.id,
            username=self.username,
            date_joined=self.date_joined,
            biography=self.biography,
        )


@dataclass(frozen=True)
class UserDraft:
    """Input for account creation, before the password is hashed."""
    username: str
    password: str
    date_joined: datetime | None = None


@dataclass(frozen=True)
class UserCredentials:
    username: str
    password: str
