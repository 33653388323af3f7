"""Tagged success/failure result returned by services."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from domain.model.errors import DomainError

T = TypeVar('T')


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: DomainError

    @property
    def message(self) -> str:
        return self.error.message


Result = Ok[T] | Err
