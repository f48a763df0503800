"""User entities and registration logic."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol


class UserAlreadyExistsError(Exception):
    """Raised when a user with the same identity is already stored."""

    def __init__(self, message: str = "user already exists") -> None:
        super().__init__(message)


@dataclass
class User:
    """A registered user."""

    id: str
    name: str
    email: str
    created_at: datetime


@dataclass(frozen=True)
class RegisterRequest:
    """Validated input for creating a user."""

    name: str
    email: str


class UserStore(Protocol):
    """Persistence for users."""

    def create(self, user: User) -> None:
        """Store a new user."""
        ...


class UserService:
    """User business operations."""

    def __init__(self, user_store: UserStore) -> None:
        self._user_store = user_store

    def register(self, register_request: RegisterRequest) -> User:
        """Create and persist a user; store errors propagate unchanged."""
        user = User(
            id=str(uuid.uuid4()),
            name=register_request.name,
            email=register_request.email,
            created_at=datetime.now(timezone.utc),
        )
        self._user_store.create(user)
        return user