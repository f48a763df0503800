"""PostgreSQL persistence for users."""

from __future__ import annotations

from typing import Any

from coffie.user_domain import User, UserAlreadyExistsError

_INSERT_USER = "INSERT INTO users (id, name, email, created_at) VALUES (%s, %s, %s, %s)"
_UNIQUE_VIOLATION = "23505"


def _is_unique_violation(error: BaseException) -> bool:
    code = getattr(error, "pgcode", None) or getattr(error, "sqlstate", None)
    return code == _UNIQUE_VIOLATION


class PostgresUserStore:
    """User store over a DB-API connection to PostgreSQL."""

    def __init__(self, connection: Any) -> None:
        self._connection = connection

    def create(self, user: User) -> None:
        """Insert a user; a unique violation becomes UserAlreadyExistsError."""
        cursor = self._connection.cursor()
        try:
            cursor.execute(_INSERT_USER, (user.id, user.name, user.email, user.created_at))
        except Exception as error:
            self._connection.rollback()
            if _is_unique_violation(error):
                raise UserAlreadyExistsError() from error
            raise
        finally:
            cursor.close()
        self._connection.commit()