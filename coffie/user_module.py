"""Wiring of the user feature."""

from __future__ import annotations

from typing import Any

from coffie.routing import Router
from coffie.user_domain import UserService
from coffie.user_http import UserHandler
from coffie.user_store import PostgresUserStore


class UserModule:
    """Builds the user store, service and handler from a database connection."""

    def __init__(self, connection: Any) -> None:
        user_store = PostgresUserStore(connection)
        user_service = UserService(user_store)
        self._user_handler = UserHandler(user_service)

    def register_routes(self, router: Router) -> None:
        self._user_handler.register_routes(router)