"""Assembly of the WSGI application."""

from __future__ import annotations

from typing import Any

from coffie.apidocs import register_swagger_routes
from coffie.health import HealthHandler
from coffie.routing import Router
from coffie.user_module import UserModule


def create_app(connection: Any) -> Router:
    """Build the WSGI application with every route registered."""
    router = Router()
    register_swagger_routes(router)
    HealthHandler().register_routes(router)
    UserModule(connection).register_routes(router)
    return router