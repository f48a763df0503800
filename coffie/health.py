"""Health check endpoint."""

from __future__ import annotations

from http import HTTPStatus

from werkzeug.wrappers import Request, Response

from coffie.response import json_response
from coffie.routing import Router


class HealthHandler:
    """Handles the /health endpoint."""

    def register_routes(self, router: Router) -> None:
        router.add("GET", "/health", self.get)

    def get(self, request: Request) -> Response:
        """Report that the API is running."""
        return json_response(HTTPStatus.OK, {"status": "ok"})