"""HTTP endpoints for user registration."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from http import HTTPStatus
from typing import Any, Mapping

from werkzeug.wrappers import Request, Response

from coffie.response import FieldError, domain_error_response, error_response, json_response
from coffie.routing import Router
from coffie.user_domain import RegisterRequest, User, UserService


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


_DECODER = json.JSONDecoder(parse_constant=_reject_constant)


def _decode_json_body(body: bytes) -> Any:
    """Decode the first JSON value of a request body."""
    text = body.decode("utf-8", errors="replace").lstrip(" \t\r\n")
    if not text:
        raise ValueError("empty request body")
    value, _ = _DECODER.raw_decode(text)
    return value


@dataclass(frozen=True)
class RegisterUser:
    """Body of POST /api/users."""

    name: str = ""
    email: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> RegisterUser:
        """Build from a decoded JSON value; raise ValueError on a wrong shape."""
        if payload is None:
            return cls()
        if not isinstance(payload, Mapping):
            raise ValueError("request body must be a JSON object")
        values: dict[str, str] = {}
        for key, value in payload.items():
            field_name = str(key).lower()
            if field_name not in ("name", "email") or value is None:
                continue
            if not isinstance(value, str):
                raise ValueError(f"field {key!r} must be a string")
            values[field_name] = value
        return cls(**values)

    def validate(self) -> list[FieldError]:
        """Return the missing required fields."""
        validation_errors = []
        if not self.name:
            validation_errors.append(FieldError("name", "is required"))
        if not self.email:
            validation_errors.append(FieldError("email", "is required"))
        return validation_errors


@dataclass(frozen=True)
class UserResponse:
    """Representation of a single user."""

    id: str
    name: str
    email: str
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> UserResponse:
        return cls(id=user.id, name=user.name, email=user.email, created_at=user.created_at)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "created_at": self.created_at,
        }


class UserHandler:
    """Handlers for the user endpoints."""

    def __init__(self, user_service: UserService) -> None:
        self._user_service = user_service

    def register_routes(self, router: Router) -> None:
        router.add("POST", "/api/users", self.register)

    def register(self, request: Request) -> Response:
        """Register a new user from the JSON body."""
        try:
            register_user = RegisterUser.from_payload(_decode_json_body(request.get_data()))
        except ValueError:
            return error_response(HTTPStatus.BAD_REQUEST, "INVALID_INPUT", "invalid request body")

        validation_errors = register_user.validate()
        if validation_errors:
            return error_response(
                HTTPStatus.BAD_REQUEST, "INVALID_INPUT", "validation failed", validation_errors
            )

        service_request = RegisterRequest(name=register_user.name, email=register_user.email)
        try:
            created_user = self._user_service.register(service_request)
        except Exception as error:
            return domain_error_response(error)

        return json_response(HTTPStatus.CREATED, UserResponse.from_user(created_user))