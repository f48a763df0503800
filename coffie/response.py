"""JSON response helpers and the standard error payload."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from http import HTTPStatus
from typing import Any, Sequence

from werkzeug.wrappers import Response

from coffie.user_domain import UserAlreadyExistsError

_HTML_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


@dataclass(frozen=True)
class FieldError:
    """A validation error on a specific field."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ErrorResponse:
    """Standardized error payload; fields are omitted when empty."""

    error_code: str
    message: str
    fields: Sequence[FieldError] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error_code": self.error_code, "message": self.message}
        if self.fields:
            payload["fields"] = [field_error.to_dict() for field_error in self.fields]
        return payload


def _format_time(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return text + "Z"
    sign = "+" if offset > timedelta(0) else "-"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _to_json(value: Any) -> Any:
    if isinstance(value, datetime):
        return _format_time(value)
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"object of type {type(value).__name__} is not JSON serializable")


def json_response(status: int, data: Any) -> Response:
    """Build a JSON response with the given status code."""
    body = json.dumps(data, default=_to_json, ensure_ascii=False, separators=(",", ":"))
    for raw, escaped in _HTML_ESCAPES:
        body = body.replace(raw, escaped)
    return Response(body + "\n", status=int(status), content_type="application/json")


def error_response(
    status: int, code: str, message: str, fields: Sequence[FieldError] | None = None
) -> Response:
    """Build a JSON error response."""
    return json_response(status, ErrorResponse(code, message, tuple(fields or ())))


def _caused_by(error: BaseException | None, kind: type[BaseException]) -> bool:
    seen: set[int] = set()
    while error is not None and id(error) not in seen:
        if isinstance(error, kind):
            return True
        seen.add(id(error))
        error = error.__cause__
    return False


def domain_error_response(error: BaseException) -> Response:
    """Map a domain error to its standard HTTP response."""
    if _caused_by(error, UserAlreadyExistsError):
        return error_response(HTTPStatus.CONFLICT, "CONFLICT", "user already exists")
    return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", "internal server error")