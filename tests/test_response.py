import json
from datetime import datetime, timezone
from http import HTTPStatus

from coffie.response import (
    ErrorResponse,
    FieldError,
    domain_error_response,
    error_response,
    json_response,
)
from coffie.user_domain import UserAlreadyExistsError


def _body(response):
    return json.loads(response.get_data(as_text=True))


def test_json_response_sets_status_type_and_body():
    response = json_response(HTTPStatus.OK, {"status": "ok"})
    assert response.status_code == HTTPStatus.OK
    assert response.headers["Content-Type"] == "application/json"
    assert _body(response) == {"status": "ok"}
    assert response.get_data().endswith(b"\n")


def test_json_response_escapes_html_characters():
    payload = {"text": "<a & b>"}
    response = json_response(HTTPStatus.OK, payload)
    raw = response.get_data()
    assert b"<" not in raw and b">" not in raw and b"&" not in raw
    assert _body(response) == payload


def test_json_response_formats_utc_datetime():
    moment = datetime(2026, 4, 9, 13, 0, 0, tzinfo=timezone.utc)
    response = json_response(HTTPStatus.OK, {"at": moment})
    assert _body(response)["at"] == "2026-04-09T13:00:00Z"


def test_json_response_datetime_round_trips_with_fraction():
    moment = datetime(2026, 4, 9, 13, 0, 0, 250000, tzinfo=timezone.utc)
    text = _body(json_response(HTTPStatus.OK, {"at": moment}))["at"]
    assert datetime.fromisoformat(text.replace("Z", "+00:00")) == moment


def test_json_response_uses_to_dict_objects():
    field_error = FieldError("email", "is required")
    response = json_response(HTTPStatus.OK, [field_error])
    assert _body(response) == [field_error.to_dict()]


def test_error_response_omits_empty_fields():
    response = error_response(HTTPStatus.BAD_REQUEST, "INVALID_INPUT", "invalid request body")
    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert _body(response) == {"error_code": "INVALID_INPUT", "message": "invalid request body"}


def test_error_response_includes_fields():
    fields = [FieldError("name", "is required"), FieldError("email", "is required")]
    response = error_response(HTTPStatus.BAD_REQUEST, "INVALID_INPUT", "validation failed", fields)
    assert _body(response) == ErrorResponse("INVALID_INPUT", "validation failed", fields).to_dict()
    assert [item["field"] for item in _body(response)["fields"]] == ["name", "email"]


def test_error_response_to_dict_without_fields():
    assert "fields" not in ErrorResponse("CONFLICT", "user already exists").to_dict()


def test_domain_error_maps_user_already_exists_to_conflict():
    response = domain_error_response(UserAlreadyExistsError())
    assert response.status_code == HTTPStatus.CONFLICT
    assert _body(response) == {"error_code": "CONFLICT", "message": "user already exists"}


def test_domain_error_follows_cause_chain():
    try:
        try:
            raise UserAlreadyExistsError()
        except UserAlreadyExistsError as inner:
            raise RuntimeError("wrapped") from inner
    except RuntimeError as wrapped:
        response = domain_error_response(wrapped)
    assert response.status_code == HTTPStatus.CONFLICT


def test_domain_error_maps_unknown_error_to_internal():
    response = domain_error_response(RuntimeError("boom"))
    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert _body(response) == {"error_code": "INTERNAL_ERROR", "message": "internal server error"}