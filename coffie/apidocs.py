"""Swagger 2.0 description of the API and the routes that serve it."""

from __future__ import annotations

import html
from http import HTTPStatus
from typing import Any

from werkzeug.wrappers import Request, Response

from coffie.response import json_response
from coffie.routing import PATH_PARAMS_KEY, Router

SWAGGER_PREFIX = "/swagger/"

_ERROR_REF = {"$ref": "#/definitions/coffie_internal_http_response.ErrorResponse"}


def _definitions() -> dict[str, Any]:
    string = {"type": "string"}
    return {
        "coffie_internal_http_response.ErrorResponse": {
            "type": "object",
            "properties": {
                "error_code": dict(string),
                "fields": {
                    "type": "array",
                    "items": {"$ref": "#/definitions/coffie_internal_http_response.FieldError"},
                },
                "message": dict(string),
            },
        },
        "coffie_internal_http_response.FieldError": {
            "type": "object",
            "properties": {"field": dict(string), "message": dict(string)},
        },
        "internal_feature_user_http.RegisterUser": {
            "type": "object",
            "properties": {"email": dict(string), "name": dict(string)},
        },
        "internal_feature_user_http.UserResponse": {
            "type": "object",
            "properties": {
                "created_at": dict(string),
                "email": dict(string),
                "id": dict(string),
                "name": dict(string),
            },
        },
    }


def _paths() -> dict[str, Any]:
    return {
        "/api/users": {
            "post": {
                "description": "Create a new user account with name and email.",
                "consumes": ["application/json"],
                "produces": ["application/json"],
                "tags": ["users"],
                "summary": "Register a new user",
                "parameters": [
                    {
                        "description": "User registration",
                        "name": "request",
                        "in": "body",
                        "required": True,
                        "schema": {"$ref": "#/definitions/internal_feature_user_http.RegisterUser"},
                    }
                ],
                "responses": {
                    "201": {
                        "description": "Created",
                        "schema": {"$ref": "#/definitions/internal_feature_user_http.UserResponse"},
                    },
                    "400": {"description": "Bad Request", "schema": dict(_ERROR_REF)},
                    "500": {"description": "Internal Server Error", "schema": dict(_ERROR_REF)},
                },
            }
        },
        "/health": {
            "get": {
                "description": "Check if the API is running.",
                "produces": ["application/json"],
                "tags": ["health"],
                "summary": "Health check",
                "responses": {
                    "200": {
                        "description": "OK",
                        "schema": {
                            "type": "object",
                            "additionalProperties": {"type": "string"},
                        },
                    }
                },
            }
        },
    }


def swagger_spec() -> dict[str, Any]:
    """Return a fresh copy of the Swagger 2.0 document for the API."""
    return {
        "schemes": ["http"],
        "swagger": "2.0",
        "info": {
            "description": "REST API for managing coffee recipes.",
            "title": "Coffee API",
            "contact": {},
            "version": "1.0",
        },
        "host": "localhost:8080",
        "basePath": "/",
        "paths": _paths(),
        "definitions": _definitions(),
    }


def _index_page(spec: dict[str, Any]) -> str:
    info = spec["info"]
    items = []
    for path, operations in spec["paths"].items():
        for method, operation in operations.items():
            items.append(
                "<li><code>{} {}</code> &mdash; {}</li>".format(
                    html.escape(method.upper()),
                    html.escape(path),
                    html.escape(operation.get("summary", "")),
                )
            )
    title = html.escape(f"{info['title']} {info['version']}")
    return (
        "<!DOCTYPE html>\n"
        f"<html><head><meta charset=\"utf-8\"><title>{title}</title></head>\n"
        f"<body><h1>{title}</h1>\n"
        f"<p>{html.escape(info['description'])}</p>\n"
        f"<ul>{''.join(items)}</ul>\n"
        "<p><a href=\"doc.json\">doc.json</a></p>\n"
        "</body></html>\n"
    )


def _not_found() -> Response:
    response = Response("404 page not found\n", status=404, content_type="text/plain; charset=utf-8")
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response


def _serve_swagger(request: Request) -> Response:
    path = request.path
    if not path.startswith(SWAGGER_PREFIX):
        return _not_found()
    name = path[len(SWAGGER_PREFIX):]
    if name == "":
        return Response(status=HTTPStatus.MOVED_PERMANENTLY, headers={"Location": SWAGGER_PREFIX + "index.html"})
    if name == "doc.json":
        return json_response(HTTPStatus.OK, swagger_spec())
    if name == "index.html":
        return Response(_index_page(swagger_spec()), status=HTTPStatus.OK, content_type="text/html; charset=utf-8")
    request.environ.pop(PATH_PARAMS_KEY, None)
    return _not_found()


def register_swagger_routes(router: Router) -> None:
    """Serve the API description under /swagger/."""
    router.add("GET", SWAGGER_PREFIX, _serve_swagger)