"""Method-aware URL routing for WSGI applications."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from werkzeug.wrappers import Request, Response

Handler = Callable[[Request], Response]

PATH_PARAMS_KEY = "coffie.path_params"


def _is_wildcard(segment: str) -> bool:
    return len(segment) > 2 and segment.startswith("{") and segment.endswith("}")


def _plain_error(status: int, text: str, headers: Iterable[tuple[str, str]] = ()) -> Response:
    response = Response(text + "\n", status=status, content_type="text/plain; charset=utf-8")
    response.headers["X-Content-Type-Options"] = "nosniff"
    for name, value in headers:
        response.headers[name] = value
    return response


@dataclass(frozen=True)
class _Route:
    method: str
    pattern: str
    segments: tuple[str, ...]
    is_prefix: bool
    handler: Handler

    @property
    def shape(self) -> tuple[str, tuple[str, ...], bool]:
        normalized = tuple("{}" if _is_wildcard(s) else s for s in self.segments)
        return self.method, normalized, self.is_prefix

    @property
    def specificity(self) -> tuple[bool, int, int]:
        literals = sum(1 for s in self.segments if not _is_wildcard(s))
        return not self.is_prefix, literals, len(self.segments)

    def accepts(self, method: str) -> bool:
        return self.method == method or (self.method == "GET" and method == "HEAD")

    def match(self, path: str) -> dict[str, str] | None:
        parts = path.split("/")[1:]
        if self.is_prefix:
            if len(parts) <= len(self.segments):
                return None
        elif len(parts) != len(self.segments):
            return None
        params: dict[str, str] = {}
        for expected, actual in zip(self.segments, parts):
            if _is_wildcard(expected):
                if not actual:
                    return None
                params[expected[1:-1]] = actual
            elif expected != actual:
                return None
        return params


def _parse_pattern(path: str) -> tuple[tuple[str, ...], bool]:
    if not path.startswith("/"):
        raise ValueError(f"path pattern must start with '/': {path!r}")
    if path == "/":
        return (), True
    if path.endswith("/"):
        segments, is_prefix = tuple(path[1:-1].split("/")), True
    else:
        segments, is_prefix = tuple(path[1:].split("/")), False
    for segment in segments:
        if "{" in segment or "}" in segment:
            if not _is_wildcard(segment) or not segment[1:-1].isidentifier():
                raise ValueError(f"invalid wildcard segment {segment!r} in {path!r}")
    return segments, is_prefix


class Router:
    """Dispatches requests to handlers by HTTP method and path pattern.

    A pattern ending in '/' matches every path below it; '{name}' segments
    match one path segment and are exposed in the WSGI environ under
    PATH_PARAMS_KEY.
    """

    def __init__(self) -> None:
        self._routes: list[_Route] = []

    def add(self, method: str, path: str, handler: Handler) -> None:
        method = method.upper()
        if not method or not method.isalpha():
            raise ValueError(f"invalid HTTP method: {method!r}")
        segments, is_prefix = _parse_pattern(path)
        route = _Route(method, path, segments, is_prefix, handler)
        for existing in self._routes:
            if existing.shape == route.shape:
                raise ValueError(
                    f"pattern {method} {path} conflicts with {existing.method} {existing.pattern}"
                )
        self._routes.append(route)

    def dispatch(self, request: Request) -> Response:
        path = request.path
        method = request.method.upper()
        matched = [(route, params) for route in self._routes if (params := route.match(path)) is not None]

        if not matched:
            redirect = self._slash_redirect(request, path, method)
            if redirect is not None:
                return redirect
            return _plain_error(404, "404 page not found")

        candidates = [(route, params) for route, params in matched if route.accepts(method)]
        if not candidates:
            allowed = {route.method for route, _ in matched}
            if "GET" in allowed:
                allowed.add("HEAD")
            return _plain_error(405, "Method Not Allowed", [("Allow", ", ".join(sorted(allowed)))])

        route, params = max(candidates, key=lambda item: item[0].specificity)
        request.environ[PATH_PARAMS_KEY] = params
        return route.handler(request)

    def _slash_redirect(self, request: Request, path: str, method: str) -> Response | None:
        if path.endswith("/"):
            return None
        slashed = path + "/"
        if not any(
            route.is_prefix and route.accepts(method) and route.match(slashed) is not None
            for route in self._routes
        ):
            return None
        location = slashed
        query = request.query_string.decode("latin-1")
        if query:
            location += "?" + query
        return Response(status=301, headers={"Location": location})

    def __call__(self, environ, start_response):
        response = self.dispatch(Request(environ))
        return response(environ, start_response)