# coffie

A small REST API for a coffee-recipe community, served as a plain WSGI
application built on Werkzeug. Users register with a name and an e-mail
address. The package also holds the data models and request/response
shapes for coffees, brewing recipes and recipe ratings.

## Endpoints

| Method | Path                      | Purpose                                       |
|--------|---------------------------|-----------------------------------------------|
| GET    | `/health`                 | Liveness check, answers `{"status": "ok"}`    |
| POST   | `/api/users`              | Register a user from `{"name", "email"}`      |
| GET    | `/swagger/`               | Redirects (301) to `/swagger/index.html`      |
| GET    | `/swagger/index.html`     | HTML page listing the documented operations   |
| GET    | `/swagger/doc.json`       | The API's Swagger 2.0 description as JSON     |

The health, user and `doc.json` endpoints answer with
`Content-Type: application/json`. Times are written in RFC 3339 form
(`2026-04-09T13:00:00Z`); a time without a time zone is taken as UTC.

Requests that match no route get a plain-text `404 page not found`. A path
that matches a route only under another method gets `405 Method Not Allowed`
with an `Allow` header (`GET` routes also answer `HEAD`).

### Registering a user

```
POST /api/users
{"name": "Lucas", "email": "lucas@example.com"}
```

A successful call answers `201 Created`:

```json
{
  "id": "7d0f3c1e-...",
  "name": "Lucas",
  "email": "lucas@example.com",
  "created_at": "2026-04-09T13:00:00Z"
}
```

The `id` is a freshly generated UUID and `created_at` the current UTC time.
Field names in the body are matched without regard to case, unknown fields
are ignored, and only the first JSON value of the body is read.

## Errors

Failures share one shape:

```json
{
  "error_code": "INVALID_INPUT",
  "message": "validation failed",
  "fields": [{"field": "email", "message": "is required"}]
}
```

`fields` is left out when there is nothing to report field by field.

| Situation                                                 | Status | `error_code`     | `message`               |
|-----------------------------------------------------------|--------|------------------|-------------------------|
| Body is not JSON, not an object, or a field not a string  | 400    | `INVALID_INPUT`  | `invalid request body`  |
| `name` or `email` missing or empty                        | 400    | `INVALID_INPUT`  | `validation failed`     |
| E-mail already registered                                 | 409    | `CONFLICT`       | `user already exists`   |
| Any other failure while registering                       | 500    | `INTERNAL_ERROR` | `internal server error` |

## Using it

`coffie.server.create_app(connection)` builds the WSGI application (a
`coffie.routing.Router`). The connection is an open DB-API connection to a
PostgreSQL database, using the `%s` parameter style, with a `users` table
holding `id`, `name`, `email` and `created_at` columns. Each insert is
committed on success and rolled back on failure; an error whose `pgcode` or
`sqlstate` is `23505` (unique violation) is raised as
`UserAlreadyExistsError` and turned into the 409 response above.

```python
from werkzeug.serving import run_simple

from coffie.server import create_app

app = create_app(connection)
run_simple("localhost", 8080, app)
```

Any WSGI server can host `app` in the same way.

## Pieces

- `coffie.routing.Router` – dispatch by method and path, itself a WSGI app.
  `add(method, path, handler)` registers a handler taking a Werkzeug
  `Request` and returning a `Response`. A pattern ending in `/` matches every
  path below it, and a `{name}` segment matches one path segment; the
  captured values are put in the WSGI environ under
  `coffie.routing.PATH_PARAMS_KEY`. The most specific matching pattern wins;
  registering a conflicting pattern raises `ValueError`.
- `coffie.user_domain` – `User`, `RegisterRequest`, `UserStore` (protocol),
  `UserService` and `UserAlreadyExistsError`.
- `coffie.user_http` – `RegisterUser` (parsing and validation),
  `UserResponse` and `UserHandler`.
- `coffie.user_store` – `PostgresUserStore`.
- `coffie.user_module` – `UserModule`, which wires store, service and
  handler from a connection.
- `coffie.response` – `FieldError`, `ErrorResponse`, `json_response`,
  `error_response` and `domain_error_response` (which also recognises a
  `UserAlreadyExistsError` raised as the cause of another error).
- `coffie.health` – `HealthHandler`.
- `coffie.apidocs` – `swagger_spec()` and `register_swagger_routes(router)`.
- `coffie.coffee`, `coffie.recipe`, `coffie.rating` – data models, request
  bodies (`from_payload`) and response shapes (`to_dict`) for coffees,
  recipes and ratings, plus the errors `RecipeNotFoundError`,
  `UnauthorizedError`, `RecipeAlreadyRatedError` and `InvalidScoreError`.

## What it does not do

- There are no endpoints, services or database stores for coffees, recipes
  or ratings; only their data shapes are provided.
- There is no authentication or request logging.
- The package does not open the database connection, create the `users`
  table or run migrations, and it has no command of its own to start a
  server: you pass in a connection and host the WSGI app yourself.