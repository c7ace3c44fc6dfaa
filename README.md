# daylog

daylog is a small set of HTTP services for keeping a daily log of how your
hours were spent. It is made of three independent Flask servers:

| Command          | Service                                                          |
|------------------|------------------------------------------------------------------|
| `daylog-action`  | Categories of activity and the actions logged against each day   |
| `daylog-auth`    | User registration, login, access tokens and refresh tokens       |
| `daylog-gateway` | Public entry point that checks access tokens and forwards calls  |

Each server reads its settings from the environment, and also from a `.env`
file in the working directory if one is present. Each listens on all
interfaces (`0.0.0.0`) using Flask's built-in server. A missing or malformed
setting, a database that cannot be opened, or a port that cannot be used
stops the server with exit status 1 after logging the reason.

Install with `pip install .`; the tests need the `test` extra
(`pip install .[test]`).

## The action service

```
daylog-action
```

Settings:

| Variable         | Default           | Meaning                                   |
|------------------|-------------------|-------------------------------------------|
| `ACTION_PORT`    | `8081`            | Port to listen on                         |
| `ACTION_DB_PATH` | `.data/action.db` | SQLite database file                      |
| `CACHE_TTL_SEC`  | `60`              | Must be an integer; otherwise not used    |
| `LOG_LEVEL`      | `info`            | Read into the configuration; not used     |

A non-integer `CACHE_TTL_SEC` stops the server at start-up. The directory
holding the database file must already exist; the tables are created on
first start and the database is opened in WAL mode.

Endpoints:

- `GET /health` – `{"status": "ok", "time": ...}`
- `GET /api/v1/categories` – list categories, ordered by id
- `POST /api/v1/categories` – create a category, body `{"name": "Reading"}`;
  `201` with the new category, `400` if `name` is missing or empty
- `GET /api/v1/days/<date>/actions` – list the actions of a day
  (`YYYY-MM-DD`), each with its category
- `POST /api/v1/days/<date>/actions` – record an action on the day. The
  request body is not read: the action is stored with category id `0` and
  zero hours, and returned with `201`.

An invalid date answers `400` with `{"error": "invalid date format"}`; a
storage failure answers `500` with the error message.

Categories are returned as `{"ID": 1, "Name": "Reading"}` and actions as

```json
{"ID": 1, "Date": "2024-05-01T00:00:00Z", "CategoryID": 1, "Hours": 2.5,
 "Category": {"ID": 1, "Name": "Reading"}}
```

`daylog.action.handlers` also holds `CategoryHandler.update_category`,
`CategoryHandler.delete_category`, `ActionHandler.update_action` and
`ActionHandler.delete_action`, but the server built by `create_app` does not
mount them; an application of your own can add them with
`app.add_url_rule`.

## The auth service

```
daylog-auth
```

Settings:

| Variable            | Default          | Meaning                            |
|---------------------|------------------|------------------------------------|
| `AUTH_PORT`         | `8080`           | Port to listen on                  |
| `AUTH_DB_PATH`      | `./data/auth.db` | SQLite database file               |
| `JWT_SECRET`        | *(required)*     | Key used to sign access tokens     |
| `ACCESS_TTL_SEC`    | `900`            | Access token lifetime in seconds   |
| `REFRESH_TTL_HOURS` | `24`             | Refresh token lifetime in hours    |

Endpoints (all `POST`, all JSON):

- `/api/v1/auth/register` – `{"username": ..., "password": ...}`; `201` on
  success, `409` if the user exists
- `/api/v1/auth/login` – same body; returns
  `{"access_token": ..., "refresh_token": ...}`, or `401`
- `/api/v1/auth/refresh` – `{"refresh_token": ...}`; revokes the old refresh
  token and returns a new pair, or `401` if it is unknown, revoked or expired
- `/api/v1/auth/logout` – `{"refresh_token": ...}`; revokes it and answers
  `204`, or `400` if it is unknown

A missing, empty or non-string field answers `400`.

Passwords are stored as bcrypt hashes (cost 10). A password longer than 72
bytes is stored without a usable hash, so that account can never log in.
Access tokens are HS256-signed JWTs with `sub` and `exp` claims. After
`refresh` the subject is the user id in decimal; after `login` it is the
single character whose code point is the user id. Refresh tokens are 32
letters and digits, each chosen from the nanosecond clock; they are not drawn
from a cryptographic random source.

## The gateway

```
daylog-gateway
```

Settings:

| Variable               | Default      | Meaning                            |
|------------------------|--------------|------------------------------------|
| `GATEWAY_PORT`         | `80`         | Port to listen on                  |
| `CALENDAR_SERVICE_URL` | *(required)* | Base URL of the calendar service   |
| `ACTION_SERVICE_URL`   | *(required)* | Base URL of the action service     |
| `HABIT_SERVICE_URL`    | *(required)* | Base URL of the habit service      |
| `METRICS_SERVICE_URL`  | *(required)* | Base URL of the metrics service    |
| `AUTH_SERVICE_URL`     | *(required)* | Base URL of the auth service       |
| `JWT_SECRET`           | *(required)* | Must match the auth service's key  |

Register, login and refresh are forwarded to the auth service without a
token. Every other route needs an `Authorization: Bearer <access token>`
header holding a JWT signed with `JWT_SECRET` (HS256, HS384 or HS512);
otherwise the gateway answers `401` with `invalid auth header` or
`invalid token`. Protected routes are `/health`, logout, and:

- `GET /api/v1/days`, `GET|PUT /api/v1/days/<date>` – calendar service
- `GET|POST /api/v1/days/<date>/actions`,
  `GET|PUT|DELETE /api/v1/days/<date>/actions/<id>` – action service
- `GET|POST /api/v1/habits`, `PUT|DELETE /api/v1/habits/<id>`,
  `POST /api/v1/habits/<id>/entries`,
  `DELETE /api/v1/habits/<id>/entries/<date>` – habit service
- `GET /api/v1/metrics`, `GET /api/v1/metrics/report` – metrics service

Requests are forwarded with their method, path, query, body and headers
(except `Host`). The upstream status and body are passed back, with its
headers apart from `Content-Encoding`, `Content-Length`, `Transfer-Encoding`
and `Connection`. If the upstream cannot be reached the gateway answers `502`
with an `error` message. Each request is logged as
`METHOD PATH -> STATUS (latency)`.

## What is not included

The gateway forwards calendar, habit and metrics requests, but this package
has no calendar, habit or metrics service: those routes work only if you run
such services yourself at the configured URLs. The action service does no
authentication of its own; it relies on being reached through the gateway.

## Using the pieces from Python

Each server module (`daylog.action.server`, `daylog.auth.server`,
`daylog.gateway.server`) offers `create_app(config)`, which returns a Flask
application, and `main(argv=None)`, which the commands above call. The
configuration objects come from `load(environ=None)` in `daylog.action.config`,
`daylog.auth.config` and `daylog.gateway.config`; pass a mapping to read
settings from it instead of `.env` and the process environment. A missing or
malformed setting raises that module's `ConfigError`.

The layers below the servers can be used directly:

- `daylog.action.repository.connect(path)`, `CategoryRepo`, `ActionRepo`,
  and `daylog.action.service.CategoryService`, `ActionService`
- `daylog.auth.repository.connect(path)`, `UserRepo`, `TokenRepo`, and
  `daylog.auth.service.AuthService`, whose `register`, `login`, `refresh` and
  `logout` raise `UserExistsError`, `InvalidCredentialsError`,
  `TokenNotFoundError`, `TokenRevokedError` or `TokenExpiredError`
  (all subclasses of `AuthError`)
- `daylog.gateway.middleware.require_auth(secret)` and `install_logging(app)`,
  and `daylog.gateway.routes.reverse_proxy(target_url)` and
  `register(app, config)`