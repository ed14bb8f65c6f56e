# avialog

A Flask application exposing a pilot's logbook as a JSON API: the user's
profile, their aircraft, their contacts and their logged flights. The
package holds the HTTP layer — request and response shapes, JSON binding,
the authentication check and the controllers — and calls a service layer
that you supply.

## Endpoints

The health check is public. Every route under `/api` first runs the
authentication check: the `Authorization` header has its first `Bearer `
prefix removed and the rest is passed to your authentication service.

| Method | Path                  | Purpose                              |
|--------|-----------------------|--------------------------------------|
| GET    | `/healthz`            | Health status: `{"healthy": true}`   |
| GET    | `/api/profile`        | The signed-in user's profile         |
| PUT    | `/api/profile`        | Update the profile                   |
| GET    | `/api/contacts`       | List contacts                        |
| POST   | `/api/contacts`       | Add a contact (201)                  |
| PUT    | `/api/contacts/<id>`  | Update a contact                     |
| DELETE | `/api/contacts/<id>`  | Delete a contact                     |
| GET    | `/api/logbook`        | Logbook entries in a time window     |
| POST   | `/api/logbook`        | Add a logbook entry (201)            |
| PUT    | `/api/logbook/<id>`   | Update a logbook entry               |
| DELETE | `/api/logbook/<id>`   | Delete a logbook entry               |
| GET    | `/api/aircraft`       | List aircraft                        |
| POST   | `/api/aircraft`       | Add an aircraft (201)                |
| PUT    | `/api/aircraft/<id>`  | Update an aircraft                   |
| DELETE | `/api/aircraft/<id>`  | Delete an aircraft                   |

`<id>` must be a decimal number that fits in 32 unsigned bits; anything
else is answered with 400.

`GET /api/logbook` reads a JSON body `{"start": <unix seconds>, "end":
<unix seconds>}`. Give both or neither: with neither (send `{}`) the last
90 days are listed, with only one the answer is 400. An empty body is a
400 as well, like on every route that reads a body.

## Responses and errors

Bodies are compact JSON. Times are RFC 3339 strings and durations are
whole nanoseconds.

Handler errors come back as `{"code": <status>, "message": "<text>"}`.
Exceptions raised by your services map onto status codes through the
classes in `avialog.errors`:

- `BadRequestError` → 400
- `NotFoundError` → 404 (contact update and delete, logbook and aircraft delete)
- `ConflictError` → 409 (aircraft delete)
- anything else → 500

A request body that cannot be bound (`avialog.dto.BindingError`) gives 400.
The authentication check answers `{"error": "<text>"}` with 401 when the
service raises `NotAuthorizedError`, and 500 for any other exception.

Each error class takes an optional detail appended to its message, so
`NotFoundError("record not found")` reads `not found: record not found`.

## Using it

```python
from avialog.config import Config
from avialog.controllers.routes import create_app

config = Config.from_env(None)          # reads DSN and FIREBASE_KEY
app = create_app(services, config)
```

`create_app` returns a Flask application that you serve with any WSGI
server. `services` is any object with these attributes:

- `user`: `get_user(user_id)`, `update_profile(user_id, request)`, returning `avialog.models.User`
- `contact`: `get_user_contacts(user_id)`, `insert_contact(user_id, request)`,
  `update_contact(user_id, contact_id, request)`, `delete_contact(user_id, contact_id)`
- `aircraft`: `get_user_aircraft(user_id)`, `insert_aircraft(user_id, request)`,
  `update_aircraft(user_id, aircraft_id, request)`, `delete_aircraft(user_id, aircraft_id)`
- `logbook`: `get_logbook_entries(user_id, start, end)`, `insert_logbook_entry(user_id, request)`,
  `update_logbook_entry(user_id, flight_id, request)`, `delete_logbook_entry(user_id, flight_id)`,
  returning `avialog.dto.LogbookResponse` values
- `auth`: `validate_token(ctx, token)`, returning a `User` whose `id`
  becomes the signed-in user

`avialog.controllers.routes.Controllers` builds the controllers and can
register them on an existing app with `Controllers(services, config).route(app)`.
The controllers themselves work on an `avialog.context.RequestContext`
and can be driven without Flask.

`Config.decode_firebase_key()` returns the base64-decoded contents of
`FIREBASE_KEY` and raises `ValueError` if they are not valid base64.

Request and response shapes are in `avialog.dto` (`bind_json` and
`to_json` do the decoding and encoding); stored records and their
enumerations (`Role`, `Style`, `ApproachType`) are in `avialog.models`.

## What it does not do

The package provides no service layer: there is no database access, no
storage of users, aircraft, contacts or flights, and no token
verification of its own. It has no command that starts a server and no
API documentation endpoint. All of these are for the caller to supply.