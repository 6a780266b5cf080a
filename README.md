# biblioteca

A small JSON web API for running a library: users, books, loans
(*préstamos*) and returns (*devoluciones*). Data is kept in a SQLite
database, and user passwords are stored as bcrypt hashes.

## Installation

```
pip install .
```

## Running the server

```
biblioteca
```

This creates the tables if needed and starts the HTTP server. Options:

| Option   | Default         | Meaning                    |
|----------|-----------------|----------------------------|
| `--db`   | `biblioteca.db` | path of the SQLite database |
| `--host` | `0.0.0.0`       | address to listen on       |
| `--port` | `8080`          | port to listen on          |

Requests from any origin are accepted: responses to requests that carry an
`Origin` header get `Access-Control-Allow-Origin: *`, and CORS preflight
requests are answered with status 204, allowing the methods
`GET, POST, PUT, DELETE, OPTIONS` and the headers
`Origin, Content-Length, Content-Type, Authorization`.

## Endpoints

| Method | Path                           | Action                                   |
|--------|--------------------------------|------------------------------------------|
| GET    | `/api/usuarios`                | list users (passwords never returned)    |
| POST   | `/api/usuarios`                | create a user                            |
| PUT    | `/api/usuarios/<id>`           | update a user; password only if given    |
| DELETE | `/api/usuarios/<id>`           | delete a user                            |
| GET    | `/api/libros`                  | list books                               |
| POST   | `/api/libros`                  | create a book                            |
| PUT    | `/api/libros/<id>`             | update a book                            |
| DELETE | `/api/libros/<id>`             | delete a book                            |
| GET    | `/api/prestamos`               | list loans, newest first                 |
| POST   | `/api/prestamos`               | lend a book (takes one copy off stock)   |
| PUT    | `/api/prestamos/<id>`          | update a loan                            |
| PUT    | `/api/prestamos/<id>/devolver` | mark a loan returned (puts copy back)    |
| DELETE | `/api/prestamos/<id>`          | delete a loan                            |
| GET    | `/api/devoluciones`            | list returns, newest first               |
| POST   | `/api/devoluciones`            | record a return and close its loan       |
| DELETE | `/api/devoluciones/<id>`       | delete a return record                   |
| GET    | `/libros`                      | list books                               |
| POST   | `/libros`                      | create a book; answers `{"mensaje": "Libro registrado exitosamente"}` |

Creating a record answers 201 with the stored record, including its new
`id`. Successful updates and deletions answer `{"message": "..."}`. A
listing with no rows answers `null`.

A loan can only be made when the book has copies available. A loan cannot be
returned twice. Failures come back as `{"error": "..."}`, with messages in
Spanish:

- 400 for a missing or malformed JSON body, a field of the wrong type, a
  book with no copies left, or a loan that was already returned;
- 500 for an unknown book or loan, a password longer than 72 bytes, and
  database errors.

Example:

```
curl -X POST localhost:8080/api/libros \
     -H 'Content-Type: application/json' \
     -d '{"titulo": "Rayuela", "autor": "Julio Cortázar", "cantidad_disponible": 3}'
```

## Using it from Python

```python
from biblioteca.db import connect, init_schema
from biblioteca.repository import Biblioteca
from biblioteca.models import Libro
from biblioteca.app import create_app

conn = connect(":memory:")
init_schema(conn)
store = Biblioteca(conn)
libro = store.create_libro(Libro.from_dict({"titulo": "Ficciones", "cantidad_disponible": 2}))

app = create_app(store)
```

- `biblioteca.models` holds the dataclasses `Usuario`, `Libro`, `Prestamo`
  and `Devolucion`, each with `from_dict` and `to_dict`. `from_dict` raises
  `ValidationError` for malformed input; missing fields take empty defaults.
- `biblioteca.db` has `connect(path)` and `init_schema(conn)`.
- `biblioteca.repository` has the `Biblioteca` store, `hash_password`, and
  the errors `NotFoundError`, `BookUnavailableError` and
  `AlreadyReturnedError`.
- `biblioteca.app` has `create_app(store)` and `main(argv=None)`.

## What it does not do

- No web page is included. `GET /` renders `templates/index.html` and
  `/static` serves files from `./static`, both looked up in the directory the
  server is started from; without them those paths fail.
- There is no login: passwords are stored hashed, but no endpoint checks
  them.

## Tests

```
pip install .[test]
pytest
```