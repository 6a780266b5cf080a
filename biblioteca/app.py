"""HTTP API for the library: users, books, loans and returns."""

from __future__ import annotations

import argparse
import json
import os
import sqlite3
from typing import Any, Optional, Sequence

from flask import Blueprint, Flask, Response, jsonify, render_template, request

from .db import connect, init_schema
from .models import Devolucion, Libro, Prestamo, Usuario, ValidationError
from .repository import (
    AlreadyReturnedError,
    Biblioteca,
    BookUnavailableError,
    NotFoundError,
)

_ALLOW_METHODS = "GET,POST,PUT,DELETE,OPTIONS"
_ALLOW_HEADERS = "Origin,Content-Length,Content-Type,Authorization"
_MAX_AGE = str(12 * 60 * 60)


def _error(status: int, message: str) -> tuple[Response, int]:
    return jsonify({"error": message}), status


def _message(text: str) -> tuple[Response, int]:
    return jsonify({"message": text}), 200


def _body() -> Any:
    """Decode the request body as JSON, whatever its declared content type."""
    raw = request.get_data()
    if not raw:
        raise ValidationError("EOF")
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    return {} if data is None else data


def _listing(items: list[Any]) -> Response:
    # An empty listing is sent as null, like a nil slice.
    return jsonify([item.to_dict() for item in items] or None)


def _api(store: Biblioteca) -> Blueprint:
    api = Blueprint("api", __name__, url_prefix="/api")

    # Usuarios

    @api.get("/usuarios")
    def obtener_usuarios():
        return _listing(store.list_usuarios())

    @api.post("/usuarios")
    def crear_usuario():
        usuario = Usuario.from_dict(_body())
        try:
            creado = store.create_usuario(usuario)
        except ValidationError:
            raise
        except ValueError:
            return _error(500, "Error al encriptar contraseña")
        return jsonify(creado.to_dict()), 201

    @api.put("/usuarios/<usuario_id>")
    def actualizar_usuario(usuario_id: str):
        usuario = Usuario.from_dict(_body())
        try:
            store.update_usuario(usuario_id, usuario)
        except ValidationError:
            raise
        except ValueError:
            return _error(500, "Error al encriptar contraseña")
        return _message("Usuario actualizado exitosamente")

    @api.delete("/usuarios/<usuario_id>")
    def eliminar_usuario(usuario_id: str):
        store.delete_usuario(usuario_id)
        return _message("Usuario eliminado exitosamente")

    # Libros

    @api.get("/libros")
    def obtener_libros():
        return _listing(store.list_libros())

    @api.post("/libros")
    def crear_libro():
        libro = store.create_libro(Libro.from_dict(_body()))
        return jsonify(libro.to_dict()), 201

    @api.put("/libros/<libro_id>")
    def actualizar_libro(libro_id: str):
        store.update_libro(libro_id, Libro.from_dict(_body()))
        return _message("Libro actualizado exitosamente")

    @api.delete("/libros/<libro_id>")
    def eliminar_libro(libro_id: str):
        store.delete_libro(libro_id)
        return _message("Libro eliminado exitosamente")

    # Préstamos

    @api.get("/prestamos")
    def obtener_prestamos():
        return _listing(store.list_prestamos())

    @api.post("/prestamos")
    def crear_prestamo():
        prestamo = store.create_prestamo(Prestamo.from_dict(_body()))
        return jsonify(prestamo.to_dict()), 201

    @api.put("/prestamos/<prestamo_id>")
    def actualizar_prestamo(prestamo_id: str):
        store.update_prestamo(prestamo_id, Prestamo.from_dict(_body()))
        return _message("Préstamo actualizado exitosamente")

    @api.put("/prestamos/<prestamo_id>/devolver")
    def marcar_prestamo_devuelto(prestamo_id: str):
        store.mark_prestamo_devuelto(prestamo_id)
        return _message("Préstamo marcado como devuelto")

    @api.delete("/prestamos/<prestamo_id>")
    def eliminar_prestamo(prestamo_id: str):
        store.delete_prestamo(prestamo_id)
        return _message("Préstamo eliminado exitosamente")

    # Devoluciones

    @api.get("/devoluciones")
    def obtener_devoluciones():
        return _listing(store.list_devoluciones())

    @api.post("/devoluciones")
    def crear_devolucion():
        devolucion = store.create_devolucion(Devolucion.from_dict(_body()))
        return jsonify(devolucion.to_dict()), 201

    @api.delete("/devoluciones/<devolucion_id>")
    def eliminar_devolucion(devolucion_id: str):
        store.delete_devolucion(devolucion_id)
        return _message("Devolución eliminada exitosamente")

    return api


def _books(store: Biblioteca) -> Blueprint:
    """The plain book routes, outside the /api prefix."""
    books = Blueprint("libros", __name__)

    @books.get("/libros")
    def obtener_libros():
        return _listing(store.list_libros())

    @books.post("/libros")
    def crear_libro():
        store.create_libro(Libro.from_dict(_body()))
        return jsonify({"mensaje": "Libro registrado exitosamente"}), 201

    return books


def _install_cors(app: Flask) -> None:
    @app.before_request
    def preflight():
        if (
            request.method == "OPTIONS"
            and request.headers.get("Origin")
            and request.headers.get("Access-Control-Request-Method")
        ):
            response = Response(status=204)
            response.headers["Access-Control-Allow-Methods"] = _ALLOW_METHODS
            response.headers["Access-Control-Allow-Headers"] = _ALLOW_HEADERS
            response.headers["Access-Control-Max-Age"] = _MAX_AGE
            return response
        return None

    @app.after_request
    def allow_origin(response: Response) -> Response:
        if request.headers.get("Origin"):
            response.headers["Access-Control-Allow-Origin"] = "*"
        return response


def _install_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def bad_request(exc: ValidationError):
        return _error(400, str(exc))

    @app.errorhandler(BookUnavailableError)
    def unavailable(exc: BookUnavailableError):
        return _error(400, str(exc))

    @app.errorhandler(AlreadyReturnedError)
    def already_returned(exc: AlreadyReturnedError):
        return _error(400, str(exc))

    @app.errorhandler(NotFoundError)
    def not_found(exc: NotFoundError):
        return _error(500, str(exc))

    @app.errorhandler(sqlite3.Error)
    def database_error(exc: sqlite3.Error):
        return _error(500, str(exc))


def create_app(store: Biblioteca) -> Flask:
    """Build the web application serving *store*."""
    app = Flask(
        __name__,
        static_folder=os.path.abspath("static"),
        static_url_path="/static",
        template_folder=os.path.abspath("templates"),
    )
    app.json.ensure_ascii = False
    _install_cors(app)
    _install_error_handlers(app)
    app.register_blueprint(_api(store))
    app.register_blueprint(_books(store))

    @app.get("/")
    def index():
        return render_template("index.html")

    return app


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the library API server."""
    parser = argparse.ArgumentParser(description="Servidor de la API de la biblioteca")
    parser.add_argument("--db", default="biblioteca.db", help="ruta de la base de datos")
    parser.add_argument("--host", default="0.0.0.0", help="dirección de escucha")
    parser.add_argument("--port", type=int, default=8080, help="puerto de escucha")
    args = parser.parse_args(argv)

    conn = connect(args.db)
    try:
        init_schema(conn)
        app = create_app(Biblioteca(conn))
        app.run(host=args.host, port=args.port)
    finally:
        conn.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())