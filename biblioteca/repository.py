"""Library operations on users, books, loans and returns."""

from __future__ import annotations

import dataclasses
import sqlite3

import bcrypt

from .models import Devolucion, Libro, Prestamo, Usuario

_BCRYPT_COST = 10
_BCRYPT_MAX_BYTES = 72


class NotFoundError(LookupError):
    """Raised when a referenced record does not exist."""


class BookUnavailableError(Exception):
    """Raised when a book has no copies left to lend."""


class AlreadyReturnedError(Exception):
    """Raised when a loan has already been returned."""


def hash_password(password: str) -> str:
    """Return a bcrypt hash of *password*."""
    raw = password.encode("utf-8")
    if len(raw) > _BCRYPT_MAX_BYTES:
        raise ValueError("Error al encriptar contraseña")
    return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=_BCRYPT_COST)).decode("ascii")


class Biblioteca:
    """The library store over an open database connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # Usuarios

    def list_usuarios(self) -> list[Usuario]:
        rows = self._conn.execute(
            "SELECT id, nombre, correo, tipo_usuario FROM usuarios"
        ).fetchall()
        return [
            Usuario(id=uid, nombre=nombre, correo=correo, tipo_usuario=tipo)
            for uid, nombre, correo, tipo in rows
        ]

    def create_usuario(self, usuario: Usuario) -> Usuario:
        hashed = hash_password(usuario.contrasena)
        with self._conn:
            cursor = self._conn.execute(
                "INSERT INTO usuarios (nombre, correo, contrasena, tipo_usuario) "
                "VALUES (?, ?, ?, ?)",
                (usuario.nombre, usuario.correo, hashed, usuario.tipo_usuario),
            )
        return dataclasses.replace(usuario, id=cursor.lastrowid, contrasena="")

    def update_usuario(self, usuario_id: int, usuario: Usuario) -> None:
        query = "UPDATE usuarios SET nombre = ?, correo = ?, tipo_usuario = ?"
        args: list[object] = [usuario.nombre, usuario.correo, usuario.tipo_usuario]
        if usuario.contrasena:
            query += ", contrasena = ?"
            args.append(hash_password(usuario.contrasena))
        query += " WHERE id = ?"
        args.append(usuario_id)
        with self._conn:
            self._conn.execute(query, args)

    def delete_usuario(self, usuario_id: int) -> None:
        with self._conn:
            self._conn.execute("DELETE FROM usuarios WHERE id = ?", (usuario_id,))

    # Libros

    def list_libros(self) -> list[Libro]:
        rows = self._conn.execute(
            "SELECT id, titulo, autor, editorial, anio_publicacion, genero, isbn, "
            "cantidad_disponible FROM libros"
        ).fetchall()
        return [Libro(*row) for row in rows]

    def create_libro(self, libro: Libro) -> Libro:
        with self._conn:
            cursor = self._conn.execute(
                "INSERT INTO libros (titulo, autor, editorial, anio_publicacion, genero, "
                "isbn, cantidad_disponible) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    libro.titulo,
                    libro.autor,
                    libro.editorial,
                    libro.anio_publicacion,
                    libro.genero,
                    libro.isbn,
                    libro.cantidad_disponible,
                ),
            )
        return dataclasses.replace(libro, id=cursor.lastrowid)

    def update_libro(self, libro_id: int, libro: Libro) -> None:
        with self._conn:
            self._conn.execute(
                "UPDATE libros SET titulo = ?, autor = ?, editorial = ?, "
                "anio_publicacion = ?, genero = ?, isbn = ?, cantidad_disponible = ? "
                "WHERE id = ?",
                (
                    libro.titulo,
                    libro.autor,
                    libro.editorial,
                    libro.anio_publicacion,
                    libro.genero,
                    libro.isbn,
                    libro.cantidad_disponible,
                    libro_id,
                ),
            )

    def delete_libro(self, libro_id: int) -> None:
        with self._conn:
            self._conn.execute("DELETE FROM libros WHERE id = ?", (libro_id,))

    # Préstamos

    def list_prestamos(self) -> list[Prestamo]:
        rows = self._conn.execute(
            """
            SELECT p.id, p.id_usuario, p.id_libro, p.fecha_prestamo, p.fecha_devolucion,
                   p.devuelto, u.nombre, l.titulo
            FROM prestamos p
            LEFT JOIN usuarios u ON p.id_usuario = u.id
            LEFT JOIN libros l ON p.id_libro = l.id
            ORDER BY p.id DESC
            """
        ).fetchall()
        return [
            Prestamo(
                id=pid,
                id_usuario=id_usuario,
                id_libro=id_libro,
                fecha_prestamo=fecha_prestamo,
                fecha_devolucion=fecha_devolucion,
                devuelto=bool(devuelto),
                usuario_nombre=usuario_nombre,
                libro_titulo=libro_titulo,
            )
            for (
                pid,
                id_usuario,
                id_libro,
                fecha_prestamo,
                fecha_devolucion,
                devuelto,
                usuario_nombre,
                libro_titulo,
            ) in rows
        ]

    def create_prestamo(self, prestamo: Prestamo) -> Prestamo:
        row = self._conn.execute(
            "SELECT cantidad_disponible FROM libros WHERE id = ?", (prestamo.id_libro,)
        ).fetchone()
        if row is None:
            raise NotFoundError("Error al verificar disponibilidad")
        if row[0] <= 0:
            raise BookUnavailableError("El libro no está disponible")

        with self._conn:
            cursor = self._conn.execute(
                "INSERT INTO prestamos (id_usuario, id_libro, fecha_prestamo, "
                "fecha_devolucion, devuelto) VALUES (?, ?, ?, ?, 0)",
                (
                    prestamo.id_usuario,
                    prestamo.id_libro,
                    prestamo.fecha_prestamo,
                    prestamo.fecha_devolucion,
                ),
            )
            self._conn.execute(
                "UPDATE libros SET cantidad_disponible = cantidad_disponible - 1 WHERE id = ?",
                (prestamo.id_libro,),
            )
        return dataclasses.replace(prestamo, id=cursor.lastrowid)

    def update_prestamo(self, prestamo_id: int, prestamo: Prestamo) -> None:
        with self._conn:
            self._conn.execute(
                "UPDATE prestamos SET id_usuario = ?, id_libro = ?, fecha_prestamo = ?, "
                "fecha_devolucion = ? WHERE id = ?",
                (
                    prestamo.id_usuario,
                    prestamo.id_libro,
                    prestamo.fecha_prestamo,
                    prestamo.fecha_devolucion,
                    prestamo_id,
                ),
            )

    def _pending_loan_book(self, prestamo_id: int) -> int:
        row = self._conn.execute(
            "SELECT id_libro, devuelto FROM prestamos WHERE id = ?", (prestamo_id,)
        ).fetchone()
        if row is None:
            raise NotFoundError("Préstamo no encontrado")
        id_libro, devuelto = row
        if devuelto:
            raise AlreadyReturnedError("El préstamo ya fue devuelto")
        return id_libro

    def mark_prestamo_devuelto(self, prestamo_id: int) -> None:
        id_libro = self._pending_loan_book(prestamo_id)
        with self._conn:
            self._conn.execute(
                "UPDATE prestamos SET devuelto = 1 WHERE id = ?", (prestamo_id,)
            )
            self._conn.execute(
                "UPDATE libros SET cantidad_disponible = cantidad_disponible + 1 WHERE id = ?",
                (id_libro,),
            )

    def delete_prestamo(self, prestamo_id: int) -> None:
        with self._conn:
            self._conn.execute("DELETE FROM prestamos WHERE id = ?", (prestamo_id,))

    # Devoluciones

    def list_devoluciones(self) -> list[Devolucion]:
        rows = self._conn.execute(
            """
            SELECT d.id, d.id_prestamo, d.fecha_entrega, d.observaciones,
                   u.nombre, l.titulo
            FROM devoluciones d
            INNER JOIN prestamos p ON d.id_prestamo = p.id
            LEFT JOIN usuarios u ON p.id_usuario = u.id
            LEFT JOIN libros l ON p.id_libro = l.id
            ORDER BY d.id DESC
            """
        ).fetchall()
        return [Devolucion(*row) for row in rows]

    def create_devolucion(self, devolucion: Devolucion) -> Devolucion:
        self._pending_loan_book(devolucion.id_prestamo)
        with self._conn:
            cursor = self._conn.execute(
                "INSERT INTO devoluciones (id_prestamo, fecha_entrega, observaciones) "
                "VALUES (?, ?, ?)",
                (devolucion.id_prestamo, devolucion.fecha_entrega, devolucion.observaciones),
            )
            self._conn.execute(
                "UPDATE prestamos SET devuelto = 1 WHERE id = ?", (devolucion.id_prestamo,)
            )
            row = self._conn.execute(
                "SELECT id_libro FROM prestamos WHERE id = ?", (devolucion.id_prestamo,)
            ).fetchone()
            if row is None:
                raise NotFoundError("Préstamo no encontrado")
            self._conn.execute(
                "UPDATE libros SET cantidad_disponible = cantidad_disponible + 1 WHERE id = ?",
                (row[0],),
            )
        return dataclasses.replace(devolucion, id=cursor.lastrowid)

    def delete_devolucion(self, devolucion_id: int) -> None:
        with self._conn:
            self._conn.execute("DELETE FROM devoluciones WHERE id = ?", (devolucion_id,))