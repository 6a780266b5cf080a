"""Database connection and schema for the library store."""

from __future__ import annotations

import logging
import sqlite3
from os import PathLike
from typing import Union

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS usuarios (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    nombre TEXT NOT NULL,
    correo TEXT NOT NULL,
    contrasena TEXT NOT NULL,
    tipo_usuario TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS libros (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    titulo TEXT NOT NULL,
    autor TEXT NOT NULL,
    editorial TEXT NOT NULL,
    anio_publicacion INTEGER,
    genero TEXT NOT NULL,
    isbn TEXT NOT NULL,
    cantidad_disponible INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS prestamos (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    id_usuario INTEGER NOT NULL REFERENCES usuarios(id),
    id_libro INTEGER NOT NULL REFERENCES libros(id),
    fecha_prestamo TEXT NOT NULL,
    fecha_devolucion TEXT NOT NULL,
    devuelto INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS devoluciones (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    id_prestamo INTEGER NOT NULL REFERENCES prestamos(id),
    fecha_entrega TEXT NOT NULL,
    observaciones TEXT NOT NULL
);
"""


def connect(path: Union[str, "PathLike[str]"]) -> sqlite3.Connection:
    """Open the database at *path* and check that it answers."""
    conn = sqlite3.connect(path, check_same_thread=False)
    try:
        conn.execute("SELECT 1").fetchone()
    except sqlite3.Error:
        conn.close()
        raise
    logger.info("Conexión a la base de datos exitosa")
    return conn


def init_schema(conn: sqlite3.Connection) -> None:
    """Create the library tables if they do not exist yet."""
    with conn:
        conn.executescript(_SCHEMA)