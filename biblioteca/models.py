"""Data models for users, books, loans and returns, with JSON-style binding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


class ValidationError(ValueError):
    """Raised when a payload cannot be bound to a model."""


def _ensure_mapping(data: Any, model: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValidationError(f"{model}: se esperaba un objeto JSON")
    return data


def _int(data: Mapping[str, Any], key: str) -> int:
    value = _opt_int(data, key)
    return 0 if value is None else value


def _opt_int(data: Mapping[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"campo {key!r}: se esperaba un número entero")
    return value


def _str(data: Mapping[str, Any], key: str) -> str:
    value = _opt_str(data, key)
    return "" if value is None else value


def _opt_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"campo {key!r}: se esperaba una cadena")
    return value


def _bool(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValidationError(f"campo {key!r}: se esperaba un booleano")
    return value


@dataclass
class Usuario:
    """A library user. The password is only carried on input."""

    id: int = 0
    nombre: str = ""
    correo: str = ""
    contrasena: str = ""
    tipo_usuario: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Usuario":
        data = _ensure_mapping(data, "usuario")
        return cls(
            id=_int(data, "id"),
            nombre=_str(data, "nombre"),
            correo=_str(data, "correo"),
            contrasena=_str(data, "contrasena"),
            tipo_usuario=_str(data, "tipo_usuario"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "nombre": self.nombre,
            "correo": self.correo,
        }
        if self.contrasena:
            result["contrasena"] = self.contrasena
        result["tipo_usuario"] = self.tipo_usuario
        return result


@dataclass
class Libro:
    """A book with its available stock."""

    id: int = 0
    titulo: str = ""
    autor: str = ""
    editorial: str = ""
    anio_publicacion: Optional[int] = None
    genero: str = ""
    isbn: str = ""
    cantidad_disponible: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "Libro":
        data = _ensure_mapping(data, "libro")
        return cls(
            id=_int(data, "id"),
            titulo=_str(data, "titulo"),
            autor=_str(data, "autor"),
            editorial=_str(data, "editorial"),
            anio_publicacion=_opt_int(data, "anio_publicacion"),
            genero=_str(data, "genero"),
            isbn=_str(data, "isbn"),
            cantidad_disponible=_int(data, "cantidad_disponible"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "titulo": self.titulo,
            "autor": self.autor,
            "editorial": self.editorial,
            "anio_publicacion": self.anio_publicacion,
            "genero": self.genero,
            "isbn": self.isbn,
            "cantidad_disponible": self.cantidad_disponible,
        }


@dataclass
class Prestamo:
    """A loan of a book to a user."""

    id: int = 0
    id_usuario: int = 0
    id_libro: int = 0
    fecha_prestamo: str = ""
    fecha_devolucion: str = ""
    devuelto: bool = False
    usuario_nombre: Optional[str] = None
    libro_titulo: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Prestamo":
        data = _ensure_mapping(data, "prestamo")
        return cls(
            id=_int(data, "id"),
            id_usuario=_int(data, "id_usuario"),
            id_libro=_int(data, "id_libro"),
            fecha_prestamo=_str(data, "fecha_prestamo"),
            fecha_devolucion=_str(data, "fecha_devolucion"),
            devuelto=_bool(data, "devuelto"),
            usuario_nombre=_opt_str(data, "usuario_nombre"),
            libro_titulo=_opt_str(data, "libro_titulo"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "id_usuario": self.id_usuario,
            "id_libro": self.id_libro,
            "fecha_prestamo": self.fecha_prestamo,
            "fecha_devolucion": self.fecha_devolucion,
            "devuelto": self.devuelto,
        }
        if self.usuario_nombre is not None:
            result["usuario_nombre"] = self.usuario_nombre
        if self.libro_titulo is not None:
            result["libro_titulo"] = self.libro_titulo
        return result


@dataclass
class Devolucion:
    """The return of a loaned book."""

    id: int = 0
    id_prestamo: int = 0
    fecha_entrega: str = ""
    observaciones: str = ""
    usuario_nombre: Optional[str] = None
    libro_titulo: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Devolucion":
        data = _ensure_mapping(data, "devolucion")
        return cls(
            id=_int(data, "id"),
            id_prestamo=_int(data, "id_prestamo"),
            fecha_entrega=_str(data, "fecha_entrega"),
            observaciones=_str(data, "observaciones"),
            usuario_nombre=_opt_str(data, "usuario_nombre"),
            libro_titulo=_opt_str(data, "libro_titulo"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "id_prestamo": self.id_prestamo,
            "fecha_entrega": self.fecha_entrega,
            "observaciones": self.observaciones,
        }
        if self.usuario_nombre is not None:
            result["usuario_nombre"] = self.usuario_nombre
        if self.libro_titulo is not None:
            result["libro_titulo"] = self.libro_titulo
        return result