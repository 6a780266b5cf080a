import pytest

from biblioteca.models import Devolucion, Libro, Prestamo, Usuario, ValidationError


def test_usuario_round_trip_keeps_password_on_input():
    data = {
        "id": 4,
        "nombre": "Ana",
        "correo": "ana@example.com",
        "contrasena": "password",
        "tipo_usuario": "admin",
    }
    usuario = Usuario.from_dict(data)
    assert usuario.contrasena == "password"
    assert usuario.to_dict() == data


def test_usuario_omits_empty_password():
    usuario = Usuario(id=2, nombre="Ana", correo="ana@example.com", tipo_usuario="lector")
    result = usuario.to_dict()
    assert "contrasena" not in result
    assert result["tipo_usuario"] == "lector"


def test_usuario_missing_fields_get_zero_values():
    usuario = Usuario.from_dict({"nombre": "Luis"})
    assert usuario == Usuario(id=0, nombre="Luis", correo="", contrasena="", tipo_usuario="")


def test_unknown_fields_are_ignored():
    usuario = Usuario.from_dict({"nombre": "Luis", "extra": [1, 2]})
    assert usuario.nombre == "Luis"


@pytest.mark.parametrize("payload", [[], "texto", 3, None])
def test_non_object_payload_is_rejected(payload):
    with pytest.raises(ValidationError):
        Usuario.from_dict(payload)


def test_libro_round_trip():
    data = {
        "id": 7,
        "titulo": "Rayuela",
        "autor": "Cortázar",
        "editorial": "Sudamericana",
        "anio_publicacion": 1963,
        "genero": "Novela",
        "isbn": "978-0-00-000000-0",
        "cantidad_disponible": 3,
    }
    assert Libro.from_dict(data).to_dict() == data


def test_libro_null_year_is_kept_as_null():
    libro = Libro.from_dict({"titulo": "Sin fecha", "anio_publicacion": None})
    assert libro.anio_publicacion is None
    assert libro.to_dict()["anio_publicacion"] is None


@pytest.mark.parametrize(
    "payload",
    [
        {"cantidad_disponible": "3"},
        {"cantidad_disponible": 2.5},
        {"cantidad_disponible": True},
        {"titulo": 12},
        {"anio_publicacion": "1963"},
    ],
)
def test_libro_wrong_types_are_rejected(payload):
    with pytest.raises(ValidationError):
        Libro.from_dict(payload)


def test_prestamo_round_trip_without_names():
    data = {
        "id": 1,
        "id_usuario": 2,
        "id_libro": 3,
        "fecha_prestamo": "2024-05-01",
        "fecha_devolucion": "2024-05-15",
        "devuelto": False,
    }
    prestamo = Prestamo.from_dict(data)
    assert prestamo.usuario_nombre is None
    assert prestamo.to_dict() == data


def test_prestamo_names_are_included_when_present():
    prestamo = Prestamo(id=1, usuario_nombre="Ana", libro_titulo="Rayuela")
    result = prestamo.to_dict()
    assert result["usuario_nombre"] == "Ana"
    assert result["libro_titulo"] == "Rayuela"


def test_prestamo_devuelto_must_be_boolean():
    with pytest.raises(ValidationError):
        Prestamo.from_dict({"devuelto": 1})


def test_devolucion_round_trip_with_names():
    data = {
        "id": 5,
        "id_prestamo": 9,
        "fecha_entrega": "2024-05-10",
        "observaciones": "Buen estado",
        "usuario_nombre": "Ana",
        "libro_titulo": "Rayuela",
    }
    assert Devolucion.from_dict(data).to_dict() == data


def test_devolucion_rejects_string_loan_id():
    with pytest.raises(ValidationError):
        Devolucion.from_dict({"id_prestamo": "9"})