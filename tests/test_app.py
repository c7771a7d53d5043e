import pytest

from library_api import create_app
from library_api.config import DEFAULT_JWT_SECRET, ProductionConfig, TestingConfig


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.get_json()
    assert body["success"] is True
    assert body["apiVersion"] == "v1"
    assert body["orm"] == "SQLAlchemy"
    assert {"message", "timestamp", "version"} <= set(body)


def test_index_lists_endpoints(client):
    body = client.get("/").get_json()
    assert "GET /api/v1/books" in body["endpoints"]["v1"]["books"]


def test_unknown_route(client):
    response = client.get("/api/v2/books")
    assert response.status_code == 404
    assert response.get_json() == {"success": False, "message": "Ruta no encontrada: /api/v2/books"}


def test_method_not_allowed_keeps_status(client):
    response = client.patch("/api/v1/books")
    assert response.status_code == 405
    assert response.get_json()["success"] is False


def test_unexpected_error_hides_details():
    app = create_app(TestingConfig)

    @app.get("/boom")
    def boom():
        raise RuntimeError("secreto interno")

    response = app.test_client().get("/boom")
    assert response.status_code == 500
    body = response.get_json()
    assert body == {"success": False, "message": "Error interno del servidor"}


def test_unexpected_error_shows_stack_in_debug():
    class DebugTestingConfig(TestingConfig):
        DEBUG = True

    app = create_app(DebugTestingConfig)

    @app.get("/boom")
    def boom():
        raise RuntimeError("secreto interno")

    body = app.test_client().get("/boom").get_json()
    assert "RuntimeError: secreto interno" in body["error"]


def test_production_refuses_default_secret():
    class Prod(ProductionConfig):
        SQLALCHEMY_DATABASE_URI = "sqlite://"
        SQLALCHEMY_ENGINE_OPTIONS = {}
        JWT_SECRET_KEY = DEFAULT_JWT_SECRET

    with pytest.raises(RuntimeError):
        create_app(Prod)
