from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt as pyjwt
import pytest

from library_api import create_app
from library_api.config import TestingConfig
from library_api.container import get_services


@pytest.fixture(scope="function")
def app():
    app = create_app(TestingConfig)
    yield app


@pytest.fixture(scope="function")
def client(app):
    with app.test_client() as c:
        yield c


@pytest.fixture(scope="function")
def app_ctx(app):
    with app.app_context():
        yield


@pytest.fixture(scope="function")
def services(app_ctx):
    return get_services()


@pytest.fixture(scope="function")
def registered_user(client):
    response = client.post(
        "/api/auth/register",
        json={
            "email": "lector@example.com",
            "password": "secreto1",
            "firstName": "Ana",
            "lastName": "Lectora",
        },
    )
    assert response.status_code == 201
    return response.get_json()["data"]


@pytest.fixture(scope="function")
def auth_headers(registered_user):
    return {"Authorization": f"Bearer {registered_user['token']}"}


@pytest.fixture(scope="function")
def mint_token(app):
    """Builds an access token issued at an arbitrary moment, laid out like flask-jwt-extended's."""
    def _mint(user_id: int, email: str, issued_ago: timedelta) -> str:
        issued_at = datetime.now(timezone.utc) - issued_ago
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "nbf": issued_at,
            "jti": str(uuid4()),
            "type": "access",
            "fresh": False,
            "exp": issued_at + app.config["JWT_ACCESS_TOKEN_EXPIRES"],
            "userId": user_id,
            "email": email,
        }
        return pyjwt.encode(payload, app.config["JWT_SECRET_KEY"], algorithm="HS256")
    return _mint
