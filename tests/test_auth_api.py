from datetime import timedelta

USER = {
    "email": "nuevo@example.com",
    "password": "secreto1",
    "firstName": "Juan",
    "lastName": "Pérez",
}


def test_register_returns_token_and_user(client):
    response = client.post("/api/auth/register", json=USER)
    assert response.status_code == 201
    data = response.get_json()["data"]
    assert data["token"]
    assert data["user"]["email"] == "nuevo@example.com"
    assert "password" not in data["user"]


def test_register_twice_is_conflict(client):
    client.post("/api/auth/register", json=USER)
    response = client.post("/api/auth/register", json=USER)
    assert response.status_code == 409
    assert response.get_json()["success"] is False


def test_register_validation(client):
    response = client.post("/api/auth/register", json={"email": "x", "password": "1"})
    assert response.status_code == 400
    assert len(response.get_json()["errors"]) == 4


def test_login_and_me(client, registered_user):
    response = client.post("/api/auth/login", json={"email": "lector@example.com", "password": "secreto1"})
    assert response.status_code == 200
    token = response.get_json()["data"]["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    data = me.get_json()["data"]
    assert data["email"] == "lector@example.com"
    assert data["lastLoginAt"] is not None


def test_login_bad_credentials(client, registered_user):
    response = client.post("/api/auth/login", json={"email": "lector@example.com", "password": "otra-cosa"})
    assert response.status_code == 401
    assert response.get_json()["message"] == "Credenciales inválidas"

    response = client.post("/api/auth/login", json={"email": "nadie@example.com", "password": "secreto1"})
    assert response.status_code == 401


def test_me_without_token(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.get_json()["message"] == "Token de acceso requerido"


def test_me_with_garbage_token(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.token"})
    assert response.status_code == 401
    assert response.get_json()["message"] == "Token inválido"


def test_token_signed_with_other_secret(client, registered_user, app):
    import jwt as pyjwt

    forged = pyjwt.encode(
        {"sub": str(registered_user["user"]["id"]), "type": "access"},
        "another-secret-that-is-long-enough-for-hs256",
        algorithm="HS256",
    )
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {forged}"})
    assert response.status_code == 401
    assert response.get_json()["message"] == "Token inválido"


def test_token_still_valid_just_before_24h(client, registered_user, mint_token):
    user = registered_user["user"]
    token = mint_token(user["id"], user["email"], timedelta(hours=23, minutes=59))
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200


def test_token_expired_just_after_24h(client, registered_user, mint_token):
    user = registered_user["user"]
    token = mint_token(user["id"], user["email"], timedelta(hours=24, minutes=1))
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.get_json()["message"] == "Token expirado"


def test_token_for_deleted_user(client, auth_headers, registered_user):
    user_id = registered_user["user"]["id"]
    assert client.delete(f"/api/v1/users/{user_id}", headers=auth_headers).status_code == 200

    response = client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 401
    assert response.get_json()["message"] == "Usuario no encontrado"


def test_issued_token_embeds_user_claims(client, registered_user, app):
    from flask_jwt_extended import decode_token

    with app.app_context():
        claims = decode_token(registered_user["token"])
    assert claims["userId"] == registered_user["user"]["id"]
    assert claims["email"] == "lector@example.com"
    assert claims["exp"] - claims["iat"] == 24 * 3600


def test_login_with_non_object_body(client):
    for payload in ([1, 2], "lector@example.com", 42):
        response = client.post("/api/auth/login", json=payload)
        assert response.status_code == 400
        body = response.get_json()
        assert body["success"] is False
        assert body["errors"] == ["Se requiere un cuerpo JSON válido"]


def test_bearer_without_token_counts_as_missing(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer"})
    assert response.status_code == 401
    assert response.get_json()["message"] == "Token de acceso requerido"


def test_token_with_out_of_range_subject(client, mint_token):
    token = mint_token(99999999999999999999999, "fantasma@example.com", timedelta(minutes=1))
    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.get_json()["message"] == "Usuario no encontrado"
