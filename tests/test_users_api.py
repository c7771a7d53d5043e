def test_users_require_token(client):
    assert client.get("/api/v1/users").status_code == 401


def test_list_and_get_users(client, auth_headers, registered_user):
    response = client.get("/api/v1/users", headers=auth_headers)
    assert response.status_code == 200
    users = response.get_json()["data"]
    assert [u["email"] for u in users] == ["lector@example.com"]

    user_id = registered_user["user"]["id"]
    one = client.get(f"/api/v1/users/{user_id}", headers=auth_headers)
    assert one.get_json()["data"]["firstName"] == "Ana"

    assert client.get("/api/v1/users/999", headers=auth_headers).status_code == 404


def test_update_user_partially(client, auth_headers, registered_user):
    user_id = registered_user["user"]["id"]
    response = client.put(f"/api/v1/users/{user_id}", json={"lastName": "García"}, headers=auth_headers)
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["lastName"] == "García"
    assert data["firstName"] == "Ana"


def test_update_user_rejects_bad_email(client, auth_headers, registered_user):
    user_id = registered_user["user"]["id"]
    response = client.put(f"/api/v1/users/{user_id}", json={"email": "roto"}, headers=auth_headers)
    assert response.status_code == 400
    assert response.get_json()["errors"] == ["El email debe tener un formato válido"]


def test_user_stats(client, auth_headers):
    response = client.get("/api/v1/users/stats", headers=auth_headers)
    assert response.get_json()["data"]["totalUsers"] == 1


def test_out_of_range_user_id_is_not_found(client, auth_headers):
    response = client.get("/api/v1/users/99999999999999999999999", headers=auth_headers)
    assert response.status_code == 404
    assert response.get_json()["message"] == "Usuario no encontrado"
