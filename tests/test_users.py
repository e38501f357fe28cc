from devconnector_api.app.core.security import create_access_token
from devconnector_api.app.services.user_service import gravatar_url


def test_register_returns_token_and_hides_password(test_app_client):
    resp = test_app_client.post(
        "/api/users",
        json={"name": "Jane", "email": "Jane@Example.com", "password": "secret123"},
    )
    assert resp.status_code == 200
    token = resp.json()["token"]

    me = test_app_client.get("/api/auth", headers={"x-auth-token": token})
    assert me.status_code == 200
    body = me.json()
    assert body["name"] == "Jane"
    assert body["email"] == "jane@example.com"
    assert body["avatar"] == gravatar_url("jane@example.com")
    assert "password" not in body


def test_register_reports_every_invalid_field(test_app_client):
    resp = test_app_client.post("/api/users", json={"email": "not-an-email", "password": "123"})
    assert resp.status_code == 400
    params = {error["param"] for error in resp.json()["detail"]}
    assert params == {"name", "email", "password"}


def test_register_duplicate_email(test_app_client, make_user):
    make_user("Jane", "jane@example.com")
    resp = test_app_client.post(
        "/api/users",
        json={"name": "Other", "email": "jane@example.com", "password": "secret123"},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "User already exists"


def test_login(test_app_client, make_user):
    make_user("Jane", "jane@example.com")

    ok = test_app_client.post("/api/auth", json={"email": "jane@example.com", "password": "secret123"})
    assert ok.status_code == 200
    assert ok.json()["token"]

    bad = test_app_client.post("/api/auth", json={"email": "jane@example.com", "password": "wrong"})
    assert bad.status_code == 400
    assert bad.json()["detail"] == [{"msg": "Invalid Credentials"}]


def test_private_route_requires_token(test_app_client):
    assert test_app_client.get("/api/auth").status_code == 401
    assert test_app_client.get("/api/profile/me").status_code == 401
    assert test_app_client.get("/api/posts").status_code == 401


def test_private_route_rejects_invalid_token(test_app_client):
    resp = test_app_client.get("/api/profile/me", headers={"Authorization": "Bearer not.a.token"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Token is not valid"


def test_versioned_prefix_serves_same_routes(test_app_client, make_user):
    user = make_user()
    resp = test_app_client.get("/api/v1/auth", headers=user["headers"])
    assert resp.status_code == 200
    assert resp.json()["_id"] == user["id"]


def test_token_for_unknown_user(test_app_client):
    token = create_access_token({"sub": "5f1d7f0c2b3c4d5e6f708192"})
    resp = test_app_client.get("/api/auth", headers={"x-auth-token": token})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "User not found"
