def test_login(client):
    response = client.post("/api/auth/login", json={"email": "hotel@example.com", "password": "password"})
    assert response.status_code == 200
    body = response.json()
    assert body["token"] == "mock-access-token"
    assert body["user"]["outlets"] == [{"id": "h3", "name": "City Hotel", "type": "hotel"}]


def test_login_with_wrong_password(client):
    response = client.post("/api/auth/login", json={"email": "hotel@example.com", "password": "nope"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_login_requires_both_fields(client):
    response = client.post("/api/auth/login", json={"email": "hotel@example.com"})
    assert response.status_code == 400


def test_me(client):
    assert client.get("/api/auth/me").json() == {
        "id": "3",
        "fullname": "Super Admin",
        "email": "superstar@mistnove.com",
        "phone": None,
        "app_version": "1.0.0",
    }


def test_my_outlets(client):
    body = client.get("/api/auth/my-outlets").json()
    assert body["pagination"] == {"total": 4}
    assert body["data"][0] == {"business_name": "Grand Hotel", "outlet_id": "h1", "user_role_id": "admin"}
    assert body["error"] is False


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"
