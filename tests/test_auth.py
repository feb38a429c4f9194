import pytest

from todo_api.repositories.user_repo import UserRepository
from todo_api.security.tokens import TokenIssuer

pytestmark = pytest.mark.anyio

PASSWORD = "Passw0rd!"


async def test_register_returns_user_and_token(client):
    res = await client.post("/api/auth/register", json={"email": "a@b.com", "password": PASSWORD})
    assert res.status_code == 201
    data = res.json()
    assert data["success"] is True
    assert data["user"]["email"] == "a@b.com"
    assert isinstance(data["user"]["id"], int)
    assert data["token"]
    assert "password_hash" not in data["user"]


@pytest.mark.parametrize(
    "payload, message",
    [
        ({}, "Email and password are required"),
        ({"email": "a@b.com"}, "Email and password are required"),
        ({"email": "", "password": PASSWORD}, "Email and password are required"),
        ({"email": "invalid-email", "password": PASSWORD}, "Invalid email format"),
        ({"email": "a@b@c.com", "password": PASSWORD}, "Invalid email format"),
        ({"email": "a@localhost", "password": PASSWORD}, "Invalid email format"),
    ],
)
async def test_register_rejects_bad_input(client, payload, message):
    res = await client.post("/api/auth/register", json=payload)
    assert res.status_code == 400
    assert res.json() == {"success": False, "message": message}


@pytest.mark.parametrize("password", ["123", "password123", "Password123", "Passw0rd", "Pa0!"])
async def test_register_rejects_weak_password(client, password):
    res = await client.post("/api/auth/register", json={"email": "a@b.com", "password": password})
    assert res.status_code == 400
    assert res.json()["message"].startswith("Password must be at least 8 characters long")


async def test_register_validation_order(client):
    # a bad email wins over a weak password
    res = await client.post("/api/auth/register", json={"email": "nope", "password": "x"})
    assert res.json()["message"] == "Invalid email format"


async def test_duplicate_registration_does_not_reveal_account(client, register):
    await register()
    res = await client.post("/api/auth/register", json={"email": "a@b.com", "password": PASSWORD})
    assert res.status_code == 400
    body = res.json()
    assert body == {"success": False, "message": "Registration failed"}
    assert "exist" not in body["message"].lower()
    assert "already" not in body["message"].lower()


async def test_register_then_login(client, register):
    user, _ = await register()
    res = await client.post("/api/auth/login", json={"email": "a@b.com", "password": PASSWORD})
    assert res.status_code == 200
    data = res.json()
    assert data["success"] is True
    assert data["user"] == user
    assert data["token"]


async def test_login_failures_are_indistinguishable(client, register):
    await register()
    wrong_password = await client.post("/api/auth/login", json={"email": "a@b.com", "password": "Wr0ng!pass"})
    no_account = await client.post("/api/auth/login", json={"email": "x@y.com", "password": PASSWORD})
    assert wrong_password.status_code == no_account.status_code == 401
    assert wrong_password.json() == no_account.json() == {
        "success": False,
        "message": "Invalid email or password",
    }


async def test_login_requires_fields(client):
    res = await client.post("/api/auth/login", json={"email": "a@b.com"})
    assert res.status_code == 400
    assert res.json()["message"] == "Email and password are required"


async def test_login_rejects_bad_email_format(client):
    res = await client.post("/api/auth/login", json={"email": "nope", "password": PASSWORD})
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid email format"


async def test_non_object_body_is_rejected(client):
    res = await client.post("/api/auth/login", json=["a@b.com", PASSWORD])
    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "Invalid request body"}


async def test_me_returns_current_user(client, register):
    user, headers = await register()
    res = await client.get("/api/auth/me", headers=headers)
    assert res.status_code == 200
    assert res.json() == {"success": True, "user": user}


async def test_me_without_token(client):
    res = await client.get("/api/auth/me")
    assert res.status_code == 401
    assert res.json() == {"success": False, "message": "Access token required"}
    assert res.headers["www-authenticate"] == "Bearer"


async def test_me_with_malformed_header(client, register):
    _, headers = await register()
    token = headers["Authorization"].split(" ", 1)[1]
    for value in ("InvalidFormat", token, f"bearer {token}"):
        res = await client.get("/api/auth/me", headers={"Authorization": value})
        assert res.status_code == 401
        assert res.json()["message"] == "Access token required"


async def test_me_with_invalid_token(client):
    res = await client.get("/api/auth/me", headers={"Authorization": "Bearer invalid-token"})
    assert res.status_code == 401
    assert res.json() == {"success": False, "message": "Invalid token"}


async def test_me_with_token_from_another_secret(client, register):
    user, _ = await register()
    forged = TokenIssuer("some-other-secret").issue(user["id"], user["email"])
    res = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {forged}"})
    assert res.status_code == 401
    assert res.json()["message"] == "Invalid token"


async def test_me_when_user_no_longer_exists(client, settings):
    token = TokenIssuer(settings.jwt_secret).issue(99999, "nonexistent@example.com")
    res = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401
    assert res.json() == {"success": False, "message": "User not found"}


async def test_health(client):
    res = await client.get("/health")
    assert res.status_code == 200
    data = res.json()
    assert data["status"] == "ok"
    assert data["timestamp"]


async def test_duplicate_insert_race_is_reported_generically(client, register, monkeypatch):
    await register()

    async def email_is_free(self, db, email):
        return False

    monkeypatch.setattr(UserRepository, "email_exists", email_is_free)

    res = await client.post("/api/auth/register", json={"email": "a@b.com", "password": PASSWORD})
    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "Registration failed"}


async def test_unknown_email_still_checks_a_password_hash(client, initialized_app, register, monkeypatch):
    await register()
    hasher = initialized_app.state.auth_service.hasher
    checked = []
    original_verify = hasher.verify

    def counting_verify(password, password_hash):
        checked.append(password_hash)
        return original_verify(password, password_hash)

    monkeypatch.setattr(hasher, "verify", counting_verify)

    res = await client.post("/api/auth/login", json={"email": "x@y.com", "password": PASSWORD})
    assert res.status_code == 401
    assert len(checked) == 1
    assert checked[0].startswith("$2b$")
