import httpx
from fastapi.testclient import TestClient
from fittrack.identity import IdentityClient, get_identity
from fittrack.main import app
from fittrack.settings import get_settings
import uuid

client = TestClient(app)
def uniq_email(): return f"{uuid.uuid4().hex[:10]}@ex.com"
PWD = "StrongPassw0rd!"

def register(email, pwd=PWD):
    return client.post("/api/v1/auth/register", json={"email": email, "password": pwd})

def login(email, pwd=PWD):
    return client.post("/api/v1/auth/login", json={"email": email, "password": pwd})

def test_register_duplicate_email_400():
    e = uniq_email()
    assert register(e).status_code == 201
    r2 = register(e)
    assert r2.status_code == 400
    # upstream message is passed through
    assert r2.json()["detail"].startswith("Failed to create account:")
    assert "already registered" in r2.json()["detail"]

def test_login_unknown_email_401():
    r = login(uniq_email())
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid email or password"

def test_login_wrong_password_401():
    e = uniq_email()
    register(e)
    r = login(e, "WrongPass123!")
    assert r.status_code == 401

def test_identity_response_without_user_500():
    transport = httpx.MockTransport(lambda req: httpx.Response(200, json={"access_token": "x"}))

    def _identity():
        c = IdentityClient.from_settings(get_settings(), transport=transport)
        try:
            yield c
        finally:
            c.close()

    app.dependency_overrides[get_identity] = _identity
    r = login(uniq_email())
    assert r.status_code == 500
    assert r.json()["detail"] == "Invalid auth response"
