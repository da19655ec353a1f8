"""
Point the app at an in-memory stand-in for the hosted backend.

Required settings are set before any test module imports fittrack.main.
Every test gets a fresh FakeSupabase served through httpx.MockTransport,
so RecordStore and IdentityClient run their real request/response code.
"""
import json
import os
import uuid
from collections import defaultdict

os.environ.setdefault("SUPABASE_URL", "https://fake.supabase.test")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-test-key")
os.environ.setdefault("JWT_SECRET", "test-secret-change-me")

import httpx
import pytest

from fittrack.db import RecordStore, get_store
from fittrack.identity import IdentityClient, get_identity
from fittrack.main import app
from fittrack.settings import get_settings


class FakeSupabase:
    def __init__(self):
        self.tables = defaultdict(list)
        self.users = {}          # email -> {"id", "email", "password"}
        self.requests = []       # (method, path, params)
        self._failures = {}      # (method, table) -> successful calls left
        # what a POST echoes back: "full" row, "none" (empty body) or "id" only
        self.representation = "full"

    # test helpers
    def fail_on(self, method: str, table: str, *, after: int = 0):
        """Answer 500 for `method` on `table` once `after` calls have succeeded."""
        self._failures[(method, table)] = after

    def rows(self, table: str) -> list[dict]:
        return self.tables[table]

    # transport handler
    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append((request.method, request.url.path, dict(request.url.params)))
        if request.headers.get("apikey") is None:
            return httpx.Response(401, json={"message": "No API key found in request"})
        path = request.url.path
        if path.startswith("/auth/v1/"):
            return self._auth(request, path.removeprefix("/auth/v1/"))
        if path.startswith("/rest/v1/"):
            return self._rest(request, path.removeprefix("/rest/v1/"))
        return httpx.Response(404, json={"message": "not found"})

    def _should_fail(self, method: str, table: str) -> bool:
        left = self._failures.get((method, table))
        if left is None:
            return False
        if left > 0:
            self._failures[(method, table)] = left - 1
            return False
        return True

    def _matches(self, row: dict, params) -> bool:
        for field, cond in params.items():
            op, _, value = cond.partition(".")
            assert op == "eq", f"unsupported filter {cond}"
            if str(row.get(field)) != value:
                return False
        return True

    def _rest(self, request: httpx.Request, table: str) -> httpx.Response:
        if self._should_fail(request.method, table):
            return httpx.Response(500, json={"message": f"{table} unavailable"})
        rows = self.tables[table]
        params = dict(request.url.params)
        wants_rows = request.headers.get("Prefer") == "return=representation"

        if request.method == "GET":
            return httpx.Response(200, json=[r for r in rows if self._matches(r, params)])
        if request.method == "POST":
            row = json.loads(request.content)
            if any(r["id"] == row["id"] for r in rows):
                return httpx.Response(409, json={"message": "duplicate key value violates unique constraint"})
            rows.append(row)
            if not wants_rows or self.representation == "none":
                return httpx.Response(201)
            if self.representation == "id":
                return httpx.Response(201, json=[{"id": row["id"]}])
            return httpx.Response(201, json=[row])
        if request.method == "PATCH":
            changes = json.loads(request.content)
            hit = [r for r in rows if self._matches(r, params)]
            for r in hit:
                r.update(changes)
            return httpx.Response(200, json=hit if wants_rows else None)
        if request.method == "DELETE":
            self.tables[table] = [r for r in rows if not self._matches(r, params)]
            return httpx.Response(204)
        return httpx.Response(405)

    def _auth(self, request: httpx.Request, endpoint: str) -> httpx.Response:
        body = json.loads(request.content)
        email, password = body.get("email"), body.get("password")
        if endpoint == "signup":
            if email in self.users:
                return httpx.Response(422, json={"msg": "User already registered"})
            self.users[email] = {"id": str(uuid.uuid4()), "email": email, "password": password}
        elif endpoint == "token" and request.url.params.get("grant_type") == "password":
            user = self.users.get(email)
            if not user or user["password"] != password:
                return httpx.Response(400, json={"error": "invalid_grant",
                                                 "error_description": "Invalid login credentials"})
        else:
            return httpx.Response(404, json={"msg": "not found"})
        user = self.users[email]
        return httpx.Response(200, json={
            "access_token": "upstream-token",
            "user": {"id": user["id"], "email": user["email"]},
        })


@pytest.fixture
def fake_supabase():
    return FakeSupabase()


@pytest.fixture
def transport(fake_supabase):
    return httpx.MockTransport(fake_supabase.handler)


@pytest.fixture
def store(transport):
    s = RecordStore.from_settings(get_settings(), transport=transport)
    yield s
    s.close()


@pytest.fixture(autouse=True)
def _wire_fake_backend(transport):
    def _store():
        s = RecordStore.from_settings(get_settings(), transport=transport)
        try:
            yield s
        finally:
            s.close()

    def _identity():
        c = IdentityClient.from_settings(get_settings(), transport=transport)
        try:
            yield c
        finally:
            c.close()

    app.dependency_overrides[get_store] = _store
    app.dependency_overrides[get_identity] = _identity
    yield
    app.dependency_overrides.clear()
