"""Account sign-up / password sign-in against the hosted identity service."""
from __future__ import annotations

import logging
from typing import Any, Iterator, Optional

import httpx

from fittrack.models import IdentityUser
from fittrack.settings import get_settings

log = logging.getLogger("uvicorn")


class IdentityError(Exception):
    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MalformedIdentityResponse(IdentityError):
    """Identity service answered 2xx but without a usable user object."""


class IdentityClient:
    def __init__(
        self,
        base_url: str,
        anon_key: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._client = httpx.Client(
            base_url=f"{base_url.rstrip('/')}/auth/v1",
            headers={"apikey": anon_key, "Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings, *, transport: Optional[httpx.BaseTransport] = None) -> "IdentityClient":
        return cls(
            settings.SUPABASE_URL,
            settings.SUPABASE_ANON_KEY,
            timeout=settings.STORE_TIMEOUT_SECONDS,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def sign_up(self, email: str, password: str) -> IdentityUser:
        return self._authenticate("/signup", email, password)

    def sign_in(self, email: str, password: str) -> IdentityUser:
        return self._authenticate("/token", email, password, params={"grant_type": "password"})

    def _authenticate(self, path: str, email: str, password: str, **kwargs) -> IdentityUser:
        try:
            resp = self._client.post(path, json={"email": email, "password": password}, **kwargs)
        except httpx.RequestError as e:
            raise IdentityError(str(e)) from e
        if resp.status_code >= 400:
            log.debug("identity %s -> %s", path, resp.status_code)
            raise IdentityError(resp.text, status_code=resp.status_code)
        try:
            doc = resp.json()
        except ValueError as e:
            raise MalformedIdentityResponse("Failed to parse auth response") from e
        return _user_from(doc)


def _user_from(doc: Any) -> IdentityUser:
    user = doc.get("user") if isinstance(doc, dict) else None
    if not isinstance(user, dict):
        raise MalformedIdentityResponse("Invalid auth response")
    uid, email = user.get("id"), user.get("email")
    if not isinstance(uid, str) or not isinstance(email, str):
        raise MalformedIdentityResponse("Invalid auth response")
    return IdentityUser(id=uid, email=email)


def get_identity() -> Iterator[IdentityClient]:
    client = IdentityClient.from_settings(get_settings())
    try:
        yield client
    finally:
        client.close()
